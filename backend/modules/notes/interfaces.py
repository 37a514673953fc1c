"""
Notes module interface.

The API layer depends on INoteService for all note operations. Every
method takes the owner's account ID, resolved from the session token.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Note


@runtime_checkable
class INoteService(Protocol):
    """Interface for note operations."""

    async def list_notes(self, user_id: str) -> list[Note]:
        """
        List a user's notes, most recent first.

        Args:
            user_id: ID of the owning account
        """
        ...

    async def create_note(
        self,
        user_id: str,
        title: Optional[str],
        content: Optional[str],
    ) -> Note:
        """
        Create a note.

        Raises:
            ValidationError: If title or content is blank
        """
        ...

    async def delete_note(self, user_id: str, note_id: str) -> None:
        """
        Delete one of the user's notes.

        Raises:
            NoteNotFoundError: If the note doesn't exist or isn't the user's
        """
        ...
