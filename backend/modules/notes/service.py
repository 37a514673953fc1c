"""
Notes service implementation.
"""

from typing import Optional

from shared.exceptions import ValidationError

from .interfaces import INoteService
from .models import Note
from .repository import NoteRepository
from .exceptions import NoteNotFoundError


class NoteService(INoteService):
    """Note operations scoped to the authenticated account."""

    def __init__(self, repository: NoteRepository):
        self._repository = repository

    async def list_notes(self, user_id: str) -> list[Note]:
        return self._repository.list_for_user(user_id)

    async def create_note(
        self,
        user_id: str,
        title: Optional[str],
        content: Optional[str],
    ) -> Note:
        if not title or not title.strip() or not content or not content.strip():
            raise ValidationError("Title and content are required", code="VALIDATION_ERROR")
        return self._repository.create(user_id, title, content)

    async def delete_note(self, user_id: str, note_id: str) -> None:
        if self._repository.delete_for_user(user_id, note_id) is None:
            raise NoteNotFoundError(note_id)
