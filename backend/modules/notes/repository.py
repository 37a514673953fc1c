"""
Note repository for database access.

Encapsulates all Supabase queries and data mapping for the `notes` table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Note


class NoteRepository(BaseRepository[Note]):
    """
    Repository for note data access.

    Every query is filtered by user_id, so a note can only be read or
    deleted through its owner.
    """

    table_name = "notes"

    def list_for_user(self, user_id: str) -> list[Note]:
        result = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_row(row) for row in result.data]

    def create(self, user_id: str, title: str, content: str) -> Note:
        data = {"user_id": user_id, "title": title, "content": content}
        result = self._table().insert(data).execute()
        return self._map_row(result.data[0])

    def delete_for_user(self, user_id: str, note_id: str) -> Optional[Note]:
        """
        Delete a note owned by the user.

        Returns:
            The deleted note, or None if nothing matched.
        """
        result = (
            self._table()
            .delete()
            .eq("id", note_id)
            .eq("user_id", user_id)
            .execute()
        )
        return self._first(result.data)

    def _map_row(self, data: dict[str, Any]) -> Note:
        return Note(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            title=data["title"],
            content=data["content"],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
