"""
Base class for Supabase-backed repositories.

Repositories own their table name and map rows to Pydantic models; the
services above them never see raw rows.
"""

from typing import Any, Generic, Optional, TypeVar

from supabase import Client

T = TypeVar("T")

# PostgreSQL error code for unique constraint violations
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Common plumbing for repositories.

    Subclasses set `table_name` and implement `_map_row`.

    Example:
        class NoteRepository(BaseRepository[Note]):
            table_name = "notes"

            def find(self, note_id: str) -> Optional[Note]:
                result = self._table().select("*").eq("id", note_id).execute()
                return self._first(result.data)
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _table(self):
        """Start a query builder on this repository's table."""
        return self._db.table(self.table_name)

    def _first(self, rows: Optional[list[dict[str, Any]]]) -> Optional[T]:
        """Map the first row, or return None when the result is empty."""
        if not rows:
            return None
        return self._map_row(rows[0])

    def _map_row(self, data: dict[str, Any]) -> T:
        raise NotImplementedError
