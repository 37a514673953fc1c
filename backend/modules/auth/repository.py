"""
Account repository for database access.

Encapsulates all Supabase queries and data mapping for the `users` table.
The unique index on `email` enforces one account per normalized email.
"""

from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION
from .exceptions import AccountExistsError
from .models import Account


class UserRepository(BaseRepository[Account]):
    """
    Repository for account data access.

    Note: This repository does NOT normalize input. The service layer
    lowercases emails before calling in.
    """

    table_name = "users"

    def find_by_email(self, email: str) -> Optional[Account]:
        result = self._table().select("*").eq("email", email).limit(1).execute()
        return self._first(result.data)

    def find_by_id(self, user_id: str) -> Optional[Account]:
        result = self._table().select("*").eq("id", user_id).limit(1).execute()
        return self._first(result.data)

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account.

        Args:
            data: Column values (email, name, and optionally password_hash,
                date_of_birth, google_id)

        Returns:
            Created Account with generated ID and timestamps.

        Raises:
            AccountExistsError: If the email is already registered
        """
        row = dict(data)
        if row.get("date_of_birth") is not None:
            row["date_of_birth"] = row["date_of_birth"].isoformat()

        try:
            result = self._table().insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise AccountExistsError(data["email"])
            raise

        return self._map_row(result.data[0])

    def _map_row(self, data: dict[str, Any]) -> Account:
        return Account(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data.get("password_hash"),
            name=data["name"],
            date_of_birth=data.get("date_of_birth"),
            google_id=data.get("google_id"),
            created_at=data.get("created_at"),
        )
