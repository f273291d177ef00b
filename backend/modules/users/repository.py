"""
User repositories.

SupabaseUserRepository stores users in the Supabase `users` table. Every
read goes through `_live()`, so the `deleted_at IS NULL` predicate is part
of each query rather than an ORM hook. The table is expected to carry
partial unique indexes on email and username over live rows; violations
are translated into the module's conflict errors.

InMemoryUserRepository is a process-local store with the same semantics,
used for tests and local development.
"""

import itertools
import logging
import re
import threading
from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository, SOFT_DELETE_COLUMN
from .models import User
from .exceptions import EmailExistsError, UsernameExistsError, UserNotFoundError

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# "Key (username)=(janed) already exists."
CONFLICT_KEY_PATTERN = re.compile(r"Key \(\s*\"?(\w+)\"?\s*\)=")
# 'duplicate key value violates unique constraint "users_email_live_key"'
CONSTRAINT_PATTERN = re.compile(r"unique constraint \"([^\"]+)\"")

CONFLICT_ERRORS = {
    "email": EmailExistsError,
    "username": UsernameExistsError,
}


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return Pydantic models with proper mapping from database rows.

    Note: This repository does NOT perform input validation.
    The service layer is responsible for that.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db)
        self._table = table

    # -------------------------------------------------------------------------
    # Lookups (live rows only)
    # -------------------------------------------------------------------------

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._find_one("id", user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one("email", email)

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_one("username", username)

    def email_exists(self, email: str) -> bool:
        return self._exists("email", email)

    def username_exists(self, username: str) -> bool:
        return self._exists("username", username)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, user: User) -> User:
        """
        Insert a new user record.

        Returns:
            Created User with generated ID and timestamps.

        Raises:
            EmailExistsError / UsernameExistsError: If a unique index rejects the row.
        """
        data = self._to_row(user)
        try:
            result = self._db.table(self._table).insert(data).execute()
        except APIError as e:
            raise self._translate_conflict(e) from e
        return self._map_to_user(result.data[0])

    def update(self, user: User) -> User:
        """
        Overwrite the live record with `user.id`.

        Raises:
            UserNotFoundError: If no live row has this ID.
        """
        data = self._to_row(user)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = (
                self._db.table(self._table)
                .update(data)
                .eq("id", user.id)
                .is_(SOFT_DELETE_COLUMN, "null")
                .execute()
            )
        except APIError as e:
            raise self._translate_conflict(e) from e

        if not result.data:
            raise UserNotFoundError(user.id)
        return self._map_to_user(result.data[0])

    def delete(self, user_id: int) -> None:
        """Soft-delete a user. Deleting an already deleted or missing user is a no-op."""
        (
            self._db.table(self._table)
            .update({SOFT_DELETE_COLUMN: datetime.now(timezone.utc).isoformat()})
            .eq("id", user_id)
            .is_(SOFT_DELETE_COLUMN, "null")
            .execute()
        )

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: Any) -> Optional[User]:
        result = self._live(self._table).eq(column, value).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _exists(self, column: str, value: Any) -> bool:
        result = self._live(self._table, "id").eq(column, value).limit(1).execute()
        return bool(result.data)

    def _translate_conflict(self, error: APIError) -> Exception:
        if error.code != UNIQUE_VIOLATION:
            return error
        column = self._conflict_column(error)
        if column in CONFLICT_ERRORS:
            return CONFLICT_ERRORS[column]()
        return error

    @staticmethod
    def _conflict_column(error: APIError) -> Optional[str]:
        """Name the column behind a unique violation, from the key detail or constraint name."""
        match = CONFLICT_KEY_PATTERN.search(str(error.details or ""))
        if match:
            return match.group(1).lower()

        match = CONSTRAINT_PATTERN.search(str(error.message or ""))
        if match:
            for part in match.group(1).lower().split("_"):
                if part in CONFLICT_ERRORS:
                    return part
        return None

    def _to_row(self, user: User) -> dict[str, Any]:
        """Map User model to a database row (ID and timestamps are DB-managed)."""
        data = user.model_dump(
            mode="json",
            exclude={"id", "created_at", "updated_at"},
        )
        data["password_hash"] = user.password_hash
        return data

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=int(data["id"]),
            full_name=data["full_name"],
            username=data["username"],
            email=data["email"],
            phone=data.get("phone") or "",
            avatar=data.get("avatar") or "",
            gender=data.get("gender") or "",
            birthday=data.get("birthday"),
            role=data.get("role") or "user",
            password_hash=data["password_hash"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            deleted_at=data.get(SOFT_DELETE_COLUMN),
        )


class InMemoryUserRepository:
    """
    Thread-safe in-memory user store.

    Enforces live-row uniqueness of email and username inside `create` and
    `update`, mirroring the database's partial unique indexes.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, user: User) -> User:
        with self._lock:
            self._check_unique(user)
            now = datetime.now(timezone.utc)
            stored = user.model_copy(
                update={
                    "id": next(self._ids),
                    "created_at": now,
                    "updated_at": now,
                    "deleted_at": None,
                },
                deep=True,
            )
            self._users[stored.id] = stored
            return stored.model_copy(deep=True)

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None or not user.is_live:
                return None
            return user.model_copy(deep=True)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_live(lambda u: u.email == email)

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_live(lambda u: u.username == username)

    def update(self, user: User) -> User:
        with self._lock:
            current = self._users.get(user.id)
            if current is None or not current.is_live:
                raise UserNotFoundError(user.id)
            self._check_unique(user)
            stored = user.model_copy(
                update={
                    "created_at": current.created_at,
                    "updated_at": datetime.now(timezone.utc),
                    "deleted_at": None,
                },
                deep=True,
            )
            self._users[user.id] = stored
            return stored.model_copy(deep=True)

    def delete(self, user_id: int) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None or not user.is_live:
                return
            user.deleted_at = datetime.now(timezone.utc)
            logger.debug(f"Soft-deleted user {user_id} in memory store")

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def username_exists(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def _find_live(self, predicate) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.is_live and predicate(user):
                    return user.model_copy(deep=True)
        return None

    def _check_unique(self, user: User) -> None:
        others = [
            other for other in self._users.values()
            if other.is_live and other.id != user.id
        ]
        # Email conflicts are reported before username conflicts.
        if any(other.email == user.email for other in others):
            raise EmailExistsError()
        if any(other.username == user.username for other in others):
            raise UsernameExistsError()


# Module-level instance getter
_repository_instance: Optional[SupabaseUserRepository] = None


def get_user_repository() -> SupabaseUserRepository:
    """Get the user repository singleton."""
    global _repository_instance
    if _repository_instance is None:
        from shared.config import get_settings
        from shared.database import get_supabase_client

        _repository_instance = SupabaseUserRepository(
            get_supabase_client(),
            table=get_settings().users_table,
        )
    return _repository_instance


def reset_user_repository() -> None:
    """Reset the user repository singleton (for testing)."""
    global _repository_instance
    _repository_instance = None
