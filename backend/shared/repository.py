"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the soft-deletion predicate shared by every
read against a soft-deletable table.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")

# Column holding the soft-deletion marker; NULL means the row is live.
SOFT_DELETE_COLUMN = "deleted_at"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - `_live()` to build queries restricted to non-deleted rows

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            def find_by_id(self, user_id: int) -> Optional[User]:
                result = self._live("users").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _live(self, table: str, columns: str = "*"):
        """Select from `table` with the `deleted_at IS NULL` predicate applied."""
        return self._db.table(table).select(columns).is_(SOFT_DELETE_COLUMN, "null")
