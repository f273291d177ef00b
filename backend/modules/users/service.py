"""
User profile service implementation.

Fetches, partially updates, soft-deletes and re-points the avatar of
existing users. Uniqueness of the username is re-checked only when an
update actually changes it; email is immutable after registration.
"""

import logging
import re
from datetime import date, datetime
from typing import BinaryIO, Optional

from shared.exceptions import ConfigurationError

from .interfaces import IUserService, IUserRepository, IAvatarStorage
from .models import User, UpdateProfileRequest, BIRTHDAY_FORMAT
from .uniqueness import UniquenessGuard
from .exceptions import UserNotFoundError, FieldValidationError

logger = logging.getLogger(__name__)

_BIRTHDAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_birthday(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD literal.

    Raises:
        FieldValidationError: If the literal is not a valid calendar date
    """
    try:
        if not _BIRTHDAY_RE.match(value):
            raise ValueError(value)
        return datetime.strptime(value, BIRTHDAY_FORMAT).date()
    except ValueError:
        raise FieldValidationError(
            "birthday", "invalid birthday format, use YYYY-MM-DD"
        ) from None


class UserService(IUserService):
    """Profile operations backed by an IUserRepository."""

    def __init__(
        self,
        repository: IUserRepository,
        storage: Optional[IAvatarStorage] = None,
        guard: Optional[UniquenessGuard] = None,
    ):
        self._repo = repository
        self._storage = storage
        self._guard = guard or UniquenessGuard(repository)

    async def get_profile(self, user_id: int) -> User:
        user = self._repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_profile(
        self,
        user_id: int,
        request: UpdateProfileRequest,
    ) -> User:
        """Overwrite only the non-empty fields of `request`."""
        user = await self.get_profile(user_id)

        changes: dict = {}
        if request.full_name:
            changes["full_name"] = request.full_name
        if request.username:
            if request.username != user.username:
                self._guard.ensure_username_available(request.username)
            changes["username"] = request.username
        if request.phone:
            changes["phone"] = request.phone
        if request.gender:
            changes["gender"] = request.gender
        if request.birthday:
            changes["birthday"] = parse_birthday(request.birthday)

        updated = self._repo.update(user.model_copy(update=changes))
        if changes:
            logger.info(f"Updated profile of user {user_id}: {sorted(changes)}")
        return updated

    async def delete_profile(self, user_id: int) -> None:
        self._repo.delete(user_id)
        logger.info(f"Soft-deleted user {user_id}")

    async def update_avatar(self, user_id: int, avatar_ref: str) -> User:
        """Point the user's avatar at `avatar_ref`; an empty reference clears it."""
        user = await self.get_profile(user_id)
        user.avatar = avatar_ref
        return self._repo.update(user)

    async def upload_avatar(
        self,
        user_id: int,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None,
    ) -> User:
        """
        Store an avatar file and record its reference on the user.

        Raises:
            UserNotFoundError: If no live user has this ID
            AvatarRejectedError: If storage refuses the file
        """
        if self._storage is None:
            raise ConfigurationError("Avatar storage is not configured for this service")

        await self.get_profile(user_id)
        avatar_ref = self._storage.store(user_id, stream, filename, size=size)
        try:
            return await self.update_avatar(user_id, avatar_ref)
        except Exception:
            logger.warning(f"Discarding avatar {avatar_ref}: user {user_id} was not updated")
            self._storage.remove(avatar_ref)
            raise


# Module-level instance getter
_service_instance: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get the user service singleton."""
    global _service_instance
    if _service_instance is None:
        from .repository import get_user_repository
        from .storage import get_avatar_storage

        _service_instance = UserService(
            get_user_repository(),
            storage=get_avatar_storage(),
        )
    return _service_instance


def reset_user_service() -> None:
    """Reset the user service singleton (for testing)."""
    global _service_instance
    _service_instance = None
