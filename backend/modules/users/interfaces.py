"""
Users module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The repository and avatar storage are collaborators the
core consumes; IUserService is what the module exposes.
"""

from typing import BinaryIO, Protocol, Optional, runtime_checkable

from .models import User, UpdateProfileRequest


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for User records.

    Every lookup and existence check applies the live-record predicate
    (`deleted_at IS NULL`): soft-deleted users are never returned or counted.
    Individual calls must be atomic; no multi-call transactions are assumed.
    """

    def create(self, user: User) -> User:
        """
        Persist a new user.

        Returns:
            The stored user with its assigned ID and timestamps
        """
        ...

    def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def find_by_username(self, username: str) -> Optional[User]:
        ...

    def update(self, user: User) -> User:
        """Overwrite the stored record matching `user.id`."""
        ...

    def delete(self, user_id: int) -> None:
        """Soft-delete the user by setting its deletion marker."""
        ...

    def email_exists(self, email: str) -> bool:
        ...

    def username_exists(self, username: str) -> bool:
        ...


@runtime_checkable
class IAvatarStorage(Protocol):
    """Blob storage for avatar images."""

    def store(
        self,
        owner_id: int,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None,
    ) -> str:
        """
        Store an avatar and return a stable reference to it.

        Args:
            owner_id: ID of the user the avatar belongs to
            stream: Readable binary stream with the file contents
            filename: Original filename (its extension decides acceptance)
            size: Declared size in bytes, if known up front

        Returns:
            Reference string to record on the user

        Raises:
            AvatarTooLargeError: If the file exceeds the size limit
            InvalidAvatarTypeError: If the extension is not allowed
            StorageError: If the bytes could not be written
        """
        ...

    def remove(self, ref: str) -> None:
        """Delete a stored avatar by the reference `store` returned."""
        ...


@runtime_checkable
class IUserService(Protocol):
    """Interface for profile operations on existing users."""

    async def get_profile(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundError: If no live user has this ID
        """
        ...

    async def update_profile(
        self,
        user_id: int,
        request: UpdateProfileRequest,
    ) -> User:
        """
        Apply a partial update; only non-empty fields overwrite.

        Raises:
            UserNotFoundError: If no live user has this ID
            UsernameExistsError: If the new username belongs to another user
            FieldValidationError: If the birthday is not YYYY-MM-DD
        """
        ...

    async def delete_profile(self, user_id: int) -> None:
        ...

    async def update_avatar(self, user_id: int, avatar_ref: str) -> User:
        ...

    async def upload_avatar(
        self,
        user_id: int,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None,
    ) -> User:
        ...
