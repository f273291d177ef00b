"""
Users module.

Owns the Identity record, its persistence contract, the email/username
uniqueness guard, profile operations and avatar storage.

Public API:
- IUserService: Interface for profile operations
- IUserRepository: Persistence contract (live records only)
- IAvatarStorage: Blob storage contract for avatars
- User / UserPublic: Identity record and its outward projection
- User exceptions: UserNotFoundError, EmailExistsError, etc.
"""

from .interfaces import IUserService, IUserRepository, IAvatarStorage
from .models import User, UserPublic, UpdateProfileRequest
from .uniqueness import UniquenessGuard
from .exceptions import (
    UserNotFoundError,
    FieldValidationError,
    EmailExistsError,
    UsernameExistsError,
    AvatarRejectedError,
    AvatarTooLargeError,
    InvalidAvatarTypeError,
)

__all__ = [
    # Interfaces
    "IUserService",
    "IUserRepository",
    "IAvatarStorage",
    # Models
    "User",
    "UserPublic",
    "UpdateProfileRequest",
    "UniquenessGuard",
    # Exceptions
    "UserNotFoundError",
    "FieldValidationError",
    "EmailExistsError",
    "UsernameExistsError",
    "AvatarRejectedError",
    "AvatarTooLargeError",
    "InvalidAvatarTypeError",
]
