"""
Users module exceptions.

These exceptions are raised by the users module and can be caught
by the transport layer to return appropriate responses.
"""

from typing import Optional

from shared.exceptions import (
    ErrorCode,
    NotFoundError,
    ValidationError,
    ConflictError,
)


class UserNotFoundError(NotFoundError):
    """Raised when no live user matches the lookup."""

    def __init__(self, user_id: Optional[int] = None):
        super().__init__(
            "User not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id} if user_id is not None else {},
        )


class FieldValidationError(ValidationError):
    """Raised when a single input field is malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR,
            details={"field": field},
        )
        self.field = field


class EmailExistsError(ConflictError):
    """Raised when the email is already held by a live user."""

    def __init__(self):
        super().__init__("Email already registered", code=ErrorCode.EMAIL_EXISTS)


class UsernameExistsError(ConflictError):
    """Raised when the username is already held by a live user."""

    def __init__(self):
        super().__init__("Username already taken", code=ErrorCode.USERNAME_EXISTS)


class AvatarRejectedError(ValidationError):
    """Base exception for avatar files refused by the storage policy."""

    pass


class AvatarTooLargeError(AvatarRejectedError):
    """Raised when an avatar exceeds the size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File too large (max {limit // (1024 * 1024)}MB)",
            code=ErrorCode.AVATAR_TOO_LARGE,
            details={"size": size, "limit": limit},
        )


class InvalidAvatarTypeError(AvatarRejectedError):
    """Raised when an avatar has a disallowed extension."""

    def __init__(self, filename: str, allowed: tuple[str, ...]):
        super().__init__(
            "Invalid file type (only " + ", ".join(e.lstrip(".") for e in allowed) + " allowed)",
            code=ErrorCode.INVALID_AVATAR_TYPE,
            details={"filename": filename},
        )
