"""
Base exception classes for the Vayura accounts backend.

Each module should define its own exceptions that inherit from these bases.
Every exception carries an ErrorCode so callers branch on the kind of
failure rather than on exception identity.
"""

from enum import Enum
from typing import Optional, Any


class ErrorCode(str, Enum):
    """Kinds of failure surfaced by the accounts core."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    USERNAME_EXISTS = "USERNAME_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_TOKEN = "INVALID_TOKEN"
    ENCODING_ERROR = "ENCODING_ERROR"
    AVATAR_TOO_LARGE = "AVATAR_TOO_LARGE"
    INVALID_AVATAR_TYPE = "INVALID_AVATAR_TYPE"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class VayuraError(Exception):
    """
    Base exception for all Vayura errors.

    All custom exceptions should inherit from this class.
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(VayuraError):
    """Resource not found."""

    pass


class ValidationError(VayuraError):
    """Input validation failed."""

    default_code = ErrorCode.VALIDATION_ERROR


class ConflictError(VayuraError):
    """A unique value is already held by another live record."""

    pass


class AuthenticationError(VayuraError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ConfigurationError(VayuraError):
    """
    The process is misconfigured.

    Not recoverable per request: the operation must not be served until
    configuration is fixed and the process restarted.
    """

    default_code = ErrorCode.CONFIGURATION_ERROR


class StorageError(VayuraError):
    """Error reading or writing blob storage."""

    default_code = ErrorCode.STORAGE_ERROR
