"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by the transport layer to return appropriate responses.
"""

from shared.exceptions import ErrorCode, VayuraError, AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password raise the same error with the same
    message, so callers cannot tell which part was wrong.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code=ErrorCode.INVALID_CREDENTIALS)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid, malformed or expired."""

    def __init__(self, message: str = "Invalid or expired token", reason: str = "invalid"):
        super().__init__(
            message,
            code=ErrorCode.INVALID_TOKEN,
            details={"reason": reason},
        )


class ExpiredTokenError(InvalidTokenError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, reason="expired")


class MissingTokenError(InvalidTokenError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, reason="missing")


class EncodingError(VayuraError):
    """Raised when a password could not be hashed."""

    def __init__(self, message: str = "Failed to hash password"):
        super().__init__(message, code=ErrorCode.ENCODING_ERROR)
