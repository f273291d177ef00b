"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, runtime_checkable

from modules.users.models import User

from .models import RegisterRequest, LoginRequest, LoginResponse, TokenClaims


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for registration and authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> User:
        """
        Validate and create a new user.

        Args:
            request: Registration input

        Returns:
            The created user with its assigned ID and timestamps

        Raises:
            FieldValidationError: First failing field check
            EmailExistsError: If a live user holds the email
            UsernameExistsError: If a live user holds the username
        """
        ...

    async def authenticate(self, request: LoginRequest) -> User:
        """
        Check an email/password pair.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        ...

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Authenticate and mint a session token.

        Raises:
            InvalidCredentialsError: If authentication fails
            ConfigurationError: If token signing is not configured
        """
        ...

    async def validate_token(self, token: str) -> TokenClaims:
        """
        Validate a session token and return its claims.

        Raises:
            InvalidTokenError: If token is invalid or expired
        """
        ...

    async def get_current_user(self, token: str) -> User:
        """
        Resolve the live user a session token belongs to.

        Raises:
            InvalidTokenError: If token is invalid or expired
            UserNotFoundError: If the user no longer exists
        """
        ...
