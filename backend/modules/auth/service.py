"""
Authentication service implementation.

Registers users, checks credentials and issues session tokens.
"""

import logging
import re
from datetime import date
from typing import Optional

from modules.users.interfaces import IUserRepository
from modules.users.models import User, UserPublic
from modules.users.uniqueness import UniquenessGuard
from modules.users.service import parse_birthday
from modules.users.exceptions import FieldValidationError, UserNotFoundError

from .interfaces import IAuthService
from .models import RegisterRequest, LoginRequest, LoginResponse, TokenClaims
from .passwords import hash_password, verify_password, DEFAULT_ROUNDS, MAX_PASSWORD_BYTES
from .tokens import TokenService
from .exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

MIN_NAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8
DEFAULT_ROLE = "user"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Users are persisted through an IUserRepository; passwords are stored as
    bcrypt hashes and sessions are HS256 tokens from the TokenService.
    """

    def __init__(
        self,
        repository: IUserRepository,
        tokens: TokenService,
        guard: Optional[UniquenessGuard] = None,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self._repo = repository
        self._tokens = tokens
        self._guard = guard or UniquenessGuard(repository)
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, request: RegisterRequest) -> User:
        """
        Validate and create a new user.

        Checks run in a fixed order and stop at the first failure: full name,
        username, email shape, password, email uniqueness, username
        uniqueness, birthday.
        """
        self._validate_registration(request)
        self._guard.ensure_available(request.email, request.username)

        birthday: Optional[date] = None
        if request.birthday:
            birthday = parse_birthday(request.birthday)

        user = User(
            full_name=request.full_name,
            username=request.username,
            email=request.email,
            phone=request.phone,
            role=request.role or DEFAULT_ROLE,
            gender=request.gender,
            birthday=birthday,
            password_hash=hash_password(request.password, rounds=self._bcrypt_rounds),
        )

        created = self._repo.create(user)
        logger.info(f"Registered user {created.id} ({created.username})")
        return created

    async def authenticate(self, request: LoginRequest) -> User:
        user = self._repo.find_by_email(request.email)
        if user is None:
            logger.warning("Login failed: no live account for email")
            raise InvalidCredentialsError()

        if not verify_password(request.password, user.password_hash):
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        return user

    async def login(self, request: LoginRequest) -> LoginResponse:
        user = await self.authenticate(request)
        token, expires_at = self._tokens.issue_with_expiry(user.id, user.email)
        logger.info(f"Issued session token for user {user.id}")
        return LoginResponse(
            user=UserPublic.from_user(user),
            token=token,
            expires_at=expires_at,
        )

    async def validate_token(self, token: str) -> TokenClaims:
        return self._tokens.verify(token)

    async def get_current_user(self, token: str) -> User:
        claims = await self.validate_token(token)
        user = self._repo.find_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError(claims.user_id)
        return user

    def _validate_registration(self, request: RegisterRequest) -> None:
        if len(request.full_name) < MIN_NAME_LENGTH:
            raise FieldValidationError(
                "full_name", "full name must be at least 3 characters"
            )
        if len(request.username) < MIN_NAME_LENGTH:
            raise FieldValidationError(
                "username", "username must be at least 3 characters"
            )
        if not is_valid_email(request.email):
            raise FieldValidationError("email", "invalid email format")
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise FieldValidationError(
                "password", "password must be at least 8 characters"
            )
        if len(request.password.encode()) > MAX_PASSWORD_BYTES:
            raise FieldValidationError(
                "password", "password must be at most 72 bytes"
            )


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        from shared.config import get_settings
        from modules.users.repository import get_user_repository
        from .tokens import get_token_service

        _service_instance = AuthService(
            get_user_repository(),
            get_token_service(),
            bcrypt_rounds=get_settings().bcrypt_rounds,
        )
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
