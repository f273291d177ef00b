"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
import pytest_asyncio
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from shared.config import get_settings
from shared.database import reset_client_cache
from modules.auth.service import AuthService, reset_auth_service
from modules.auth.tokens import TokenConfig, TokenService, reset_token_service
from modules.auth.models import RegisterRequest
from modules.users.repository import InMemoryUserRepository, reset_user_repository
from modules.users.service import UserService, reset_user_service
from modules.users.storage import LocalAvatarStorage, reset_avatar_storage


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Minimum bcrypt cost keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4


def create_test_token(
    user_id: int = 1,
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    algorithm: str = "HS256",
    **extra,
) -> str:
    """
    Create a test JWT token shaped like the ones TokenService issues.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret
        algorithm: Signing algorithm
        extra: Additional claims

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "user_id": user_id,
        "email": email,
        "exp": int(exp.timestamp()),
        **extra,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset service singletons and cached settings before and after each test."""
    for reset in (
        reset_auth_service,
        reset_token_service,
        reset_user_service,
        reset_user_repository,
        reset_avatar_storage,
        reset_client_cache,
        get_settings.cache_clear,
    ):
        reset()
    yield
    for reset in (
        reset_auth_service,
        reset_token_service,
        reset_user_service,
        reset_user_repository,
        reset_avatar_storage,
        reset_client_cache,
        get_settings.cache_clear,
    ):
        reset()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def token_service() -> TokenService:
    """Provide a token service configured with the test secret."""
    return TokenService(TokenConfig(secret=TEST_JWT_SECRET))


@pytest.fixture
def auth_service(repository, token_service) -> AuthService:
    """Provide an auth service over the in-memory repository."""
    return AuthService(repository, token_service, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def avatar_storage(tmp_path) -> LocalAvatarStorage:
    """Provide avatar storage writing into a temporary directory."""
    return LocalAvatarStorage(str(tmp_path / "avatars"))


@pytest.fixture
def user_service(repository, avatar_storage) -> UserService:
    """Provide a user service over the in-memory repository."""
    return UserService(repository, storage=avatar_storage)


@pytest.fixture
def register_request() -> RegisterRequest:
    """Provide a valid registration request."""
    return RegisterRequest(
        full_name="Jane Doe",
        username="janed",
        email="jane@x.com",
        password="secretpw1",
    )


@pytest_asyncio.fixture
async def registered_user(auth_service, register_request):
    """Register the default test user and return it."""
    return await auth_service.register(register_request)
