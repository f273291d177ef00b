"""
Authentication module.

Handles registration, password verification and session tokens.

Public API:
- IAuthService: Interface for auth operations
- TokenService / TokenConfig: Session token issuance and verification
- hash_password / verify_password: Credential hashing
- TokenClaims, RegisterRequest, LoginRequest, LoginResponse
- Auth exceptions: InvalidCredentialsError, InvalidTokenError, etc.
"""

from .interfaces import IAuthService
from .models import TokenClaims, RegisterRequest, LoginRequest, LoginResponse
from .passwords import hash_password, verify_password
from .tokens import TokenService, TokenConfig
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    EncodingError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Services
    "TokenService",
    "TokenConfig",
    "hash_password",
    "verify_password",
    # Models
    "TokenClaims",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    # Exceptions
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "EncodingError",
]
