"""
Session token issuance and verification.

Tokens are HS256-signed JWTs carrying `user_id`, `email` and `exp`.
Configuration (secret and validity) is built once at startup into an
immutable TokenConfig and injected into TokenService.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from pydantic import BaseModel, ValidationError

from shared.config import Settings
from shared.exceptions import ConfigurationError

from .models import TokenClaims
from .exceptions import InvalidTokenError, ExpiredTokenError, MissingTokenError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY = timedelta(hours=72)
SIGNING_ALGORITHM = "HS256"


class TokenConfig(BaseModel):
    """Immutable token settings."""

    model_config = {"frozen": True}

    secret: str = ""
    expires_in: timedelta = DEFAULT_EXPIRY

    @property
    def is_configured(self) -> bool:
        return bool(self.secret)

    @property
    def effective_expiry(self) -> timedelta:
        """Validity window; zero or negative values fall back to 72 hours."""
        if self.expires_in <= timedelta(0):
            return DEFAULT_EXPIRY
        return self.expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(secret=settings.jwt_secret, expires_in=settings.jwt_expires_in)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies session tokens."""

    def __init__(
        self,
        config: TokenConfig,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._config = config
        self._clock = clock

    @property
    def config(self) -> TokenConfig:
        return self._config

    def _require_secret(self) -> str:
        if not self._config.is_configured:
            raise ConfigurationError("JWT secret not configured")
        return self._config.secret

    def issue_with_expiry(self, user_id: int, email: str) -> tuple[str, datetime]:
        """
        Sign a token for the user.

        Returns:
            (token, expires_at)

        Raises:
            ConfigurationError: If no signing secret is configured
        """
        secret = self._require_secret()
        exp = int((self._clock() + self._config.effective_expiry).timestamp())
        payload = {
            "user_id": user_id,
            "email": email,
            "exp": exp,
        }
        token = jwt.encode(payload, secret, algorithm=SIGNING_ALGORITHM)
        return token, datetime.fromtimestamp(exp, tz=timezone.utc)

    def issue(self, user_id: int, email: str) -> str:
        token, _ = self.issue_with_expiry(user_id, email)
        return token

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify a token and return its claims.

        Only HS256 is accepted; tokens naming any other algorithm (including
        "none") are rejected before the signature is considered.

        Raises:
            ConfigurationError: If no signing secret is configured
            ExpiredTokenError: If the token's expiry has passed
            InvalidTokenError: If the token is malformed, mis-signed or
                carries an unexpected claim set
        """
        secret = self._require_secret()
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[SIGNING_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected session token: {e}")
            raise InvalidTokenError(str(e))

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            logger.warning("Rejected session token: unexpected claim set")
            raise InvalidTokenError("Invalid token claims")


# Module-level instance getter
_service_instance: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Get the token service singleton, configured from settings on first use."""
    global _service_instance
    if _service_instance is None:
        from shared.config import get_settings

        _service_instance = TokenService(TokenConfig.from_settings(get_settings()))
    return _service_instance


def reset_token_service() -> None:
    """Reset the token service singleton (for testing)."""
    global _service_instance
    _service_instance = None
