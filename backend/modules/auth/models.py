"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field

from modules.users.models import UserPublic


class TokenClaims(BaseModel):
    """
    Claims carried by a session token.

    The shape is strict: unknown keys or wrongly typed values are rejected,
    so a token that verifies but carries a foreign payload is still refused.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    user_id: int = Field(..., description="Surrogate ID of the user")
    email: str = Field(..., description="User's email")
    exp: int = Field(..., description="Expiration timestamp (unix seconds)")

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class RegisterRequest(BaseModel):
    """Registration input. Validation happens in the service, in a fixed order."""

    full_name: str
    username: str
    email: str
    password: str = Field(..., repr=False)
    phone: str = ""
    role: str = ""
    gender: str = ""
    birthday: str = Field(default="", description="YYYY-MM-DD")


class LoginRequest(BaseModel):
    """Login input."""

    email: str
    password: str = Field(..., repr=False)


class LoginResponse(BaseModel):
    """Successful login: the user's public profile and a session token."""

    user: UserPublic
    token: str
    expires_at: datetime
