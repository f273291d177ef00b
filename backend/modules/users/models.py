"""
Users module data models.

These models define the Identity record held by persistence and the
projections exposed to other modules through the interface.
"""

from datetime import date, datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

# Strict calendar-date literal accepted for birthdays.
BIRTHDAY_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """
    A registered account (Identity).

    `password_hash` and `deleted_at` are persistence-only fields: both are
    excluded from `model_dump()` so they never reach an outward payload.
    A record with `deleted_at` set is soft-deleted and invisible to lookups.
    """

    id: int = Field(default=0, description="Surrogate ID (0 until persisted)")
    full_name: str = Field(..., description="Full name")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Unique email address")
    phone: str = Field(default="", description="Phone number")
    avatar: str = Field(default="", description="Reference into avatar storage")
    gender: str = Field(default="", description="Gender")
    birthday: Optional[date] = Field(None, description="Birthday (unset when None)")
    role: str = Field(default="user", description="User role")
    password_hash: str = Field(default="", exclude=True, repr=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = Field(None, exclude=True)

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None


class UserPublic(BaseModel):
    """Outward projection of a User: no credential hash, no deletion marker."""

    id: int
    full_name: str
    username: str
    email: str
    phone: str = ""
    avatar: str = ""
    gender: str = ""
    birthday: Optional[date] = None
    role: str = "user"
    created_at: datetime
    updated_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(**user.model_dump())


class UpdateProfileRequest(BaseModel):
    """
    Partial profile update.

    Empty strings mean "leave unchanged"; there is no way to clear a field
    through this request.
    """

    full_name: str = ""
    username: str = ""
    phone: str = ""
    gender: str = ""
    birthday: str = Field(default="", description="YYYY-MM-DD")
