"""
Centralized configuration for the Vayura accounts backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, SUPABASE_*).
"""

from datetime import timedelta
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Vayura Accounts"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Session tokens (empty secret means token operations are unavailable)
    jwt_secret: str = ""
    jwt_expires_in: timedelta = timedelta(hours=72)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Avatar storage
    upload_dir: str = "uploads/avatars"
    max_avatar_bytes: int = 2 * 1024 * 1024

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    users_table: str = "users"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
