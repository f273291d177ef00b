"""
Shared infrastructure for the Vayura accounts backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes and error codes
- repository: Base repository with the soft-deletion predicate

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ErrorCode,
    VayuraError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ConfigurationError,
    StorageError,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "ErrorCode",
    "VayuraError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ConfigurationError",
    "StorageError",
]
