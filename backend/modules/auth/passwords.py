"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

import bcrypt

from .exceptions import EncodingError

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a password with bcrypt (auto-salted).

    Two calls with the same password return different hashes; both verify.

    Raises:
        EncodingError: If bcrypt cannot produce a hash
    """
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()
    except (ValueError, TypeError) as e:
        raise EncodingError(f"Failed to hash password: {e}") from e


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False
