"""
Local filesystem avatar storage.

Accepts .jpg/.jpeg/.png files up to the configured size limit and writes
them under the upload directory as `{owner_id}_{unix_ts}_{nonce}{ext}`. The
policy is checked before anything is written, and an existing file is never
opened for writing.
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from shared.exceptions import StorageError
from .exceptions import AvatarTooLargeError, InvalidAvatarTypeError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png")
DEFAULT_MAX_BYTES = 2 * 1024 * 1024
CHUNK_SIZE = 64 * 1024
NONCE_LENGTH = 8


class LocalAvatarStorage:
    """Stores avatars on the local filesystem."""

    def __init__(
        self,
        upload_dir: str,
        max_bytes: int = DEFAULT_MAX_BYTES,
        clock=time.time,
    ):
        self._upload_dir = Path(upload_dir)
        self._max_bytes = max_bytes
        self._clock = clock

    def check(self, filename: str, size: Optional[int]) -> str:
        """
        Validate a file against the avatar policy.

        Returns:
            The normalized (lowercase) extension
        """
        if size is not None and size > self._max_bytes:
            raise AvatarTooLargeError(size, self._max_bytes)

        ext = os.path.splitext(filename)[1].lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise InvalidAvatarTypeError(filename, ALLOWED_EXTENSIONS)
        return ext

    def store(
        self,
        owner_id: int,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None,
    ) -> str:
        """Write the avatar and return its reference (`/<upload_dir>/<name>`)."""
        ext = self.check(filename, size)

        nonce = uuid.uuid4().hex[:NONCE_LENGTH]
        name = f"{owner_id}_{int(self._clock())}_{nonce}{ext}"
        path = self._upload_dir / name

        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
            out = open(path, "xb")
        except OSError as e:
            raise StorageError(
                f"Failed to save avatar: {e}",
                details={"path": str(path)},
            ) from e

        try:
            with out:
                written = self._copy_limited(stream, out)
        except AvatarTooLargeError:
            path.unlink(missing_ok=True)
            raise
        except OSError as e:
            path.unlink(missing_ok=True)
            raise StorageError(
                f"Failed to save avatar: {e}",
                details={"path": str(path)},
            ) from e

        logger.info(f"Stored avatar for user {owner_id} ({written} bytes) at {path}")
        ref = path.as_posix()
        return ref if path.is_absolute() else "/" + ref

    def remove(self, ref: str) -> None:
        """Delete a stored avatar by reference. Missing files are ignored."""
        path = self._upload_dir / Path(ref).name
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to remove avatar: {e}",
                details={"path": str(path)},
            ) from e
        logger.info(f"Removed avatar {path}")

    def _copy_limited(self, stream: BinaryIO, out: BinaryIO) -> int:
        """Copy `stream` to `out`, failing once more than max_bytes arrive."""
        written = 0
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > self._max_bytes:
                raise AvatarTooLargeError(written, self._max_bytes)
            out.write(chunk)
        return written


# Module-level instance getter
_storage_instance: Optional[LocalAvatarStorage] = None


def get_avatar_storage() -> LocalAvatarStorage:
    """Get the avatar storage singleton."""
    global _storage_instance
    if _storage_instance is None:
        from shared.config import get_settings

        settings = get_settings()
        _storage_instance = LocalAvatarStorage(
            settings.upload_dir,
            max_bytes=settings.max_avatar_bytes,
        )
    return _storage_instance


def reset_avatar_storage() -> None:
    """Reset the avatar storage singleton (for testing)."""
    global _storage_instance
    _storage_instance = None
