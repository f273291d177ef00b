"""
Uniqueness guard for email and username.

Both values must be unique among live (non-deleted) users. The guard is a
pre-check: the repository's own unique constraint remains the authoritative
answer when two requests race between check and write.
"""

import logging

from .interfaces import IUserRepository
from .exceptions import EmailExistsError, UsernameExistsError

logger = logging.getLogger(__name__)


class UniquenessGuard:
    """Checks email/username availability against live users."""

    def __init__(self, repository: IUserRepository):
        self._repo = repository

    def email_taken(self, email: str) -> bool:
        taken = self._repo.email_exists(email)
        logger.debug(f"Email availability check: taken={taken}")
        return taken

    def username_taken(self, username: str) -> bool:
        taken = self._repo.username_exists(username)
        logger.debug(f"Username availability check for {username!r}: taken={taken}")
        return taken

    def ensure_email_available(self, email: str) -> None:
        if self.email_taken(email):
            raise EmailExistsError()

    def ensure_username_available(self, username: str) -> None:
        if self.username_taken(username):
            raise UsernameExistsError()

    def ensure_available(self, email: str, username: str) -> None:
        """
        Raise on the first conflict, email before username.

        Raises:
            EmailExistsError: If a live user holds the email
            UsernameExistsError: If a live user holds the username
        """
        self.ensure_email_available(email)
        self.ensure_username_available(username)
