"""Process-wide "is authenticated" flag."""

from __future__ import annotations

import logging

from .._observable import Observable
from .types import CredentialStore

logger = logging.getLogger(__name__)


class SessionState(Observable[bool]):
    """Tracks whether a user is logged in.

    The flag is derived from the credential store once, at construction:
    a non-blank access token means logged in. After that it only changes
    through ``set_logged_in`` / ``set_logged_out``.
    """

    def __init__(self, credentials: CredentialStore) -> None:
        self._credentials = credentials
        access = credentials.get_access()
        super().__init__(bool(access and access.strip()))

    @property
    def is_authenticated(self) -> bool:
        return self.value

    def set_logged_in(self) -> None:
        """Mark the session as logged in. Credentials must already be saved."""
        self._set(True)

    def set_logged_out(self) -> None:
        """Clear stored credentials, then mark the session as logged out."""
        self._credentials.clear()
        logger.info("Session logged out")
        self._set(False)
