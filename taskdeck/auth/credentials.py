"""Credential storage for the Taskdeck client.

Tokens live in the system keyring when a backend is available. Otherwise
they are written to ~/.taskdeck/credentials.json with restrictive
permissions, the same way ~/.aws/credentials or ~/.npmrc are kept.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

import keyring
from keyring.errors import KeyringError

from ..config import get_config_dir
from .constants import CREDENTIALS_FILE, KEYRING_SERVICE_NAME, KEYRING_USERNAME
from .types import AuthStatus, CredentialPair

logger = logging.getLogger(__name__)


def get_credentials_path() -> Path:
    return get_config_dir() / CREDENTIALS_FILE


def _decode_pair(raw: str | None) -> CredentialPair:
    """Parse a stored JSON blob. Anything but a complete pair reads as empty."""
    if not raw:
        return CredentialPair()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return CredentialPair()
    if not isinstance(data, dict):
        return CredentialPair()

    pair = CredentialPair(data.get("access_token"), data.get("refresh_token"))
    if not (isinstance(pair.access_token, str) and isinstance(pair.refresh_token, str)):
        return CredentialPair()
    if not pair.is_complete:
        return CredentialPair()
    return pair


def _write_private_file(path: Path, content: str) -> None:
    """Atomic write with restrictive permissions.

    - Directory: 0700 (owner read/write/execute only)
    - File: 0600 (owner read/write only)
    - Atomic: writes to temp file in same dir, then os.replace()
    """
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    os.chmod(directory, 0o700)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".credentials_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class SecureCredentialStore:
    """Keyring-backed credential store with a private-file fallback.

    Both tokens are stored as one JSON entry, so a save either replaces the
    whole pair or nothing.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        service: str = KEYRING_SERVICE_NAME,
        username: str = KEYRING_USERNAME,
    ) -> None:
        self._path = path
        self._service = service
        self._username = username

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else get_credentials_path()

    def _keyring_get(self) -> str | None:
        try:
            return keyring.get_password(self._service, self._username)
        except KeyringError:
            return None

    def _keyring_set(self, value: str) -> bool:
        try:
            keyring.set_password(self._service, self._username, value)
            return True
        except KeyringError as e:
            logger.debug("Keyring unavailable, using credentials file: %s", e)
            return False

    def _keyring_delete(self) -> bool:
        try:
            keyring.delete_password(self._service, self._username)
            return True
        except KeyringError:
            return False

    def save(self, access: str, refresh: str) -> None:
        """Overwrite the stored pair."""
        content = json.dumps({"access_token": access, "refresh_token": refresh})
        if self._keyring_set(content):
            # Drop a fallback file left over from a keyring-less session.
            if self.path.exists():
                self.path.unlink()
            return
        # load() prefers the keyring, so an older pair there would shadow the file.
        self._keyring_delete()
        _write_private_file(self.path, content)

    def load(self) -> CredentialPair:
        pair = _decode_pair(self._keyring_get())
        if pair.is_complete:
            return pair

        if not self.path.exists():
            return CredentialPair()
        try:
            return _decode_pair(self.path.read_text())
        except OSError:
            return CredentialPair()

    def get_access(self) -> str | None:
        return self.load().access_token

    def get_refresh(self) -> str | None:
        return self.load().refresh_token

    def clear(self) -> bool:
        """Remove the pair from keyring and file storage.

        Returns:
            True if any credentials were cleared, False otherwise.
        """
        cleared = self._keyring_delete()

        if self.path.exists():
            self.path.unlink()
            cleared = True

        return cleared

    def status(self) -> AuthStatus:
        """Describe where the current credentials come from, with the token masked."""
        pair = _decode_pair(self._keyring_get())
        if pair.is_complete:
            return AuthStatus(
                authenticated=True,
                masked_token=mask_token(pair.access_token),
                source="keyring",
                location=f"{self._service}/{self._username}",
            )

        pair = self.load()
        if pair.is_complete:
            return AuthStatus(
                authenticated=True,
                masked_token=mask_token(pair.access_token),
                source="file",
                location=str(self.path),
            )

        return AuthStatus(authenticated=False, location=str(self.path))


def mask_token(token: str | None) -> str:
    if not token:
        return "***"
    if len(token) >= 16:
        return token[:4] + "..." + token[-4:]
    if len(token) >= 8:
        return token[:4] + "..."
    return "***"
