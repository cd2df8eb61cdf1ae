"""Typed values shared by the authentication components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CredentialPair:
    """Access and refresh token, always both present or both absent."""

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.access_token and self.refresh_token)


class CredentialStore(Protocol):
    """Storage for the credential pair consumed by the client."""

    def save(self, access: str, refresh: str) -> None: ...

    def load(self) -> CredentialPair: ...

    def get_access(self) -> str | None: ...

    def get_refresh(self) -> str | None: ...

    def clear(self) -> bool: ...


@dataclass
class AuthStatus:
    """Current authentication status, as reported by ``taskdeck auth status``."""

    authenticated: bool
    masked_token: str | None = None
    source: str | None = None  # "keyring", "file", or None
    location: str | None = None
