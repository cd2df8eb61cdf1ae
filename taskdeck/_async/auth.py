"""Auth namespace for the Taskdeck client (async)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import build_headers, send
from ..models import AuthResponse, ChangePasswordResponse

if TYPE_CHECKING:
    import httpx

    from ..auth.types import CredentialStore


class AsyncAuthNamespace:
    """Async namespace for account operations: login, signup, token refresh, password change."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, credentials: CredentialStore) -> None:
        self._client = client
        self._base_url = base_url
        self._credentials = credentials

    async def login(self, email: str, password: str) -> AuthResponse:
        """Exchange email and password for a token pair and the user's profile.

        Nothing is stored here; persisting the tokens is up to the caller.
        """
        data = await send(
            self._client,
            "POST",
            f"{self._base_url}/login",
            json={"email": email, "password": password},
        )
        return AuthResponse.model_validate(data)

    async def signup(self, email: str, password: str) -> AuthResponse:
        """Create an account for an email the backend already knows, returning tokens like login."""
        data = await send(
            self._client,
            "POST",
            f"{self._base_url}/signup",
            json={"email": email, "password": password},
        )
        return AuthResponse.model_validate(data)

    async def refresh(self) -> AuthResponse:
        """Mint a new token pair, authorizing with the stored refresh token."""
        data = await send(
            self._client,
            "POST",
            f"{self._base_url}/refresh",
            headers=build_headers(self._credentials.get_refresh()),
        )
        return AuthResponse.model_validate(data)

    async def change_password(self, password: str, new_password: str) -> ChangePasswordResponse:
        """Change the current user's password.

        Args:
            password: The current password.
            new_password: The password to set.
        """
        data = await send(
            self._client,
            "PUT",
            f"{self._base_url}/change-password",
            headers=build_headers(self._credentials.get_access()),
            json={"password": password, "new_password": new_password},
        )
        return ChangePasswordResponse.model_validate(data)
