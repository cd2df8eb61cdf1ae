"""Asynchronous HTTP client for the Taskdeck backend."""

from __future__ import annotations

from typing import Any

import httpx

from ._async import AsyncAuthNamespace, AsyncTasksNamespace
from .auth.types import CredentialStore
from .config import ClientConfig


class AsyncTaskdeckClient:
    """Asynchronous transport for the Taskdeck API.

    Example:
        >>> import asyncio
        >>> from taskdeck import AsyncTaskdeckClient, ClientConfig, SecureCredentialStore
        >>>
        >>> async def main():
        ...     store = SecureCredentialStore()
        ...     async with AsyncTaskdeckClient(store, config=ClientConfig()) as client:
        ...         print(await client.tasks.list(role="member", project_id="123"))
        >>>
        >>> asyncio.run(main())

    The client provides namespaced access to different API areas:
        - client.auth: login, signup, token refresh, password change
        - client.tasks: list, create, edit and delete tasks

    Failures are raised as TaskdeckError subclasses. For the refresh-and-retry
    behavior and result classification, wrap it in an OperationClient.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        *,
        config: ClientConfig | None = None,
    ) -> None:
        """Initialize the async Taskdeck client.

        Args:
            credentials: Store the bearer tokens are read from on every request.
            config: Base URL and timeout (default: ClientConfig()).
        """
        self._config = config or ClientConfig()
        self._credentials = credentials
        self._client = httpx.AsyncClient(timeout=self._config.timeout)

        self.auth = AsyncAuthNamespace(self._client, self._config.base_url, credentials)
        self.tasks = AsyncTasksNamespace(self._client, self._config.base_url, credentials)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    async def close(self) -> None:
        """Release the underlying HTTP client resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncTaskdeckClient:
        return self

    async def __aexit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        await self.close()
