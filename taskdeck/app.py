"""Application assembly: wires storage, session, transport and executor."""

from __future__ import annotations

from typing import Any

from .async_client import AsyncTaskdeckClient
from .auth.credentials import SecureCredentialStore
from .auth.session import SessionState
from .auth.types import CredentialStore
from .config import ClientConfig
from .executor import AuthenticatedExecutor
from .operations import OperationClient
from .profile import ProfileStore


class TaskdeckApp:
    """Owns every long-lived component of a client session.

    Example:
        >>> from taskdeck import OperationKind
        >>> async with TaskdeckApp() as app:
        ...     await app.executor.login("me@example.com", "secret")
        ...     print(app.executor.state(OperationKind.LOGIN).snapshot)

    The HTTP client is closed when the context exits.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        credentials: CredentialStore | None = None,
        profiles: ProfileStore | None = None,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self.credentials = credentials if credentials is not None else SecureCredentialStore()
        self.profiles = profiles if profiles is not None else ProfileStore()
        self.session = SessionState(self.credentials)
        self.client = AsyncTaskdeckClient(self.credentials, config=self.config)
        self.operations = OperationClient(self.client, self.profiles)
        self.executor = AuthenticatedExecutor(self.operations, self.session, self.profiles)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> TaskdeckApp:
        return self

    async def __aexit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        await self.close()
