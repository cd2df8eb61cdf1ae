"""Authenticated operation executor.

Runs one logical operation with the refresh-and-retry-once policy and
publishes its outcome in the operation's state cell:

    ATTEMPTING --ok / other error--------------------------> SETTLED
    ATTEMPTING --auth expired--> REFRESHING_AFTER_EXPIRY
    REFRESHING_AFTER_EXPIRY --refresh failed (forced logout)--> SETTLED
    REFRESHING_AFTER_EXPIRY --refreshed--> RETRYING --any outcome--> SETTLED

RETRYING always settles, so a second expiry cannot start another refresh.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional

from .auth.constants import ERROR_REFRESH_FAILED, ERROR_SESSION_EXPIRED
from .auth.session import SessionState
from .auth.types import CredentialPair
from .operations import (
    UNAUTHENTICATED_KINDS,
    ChangePasswordParams,
    CreateTaskParams,
    DeleteTaskParams,
    EditTaskParams,
    ListTasksParams,
    LoginParams,
    OperationClient,
    OperationKind,
)
from .profile import ProfileStore
from .result import ErrorKind, Failure, Result, Success
from .state import OperationState

logger = logging.getLogger(__name__)

ForcedLogoutListener = Callable[[], None]


class Phase(str, Enum):
    ATTEMPTING = "attempting"
    REFRESHING_AFTER_EXPIRY = "refreshing_after_expiry"
    RETRYING = "retrying"
    SETTLED = "settled"


class AuthenticatedExecutor:
    """Executes named operations and tracks one OperationState per kind.

    States are created here, one per OperationKind, and live as long as the
    executor. Calls of different kinds run independently; repeated calls of
    the same kind are not coalesced and the last settle wins.
    """

    def __init__(
        self,
        operations: OperationClient,
        session: SessionState,
        profiles: Optional[ProfileStore] = None,
    ) -> None:
        self._operations = operations
        self._session = session
        self._profiles = profiles
        self._states: dict[OperationKind, OperationState[Any]] = {kind: OperationState() for kind in OperationKind}
        self._forced_logout_listeners: list[ForcedLogoutListener] = []

    @property
    def session(self) -> SessionState:
        return self._session

    def state(self, kind: OperationKind) -> OperationState[Any]:
        return self._states[kind]

    def on_forced_logout(self, listener: ForcedLogoutListener) -> Callable[[], None]:
        """Register a callback fired when a failed refresh ends the session."""
        self._forced_logout_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._forced_logout_listeners:
                self._forced_logout_listeners.remove(listener)

        return unsubscribe

    async def execute(self, kind: OperationKind, params: Any = None) -> None:
        """Run ``kind`` once and settle its state. The outcome is read from ``state(kind)``."""
        await self._execute(kind, params)

    async def _execute(self, kind: OperationKind, params: Any = None) -> Result[Any]:
        state = self._states[kind]
        state.start()

        refresh_failed = False
        try:
            if kind in UNAUTHENTICATED_KINDS:
                outcome = await self._operations.invoke(kind, params)
                if isinstance(outcome, Success) and kind in (OperationKind.LOGIN, OperationKind.SIGNUP):
                    self._session.set_logged_in()
            else:
                outcome, refresh_failed = await self._run_with_refresh(kind, params)
        except Exception as e:
            # Unexpected errors still settle the state before propagating.
            state.fail(str(e) or type(e).__name__)
            raise

        if isinstance(outcome, Success):
            state.succeed(outcome.value)
        else:
            state.fail(outcome.message)

        if refresh_failed:
            self._force_logout()
        return outcome

    async def _run_with_refresh(self, kind: OperationKind, params: Any) -> tuple[Result[Any], bool]:
        """Drive the phase machine; also report whether the refresh step failed."""
        phase = Phase.ATTEMPTING
        outcome: Result[Any] = Failure(ErrorKind.OTHER, ERROR_REFRESH_FAILED)
        refresh_failed = False

        while phase is not Phase.SETTLED:
            if phase is Phase.ATTEMPTING:
                outcome = await self._operations.invoke(kind, params)
                if isinstance(outcome, Failure) and outcome.is_auth_expired:
                    logger.info("%s: access token rejected, refreshing", kind.value)
                    phase = Phase.REFRESHING_AFTER_EXPIRY
                else:
                    phase = Phase.SETTLED

            elif phase is Phase.REFRESHING_AFTER_EXPIRY:
                refreshed = await self._operations.refresh()
                if isinstance(refreshed, Failure):
                    outcome = Failure(refreshed.kind, refreshed.message or ERROR_REFRESH_FAILED)
                    refresh_failed = True
                    phase = Phase.SETTLED
                else:
                    phase = Phase.RETRYING

            elif phase is Phase.RETRYING:
                outcome = await self._operations.invoke(kind, params)
                if isinstance(outcome, Failure) and outcome.is_auth_expired:
                    logger.warning("%s: token rejected again after refresh (%s)", kind.value, outcome.message)
                    outcome = Failure(ErrorKind.OTHER, ERROR_SESSION_EXPIRED)
                phase = Phase.SETTLED

        return outcome, refresh_failed

    def _force_logout(self) -> None:
        logger.warning("Token refresh failed, ending session")
        self.logout()
        for listener in list(self._forced_logout_listeners):
            listener()

    def logout(self) -> None:
        """Clear tokens, the logged-in flag and the stored profile."""
        self._session.set_logged_out()
        if self._profiles is not None:
            self._profiles.clear()

    async def login(self, email: str, password: str) -> None:
        await self.execute(OperationKind.LOGIN, LoginParams(email, password))

    async def signup(self, email: str, password: str) -> None:
        await self.execute(OperationKind.SIGNUP, LoginParams(email, password))

    async def refresh(self) -> Result[CredentialPair]:
        """Refresh the token pair on demand, tracking it in the REFRESH state."""
        return await self._execute(OperationKind.REFRESH)

    async def list_tasks(self, role: str, project_id: str) -> None:
        await self.execute(OperationKind.LIST_TASKS, ListTasksParams(role, project_id))

    async def create_task(
        self,
        *,
        name: str,
        description: str,
        due_date: str,
        status: str,
        project_id: str,
        assignee: str,
    ) -> None:
        await self.execute(
            OperationKind.CREATE_TASK,
            CreateTaskParams(name, description, due_date, status, project_id, assignee),
        )

    async def edit_task(
        self,
        task_id: str,
        *,
        due_date: str,
        status: str,
        project_id: str,
        assignee: str,
    ) -> None:
        await self.execute(
            OperationKind.EDIT_TASK,
            EditTaskParams(task_id, due_date, status, project_id, assignee),
        )

    async def delete_task(self, task_id: str) -> None:
        await self.execute(OperationKind.DELETE_TASK, DeleteTaskParams(task_id))

    async def delete_task_and_reload(
        self,
        task_id: str,
        role: str,
        project_id: str,
        *,
        delay: float = 2.0,
    ) -> None:
        """Delete a task, give the backend ``delay`` seconds, then reload the list.

        Nothing is reloaded when the delete ended the session.
        """
        await self.delete_task(task_id)
        if not self._session.is_authenticated:
            return
        await asyncio.sleep(delay)
        await self.list_tasks(role, project_id)

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self.execute(
            OperationKind.CHANGE_PASSWORD,
            ChangePasswordParams(current_password, new_password),
        )

    def clear_errors(self) -> None:
        for state in self._states.values():
            state.clear_error()

    def clear_responses(self) -> None:
        for state in self._states.values():
            state.clear_response()

    def consume_successes(self) -> None:
        for state in self._states.values():
            state.consume_success()
