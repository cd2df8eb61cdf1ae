"""Named remote operations returning classified results instead of raising."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

from .async_client import AsyncTaskdeckClient
from .auth.constants import TOKEN_EXPIRED_MESSAGES
from .auth.types import CredentialPair
from .exceptions import APIError, AuthenticationError, NetworkError, TaskdeckError
from .models import AuthResponse
from .profile import ProfileStore, UserProfile
from .result import ErrorKind, Failure, Result, Success

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"
    REFRESH = "refresh"
    LIST_TASKS = "list_tasks"
    EDIT_TASK = "edit_task"
    CREATE_TASK = "create_task"
    DELETE_TASK = "delete_task"
    CHANGE_PASSWORD = "change_password"


# Kinds that run once, without the refresh-and-retry path.
UNAUTHENTICATED_KINDS = frozenset({OperationKind.LOGIN, OperationKind.SIGNUP, OperationKind.REFRESH})


@dataclass(frozen=True)
class LoginParams:
    email: str
    password: str


@dataclass(frozen=True)
class ListTasksParams:
    role: str
    project_id: str


@dataclass(frozen=True)
class CreateTaskParams:
    name: str
    description: str
    due_date: str
    status: str
    project_id: str
    assignee: str


@dataclass(frozen=True)
class EditTaskParams:
    task_id: str
    due_date: str
    status: str
    project_id: str
    assignee: str


@dataclass(frozen=True)
class DeleteTaskParams:
    task_id: str


@dataclass(frozen=True)
class ChangePasswordParams:
    current_password: str
    new_password: str


def classify_error(exc: Exception) -> Failure:
    """Map a transport exception to a Failure.

    Only a 401, or a backend message naming an expired/invalid token, is
    AUTH_EXPIRED. Everything else is OTHER and must not trigger a refresh.
    """
    if isinstance(exc, AuthenticationError):
        return Failure(ErrorKind.AUTH_EXPIRED, str(exc))
    if isinstance(exc, APIError):
        kind = ErrorKind.AUTH_EXPIRED if exc.message in TOKEN_EXPIRED_MESSAGES else ErrorKind.OTHER
        return Failure(kind, exc.message)
    if isinstance(exc, NetworkError):
        return Failure(ErrorKind.OTHER, f"Network error: {exc}")
    if isinstance(exc, OSError):
        return Failure(ErrorKind.OTHER, f"Storage error: {exc}")
    if isinstance(exc, ValidationError):
        return Failure(ErrorKind.OTHER, f"Malformed response: {exc.error_count()} invalid field(s)")
    return Failure(ErrorKind.OTHER, str(exc) or type(exc).__name__)


class OperationClient:
    """Issues one named operation and reports a Success or a classified Failure.

    Side effects mirror the backend's session model: login and signup store
    the token pair and the user profile, refresh overwrites the token pair,
    and a task listing records the project's status vocabulary.
    """

    def __init__(self, client: AsyncTaskdeckClient, profiles: Optional[ProfileStore] = None) -> None:
        self._client = client
        self._credentials = client.credentials
        self._profiles = profiles

    async def invoke(self, kind: OperationKind, params: Any = None) -> Result[Any]:
        """Run ``kind`` once with ``params``.

        Returns:
            Success with the decoded response, or a Failure. Transport,
            validation and local storage errors never escape.
        """
        if kind is OperationKind.REFRESH:
            return await self.refresh()

        try:
            value = await self._dispatch(kind, params)
        except (TaskdeckError, ValidationError, OSError) as e:
            failure = classify_error(e)
            logger.debug("%s failed (%s): %s", kind.value, failure.kind.value, failure.message)
            return failure
        return Success(value)

    async def refresh(self) -> Result[CredentialPair]:
        """Exchange the stored refresh token for a new pair.

        The new pair is saved before Success is returned. On failure the
        store is left as it was; logging out is the caller's decision.
        """
        try:
            response = await self._client.auth.refresh()
            self._credentials.save(response.access_token, response.refresh_token)
        except (TaskdeckError, ValidationError, OSError) as e:
            failure = classify_error(e)
            logger.info("Token refresh failed: %s", failure.message)
            return failure

        logger.info("Token pair refreshed")
        return Success(response.credentials)

    async def _dispatch(self, kind: OperationKind, params: Any) -> Any:
        tasks = self._client.tasks

        if kind is OperationKind.LOGIN:
            return self._store_session(await self._client.auth.login(params.email, params.password))
        if kind is OperationKind.SIGNUP:
            return self._store_session(await self._client.auth.signup(params.email, params.password))
        if kind is OperationKind.LIST_TASKS:
            response = await tasks.list(role=params.role, project_id=params.project_id)
            if self._profiles is not None:
                self._profiles.update_statuses(response.statuses)
            return response
        if kind is OperationKind.CREATE_TASK:
            return await tasks.create(
                params.name,
                description=params.description,
                due_date=params.due_date,
                status=params.status,
                project_id=params.project_id,
                assignee=params.assignee,
            )
        if kind is OperationKind.EDIT_TASK:
            return await tasks.edit(
                params.task_id,
                due_date=params.due_date,
                status=params.status,
                project_id=params.project_id,
                assignee=params.assignee,
            )
        if kind is OperationKind.DELETE_TASK:
            return await tasks.delete(params.task_id)
        if kind is OperationKind.CHANGE_PASSWORD:
            return await self._client.auth.change_password(params.current_password, params.new_password)

        raise ValueError(f"Unsupported operation kind: {kind}")

    def _store_session(self, response: AuthResponse) -> AuthResponse:
        self._credentials.save(response.access_token, response.refresh_token)
        if self._profiles is not None:
            self._profiles.save(
                UserProfile(
                    id=response.id,
                    name=response.name,
                    email=response.email,
                    role=response.role,
                    current_project=response.default_project,
                    projects=dict(response.project_names),
                )
            )
        return response
