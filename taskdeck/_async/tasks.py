"""Tasks namespace for the Taskdeck client (async)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import build_headers, build_query_params, send
from ..models import StatusResponse, TasksResponse

if TYPE_CHECKING:
    import httpx

    from ..auth.types import CredentialStore


class AsyncTasksNamespace:
    """Async namespace for task operations within a project.

    Every call reads the access token from the credential store at request
    time, so a token written by a refresh is picked up by the next call.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, credentials: CredentialStore) -> None:
        self._client = client
        self._base_url = base_url
        self._credentials = credentials

    def _headers(self) -> dict[str, str]:
        return build_headers(self._credentials.get_access())

    async def list(self, *, role: str, project_id: str) -> TasksResponse:
        """List the tasks visible to ``role`` in a project.

        Args:
            role: The user's role, as returned at login.
            project_id: The project to list.

        Returns:
            The tasks plus the project's comma-separated status vocabulary.
        """
        data = await send(
            self._client,
            "GET",
            f"{self._base_url}/get-tasks",
            headers=self._headers(),
            params=build_query_params(role=role, project_id=project_id),
        )
        return TasksResponse.model_validate(data)

    async def create(
        self,
        name: str,
        *,
        description: str,
        due_date: str,
        status: str,
        project_id: str,
        assignee: str,
    ) -> StatusResponse:
        """Create a task.

        Args:
            name: Task name.
            description: Free-form description.
            due_date: Due date as "YYYY-MM-DD".
            status: Initial status, one of the project's statuses.
            project_id: Project the task is created in.
            assignee: Email of the assignee.
        """
        payload = {
            "due_date": due_date,
            "status": status,
            "project_id": project_id,
            "name": name,
            "description": description,
            "assignee": assignee,
        }
        data = await send(
            self._client,
            "POST",
            f"{self._base_url}/create-task",
            headers=self._headers(),
            json=payload,
        )
        return StatusResponse.model_validate(data)

    async def edit(
        self,
        task_id: str,
        *,
        due_date: str,
        status: str,
        project_id: str,
        assignee: str,
    ) -> StatusResponse:
        """Update due date, status and assignee of an existing task."""
        payload = {
            "task_id": task_id,
            "due_date": due_date,
            "status": status,
            "project_id": project_id,
            "assignee": assignee,
        }
        data = await send(
            self._client,
            "PUT",
            f"{self._base_url}/edit-task",
            headers=self._headers(),
            json=payload,
        )
        return StatusResponse.model_validate(data)

    async def delete(self, task_id: str) -> StatusResponse:
        # The backend expects the id in a DELETE body, not in the path.
        data = await send(
            self._client,
            "DELETE",
            f"{self._base_url}/delete-task",
            headers=self._headers(),
            json={"task_id": task_id},
        )
        return StatusResponse.model_validate(data)
