"""Wire models mirroring the backend's JSON payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .auth.types import CredentialPair


class AuthResponse(BaseModel):
    """Body returned by login, signup and refresh.

    Refresh responses only carry the token fields; the profile fields
    default to empty values.
    """

    access_token: str
    refresh_token: str
    access_token_expires: int | None = None
    refresh_token_expires: int | None = None
    msg: str = ""
    id: str = ""
    name: str = ""
    email: str = ""
    role: str = ""
    # Comma-separated project ids; the first one is the default project.
    project_id: str = ""
    project_names: dict[str, str] = Field(default_factory=dict)

    @property
    def credentials(self) -> CredentialPair:
        return CredentialPair(self.access_token, self.refresh_token)

    @property
    def default_project(self) -> str:
        return self.project_id.split(",")[0].strip()


class Task(BaseModel):
    """A single task as listed by ``/get-tasks``."""

    model_config = ConfigDict(populate_by_name=True)

    assignee_id: str = Field(default="", alias="AssigneeID")
    status: str = Field(default="", alias="Status")
    due_date: str = ""
    name: str = ""
    task_id: str = ""
    description: str = Field(default="", alias="TaskDescription")


class TasksResponse(BaseModel):
    msg: str = ""
    user_tasks: list[Task] = Field(default_factory=list)
    statuses: str = ""

    @property
    def status_list(self) -> list[str]:
        """The project's status vocabulary, split and stripped."""
        return [s.strip() for s in self.statuses.split(",") if s.strip()]


class StatusResponse(BaseModel):
    """Acknowledgement returned by task mutations."""

    msg: str = ""


class ChangePasswordResponse(StatusResponse):
    pass
