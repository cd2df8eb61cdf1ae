"""Tests for CLI entrypoint behavior."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from taskdeck import __version__
from taskdeck.auth.credentials import SecureCredentialStore
from taskdeck.cli.main import app
from taskdeck.profile import ProfileStore, UserProfile

runner = CliRunner()

LOGIN_BODY = {
    "access_token": "access-token-0001",
    "refresh_token": "refresh-token-0001",
    "id": "u-1",
    "name": "Ada",
    "email": "ada@example.com",
    "role": "member",
    "project_id": "p-1,p-2",
    "project_names": {"Web": "p-1", "App": "p-2"},
}

TASKS_BODY = {
    "msg": "",
    "user_tasks": [
        {"task_id": "t-1", "name": "Ship", "Status": "Completed"},
        {"task_id": "t-2", "name": "Test", "Status": "Open"},
        {"task_id": "t-3", "name": "Docs", "Status": ""},
    ],
    "statuses": "Open,Completed",
}


def _response(status_code, payload=None):
    return httpx.Response(status_code, json=payload if payload is not None else {})


def _patched(**kwargs):
    return patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock, **kwargs)


@pytest.fixture
def logged_in():
    """A stored token pair plus a profile whose current project is Web."""
    SecureCredentialStore().save("access-token-0001", "refresh-token-0001")
    ProfileStore().save(
        UserProfile(
            id="u-1",
            name="Ada",
            role="member",
            current_project="p-1",
            statuses="Open,Completed",
            projects={"Web": "p-1", "App": "p-2"},
        )
    )


def test_root_version_option():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"taskdeck {__version__}"


def test_version_subcommand():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"taskdeck {__version__}"


class TestAuthCommands:
    def test_login_stores_credentials_and_profile(self):
        with _patched(return_value=_response(200, LOGIN_BODY)):
            result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com", "--password", "pw"])

        assert result.exit_code == 0, result.output
        assert "Logged in as Ada." in result.output
        assert "Current project: Web" in result.output
        assert SecureCredentialStore().get_access() == "access-token-0001"
        assert ProfileStore().load().role == "member"

    def test_login_failure_exits_with_message(self):
        with _patched(return_value=_response(400, {"msg": "Wrong email or password"})):
            result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com", "--password", "pw"])

        assert result.exit_code == 1
        assert "Wrong email or password" in result.output
        assert SecureCredentialStore().get_access() is None

    def test_login_refused_when_already_authenticated(self, logged_in):
        with _patched() as mock_request:
            result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com", "--password", "pw"])

        assert result.exit_code == 1
        assert "already authenticated" in result.output
        mock_request.assert_not_called()

    def test_status(self, logged_in):
        result = runner.invoke(app, ["auth", "status"])
        assert result.exit_code == 0
        assert "Authenticated" in result.output
        assert "acce...0001" in result.output
        assert "Current project: Web" in result.output

    def test_status_not_authenticated(self):
        result = runner.invoke(app, ["auth", "status"])
        assert result.exit_code == 1
        assert "Not authenticated." in result.output

    def test_logout(self, logged_in):
        result = runner.invoke(app, ["auth", "logout"])
        assert result.exit_code == 0
        assert "Successfully logged out." in result.output
        assert SecureCredentialStore().get_access() is None
        assert ProfileStore().load() is None

        result = runner.invoke(app, ["auth", "logout"])
        assert "No credentials found." in result.output

    def test_change_password_too_short(self, logged_in):
        with _patched() as mock_request:
            result = runner.invoke(
                app, ["auth", "change-password", "--current-password", "old", "--new-password", "short"]
            )

        assert result.exit_code == 1
        assert "at least 10 characters" in result.output
        mock_request.assert_not_called()

    def test_change_password(self, logged_in):
        with _patched(return_value=_response(200, {"msg": "Password changed"})):
            result = runner.invoke(
                app,
                ["auth", "change-password", "--current-password", "old", "--new-password", "a-long-password"],
            )

        assert result.exit_code == 0, result.output
        assert "Password changed" in result.output


class TestProjectCommands:
    def test_list_marks_current(self, logged_in):
        result = runner.invoke(app, ["projects", "list"])
        assert result.exit_code == 0
        assert "Web" in result.output
        assert "App" in result.output

    def test_use_by_name(self, logged_in):
        result = runner.invoke(app, ["projects", "use", "App"])
        assert result.exit_code == 0
        assert "Current project: App" in result.output
        assert ProfileStore().load().current_project == "p-2"

    def test_use_unknown_project(self, logged_in):
        result = runner.invoke(app, ["projects", "use", "Nope"])
        assert result.exit_code == 1
        assert "Unknown project: Nope" in result.output

    def test_requires_profile(self):
        result = runner.invoke(app, ["projects", "list"])
        assert result.exit_code == 1
        assert "No user profile found" in result.output


class TestTaskCommands:
    def test_stats(self, logged_in):
        with _patched(return_value=_response(200, TASKS_BODY)) as mock_request:
            result = runner.invoke(app, ["tasks", "stats"])

        assert result.exit_code == 0, result.output
        assert "Open: 2" in result.output
        assert "Completed: 1" in result.output
        assert "Total: 3" in result.output
        assert mock_request.call_args.kwargs["params"] == {"role": "member", "project_id": "p-1"}

    def test_list(self, logged_in):
        with _patched(return_value=_response(200, TASKS_BODY)):
            result = runner.invoke(app, ["tasks", "list", "--project", "App"])

        assert result.exit_code == 0, result.output
        assert "t-1" in result.output
        assert "Ship" in result.output

    def test_list_empty(self, logged_in):
        with _patched(return_value=_response(200, {"user_tasks": [], "statuses": "Open"})):
            result = runner.invoke(app, ["tasks", "list"])

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_not_authenticated(self):
        ProfileStore().save(UserProfile(role="member", current_project="p-1"))
        with _patched() as mock_request:
            result = runner.invoke(app, ["tasks", "stats"])

        assert result.exit_code == 1
        assert "Not authenticated" in result.output
        mock_request.assert_not_called()

    def test_expired_session_logs_out(self, logged_in):
        responses = [
            _response(401, {"msg": "Token has expired"}),
            _response(401, {"msg": "Token has expired"}),
        ]
        with _patched(side_effect=responses):
            result = runner.invoke(app, ["tasks", "list"])

        assert result.exit_code == 1
        assert "Your session has ended" in result.output
        assert SecureCredentialStore().get_access() is None
        assert ProfileStore().load() is None

    def test_create(self, logged_in):
        with _patched(return_value=_response(201, {"msg": "Task created"})) as mock_request:
            result = runner.invoke(
                app,
                [
                    "tasks", "create",
                    "--name", "Ship",
                    "--due", "2026-11-01",
                    "--status", "Open",
                    "--assignee", "bob@example.com",
                ],
            )

        assert result.exit_code == 0, result.output
        assert "Task created" in result.output
        payload = mock_request.call_args.kwargs["json"]
        assert payload["project_id"] == "p-1"
        assert payload["name"] == "Ship"

    def test_create_rejects_long_name(self, logged_in):
        result = runner.invoke(
            app,
            [
                "tasks", "create",
                "--name", "a name that is far too long",
                "--due", "2026-11-01",
                "--status", "Open",
                "--assignee", "bob@example.com",
            ],
        )
        assert result.exit_code == 1
        assert "at most 18 characters" in result.output

    def test_create_rejects_bad_due_date(self, logged_in):
        result = runner.invoke(
            app,
            ["tasks", "create", "--name", "Ship", "--due", "01/11/2026", "--status", "Open", "--assignee", "b"],
        )
        assert result.exit_code == 2

    def test_edit_rejects_unknown_status(self, logged_in):
        with _patched() as mock_request:
            result = runner.invoke(
                app, ["tasks", "edit", "t-1", "--due", "2026-11-01", "--status", "Blocked", "--assignee", "b"]
            )

        assert result.exit_code == 1
        assert "Unknown status 'Blocked'" in result.output
        mock_request.assert_not_called()

    def test_delete_force(self, logged_in):
        with _patched(return_value=_response(200, {"msg": "deleted"})) as mock_request:
            result = runner.invoke(app, ["tasks", "delete", "t-2", "--force"])

        assert result.exit_code == 0, result.output
        assert "Task t-2 deleted." in result.output
        assert mock_request.call_args.args[0] == "DELETE"
        assert mock_request.call_args.kwargs["json"] == {"task_id": "t-2"}

    def test_delete_cancelled(self, logged_in):
        with _patched() as mock_request:
            result = runner.invoke(app, ["tasks", "delete", "t-2"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled." in result.output
        mock_request.assert_not_called()
