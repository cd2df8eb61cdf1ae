"""CLI command modules."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from datetime import datetime
from typing import Any, Callable

import typer
from rich.console import Console

from taskdeck.app import TaskdeckApp
from taskdeck.operations import OperationKind
from taskdeck.profile import ProfileStore, UserProfile
from taskdeck.state import OperationSnapshot

from ..constants import DUE_DATE_FORMAT

_console = Console()


def run_operation(
    kind: OperationKind,
    action: Callable[[TaskdeckApp], Awaitable[None]],
    *,
    require_auth: bool = True,
) -> OperationSnapshot[Any]:
    """Run ``action`` against a fresh app and return the settled state of ``kind``.

    Exits with status 1, after printing the error, if the operation failed
    or if no user is logged in and ``require_auth`` is set.
    """

    async def _run() -> OperationSnapshot[Any]:
        async with TaskdeckApp() as deck:
            if require_auth and not deck.session.is_authenticated:
                _console.print("[red]Not authenticated. Run 'taskdeck auth login' first.[/red]")
                raise typer.Exit(1)

            deck.executor.on_forced_logout(
                lambda: _console.print("[yellow]Your session has ended. Run 'taskdeck auth login' again.[/yellow]")
            )
            await action(deck)
            return deck.executor.state(kind).snapshot

    snapshot = asyncio.run(_run())
    if snapshot.error is not None:
        _console.print(f"[red]{snapshot.error}[/red]")
        raise typer.Exit(1)
    return snapshot


def require_profile() -> UserProfile:
    """Load the stored profile, or exit when nobody has logged in on this machine."""
    profile = ProfileStore().load()
    if profile is None:
        _console.print("[red]No user profile found. Run 'taskdeck auth login' first.[/red]")
        raise typer.Exit(1)
    return profile


def resolve_project(profile: UserProfile, project: str | None) -> str:
    """Pick the project id for a command: the explicit ``--project`` or the current one."""
    if project is None:
        if not profile.current_project:
            _console.print("[red]No current project. Run 'taskdeck projects use <name>' first.[/red]")
            raise typer.Exit(1)
        return profile.current_project

    project_id = profile.resolve_project(project)
    if project_id is None:
        _console.print(f"[red]Unknown project: {project}[/red]")
        raise typer.Exit(1)
    return project_id


def validate_due_date(value: str | None) -> str | None:
    """Typer callback accepting only YYYY-MM-DD dates."""
    if value is None:
        return value
    try:
        datetime.strptime(value, DUE_DATE_FORMAT)
    except ValueError:
        raise typer.BadParameter("Due date must be in format YYYY-MM-DD") from None
    return value
