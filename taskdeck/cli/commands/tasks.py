"""Task commands for the Taskdeck CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from taskdeck.app import TaskdeckApp
from taskdeck.models import Task
from taskdeck.operations import OperationKind
from taskdeck.profile import UserProfile
from taskdeck.stats import count_by_status

from ..constants import DELETE_RELOAD_DELAY_SECONDS, TASK_NAME_MAX_LENGTH
from . import require_profile, resolve_project, run_operation, validate_due_date

app = typer.Typer(help="Manage tasks in the current project")
console = Console()


def _tasks_table(tasks: list[Task], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", max_width=40)
    table.add_column("Status", style="green")
    table.add_column("Due")
    table.add_column("Assignee")

    for task in tasks:
        table.add_row(task.task_id, task.name, task.status or "-", task.due_date or "-", task.assignee_id or "-")
    return table


def _check_status(profile: UserProfile, status: str) -> None:
    known = [s.strip() for s in profile.statuses.split(",") if s.strip()]
    if known and status not in known:
        console.print(f"[red]Unknown status '{status}'. Choose one of: {', '.join(known)}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_tasks(
    project: str = typer.Option(None, "--project", "-p", help="Project name (default: current project)"),
) -> None:
    """List your tasks."""
    profile = require_profile()
    project_id = resolve_project(profile, project)

    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.list_tasks(profile.role, project_id)

    snapshot = run_operation(OperationKind.LIST_TASKS, action)
    tasks = snapshot.last_response.user_tasks

    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return

    console.print(_tasks_table(tasks, "Your Tasks"))


@app.command()
def stats(
    project: str = typer.Option(None, "--project", "-p", help="Project name (default: current project)"),
) -> None:
    """Show open / completed / total task counts."""
    profile = require_profile()
    project_id = resolve_project(profile, project)

    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.list_tasks(profile.role, project_id)

    snapshot = run_operation(OperationKind.LIST_TASKS, action)
    counts = count_by_status(snapshot.last_response.user_tasks)

    console.print("\n[bold]Task Statistics[/bold]\n")
    console.print(f"  Open: {counts.open}")
    console.print(f"  Completed: {counts.completed}")
    console.print(f"  Total: {counts.total}")


@app.command()
def create(
    name: str = typer.Option(None, "--name", "-n", help="Task name"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due_date: str = typer.Option(..., "--due", help="Due date (YYYY-MM-DD)", callback=validate_due_date),
    status: str = typer.Option(..., "--status", "-s", help="Initial status"),
    assignee: str = typer.Option(..., "--assignee", "-a", help="Assignee email"),
    project: str = typer.Option(None, "--project", "-p", help="Project name (default: current project)"),
) -> None:
    """Create a new task."""
    if not name:
        name = typer.prompt("Task name")
    if len(name) > TASK_NAME_MAX_LENGTH:
        console.print(f"[red]Task name must be at most {TASK_NAME_MAX_LENGTH} characters long[/red]")
        raise typer.Exit(1)

    profile = require_profile()
    project_id = resolve_project(profile, project)
    _check_status(profile, status)

    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.create_task(
            name=name,
            description=description,
            due_date=due_date,
            status=status,
            project_id=project_id,
            assignee=assignee,
        )

    snapshot = run_operation(OperationKind.CREATE_TASK, action)
    console.print(f"\n[green]{snapshot.last_response.msg or 'Task created.'}[/green]")


@app.command()
def edit(
    task_id: str = typer.Argument(help="The task ID"),
    due_date: str = typer.Option(..., "--due", help="Due date (YYYY-MM-DD)", callback=validate_due_date),
    status: str = typer.Option(..., "--status", "-s", help="New status"),
    assignee: str = typer.Option(..., "--assignee", "-a", help="Assignee email"),
    project: str = typer.Option(None, "--project", "-p", help="Project name (default: current project)"),
) -> None:
    """Edit due date, status and assignee of a task."""
    profile = require_profile()
    project_id = resolve_project(profile, project)
    _check_status(profile, status)

    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.edit_task(
            task_id,
            due_date=due_date,
            status=status,
            project_id=project_id,
            assignee=assignee,
        )

    snapshot = run_operation(OperationKind.EDIT_TASK, action)
    console.print(f"[green]{snapshot.last_response.msg or f'Task {task_id} updated.'}[/green]")


@app.command()
def delete(
    task_id: str = typer.Argument(help="The task ID to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    show_remaining: bool = typer.Option(False, "--show-remaining", help="List the remaining tasks afterwards"),
) -> None:
    """Delete a task."""
    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete task {task_id}?")
        if not confirm:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    if not show_remaining:

        async def action(deck: TaskdeckApp) -> None:
            await deck.executor.delete_task(task_id)

        run_operation(OperationKind.DELETE_TASK, action)
        console.print(f"[green]Task {task_id} deleted.[/green]")
        return

    profile = require_profile()
    project_id = resolve_project(profile, None)

    async def delete_and_reload(deck: TaskdeckApp) -> None:
        await deck.executor.delete_task_and_reload(
            task_id, profile.role, project_id, delay=DELETE_RELOAD_DELAY_SECONDS
        )
        error = deck.executor.state(OperationKind.DELETE_TASK).error
        if error is not None:
            console.print(f"[red]{error}[/red]")
            raise typer.Exit(1)

    snapshot = run_operation(OperationKind.LIST_TASKS, delete_and_reload)
    console.print(f"[green]Task {task_id} deleted.[/green]")
    console.print(_tasks_table(snapshot.last_response.user_tasks, "Remaining Tasks"))
