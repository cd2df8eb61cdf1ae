"""Project selection commands for the Taskdeck CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from taskdeck.profile import ProfileStore

from . import require_profile

app = typer.Typer(help="List projects and pick the current one")
console = Console()


@app.command("list")
def list_projects() -> None:
    """List the projects you belong to."""
    profile = require_profile()

    if not profile.projects:
        console.print("[yellow]No projects found.[/yellow]")
        return

    table = Table(title="Your Projects")
    table.add_column("", width=1)
    table.add_column("Name")
    table.add_column("ID", style="cyan", no_wrap=True)

    for name, project_id in sorted(profile.projects.items()):
        marker = "*" if project_id == profile.current_project else ""
        table.add_row(marker, name, project_id)

    console.print(table)


@app.command()
def use(
    project: str = typer.Argument(help="Project name or ID"),
) -> None:
    """Set the current project used by task commands."""
    profile = require_profile()

    project_id = profile.resolve_project(project)
    if project_id is None:
        console.print(f"[red]Unknown project: {project}[/red]")
        raise typer.Exit(1)

    updated = ProfileStore().update_current_project(project_id)
    console.print(f"[green]Current project: {updated.current_project_name or project_id}[/green]")
