"""Main entry point for the Taskdeck CLI."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from .commands import auth, projects, tasks

app = typer.Typer(
    name="taskdeck",
    help="Taskdeck CLI - Track and manage your team's tasks",
    no_args_is_help=True,
)

app.add_typer(auth.app, name="auth")
app.add_typer(projects.app, name="projects")
app.add_typer(tasks.app, name="tasks")


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from taskdeck import __version__

        typer.echo(f"taskdeck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and token refreshes."),
) -> None:
    """Taskdeck CLI root callback."""
    _ = version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
        # httpx logs every request at INFO; keep it but drop its DEBUG chatter.
        logging.getLogger("httpcore").setLevel(logging.INFO)


@app.command()
def version() -> None:
    """Show the CLI version."""
    from taskdeck import __version__

    typer.echo(f"taskdeck {__version__}")


if __name__ == "__main__":
    app()
