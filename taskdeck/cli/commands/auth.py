"""Authentication commands for the Taskdeck CLI."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from taskdeck.app import TaskdeckApp
from taskdeck.auth.credentials import SecureCredentialStore
from taskdeck.operations import LoginParams, OperationKind
from taskdeck.profile import ProfileStore

from ..constants import MIN_PASSWORD_LENGTH
from . import run_operation

app = typer.Typer(help="Manage authentication")
console = Console()


def _authenticate(kind: OperationKind, email: str, password: str) -> None:
    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.execute(kind, LoginParams(email, password))

    snapshot = run_operation(kind, action, require_auth=False)
    response = snapshot.last_response

    console.print(f"\n[green]Logged in as {response.name or response.email}.[/green]")
    profile = ProfileStore().load()
    if profile and profile.current_project_name:
        console.print(f"  Current project: {profile.current_project_name}")


def _ensure_logged_out() -> None:
    if SecureCredentialStore().load().is_complete:
        console.print("[yellow]You are already authenticated.[/yellow]")
        console.print("Run [bold]taskdeck auth logout[/bold] first to switch accounts.")
        raise typer.Exit(1)


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password"),
) -> None:
    """Log in with email and password."""
    _ensure_logged_out()
    _authenticate(OperationKind.LOGIN, email, password)


@app.command()
def signup(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email registered with your team"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new account"
    ),
) -> None:
    """Create an account and log in."""
    _ensure_logged_out()
    _authenticate(OperationKind.SIGNUP, email, password)


@app.command()
def logout() -> None:
    """Remove stored credentials and profile."""

    async def _logout() -> bool:
        async with TaskdeckApp() as deck:
            was_authenticated = deck.session.is_authenticated
            deck.executor.logout()
            return was_authenticated

    if asyncio.run(_logout()):
        console.print("[green]Successfully logged out.[/green]")
    else:
        console.print("[yellow]No credentials found.[/yellow]")


@app.command()
def status() -> None:
    """Show current authentication status."""
    auth_status = SecureCredentialStore().status()

    if not auth_status.authenticated:
        console.print("[yellow]Not authenticated.[/yellow]")
        console.print("Run [bold]taskdeck auth login[/bold] to authenticate.")
        raise typer.Exit(1)

    console.print("[green]Authenticated[/green]")
    console.print(f"  Access token: {auth_status.masked_token}")
    console.print(f"  Stored in: {auth_status.source} ({auth_status.location})")

    profile = ProfileStore().load()
    if profile:
        if profile.name:
            console.print(f"  Name: {profile.name}")
        if profile.email:
            console.print(f"  Email: {profile.email}")
        if profile.role:
            console.print(f"  Role: {profile.role}")
        if profile.current_project_name:
            console.print(f"  Current project: {profile.current_project_name}")


@app.command("change-password")
def change_password(
    current_password: str = typer.Option(..., prompt="Current password", hide_input=True),
    new_password: str = typer.Option(..., prompt="New password", hide_input=True, confirmation_prompt=True),
) -> None:
    """Change your account password."""
    if len(new_password) < MIN_PASSWORD_LENGTH:
        console.print(f"[red]Password must be at least {MIN_PASSWORD_LENGTH} characters long[/red]")
        raise typer.Exit(1)

    async def action(deck: TaskdeckApp) -> None:
        await deck.executor.change_password(current_password, new_password)

    snapshot = run_operation(OperationKind.CHANGE_PASSWORD, action)
    console.print(f"[green]{snapshot.last_response.msg or 'Password changed.'}[/green]")
