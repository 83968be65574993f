"""Account commands: init, login, register, logout."""

import sys

from lana.api import create_client
from lana.commands.common import console, fail, submit_form
from lana.config import create_default_config, get_api_url, get_config_path, set_api_url
from lana.domain.accounts import validate_login, validate_registration


def init_command(api_url: str | None = None, force: bool = False) -> None:
    """Create the lana configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'lana init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path, api_url)
    except OSError as e:
        fail(f"Filesystem error: {e}")

    console.print("[green]✓[/green] Config file created (permissions: 600)")
    console.print(f"[dim]API: {get_api_url(config_path)}[/dim]")


def config_command(api_url: str | None = None) -> None:
    """Show the API base URL, or store a new one."""
    config_path = get_config_path()

    if api_url is None:
        console.print(f"API: {get_api_url(config_path)}")
        console.print(f"[dim]Config: {config_path}[/dim]")
        return

    try:
        set_api_url(api_url, config_path)
    except OSError as e:
        fail(f"Filesystem error: {e}")
    console.print(f"[green]✓[/green] API set to {get_api_url(config_path)}")


def login_command(identifier: str, password: str) -> None:
    """Log in with an email or phone number."""
    client = create_client()

    def send(credentials: tuple[str | None, str | None]) -> str:
        email, phone = credentials
        try:
            return client.login(password, email=email, phone=phone)
        except OSError as e:
            fail(f"Could not save session: {e}")

    submit_form(
        lambda: validate_login(identifier, password),
        send,
        success="Logged in",
        working="Logging in...",
    )


def register_command(name: str, lastname: str, email: str, phone: str, password: str, confirm: str) -> None:
    """Create an account; the user logs in afterwards."""
    client = create_client()

    submit_form(
        lambda: validate_registration(name, lastname, email, phone, password, confirm),
        lambda body: client.register(**body),
        success="Account created. Log in with 'lana login'.",
        working="Creating account...",
    )


def logout_command() -> None:
    """Forget the stored session token."""
    client = create_client()
    try:
        client.logout()
    except OSError as e:
        fail(f"Could not remove session: {e}")
    console.print("[green]✓[/green] Logged out")
