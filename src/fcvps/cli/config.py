"""Configuration management commands for fc-vps."""

import typer

from ..api.exceptions import FcVpsError
from ..config import ConfigManager
from ..models.config import DEFAULT_SERVER, DEFAULT_TIMEOUT
from ..utils import console, create_table, print_error, print_success
from ._shared import get_config

app = typer.Typer(help="Manage fc-vps configuration", no_args_is_help=True)


@app.command("show")
def show_config(ctx: typer.Context) -> None:
    """Show the settings file and the effective configuration."""
    config_manager = ConfigManager()

    try:
        settings = config_manager.get()
    except FcVpsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    effective = get_config(ctx)
    table = create_table(
        title="Configuration",
        columns=[("Key", "cyan"), ("Effective", "bold"), ("Config file", ""), ("Default", "dim")],
    )
    table.add_row("server", effective.server, settings.server or "-", DEFAULT_SERVER)
    table.add_row("timeout", f"{effective.timeout:g}s", f"{settings.timeout:g}s" if settings.timeout else "-", f"{DEFAULT_TIMEOUT:g}s")
    table.add_row("health timeout", f"{effective.health_timeout:g}s", "-", "-")
    table.add_row("verbose", str(effective.verbose), "-", "False")
    console.print(table)
    console.print(f"[dim]Config file: {config_manager.config_file}[/dim]")


@app.command("set-server")
def set_server(
    url: str = typer.Argument(..., help="Base URL of the VPS service (e.g. http://10.0.0.5:8080)"),
) -> None:
    """Save the default server URL."""
    config_manager = ConfigManager()

    try:
        config_manager.set_server(url)
    except FcVpsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Default server set to {url.rstrip('/')}")


@app.command("set-timeout")
def set_timeout(
    seconds: float = typer.Argument(..., help="Request timeout in seconds"),
) -> None:
    """Save the default request timeout."""
    config_manager = ConfigManager()

    try:
        config_manager.set_timeout(seconds)
    except FcVpsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Default timeout set to {seconds:g}s")
