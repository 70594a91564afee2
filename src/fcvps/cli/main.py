"""Main CLI application."""

import typer

from .. import __version__
from ..api.exceptions import ConfigError
from ..config import ConfigManager
from ..models.config import ClientConfig
from ..utils import console, print_error
from ..utils.helpers import ordered_group
from ..utils.log import setup_logging
from . import config, vm

_CMD_ORDER = [
    "create", "list", "get", "start", "stop", "delete",
    "health", "console", "config",
]

app = typer.Typer(
    name="fc-vps",
    help="Firecracker VPS Management CLI",
    no_args_is_help=True,
    cls=ordered_group(_CMD_ORDER),
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("create")(vm.create_vm)
app.command("list")(vm.list_vms)
app.command("get")(vm.get_vm)
app.command("start")(vm.start_vm)
app.command("stop")(vm.stop_vm)
app.command("delete")(vm.delete_vm)
app.command("health")(vm.health)
app.command("console")(vm.console_cmd)
app.add_typer(config.app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether version flag was set
    """
    if value:
        console.print(f"fc-vps version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    server: str = typer.Option(
        None,
        "--server",
        "-s",
        envvar="FC_VPS_SERVER",
        help="VPS service URL [default: http://localhost:8080]",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """fc-vps - manage Firecracker VPS instances from the command line.

    Every command except `health` and `config` first checks that the
    service is reachable.

    Get started:
        fc-vps health                  # Check the service
        fc-vps create --interactive    # Create your first VPS
        fc-vps console                 # Interactive console
    """
    setup_logging(verbose)

    try:
        ctx.obj = ConfigManager().client_config(server=server, verbose=verbose)
    except ConfigError as e:
        if ctx.invoked_subcommand != "config":
            print_error(str(e))
            raise typer.Exit(1)
        ctx.obj = ClientConfig(server=server or ClientConfig().server, verbose=verbose)


if __name__ == "__main__":
    app()
