"""VPS management commands."""

import typer

from ._shared import run_command
from .console import handle_console
from .handlers import (
    handle_create,
    handle_delete,
    handle_get,
    handle_health,
    handle_list,
    handle_start,
    handle_stop,
    request_from_flags,
)
from ..api.exceptions import ValidationError
from ..models.vm import DEFAULT_CPU, DEFAULT_DISK, DEFAULT_MEMORY
from ..utils import print_error
from ..utils.helpers import async_to_sync


@async_to_sync
async def create_vm(
    ctx: typer.Context,
    name: str = typer.Option(None, "--name", "-n", help="Name of the VPS"),
    cpu: int = typer.Option(DEFAULT_CPU, "--cpu", "-c", help="Number of CPU cores (1-8)"),
    memory: int = typer.Option(DEFAULT_MEMORY, "--memory", "-m", help="Memory in MB (128-8192)"),
    disk: int = typer.Option(DEFAULT_DISK, "--disk", "-d", help="Disk size in GB (1-100)"),
    image: str = typer.Option(None, "--image", "-i", help="Base image to use"),
    interactive: bool = typer.Option(False, "--interactive", "-I", help="Interactive mode"),
) -> None:
    """Create a new VPS instance."""
    request = None
    if not interactive:
        # Flag values are checked before the client opens or the health probe runs.
        try:
            request = request_from_flags(name, cpu, memory, disk, image)
        except ValidationError as e:
            print_error(str(e))
            raise typer.Exit(1)

    await run_command(ctx, handle_create, request=request, interactive=interactive)


@async_to_sync
async def list_vms(
    ctx: typer.Context,
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show detailed information"),
    status: str = typer.Option(None, "--status", "-s", help="Filter by status (running, stopped, created)"),
) -> None:
    """List all VPS instances."""
    await run_command(ctx, handle_list, detailed=detailed, status=status)


@async_to_sync
async def get_vm(
    ctx: typer.Context,
    token: str = typer.Argument(..., metavar="ID_OR_NAME", help="VPS ID or name"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Show in JSON format"),
) -> None:
    """Show VPS details."""
    await run_command(ctx, handle_get, token, as_json=as_json)


@async_to_sync
async def start_vm(
    ctx: typer.Context,
    token: str = typer.Argument(..., metavar="ID_OR_NAME", help="VPS ID or name"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Wait for VPS to be ready"),
) -> None:
    """Start a VPS."""
    await run_command(ctx, handle_start, token, wait=wait)


@async_to_sync
async def stop_vm(
    ctx: typer.Context,
    token: str = typer.Argument(..., metavar="ID_OR_NAME", help="VPS ID or name"),
    force: bool = typer.Option(False, "--force", "-f", help="Force stop without confirmation"),
) -> None:
    """Stop a VPS."""
    await run_command(ctx, handle_stop, token, force=force)


@async_to_sync
async def delete_vm(
    ctx: typer.Context,
    token: str = typer.Argument(..., metavar="ID_OR_NAME", help="VPS ID or name"),
    force: bool = typer.Option(False, "--force", "-f", help="Force delete without confirmation"),
) -> None:
    """Delete a VPS."""
    await run_command(ctx, handle_delete, token, force=force)


@async_to_sync
async def health(ctx: typer.Context) -> None:
    """Show service health."""
    await run_command(ctx, handle_health, check_health=False)


@async_to_sync
async def console_cmd(ctx: typer.Context) -> None:
    """Interactive management console."""
    await run_command(ctx, handle_console)
