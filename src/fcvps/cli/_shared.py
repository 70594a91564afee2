"""Shared plumbing for fc-vps commands.

Opens the API client for a command, runs the pre-flight health probe and
maps the error taxonomy onto exit codes, so every command body only deals
with its own handler.
"""

import asyncio
from typing import Any, Awaitable, Callable, Coroutine, TypeVar

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..api.client import VPSClient
from ..api.exceptions import FcVpsError, TransportError
from ..models.config import ClientConfig
from ..models.vm import VM
from ..utils import console, print_error, print_info
from ..utils.menu import select_menu

T = TypeVar("T")

WAIT_GRACE_SECONDS = 3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_config(ctx: typer.Context) -> ClientConfig:
    """Return the ClientConfig stored on the root context by the main callback."""
    config = ctx.find_root().obj
    if not isinstance(config, ClientConfig):
        config = ClientConfig()
    return config


async def run_with_spinner(
    action_desc: str,
    coro: Coroutine[Any, Any, T],
    wait_desc: str | None = None,
    wait_seconds: float = 0,
) -> T:
    """Run an API action with a Progress spinner.

    Args:
        action_desc: Initial spinner description (e.g. "Starting VM...").
        coro: Coroutine performing the API call.
        wait_desc: Spinner text while the grace period elapses.
        wait_seconds: Fixed delay after the call completes.

    Returns:
        Whatever the coroutine returned.
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(description=action_desc, total=None)
        result = await coro
        if wait_desc and wait_seconds > 0:
            progress.update(task, description=wait_desc)
            await asyncio.sleep(wait_seconds)
    return result


def vm_menu_label(vm: VM) -> str:
    """Menu entry for a VM: name plus short ID."""
    return f"{vm.name} ({vm.short_id})"


async def pick_vm(client: VPSClient, title: str) -> VM | None:
    """Interactive single-select over the live VM list.

    Returns:
        The selected VM, or None when there are no VMs or the menu was
        cancelled.
    """
    vms = await client.list_vms()
    if not vms:
        print_info("No VPS instances found")
        return None
    idx = select_menu([vm_menu_label(vm) for vm in vms], title)
    if idx is None:
        return None
    return vms[idx]


async def preflight(client: VPSClient) -> None:
    """Fail fast when the service is unreachable or unhealthy.

    Raises:
        TransportError: If the probe fails or reports unhealthy
    """
    try:
        healthy = await client.health_check()
    except TransportError:
        healthy = False
    if not healthy:
        raise TransportError(
            f"Cannot connect to Firecracker VPS service at {client.base_url}\n"
            "Make sure the service is running and the URL is correct."
        )


async def run_command(
    ctx: typer.Context,
    handler: Callable[..., Awaitable[Any]],
    *args: Any,
    check_health: bool = True,
    **kwargs: Any,
) -> None:
    """Run a command handler against a fresh client and exit on failure.

    Args:
        ctx: Typer context carrying the ClientConfig
        handler: Coroutine function taking the client as first argument
        check_health: Run the pre-flight health probe first
    """
    config = get_config(ctx)

    try:
        async with VPSClient(config) as client:
            if check_health:
                await preflight(client)
            await handler(client, *args, **kwargs)
    except FcVpsError as e:
        print_error(str(e))
        raise typer.Exit(1)
