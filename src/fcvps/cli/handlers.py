"""Command handlers for the VPS verbs.

Each handler takes a connected VPSClient first, re-reads the VM state it
needs, and raises FcVpsError subclasses instead of exiting so the same code
serves the one-shot commands and the interactive console.
"""

import time

from rich.markup import escape

from ._shared import WAIT_GRACE_SECONDS, run_with_spinner
from .render import (
    render_created_vm,
    render_vm_detailed_list,
    render_vm_details,
    render_vm_json,
    render_vm_table,
)
from ..api.client import VPSClient
from ..api.exceptions import TransportError
from ..api.resolver import resolve_vm
from ..models.vm import (
    BASE_IMAGES,
    CPU_RANGE,
    DEFAULT_CPU,
    DEFAULT_DISK,
    DEFAULT_IMAGE,
    DEFAULT_MEMORY,
    DISK_RANGE,
    MEMORY_RANGE,
    VMRequest,
)
from ..utils import (
    confirm,
    console,
    print_cancelled,
    print_info,
    print_success,
    print_warning,
    prompt,
    prompt_int,
    select_menu,
)
from ..utils.validation import build_request


def default_vm_name() -> str:
    """Generated name used when none is given."""
    return f"vps-{int(time.time())}"


def prompt_vm_request() -> VMRequest | None:
    """Gather a creation request interactively.

    Returns:
        The request, or None if the image menu was cancelled.
    """
    console.print("[bold cyan]Creating a new VPS[/bold cyan]")
    console.print()

    name = prompt("VPS Name", default=default_vm_name())

    image_idx = select_menu(BASE_IMAGES, "  Select base image:")
    if image_idx is None:
        return None
    image = BASE_IMAGES[image_idx]
    console.print(f"[bold]Base image:[/bold] {image}")

    cpu = prompt_int(
        f"CPU cores ({CPU_RANGE[0]}-{CPU_RANGE[1]})",
        DEFAULT_CPU,
        *CPU_RANGE,
        error=f"CPU cores must be between {CPU_RANGE[0]} and {CPU_RANGE[1]}",
    )
    memory = prompt_int(
        f"Memory in MB ({MEMORY_RANGE[0]}-{MEMORY_RANGE[1]})",
        DEFAULT_MEMORY,
        *MEMORY_RANGE,
        error=f"Memory must be between {MEMORY_RANGE[0]}MB and {MEMORY_RANGE[1]}MB",
    )
    disk_size = prompt_int(
        f"Disk size in GB ({DISK_RANGE[0]}-{DISK_RANGE[1]})",
        DEFAULT_DISK,
        *DISK_RANGE,
        error=f"Disk size must be between {DISK_RANGE[0]}GB and {DISK_RANGE[1]}GB",
    )

    return build_request(name, cpu, memory, disk_size, image)


def request_from_flags(
    name: str | None = None,
    cpu: int = DEFAULT_CPU,
    memory: int = DEFAULT_MEMORY,
    disk: int = DEFAULT_DISK,
    image: str | None = None,
) -> VMRequest:
    """Build a creation request from command-line values, filling defaults.

    Raises:
        ValidationError: If any value is out of range
    """
    return build_request(
        name or default_vm_name(),
        cpu,
        memory,
        disk,
        image or DEFAULT_IMAGE,
    )


async def handle_create(
    client: VPSClient,
    name: str | None = None,
    cpu: int = DEFAULT_CPU,
    memory: int = DEFAULT_MEMORY,
    disk: int = DEFAULT_DISK,
    image: str | None = None,
    interactive: bool = False,
    request: VMRequest | None = None,
) -> None:
    """Create a VPS from flags or from the interactive prompt sequence.

    A request that was already validated can be passed directly; the flag
    values are then ignored.
    """
    if interactive:
        request = prompt_vm_request()
        if request is None:
            print_cancelled()
            return
    elif request is None:
        request = request_from_flags(name, cpu, memory, disk, image)

    console.print(f"Creating VPS '{escape(request.name)}'...")
    vm = await run_with_spinner("Creating VM...", client.create_vm(request))
    print_success("VPS created successfully!")
    render_created_vm(vm)


async def handle_list(
    client: VPSClient,
    detailed: bool = False,
    status: str | None = None,
) -> None:
    """List VPS instances, optionally filtered by status."""
    vms = await client.list_vms()

    if not vms:
        print_info("No VPS instances found")
        console.print("Create your first VPS with: [cyan]fc-vps create --interactive[/cyan]")
        return

    if status:
        vms = [vm for vm in vms if vm.status.lower() == status.lower()]

    if not vms:
        print_info("No VPS instances match the filter criteria")
        return

    if detailed:
        render_vm_detailed_list(vms)
    else:
        render_vm_table(vms)


async def handle_get(client: VPSClient, token: str, as_json: bool = False) -> None:
    """Show one VPS resolved by ID or name."""
    vm = await resolve_vm(client, token)
    if as_json:
        render_vm_json(vm)
    else:
        render_vm_details(vm)


async def handle_start(client: VPSClient, token: str, wait: bool = False) -> None:
    """Start a VPS unless it is already running."""
    vm = await resolve_vm(client, token)
    label = escape(vm.name)

    if vm.status == "running":
        print_warning(f"VPS '{label}' is already running")
        return

    console.print(f"Starting VPS '{label}'...")
    await run_with_spinner(
        "Starting VM...",
        client.start_vm(vm.id),
        wait_desc="Waiting for VM to be ready..." if wait else None,
        wait_seconds=WAIT_GRACE_SECONDS if wait else 0,
    )
    print_success("VPS started successfully!")

    console.print()
    console.print(f"VPS '[bold]{label}[/bold]' is now running!")
    if vm.ip_address:
        console.print(f"   IP Address: [cyan]{escape(vm.ip_address)}[/cyan]")
        console.print(f"   SSH: [cyan]ssh user@{escape(vm.ip_address)}[/cyan]")


async def handle_stop(client: VPSClient, token: str, force: bool = False) -> None:
    """Stop a VPS unless it is already stopped, confirming unless forced."""
    vm = await resolve_vm(client, token)
    label = escape(vm.name)

    if vm.status == "stopped":
        print_warning(f"VPS '{label}' is already stopped")
        return

    if not force and not confirm(f"Are you sure you want to stop VPS '{label}'?", default=False):
        print_cancelled()
        return

    console.print(f"Stopping VPS '{label}'...")
    await run_with_spinner("Stopping VM...", client.stop_vm(vm.id))
    print_success("VPS stopped successfully!")
    console.print(f"VPS '[bold]{label}[/bold]' has been stopped")


async def handle_delete(client: VPSClient, token: str, force: bool = False) -> None:
    """Permanently delete a VPS, confirming unless forced."""
    vm = await resolve_vm(client, token)
    label = escape(vm.name)

    console.print("[bold red]WARNING: This action cannot be undone![/bold red]")
    console.print(f"VPS '[bold]{label}[/bold]' will be permanently deleted.")
    console.print()

    if not force and not confirm(
        "Are you absolutely sure you want to delete this VPS?", default=False
    ):
        print_cancelled()
        return

    console.print(f"Deleting VPS '{label}'...")
    await run_with_spinner("Deleting VM...", client.delete_vm(vm.id))
    print_success("VPS deleted successfully!")
    console.print(f"VPS '[bold]{label}[/bold]' has been permanently deleted")


async def handle_health(client: VPSClient) -> None:
    """Report service health.

    Raises:
        TransportError: If the service is unhealthy or unreachable
    """
    console.print("Checking service health...")
    healthy = await run_with_spinner("Connecting...", client.health_check())

    if not healthy:
        console.print("[red]Service is not responding[/red]")
        raise TransportError("Service health check failed")

    print_success("Service is healthy and running")
