"""Rendering of VPS records as tables, detail panels and JSON.

Every string that comes from the service is escaped before it is placed in
rich markup; VM names are operator-chosen and may contain brackets.
"""

from rich.markup import escape
from rich.panel import Panel

from ..models.vm import VM
from ..utils import console, create_table, format_status, format_timestamp


def _text(value: str) -> str:
    return escape(value) if value else "-"


def render_vm_table(vms: list[VM]) -> None:
    """Print VMs as a summary table."""
    table = create_table(
        title="VPS Instances",
        columns=[
            ("ID", "cyan"),
            ("Name", "bold"),
            ("Status", ""),
            ("CPU", ""),
            ("Memory", ""),
            ("Disk", ""),
            ("IP Address", "cyan"),
            ("Created", "dim"),
        ],
    )
    for vm in vms:
        table.add_row(
            escape(vm.short_id),
            escape(vm.name),
            format_status(vm.status),
            f"{vm.cpu}c",
            f"{vm.memory}MB",
            f"{vm.disk_size}GB",
            _text(vm.ip_address),
            format_timestamp(vm.created_at),
        )
    console.print(table)


def _summary_lines(vm: VM) -> list[str]:
    return [
        f"[bold]ID:[/bold]           {escape(vm.id)}",
        f"[bold]Name:[/bold]         {escape(vm.name)}",
        f"[bold]Status:[/bold]       {format_status(vm.status)}",
        f"[bold]CPU:[/bold]          {vm.cpu} cores",
        f"[bold]Memory:[/bold]       {vm.memory}MB",
        f"[bold]Disk:[/bold]         {vm.disk_size}GB",
        f"[bold]Image:[/bold]        {_text(vm.image)}",
        f"[bold]IP Address:[/bold]   [cyan]{_text(vm.ip_address)}[/cyan]",
    ]


def render_vm_detailed_list(vms: list[VM]) -> None:
    """Print one block per VM (list --detailed)."""
    for vm in vms:
        console.rule(style="dim")
        for line in _summary_lines(vm):
            console.print(line)
        console.print(f"[bold]Created:[/bold]      {format_timestamp(vm.created_at, with_seconds=True)}")
        console.print()


def render_vm_details(vm: VM) -> None:
    """Print the full detail panel for a VM, including host-side paths."""
    lines = _summary_lines(vm)
    lines.append("")
    lines.append("[bold]── Host ──[/bold]")
    lines.append(f"[bold]Socket Path:[/bold]  {_text(vm.socket_path)}")
    lines.append(f"[bold]Kernel Path:[/bold]  {_text(vm.kernel_path)}")
    lines.append(f"[bold]Root FS Path:[/bold] {_text(vm.rootfs_path)}")
    lines.append(f"[bold]TAP Device:[/bold]   {_text(vm.tap_device)}")
    lines.append(f"[bold]Created:[/bold]      {format_timestamp(vm.created_at, with_seconds=True)}")

    console.print(Panel("\n".join(lines), title="VPS Details", border_style="blue"))


def render_created_vm(vm: VM) -> None:
    """Print the summary shown right after a VPS is created."""
    vm_id = escape(vm.id)
    console.print()
    console.print("[bold]VPS Details:[/bold]")
    console.print(f"  ID: {vm_id}")
    console.print(f"  Name: [bold]{escape(vm.name)}[/bold]")
    console.print(f"  CPU: {vm.cpu} cores")
    console.print(f"  Memory: {vm.memory}MB")
    console.print(f"  Disk: {vm.disk_size}GB")
    console.print(f"  IP Address: [cyan]{_text(vm.ip_address)}[/cyan]")
    console.print(f"  Status: {format_status(vm.status)}")
    console.print()
    console.print(f"Use '[cyan]fc-vps start {vm_id}[/cyan]' to start your VPS")


def render_vm_json(vm: VM) -> None:
    """Print a VM as pretty JSON."""
    console.print_json(vm.model_dump_json())
