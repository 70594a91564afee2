"""Output formatting utilities using Rich."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

console = Console()


def print_error(msg: str) -> None:
    """Print an error message to the console.

    Args:
        msg: The error message to display.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(msg)}")


def print_success(msg: str) -> None:
    """Print a success message to the console.

    Args:
        msg: The success message to display.
    """
    console.print(f"[bold green]✓[/bold green] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message to the console.

    Args:
        msg: The warning message to display.
    """
    console.print(f"[bold yellow]Warning:[/bold yellow] {msg}")


def print_info(msg: str) -> None:
    """Print an info message to the console.

    Args:
        msg: The info message to display.
    """
    console.print(f"[cyan]{msg}[/cyan]")


def print_cancelled(msg: str = "Operation cancelled") -> None:
    """Print a cancellation message to the console.

    Args:
        msg: The cancellation message to display.
    """
    console.print(f"[yellow]{msg}[/yellow]")


def create_table(
    title: str | None = None,
    columns: list[tuple[str, str]] | None = None,
    rows: list[list[str]] | None = None,
    show_header: bool = True,
) -> Table:
    """Create a Rich table.

    Args:
        title: Optional table title.
        columns: List of (column_name, column_style) tuples.
        rows: List of row data.
        show_header: Whether to show the header row.

    Returns:
        A configured Rich Table instance.
    """
    table = Table(title=title, show_header=show_header, header_style="bold cyan")

    if columns:
        for col_name, col_style in columns:
            table.add_column(col_name, style=col_style)

    if rows:
        for row in rows:
            table.add_row(*row)

    return table


def confirm(message: str, default: bool = False) -> bool:
    """Prompt user for confirmation.

    Args:
        message: The confirmation message to display.
        default: Default choice if user just presses enter.

    Returns:
        True if user confirmed, False otherwise.
    """
    return Confirm.ask(message, default=default, console=console)


def prompt(message: str, default: str | None = None) -> str:
    """Prompt user for text input.

    Args:
        message: The prompt message to display.
        default: Default value if user just presses enter.

    Returns:
        The user's input string.
    """
    if default is None:
        return Prompt.ask(message, console=console)
    return Prompt.ask(message, default=default, console=console)


def prompt_int(message: str, default: int, low: int, high: int, error: str) -> int:
    """Prompt for an integer until it falls within [low, high].

    Args:
        message: The prompt message to display.
        default: Default value if user just presses enter.
        low: Smallest accepted value.
        high: Largest accepted value.
        error: Message shown when the value is out of range.

    Returns:
        The accepted value.
    """
    while True:
        value = IntPrompt.ask(message, default=default, console=console)
        if low <= value <= high:
            return value
        print_error(error)


def pause(message: str = "Press Enter to continue...") -> None:
    """Block until the user presses Enter.

    Raises:
        EOFError: If stdin is closed.
    """
    console.print()
    console.input(message)


def get_status_color(status: str) -> str:
    """Get the Rich color name for a VPS status string.

    Args:
        status: The status string (e.g., 'running', 'stopped').

    Returns:
        Rich color name ('green', 'red', 'yellow', or 'white').
    """
    status_lower = status.lower()
    if status_lower == "running":
        return "green"
    elif status_lower == "stopped":
        return "red"
    elif status_lower == "created":
        return "yellow"
    else:
        return "white"


def format_status(status: str) -> str:
    """Wrap a status in Rich color markup."""
    color = get_status_color(status)
    return f"[{color}]{escape(status)}[/{color}]"


def format_timestamp(value: datetime | None, with_seconds: bool = False) -> str:
    """Format a UTC timestamp for display.

    Args:
        value: Timestamp or None.
        with_seconds: Include seconds and the UTC suffix.

    Returns:
        Formatted string, '-' when missing.
    """
    if value is None:
        return "-"
    if with_seconds:
        return value.strftime("%Y-%m-%d %H:%M:%S UTC")
    return value.strftime("%Y-%m-%d %H:%M")
