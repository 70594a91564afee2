"""Utility functions and helpers."""

from .helpers import (
    async_to_sync,
    ordered_group,
)
from .menu import select_menu
from .output import (
    confirm,
    console,
    create_table,
    format_status,
    format_timestamp,
    get_status_color,
    pause,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    print_warning,
    prompt,
    prompt_int,
)

__all__ = [
    "async_to_sync",
    "confirm",
    "console",
    "create_table",
    "format_status",
    "format_timestamp",
    "get_status_color",
    "ordered_group",
    "pause",
    "print_cancelled",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "prompt",
    "prompt_int",
    "select_menu",
]
