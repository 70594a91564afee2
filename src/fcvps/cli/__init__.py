"""CLI commands."""

from . import config, console, handlers, main, vm

__all__ = ["config", "console", "handlers", "main", "vm"]
