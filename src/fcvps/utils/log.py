"""Logging setup for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "fcvps"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route fc-vps log records to stderr through Rich.

    Args:
        verbose: Emit DEBUG records (request tracing) instead of warnings only

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
