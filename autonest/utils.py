"""Shared utilities for AutoNest."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Rich console for log output (stderr)
console = Console(stderr=True)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Set up logging with Rich handler."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    return logging.getLogger("autonest")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module."""
    return logging.getLogger(f"autonest.{name}")


def format_dimension(value: float) -> str:
    """Format a length without trailing zeros (``120`` rather than ``120.0``)."""
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_size(width: float, height: float) -> str:
    """Format a width/height pair as ``W x H``."""
    return f"{format_dimension(width)} x {format_dimension(height)}"
