"""Logging for stitch: Rich console output on stderr, stdout stays clean for markup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

_configured = False


def setup_logging(level: int | str = logging.INFO) -> None:
    """Attach the console handler to the `stitch` logger (once) and set its level."""
    global _configured

    root_logger = logging.getLogger("stitch")
    root_logger.setLevel(level)

    if _configured:
        return

    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the `stitch` namespace (typically pass `__name__`)."""
    return logging.getLogger(name)
