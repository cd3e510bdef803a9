"""Logging setup for the CLI.

The core only creates module loggers; handlers are installed here so library
use of the core stays silent unless the host application configures logging.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def parse_level(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level!r}")
    return value


def configure_logging(level: str, *, console: Console | None = None) -> None:
    """Route the root logger through Rich at `level`."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=parse_level(level),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
