"""Logging setup for the kubetop CLI.

Log records go to stderr through rich so the report table on stdout stays
clean for piping.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from kubetop.constants.defaults import LOG_LEVEL_DEFAULT, LOG_LEVEL_ENV

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def resolve_log_level(verbosity: int = 0) -> int:
    """Pick the effective level from -v flags, falling back to the environment."""
    if verbosity > 0:
        return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]
    name = os.getenv(LOG_LEVEL_ENV, LOG_LEVEL_DEFAULT).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbosity: int = 0) -> None:
    """Configure application-wide logging."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=resolve_log_level(verbosity),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
