"""Loguru sink setup for command-line use.

Library modules only ever call ``from loguru import logger``; sinks are
configured once, by the CLI, through :func:`configure_logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink: TextIO | None = None) -> int:
    """Replace loguru's default handler with a single leveled sink.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        sink: Stream to write to (default: stderr).

    Returns:
        The loguru handler id of the new sink.
    """
    logger.remove()
    return logger.add(
        sink or sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=sink is None,
    )
