"""Logging setup for the command line entry point."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)


def configure_logging(verbose: bool = False) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Args:
        verbose: Log at DEBUG level instead of WARNING
    """
    logger.remove()
    logger.configure(extra={"component": "chartwright"})
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
        colorize=None,
    )
