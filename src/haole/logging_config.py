"""
Logging configuration for Haole.

Records go to stderr through Rich so that command output on stdout (and the
live dashboard) stays clean.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import get_config

# HTTP libraries log one line per request; only surface them when debugging
CHATTY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Set up logging with Rich handler for nice terminal output.

    Args:
        level: Optional log level override. If not provided, uses config
            (which has already been checked against the known level names).

    Returns:
        The logger for the haole package.
    """
    log_level = (level or get_config().log_level).upper()
    numeric_level = logging.getLevelName(log_level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=numeric_level <= logging.DEBUG,
                show_path=False,
            )
        ],
    )

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(
            numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
        )

    logger = logging.getLogger("haole")
    logger.setLevel(numeric_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module (usually ``__name__``)."""
    return logging.getLogger(name)
