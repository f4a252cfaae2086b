"""Logging setup for threadline.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed once by the application entry point.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LogLevel

ROOT_LOGGER_NAME = "threadline"


def setup_logging(
    level: LogLevel | str | int = LogLevel.WARNING,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package logger with a Rich handler.

    Calling this more than once replaces the previously installed handler
    instead of stacking a second one.

    Args:
        level: LogLevel, level name ("debug", "info", ...) or numeric level
        console: Console to write to (defaults to stderr)

    Returns:
        The configured ``threadline`` logger
    """
    if isinstance(level, str):
        level = LogLevel(level.lower()).level

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger

