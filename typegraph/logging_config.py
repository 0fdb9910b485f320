"""Logging setup shared by every typegraph module.

Modules obtain their logger with ``get_logger(__name__)``. Nothing is printed
until the host application calls ``configure_logging``, which installs a
rich handler on the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "typegraph"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Args:
        level: Logging level name or number.
        console: Console to log to (default: a stderr console).

    Returns:
        The configured package logger.
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger


# Library default: stay silent unless configured
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
