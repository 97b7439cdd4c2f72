"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Route all tlsmon logging to stderr through Rich.

    Args:
        level: Logging level name, unknown names fall back to INFO.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("tlsmon")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
