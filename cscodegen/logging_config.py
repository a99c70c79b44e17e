"""
Logging setup for cscodegen.

Every module obtains its logger through get_logger(__name__); the CLI calls
setup_logging() once to attach a rich console handler.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "cscodegen"
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"

_configured = False


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """
    Configure the package logger.

    Args:
        verbose: Log DEBUG messages when True, WARNING and above otherwise
        console: Console to log to (defaults to stderr)
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if _configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the cscodegen namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
