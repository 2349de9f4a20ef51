"""
Logging configuration for ovsdb_modelgen.

Modules get their logger with ``get_logger(__name__)``. Nothing is printed
until ``configure_logging`` installs a rich console handler; the level comes
from the argument, the OVSDB_MODELGEN_LOG_LEVEL environment variable, or
defaults to WARNING.
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "ovsdb_modelgen"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "OVSDB_MODELGEN_LOG_LEVEL"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package hierarchy."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Optional[Union[str, int]] = None, console: Optional[Console] = None
) -> logging.Logger:
    """
    Send package logs to the console through rich.

    Calling it again replaces the previous handler instead of adding one.

    Args:
        level: Log level name or number
        console: Console to log to (default: a new stderr console)

    Returns:
        The package root logger
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)

    return root
