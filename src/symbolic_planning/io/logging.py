"""Define utility functions to simplify logging to the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("symbolic_planning")
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route the package's log records through a Rich handler on the shared console.

    :param verbose: Whether to emit debug-level messages (defaults to False)
    """
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def log_debug(message: str) -> None:
    """Log the given string at debug level."""
    logger.debug(message)


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    logger.info(message)


def log_warning(message: str) -> None:
    """Log the given string as a warning."""
    logger.warning(message)


def log_error(message: str) -> None:
    """Log the given string as an error."""
    logger.error(message)
