"""Rich-backed logging for the dbmigrate CLI.

Every module asks for its logger through ``get_logger`` so that console
output shares one rich ``Console`` and one formatting convention.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("[green]MIGRATED 1700000000000[/green] [blue]AddUsers[/blue]")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from common.env import env

# Shared console so log lines and direct prints interleave correctly
console = Console()


def _rich_handler() -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a logger that renders through rich.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level name. Falls back to LOG_LEVEL, then INFO.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    logger.setLevel((level or env.log_level()).upper())
    logger.addHandler(_rich_handler())

    # Keep propagation on so pytest caplog sees the records
    logger.propagate = True

    return logger


def progress(message: str) -> None:
    """Print a plain progress line."""
    console.print(message)

