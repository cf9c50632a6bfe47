"""Logging setup for biblechallenge.

Console output goes through Rich; an optional log file receives everything.
Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "biblechallenge"

# Diagnostics go to stderr so command output stays clean
console = Console(stderr=True)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """Initialize the package logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a diagnostic log file
        log_to_console: Whether to attach the Rich console handler

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()
    logger.propagate = False

    if log_to_console:
        console_handler = RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger

