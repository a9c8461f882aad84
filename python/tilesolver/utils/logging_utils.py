"""Logger setup shared by the command line and library callers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(name)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING


def setup_logger(
    name: str = "tilesolver",
    level: int = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure *name* to log through rich on stderr, optionally to a file.

    Safe to call repeatedly: existing handlers on the logger are replaced.
    """
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.setLevel(level)

    console_handler = RichHandler(
        console=Console(stderr=True), show_path=False, rich_tracebacks=True
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    logger.debug("Logging configured at %s", logging.getLevelName(level))
    return logger


def get_level_from_string(level_str: str) -> int:
    """Converts a log level string to a logging level constant."""
    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)
