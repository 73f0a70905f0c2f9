"""
Logging configuration for ffmeta.

Parser modules only log at DEBUG (dropped chapter blocks, skipped stream
lines, where the duration came from). Applications call setup_logging() once;
with no explicit level the LOG_LEVEL environment setting applies.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pydantic
from rich.console import Console
from rich.logging import RichHandler

from ffmeta.env_settings import get_env_settings
from ffmeta.exceptions import ConfigurationError

LOGGER_NAME = "ffmeta"

FILE_FORMAT = "%(asctime)s | %(levelname)-5s | [%(name)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: str | None = None) -> int:
    """
    Map a level name to a logging level.

    Args:
        log_level: Level name in any case; None reads LOG_LEVEL

    Returns:
        The numeric level; unknown names give INFO.

    Raises:
        ConfigurationError: If LOG_LEVEL is set to an invalid value
    """
    if log_level is None:
        try:
            log_level = get_env_settings().app.log_level
        except pydantic.ValidationError as e:
            raise ConfigurationError(f"Invalid log level setting: {e}", field="LOG_LEVEL") from e

    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: str | None = None,
    log_file: Path | str | None = None,
    *,
    rich_console: bool = True,
    quiet_console: bool = False,
) -> logging.Logger:
    """
    Configure the "ffmeta" logger.

    Args:
        log_level: Level name; None reads LOG_LEVEL
        log_file: Optional file that receives every record at the chosen level
        rich_console: Render stderr output with rich instead of plain text
        quiet_console: Only WARNING+ on stderr, e.g. while stdout carries JSON

    Returns:
        The "ffmeta" logger
    """
    level = resolve_log_level(log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler: logging.Handler
    if rich_console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=level <= logging.DEBUG,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s: [%(name)s] %(message)s"))
    console_handler.setLevel(max(level, logging.WARNING) if quiet_console else level)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger
