"""
Logging configuration using loguru.

The CLI calls configure_logging() once at startup with the loaded Config;
library modules just ``from loguru import logger`` and log.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

from commodity_ledger.core.config import Config
from commodity_ledger.core.exceptions import ConfigurationError

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def resolve_level(level: str) -> str:
    """Normalize a level name, raising ConfigurationError for unknown ones."""
    name = str(level).strip().upper()
    try:
        logger.level(name)
    except ValueError as e:
        raise ConfigurationError(f"Unknown logging level {level!r}") from e
    return name


def configure_logging(config: Config, verbose: bool = False) -> str | None:
    """Install stderr and optional file sinks from the ``logging.*`` settings.

    ``logging.file`` may be absolute or relative to ``paths.log_dir``.
    ``verbose`` forces DEBUG on both sinks.

    Returns:
        Absolute path of the log file, or None when file logging is off.
    """
    level = "DEBUG" if verbose else resolve_level(config.get("logging.level", "WARNING"))

    log_file = os.path.expanduser(str(config.get("logging.file") or ""))
    if log_file and not os.path.isabs(log_file):
        log_dir = os.path.expanduser(config.get("paths.log_dir") or config.get_data_dir())
        log_file = os.path.join(log_dir, log_file)

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    if log_file:
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation="1 MB", retention="30 days")
    return log_file or None
