"""Logging for pathux.

Library modules log through ``get_logger`` and nothing is configured on
import; the CLI calls ``setup_logging`` once per invocation.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import LoggingConfig

PACKAGE_LOGGER = "pathux"

# Below DEBUG: one line per conversion step in the resolver
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: str, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = _trace  # type: ignore[attr-defined]

FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)-5s [%(name)s] %(message)s"


def level_from_name(level_name: str) -> int:
    """Map a level name (including TRACE) to its numeric value."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def _console_handler() -> logging.Handler:
    """Rich output on a terminal, plain lines when stderr is redirected."""
    if sys.stderr.isatty():
        return RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    return handler


def setup_logging(
    config: LoggingConfig,
    level_override: str | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Replaces any handlers from an earlier call, so repeated CLI invocations
    in one process do not duplicate output.

    Args:
        config: Logging configuration
        level_override: Level name from the command line, if given

    Returns:
        The ``pathux`` logger
    """
    level = level_from_name(level_override or config.level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    log_path = config.expanded_file
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.addHandler(_console_handler())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``pathux.<name>`` logger (``name`` may already be qualified)."""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
