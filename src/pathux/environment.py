"""Providers for the two environment facts path resolution depends on.

A provider is any zero-argument callable returning path text. It raises
``EnvironmentUnavailable`` when the fact cannot be determined. The
resolver takes providers as parameters so tests (and configuration
overrides) can supply fixed values instead of the real process state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from .errors import EnvironmentUnavailable
from .logging_config import get_logger

logger = get_logger("environment")

Provider = Callable[[], str]

CWD = "current directory"
HOME = "home directory"


def current_working_directory() -> str:
    """Return the process's current working directory.

    Raises:
        EnvironmentUnavailable: If the directory was removed or is unreadable
    """
    try:
        return os.getcwd()
    except OSError as e:
        logger.debug(f"os.getcwd() failed: {e}")
        raise EnvironmentUnavailable(CWD, str(e)) from e


def home_directory() -> str:
    """Return the running account's home directory.

    Raises:
        EnvironmentUnavailable: If no home directory can be resolved
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        logger.debug(f"Path.home() failed: {e}")
        raise EnvironmentUnavailable(HOME, str(e) or "no home directory for this account") from e
    return str(home)


def fixed(text: str) -> Provider:
    """Return a provider that always answers ``text``."""

    def provider() -> str:
        return text

    return provider


def unavailable(fact: str, reason: str = "not available") -> Provider:
    """Return a provider that always fails for ``fact``."""

    def provider() -> str:
        raise EnvironmentUnavailable(fact, reason)

    return provider
