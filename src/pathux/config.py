"""Configuration schema and loader for pathux."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import environment
from .resolver import PathResolver

CONFIG_FILENAME = "pathux.json"

VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def expand_path(path: str) -> str:
    """Expand environment variables and ~ in a configured path string.

    Undefined variables are left as-is (e.g. "${UNDEFINED}"), so a bad
    value shows up in the resulting path rather than silently vanishing.
    """
    return os.path.expanduser(os.path.expandvars(path))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    file: str | None = None  # No log file unless configured
    max_bytes: int = 1048576  # 1MB
    backup_count: int = 3

    @property
    def expanded_file(self) -> Path | None:
        """Return log file path with ~ and $VARS expanded."""
        if not self.file:
            return None
        return Path(expand_path(self.file))

    def __post_init__(self) -> None:
        if self.level.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}. Must be one of {VALID_LEVELS}")


@dataclass
class EnvironmentConfig:
    """Optional overrides for the directories paths are resolved against."""

    cwd: str | None = None
    home_dir: str | None = None

    def cwd_provider(self) -> environment.Provider:
        if self.cwd is None:
            return environment.current_working_directory
        return environment.fixed(expand_path(self.cwd))

    def home_provider(self) -> environment.Provider:
        if self.home_dir is None:
            return environment.home_directory
        return environment.fixed(expand_path(self.home_dir))


@dataclass
class ListingConfig:
    """Configuration for directory listings."""

    show_hidden: bool = False
    directories_first: bool = True


@dataclass
class Config:
    """Root configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)

    def make_resolver(self) -> PathResolver:
        """Build a resolver that honors the environment overrides."""
        return PathResolver(
            cwd=self.environment.cwd_provider(),
            home_dir=self.environment.home_provider(),
        )


def _parse_logging_config(data: dict[str, Any] | None) -> LoggingConfig:
    """Parse logging configuration from dict."""
    if data is None:
        return LoggingConfig()
    return LoggingConfig(
        level=data.get("level", "WARNING"),
        file=data.get("file"),
        max_bytes=data.get("max_bytes", 1048576),
        backup_count=data.get("backup_count", 3),
    )


def _parse_environment_config(data: dict[str, Any] | None) -> EnvironmentConfig:
    """Parse environment overrides from dict."""
    if data is None:
        return EnvironmentConfig()
    for key in ("cwd", "home_dir"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"environment.{key} must be a string, got {type(value).__name__}")
    return EnvironmentConfig(cwd=data.get("cwd"), home_dir=data.get("home_dir"))


def _parse_listing_config(data: dict[str, Any] | None) -> ListingConfig:
    """Parse listing configuration from dict."""
    if data is None:
        return ListingConfig()
    return ListingConfig(
        show_hidden=data.get("show_hidden", False),
        directories_first=data.get("directories_first", True),
    )


def load_config(config_path: str | Path) -> Config:
    """Load configuration from a JSON file.

    Args:
        config_path: Path to the pathux.json file

    Returns:
        Parsed Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        json.JSONDecodeError: If config file is invalid JSON
        ValueError: If a section has invalid values
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object")

    return Config(
        logging=_parse_logging_config(data.get("logging")),
        environment=_parse_environment_config(data.get("environment")),
        listing=_parse_listing_config(data.get("listing")),
    )


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find pathux.json in the given directory or its parents.

    Args:
        start_path: Starting directory (defaults to current working directory)

    Returns:
        Path to the config file, or None if there is none
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path
    while current != current.parent:
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path
        current = current.parent

    # Check root too
    config_path = current / CONFIG_FILENAME
    if config_path.exists():
        return config_path

    return None
