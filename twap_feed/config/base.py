"""
Environment-backed settings shared by every twap-feed configuration.

Values are read when a config object is built rather than at import time,
so reload_config() picks up a changed environment.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

ENVIRONMENTS = ("local", "dev", "staging", "production", "test")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

T = TypeVar("T")


class ConfigError(Exception):
    """Exception raised for a missing or malformed setting."""
    pass


def read_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Read a stripped environment variable.

    Blank values count as unset.

    Raises:
        ConfigError: If the variable is required and unset
    """
    value = os.getenv(key, "").strip()
    if value:
        return value
    if required:
        raise ConfigError(f"Required environment variable '{key}' is not set")
    return default


def _read_parsed(key: str, default: T, parse: Callable[[str], T], kind: str) -> T:
    value = read_env(key)
    if value is None:
        return default
    try:
        return parse(value)
    except ValueError as e:
        raise ConfigError(f"Environment variable '{key}' must be {kind}, got: {value}") from e


def read_env_int(key: str, default: int) -> int:
    """Read an integer environment variable."""
    return _read_parsed(key, default, int, "an integer")


def read_env_float(key: str, default: float) -> float:
    """Read a float environment variable."""
    return _read_parsed(key, default, float, "a float")


@dataclass
class BaseConfig:
    """Deployment environment and log level, validated before logging is set up."""

    ENVIRONMENT: str = field(default_factory=lambda: read_env("ENVIRONMENT", "local"))
    LOG_LEVEL: str = field(default_factory=lambda: read_env("LOG_LEVEL", "INFO"))

    def __post_init__(self):
        self._validate_config()
        self._setup_logging()

    @property
    def log_level(self) -> int:
        """Numeric logging level for LOG_LEVEL."""
        return logging.getLevelName(self.LOG_LEVEL.upper())

    def _setup_logging(self):
        logging.basicConfig(level=self.log_level, format=LOG_FORMAT)

    def _validate_config(self):
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(
                f"Invalid environment: {self.ENVIRONMENT} (expected one of {', '.join(ENVIRONMENTS)})"
            )
        # getLevelName returns a "Level X" string for unknown names
        if not isinstance(self.log_level, int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
