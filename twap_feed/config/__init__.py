"""
Configuration management for twap-feed.

Example:
    from twap_feed.config import get_config

    config = get_config()

    node_url = config.NODE_URL
    window = config.AVERAGING_INTERVAL
"""

from .base import BaseConfig, ConfigError, read_env, read_env_float, read_env_int
from .feed import FeedConfig
from .manager import get_config, reload_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "FeedConfig",
    "get_config",
    "read_env",
    "read_env_float",
    "read_env_int",
    "reload_config",
]
