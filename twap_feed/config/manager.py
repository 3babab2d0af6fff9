"""
Configuration access for twap-feed.

Keeps a single cached FeedConfig for the process so that the runner script
and library callers see the same settings.
"""

import logging
from typing import Optional

from .base import ConfigError
from .feed import FeedConfig

logger = logging.getLogger(__name__)

# Global configuration instance
_feed_config: Optional[FeedConfig] = None


def get_config(force_reload: bool = False) -> FeedConfig:
    """
    Get the global feed configuration instance.

    Args:
        force_reload: Force reload of configuration from the environment

    Returns:
        FeedConfig instance

    Raises:
        ConfigError: If the environment does not describe a valid feed
    """
    global _feed_config

    if _feed_config is None or force_reload:
        try:
            _feed_config = FeedConfig()
        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}") from e

        logger.info(
            f"Configuration initialized for environment: {_feed_config.ENVIRONMENT} "
            f"(pool={_feed_config.POOL_ADDRESS}, window={_feed_config.AVERAGING_INTERVAL}s)"
        )

    return _feed_config


def reload_config() -> FeedConfig:
    """Reload the global feed configuration."""
    return get_config(force_reload=True)
