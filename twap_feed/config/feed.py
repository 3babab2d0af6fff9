"""
Price feed configuration for a single Uniswap V3 pool.
"""

from dataclasses import dataclass, field

from eth_utils import is_hex_address

from ..pricing.token_role import strip_hex_prefix
from .base import BaseConfig, ConfigError, read_env, read_env_float, read_env_int


@dataclass
class FeedConfig(BaseConfig):
    """Construction parameters of one TWAP price source."""

    # Node and pool
    NODE_URL: str = field(default_factory=lambda: read_env("TWAP_NODE_URL", ""))
    POOL_ADDRESS: str = field(default_factory=lambda: read_env("TWAP_POOL_ADDRESS", ""))
    TOKEN_ADDRESS: str = field(default_factory=lambda: read_env("TWAP_TOKEN_ADDRESS", ""))

    # Pricing
    PRICE_DECIMALS: int = field(
        default_factory=lambda: read_env_int("TWAP_PRICE_DECIMALS", 6)
    )
    AVERAGING_INTERVAL: int = field(
        default_factory=lambda: read_env_int("TWAP_AVERAGING_INTERVAL", 60)
    )  # seconds
    UPDATE_INTERVAL: float = field(
        default_factory=lambda: read_env_float("TWAP_UPDATE_INTERVAL", 1.0)
    )  # seconds between oracle reads
    PRICE_MULTIPLIER: float = field(
        default_factory=lambda: read_env_float("TWAP_PRICE_MULTIPLIER", 1.0)
    )

    def _validate_config(self):
        """Validate feed parameters."""
        super()._validate_config()

        missing = [
            name for name, value in (
                ("TWAP_NODE_URL", self.NODE_URL),
                ("TWAP_POOL_ADDRESS", self.POOL_ADDRESS),
                ("TWAP_TOKEN_ADDRESS", self.TOKEN_ADDRESS),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Required feed settings not set: {', '.join(missing)}")

        for name, address in (
            ("TWAP_POOL_ADDRESS", self.POOL_ADDRESS),
            ("TWAP_TOKEN_ADDRESS", self.TOKEN_ADDRESS),
        ):
            if not is_hex_address("0x" + strip_hex_prefix(address.strip())):
                raise ConfigError(f"{name} is not a 20-byte hex address, got: {address}")

        if self.AVERAGING_INTERVAL <= 0:
            raise ConfigError(
                f"TWAP_AVERAGING_INTERVAL must be positive, got: {self.AVERAGING_INTERVAL}"
            )
        if self.PRICE_DECIMALS < 0:
            raise ConfigError(
                f"TWAP_PRICE_DECIMALS must not be negative, got: {self.PRICE_DECIMALS}"
            )
        if self.UPDATE_INTERVAL < 0:
            raise ConfigError(
                f"TWAP_UPDATE_INTERVAL must not be negative, got: {self.UPDATE_INTERVAL}"
            )
