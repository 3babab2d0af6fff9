"""
Uniswap V3 TWAP price source.

Connects to a node once, works out which side of the pool the tracked token
sits on, then serves byte-encoded TWAP prices on every read.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from web3 import Web3

from ..config import FeedConfig
from ..pricing.codec import PriceSample, encode_price
from ..pricing.errors import (
    ConnectionFailedError,
    InvalidAddressError,
    InvalidWindowError,
    TokenNotInPoolError,
)
from ..pricing.sampler import DEFAULT_UPDATE_INTERVAL, TwapSampler
from ..pricing.tick_math import decimal_scale, price_from_mean_tick
from ..pricing.token_role import resolve_token_is_base
from .pool import UniswapV3Pool, connect_web3, to_checksum
from .retry import RetryPolicy, retry_with_backoff

logger = logging.getLogger(__name__)

# 5 attempts, waiting 4s, 8s, 16s, 32s in between
DIAL_RETRY_POLICY = RetryPolicy(max_attempts=5, base_delay=4.0, multiplier=2.0)


@dataclass(frozen=True)
class PoolIdentity:
    """Pool and tracked token, fixed for the lifetime of a connection."""

    pool_address: str
    token_address: str
    token_is_base: bool


class UniswapSource:
    """
    Price source reading a Uniswap V3 pool's TWAP.

    Call dial() once before reading. Reconnecting replaces the pool identity
    rather than mutating it.
    """

    def __init__(
        self,
        provider_url: str,
        averaging_interval: int,
        token_address: str,
        price_decimals: int,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
        retry_policy: RetryPolicy = DIAL_RETRY_POLICY,
        connector: Callable[[str], Web3] = connect_web3,
        pool_factory: Callable[[Web3, str], UniswapV3Pool] = UniswapV3Pool,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the source.

        Args:
            provider_url: Node RPC URL
            averaging_interval: TWAP window in seconds
            token_address: Token to price, with or without 0x prefix
            price_decimals: Quote decimals applied to the final price
            update_interval: Minimum seconds between oracle reads
            retry_policy: Backoff used while dialing
            connector: Opens a Web3 connection for a URL
            pool_factory: Builds the pool handle from a connection
            sleep: Coroutine function for backoff and throttle waits
            clock: Monotonic time source for the throttle
        """
        if isinstance(averaging_interval, bool) or not isinstance(averaging_interval, int) \
                or averaging_interval <= 0:
            raise InvalidWindowError(averaging_interval)

        self.provider_url = provider_url
        self.averaging_interval = averaging_interval
        self.token_address = token_address
        self.price_scale = decimal_scale(price_decimals)
        self.update_interval = update_interval
        self.retry_policy = retry_policy

        self._connector = connector
        self._pool_factory = pool_factory
        self._sleep = sleep
        self._clock = clock

        self._pool: Optional[UniswapV3Pool] = None
        self._sampler: Optional[TwapSampler] = None
        self.pool_identity: Optional[PoolIdentity] = None
        self.last_price: Optional[PriceSample] = None

        logger.info(f"created Uniswap source, provider url: {self.provider_url}")

    @classmethod
    def from_config(cls, config: FeedConfig, **kwargs) -> "UniswapSource":
        """Build a source from feed configuration."""
        return cls(
            provider_url=config.NODE_URL,
            averaging_interval=config.AVERAGING_INTERVAL,
            token_address=config.TOKEN_ADDRESS,
            price_decimals=config.PRICE_DECIMALS,
            update_interval=config.UPDATE_INTERVAL,
            **kwargs,
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def dial(self, pool_address: str) -> PoolIdentity:
        """
        Connect to the node, open the pool and resolve the token's side.

        Args:
            pool_address: Pool address, with or without 0x prefix

        Returns:
            The resolved PoolIdentity

        Raises:
            ConnectionFailedError: If the pool cannot be reached after all
                retries, or its tokens cannot be read
            TokenNotInPoolError: If the token is not one of the pool's tokens
            InvalidAddressError: If either address is not valid hex
        """
        try:
            pool_address = to_checksum(pool_address)
        except ValueError as e:
            raise InvalidAddressError(pool_address, "pool") from e
        try:
            token_address = to_checksum(self.token_address)
        except ValueError as e:
            raise InvalidAddressError(self.token_address, "token") from e

        if self._pool is not None:
            self.hang_up()

        def open_pool() -> UniswapV3Pool:
            w3 = self._connector(self.provider_url)
            return self._pool_factory(w3, pool_address)

        try:
            pool = await retry_with_backoff(open_pool, self.retry_policy, sleep=self._sleep)
        except Exception as e:
            raise ConnectionFailedError(
                f"Error dialing eth client: {e}",
                node_url=self.provider_url,
                attempts=self.retry_policy.max_attempts,
            ) from e

        try:
            token0 = pool.token0()
            token1 = pool.token1()
        except Exception as e:
            pool.close()
            raise ConnectionFailedError(
                f"Error reading uniswap token info for pool {pool_address}: {e}",
                node_url=self.provider_url,
            ) from e

        try:
            token_is_base = resolve_token_is_base(token0, token1, token_address)
        except TokenNotInPoolError:
            pool.close()
            logger.error(f"token {token_address} not found in pool {pool_address}")
            raise

        self._pool = pool
        self._sampler = TwapSampler(
            pool, update_interval=self.update_interval, clock=self._clock, sleep=self._sleep
        )
        self.pool_identity = PoolIdentity(
            pool_address=pool_address,
            token_address=token_address,
            token_is_base=token_is_base,
        )
        logger.info(
            f"successfully connected to eth client, pool {pool_address}, "
            f"token is {'token0' if token_is_base else 'token1'}"
        )
        return self.pool_identity

    def connection(self):
        """RPC sources have no raw socket to expose."""
        return None

    def hang_up(self):
        """Release the pool handle. Safe to call repeatedly or before dial()."""
        if self._pool is not None:
            self._pool.close()
            logger.info(f"hung up pool {self._pool.address}")
        self._pool = None
        self._sampler = None
        self.pool_identity = None

    async def get_price(self) -> PriceSample:
        """
        Sample the oracle and compute the current TWAP price.

        Raises:
            ConnectionFailedError: If dial() has not succeeded
            OracleReadFailedError: If the observe() call fails
            PriceArithmeticError: If the price cannot be computed
        """
        if self._sampler is None or self.pool_identity is None:
            raise ConnectionFailedError(
                "Source is not connected, call dial() first", node_url=self.provider_url
            )

        mean_tick = await self._sampler.sample(self.averaging_interval)
        price = price_from_mean_tick(mean_tick, self.pool_identity.token_is_base, self.price_scale)
        logger.debug(f"meanTick {mean_tick} price {price}")

        sample = PriceSample.now(price)
        self.last_price = sample
        return sample

    async def read_server_data(self) -> bytes:
        """Return the encoded latest TWAP price."""
        return encode_price(await self.get_price())
