"""
TWAP sampling from a pool's cumulative tick oracle.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Awaitable, Callable, Optional, Tuple

from .errors import InvalidWindowError, OracleReadFailedError
from .tick_math import PRICE_PRECISION

logger = logging.getLogger(__name__)

DEFAULT_UPDATE_INTERVAL = 1.0  # seconds


@dataclass(frozen=True)
class Observation:
    """Two cumulative tick samples, window start first and "now" last."""

    seconds_ago: Tuple[int, int]
    tick_cumulatives: Tuple[int, int]

    @property
    def tick_delta(self) -> int:
        return self.tick_cumulatives[1] - self.tick_cumulatives[0]


class TwapSampler:
    """
    Derives the mean tick of a pool over an averaging window.

    Oracle reads are throttled to one per ``update_interval`` seconds. A
    single lock covers the throttle check, the read and the throttle state
    update, so at most one observe() call is in flight per pool.
    """

    def __init__(
        self,
        pool,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the sampler.

        Args:
            pool: Pool handle exposing observe(seconds_ago) and address
            update_interval: Minimum seconds between two oracle reads
            clock: Monotonic time source
            sleep: Coroutine function used to wait out the throttle
        """
        if update_interval < 0:
            raise ValueError(f"update_interval must not be negative: {update_interval}")

        self.pool = pool
        self.update_interval = update_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_sampled: Optional[float] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def last_sampled(self) -> Optional[float]:
        """Clock reading taken right after the most recent oracle read."""
        return self._last_sampled

    async def sample(self, averaging_window: int) -> Decimal:
        """
        Read the oracle and return the mean tick over the window.

        Args:
            averaging_window: Window length in seconds

        Returns:
            Mean tick as a Decimal (fractional, may be negative)

        Raises:
            InvalidWindowError: If the window is not a positive integer
            OracleReadFailedError: If the observe() call fails
        """
        if isinstance(averaging_window, bool) or not isinstance(averaging_window, int):
            raise InvalidWindowError(averaging_window)
        if averaging_window <= 0:
            raise InvalidWindowError(averaging_window)

        async with self._lock:
            await self._throttle()
            try:
                observation = await self._observe(averaging_window)
            finally:
                self._last_sampled = self._clock()

        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            mean_tick = Decimal(observation.tick_delta) / Decimal(averaging_window)

        self.logger.debug(f"tick delta {observation.tick_delta}, mean tick {mean_tick}")
        return mean_tick

    async def _throttle(self):
        """Wait until update_interval has passed since the last read."""
        if self._last_sampled is None:
            return

        elapsed = self._clock() - self._last_sampled
        if elapsed < self.update_interval:
            delay = self.update_interval - elapsed
            self.logger.debug(f"Throttling oracle read for {delay:.3f}s")
            await self._sleep(delay)

    async def _observe(self, averaging_window: int) -> Observation:
        """Query both cumulative ticks in a single observe() call, off the event loop."""
        seconds_ago = [averaging_window, 0]
        pool_address = getattr(self.pool, "address", None)
        self.logger.debug(f"secondsAgo {seconds_ago[0]} {seconds_ago[1]}")

        try:
            # web3 calls block, run in executor to keep the loop free
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(None, self.pool.observe, seconds_ago)
            tick_cumulatives = result[0]
        except Exception as e:
            self.logger.error(f"Oracle read failed for pool {pool_address}: {e}")
            raise OracleReadFailedError(
                f"observe({seconds_ago}) failed: {e}",
                pool_address=pool_address,
                seconds_ago=seconds_ago,
            ) from e

        if len(tick_cumulatives) != 2:
            raise OracleReadFailedError(
                f"observe({seconds_ago}) returned {len(tick_cumulatives)} tick cumulatives",
                pool_address=pool_address,
                seconds_ago=seconds_ago,
            )

        self.logger.debug(
            f"tickCumulatives [0] {tick_cumulatives[0]} [1] {tick_cumulatives[1]}"
        )
        return Observation(
            seconds_ago=(seconds_ago[0], seconds_ago[1]),
            tick_cumulatives=(int(tick_cumulatives[0]), int(tick_cumulatives[1])),
        )
