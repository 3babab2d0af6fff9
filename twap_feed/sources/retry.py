"""
Bounded retry with exponential backoff.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits for an operation."""

    max_attempts: int = 5
    base_delay: float = 4.0  # seconds before the second attempt
    multiplier: float = 2.0
    max_delay: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1: {self.max_attempts}")
        if self.base_delay < 0 or self.multiplier < 1:
            raise ValueError("base_delay must be >= 0 and multiplier >= 1")

    def get_delay(self, attempt: int) -> float:
        """Delay after the given failed attempt (0-based)."""
        delay = self.base_delay * (self.multiplier ** attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay


async def retry_with_backoff(
    operation: Callable[[], Any],
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> Any:
    """
    Run an operation until it succeeds or the policy is exhausted.

    The operation may be a plain callable or a coroutine function. There is
    no sleep after the final attempt.

    Args:
        operation: Zero-argument callable to run
        policy: Retry limits (defaults to RetryPolicy())
        sleep: Coroutine function used between attempts
        retry_on: Exception types that trigger a retry; others propagate

    Returns:
        The operation's result

    Raises:
        The last exception raised by the operation once attempts run out
    """
    policy = policy or RetryPolicy()
    name = getattr(operation, "__name__", str(operation))

    for attempt in range(policy.max_attempts):
        try:
            result = operation()
            if inspect.isawaitable(result):
                result = await result
            return result
        except retry_on as e:
            if attempt == policy.max_attempts - 1:
                logger.error(f"{name} failed after {policy.max_attempts} attempts: {e}")
                raise

            delay = policy.get_delay(attempt)
            logger.warning(
                f"{name} failed ({e}), retrying in {delay}s... "
                f"(attempt {attempt + 1}/{policy.max_attempts})"
            )
            await sleep(delay)
