#!/usr/bin/env python3
"""
Poll a Uniswap V3 pool's TWAP price and log it.

Settings come from the environment (see twap_feed.config.FeedConfig).

Usage:
    python -m twap_feed.scripts.run_twap_feed
    python -m twap_feed.scripts.run_twap_feed --polls 10 --interval 5
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from twap_feed.config import ConfigError, get_config
from twap_feed.pricing.errors import OracleReadFailedError, TwapFeedError
from twap_feed.providers import UniswapProvider
from twap_feed.sources import UniswapSource

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Uniswap V3 TWAP price feed")
    parser.add_argument(
        "--polls", type=int, default=0,
        help="Number of prices to read before exiting (0 = run forever)",
    )
    parser.add_argument(
        "--interval", type=float, default=5.0,
        help="Seconds between polls",
    )
    return parser.parse_args(argv)


async def run(polls: int, interval: float) -> int:
    """Dial the configured pool and poll it."""
    try:
        config = get_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    source = UniswapSource.from_config(config)
    provider = UniswapProvider(source, multiplier=config.PRICE_MULTIPLIER)

    try:
        identity = await source.dial(config.POOL_ADDRESS)
        logger.info(
            f"Tracking {identity.token_address} on pool {identity.pool_address} "
            f"over {config.AVERAGING_INTERVAL}s"
        )

        count = 0
        while polls == 0 or count < polls:
            try:
                price = await provider.poll()
                logger.info(f"TWAP price: {price}")
            except OracleReadFailedError as e:
                # Transient on-chain condition, keep polling
                logger.warning(f"Oracle read failed: {e}")
            count += 1
            if polls == 0 or count < polls:
                await asyncio.sleep(interval)

        return 0

    except TwapFeedError as e:
        logger.error(f"❌ Fatal error in TWAP feed: {e}")
        return 1
    finally:
        source.hang_up()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    return asyncio.run(run(args.polls, args.interval))


if __name__ == "__main__":
    sys.exit(main())
