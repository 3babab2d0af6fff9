"""
twap-feed: time weighted average prices from Uniswap V3 pool oracles.

Example:
    from twap_feed.sources import UniswapSource
    from twap_feed.providers import UniswapProvider

    source = UniswapSource(node_url, averaging_interval=60,
                           token_address=token, price_decimals=6)
    await source.dial(pool)
    price = await UniswapProvider(source).poll()
"""

__version__ = "0.1.0"
