"""
On-chain price sources.
"""

from .pool import UNISWAP_V3_POOL_ABI, UniswapV3Pool, connect_web3
from .retry import RetryPolicy, retry_with_backoff
from .uniswap_source import DIAL_RETRY_POLICY, PoolIdentity, UniswapSource

__all__ = [
    'UNISWAP_V3_POOL_ABI',
    'UniswapV3Pool',
    'connect_web3',
    'RetryPolicy',
    'retry_with_backoff',
    'DIAL_RETRY_POLICY',
    'PoolIdentity',
    'UniswapSource',
]
