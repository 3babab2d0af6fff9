"""
Price providers consuming encoded source prices.
"""

from .uniswap_provider import UniswapProvider

__all__ = ['UniswapProvider']
