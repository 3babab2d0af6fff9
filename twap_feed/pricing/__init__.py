"""
TWAP price computation.

This package turns a pool's cumulative tick observations into a decimal
price and encodes it for price feed consumers.
"""

from .codec import PriceSample, decode_price, encode_price
from .errors import (
    CodecError,
    ConnectionFailedError,
    InvalidAddressError,
    InvalidWindowError,
    OracleReadFailedError,
    PriceArithmeticError,
    TokenNotInPoolError,
    TwapFeedError,
)
from .sampler import Observation, TwapSampler
from .tick_math import (
    PRICE_PRECISION,
    decimal_scale,
    get_sqrt_ratio_at_tick,
    price_from_mean_tick,
)
from .token_role import normalize_address, resolve_token_is_base, strip_hex_prefix

__all__ = [
    'PriceSample',
    'decode_price',
    'encode_price',
    'CodecError',
    'ConnectionFailedError',
    'InvalidAddressError',
    'InvalidWindowError',
    'OracleReadFailedError',
    'PriceArithmeticError',
    'TokenNotInPoolError',
    'TwapFeedError',
    'Observation',
    'TwapSampler',
    'PRICE_PRECISION',
    'decimal_scale',
    'get_sqrt_ratio_at_tick',
    'price_from_mean_tick',
    'normalize_address',
    'resolve_token_is_base',
    'strip_hex_prefix',
]
