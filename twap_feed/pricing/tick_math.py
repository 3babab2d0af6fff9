"""
Arbitrary-precision Uniswap V3 tick to price conversion.

Key concepts:
- Tick: logarithmic price representation where price = 1.0001^tick
- sqrtPriceX96: square root of price scaled by 2^96
- Squaring sqrtPriceX96 gives the price scaled by 2^192

A mean tick from a TWAP window is fractional and may be negative, so the
integer bit-shift tick math used on-chain does not apply. Everything here is
done with ``decimal.Decimal`` in a local context of PRICE_PRECISION
significant digits (about 265 bits), well above the 192 bits that the
2^192 scaling needs.
"""

from decimal import Decimal, DecimalException, localcontext
from typing import Union

from .errors import PriceArithmeticError

# Significant decimal digits used for every intermediate value
PRICE_PRECISION = 80

TICK_BASE = Decimal("1.0001")

# Exact in an 80 digit context (29 and 58 digits)
Q96 = Decimal(2**96)
Q192 = Decimal(2**192)

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a numeric value to Decimal without going through binary floats.

    Raises:
        PriceArithmeticError: If the value cannot be represented
    """
    if isinstance(value, Decimal):
        return value
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (DecimalException, TypeError, ValueError) as e:
        raise PriceArithmeticError(f"Not a number: {value!r}", value=value) from e


def decimal_scale(price_decimals: int) -> Decimal:
    """Return 10^price_decimals, the quote unit scaling factor."""
    if price_decimals < 0:
        raise ValueError(f"price_decimals must not be negative: {price_decimals}")
    return Decimal(10) ** price_decimals


def get_sqrt_ratio_at_tick(tick: Number) -> Decimal:
    """
    Calculate sqrtPriceX96 at a (possibly fractional) tick.

    Formula: sqrt(1.0001^tick) * 2^96

    Args:
        tick: The tick value

    Returns:
        sqrtPriceX96 as a Decimal

    Raises:
        PriceArithmeticError: If the tick is not finite or the power overflows
    """
    tick = to_decimal(tick)
    if not tick.is_finite():
        raise PriceArithmeticError(f"Tick must be finite, got: {tick}", value=tick)

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        try:
            pow_result = TICK_BASE ** tick
            return pow_result.sqrt() * Q96
        except DecimalException as e:
            raise PriceArithmeticError(f"sqrt ratio out of range at tick {tick}", value=tick) from e


def price_from_mean_tick(
    mean_tick: Number,
    token_is_base: bool,
    price_scale: Number = 1,
) -> Decimal:
    """
    Convert a mean tick into the tracked token's price in quote units.

    Steps:
        sqrt_ratio = sqrt(1.0001^mean_tick) * 2^96
        ratio = sqrt_ratio^2                      (price scaled by 2^192)
        price = ratio / 2^192  if token is token0
        price = 2^192 / ratio  if token is token1
        price = price * price_scale

    Args:
        mean_tick: Time weighted average tick
        token_is_base: Whether the tracked token is the pool's token0
        price_scale: Multiplier applied last, usually 10^decimals

    Returns:
        Strictly positive Decimal price

    Raises:
        PriceArithmeticError: On non-finite input or an out-of-range result
    """
    sqrt_ratio = get_sqrt_ratio_at_tick(mean_tick)
    price_scale = to_decimal(price_scale)

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        try:
            ratio = sqrt_ratio * sqrt_ratio
            if token_is_base:
                price = ratio / Q192
            else:
                price = Q192 / ratio
            price = price * price_scale
        except DecimalException as e:
            raise PriceArithmeticError(
                f"Price out of range at mean tick {mean_tick}", value=mean_tick
            ) from e

    if not price.is_finite() or price <= 0:
        raise PriceArithmeticError(
            f"Price must be finite and positive, got: {price}", value=mean_tick
        )

    return price
