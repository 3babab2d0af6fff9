"""
Tests for tick to price conversion.
"""

from decimal import Decimal, localcontext

import pytest

from ..errors import PriceArithmeticError
from ..tick_math import (
    PRICE_PRECISION,
    Q96,
    Q192,
    decimal_scale,
    get_sqrt_ratio_at_tick,
    price_from_mean_tick,
)

SAMPLE_TICKS = [
    Decimal(-887272),
    Decimal("-201234.5833333"),
    Decimal(-1),
    Decimal(0),
    Decimal("0.5"),
    Decimal("6931.47"),
    Decimal(195000),
    Decimal(887272),
]


def relative_error(a: Decimal, b: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return abs(a - b) / abs(b)


class TestSqrtRatioAtTick:
    """Test sqrtPriceX96 computation."""

    def test_tick_zero_is_q96(self):
        """Tick 0 maps to exactly 2^96."""
        assert get_sqrt_ratio_at_tick(0) == Q96
        assert get_sqrt_ratio_at_tick(0) == Decimal(2**96)

    def test_squared_ratio_matches_tick_power(self):
        """(sqrtPriceX96 / 2^96)^2 equals 1.0001^tick."""
        for tick in (Decimal(100), Decimal("-12.25"), Decimal(50000)):
            sqrt_ratio = get_sqrt_ratio_at_tick(tick)
            with localcontext() as ctx:
                ctx.prec = PRICE_PRECISION
                squared = sqrt_ratio * sqrt_ratio / Q192
                expected = Decimal("1.0001") ** tick
            assert relative_error(squared, expected) < Decimal("1e-70")

    def test_integer_tick_close_to_onchain_value(self):
        """Tick 1 agrees with the on-chain TickMath result."""
        # TickMath.getSqrtRatioAtTick(1)
        onchain = Decimal(79232123823359799118286999568)
        assert relative_error(get_sqrt_ratio_at_tick(1), onchain) < Decimal("1e-20")

    def test_non_finite_tick_rejected(self):
        """NaN and infinite ticks raise PriceArithmeticError."""
        for tick in (Decimal("NaN"), Decimal("Infinity"), float("inf"), float("nan")):
            with pytest.raises(PriceArithmeticError):
                get_sqrt_ratio_at_tick(tick)


class TestPriceFromMeanTick:
    """Test the full mean tick to price conversion."""

    def test_zero_tick_base_token(self):
        """Mean tick 0 with 6 decimals gives exactly 1,000,000."""
        price = price_from_mean_tick(Decimal(0), True, decimal_scale(6))

        assert price == Decimal(1000000)

    def test_zero_tick_quote_token(self):
        """Mean tick 0 is 1 regardless of orientation."""
        price = price_from_mean_tick(Decimal(0), False, decimal_scale(6))

        assert price == Decimal(1000000)

    def test_ln2_tick_doubles_price(self):
        """A mean tick of ln(2)/ln(1.0001) gives a price of 2."""
        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            mean_tick = Decimal(2).ln() / Decimal("1.0001").ln()

        assert abs(mean_tick - Decimal("6931.47")) < 1

        price = price_from_mean_tick(mean_tick, True, decimal_scale(0))
        assert relative_error(price, Decimal(2)) < Decimal("1e-6")

    def test_approximate_ln2_tick(self):
        """The rounded tick 6931.47 lands close to 2."""
        price = price_from_mean_tick(Decimal("6931.47"), True, 1)

        assert abs(price - 2) < Decimal("0.001")

    def test_quote_token_takes_reciprocal(self):
        """For token1 the price is the inverse of the token0 price."""
        base = price_from_mean_tick(Decimal(100), True)
        quote = price_from_mean_tick(Decimal(100), False)

        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            assert relative_error(base * quote, Decimal(1)) < Decimal("1e-70")

    def test_reciprocal_symmetry(self):
        """price(t, base) equals price(-t, quote)."""
        scale = decimal_scale(18)
        for tick in SAMPLE_TICKS:
            as_base = price_from_mean_tick(tick, True, scale)
            as_quote = price_from_mean_tick(-tick, False, scale)

            assert relative_error(as_base, as_quote) < Decimal("1e-70")

    def test_prices_strictly_positive(self):
        """Every finite tick gives a positive finite price in both orientations."""
        for tick in SAMPLE_TICKS:
            for token_is_base in (True, False):
                for decimals in (0, 6, 18):
                    price = price_from_mean_tick(tick, token_is_base, decimal_scale(decimals))
                    assert price.is_finite()
                    assert price > 0

    def test_decimal_scale_applied_last(self):
        """Scaling by 10^d multiplies the unscaled price."""
        unscaled = price_from_mean_tick(Decimal("-250.75"), True, 1)
        scaled = price_from_mean_tick(Decimal("-250.75"), True, decimal_scale(8))

        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            expected = unscaled * Decimal(10**8)
        assert relative_error(scaled, expected) < Decimal("1e-70")

    def test_accepts_int_and_float_ticks(self):
        """Integer and float ticks are converted without binary rounding."""
        assert price_from_mean_tick(0, True) == 1
        assert price_from_mean_tick(1.5, True) == price_from_mean_tick(Decimal("1.5"), True)

    def test_non_finite_mean_tick(self):
        """Non-finite input raises an ArithmeticError subclass."""
        with pytest.raises(PriceArithmeticError):
            price_from_mean_tick(Decimal("NaN"), True, 1)

        with pytest.raises(ArithmeticError):
            price_from_mean_tick(float("-inf"), False, 1)

    def test_unparsable_mean_tick(self):
        """Strings that are not numbers are rejected."""
        with pytest.raises(PriceArithmeticError):
            price_from_mean_tick("not-a-tick", True, 1)

    def test_overflowing_tick(self):
        """A tick beyond the decimal exponent range raises PriceArithmeticError."""
        with pytest.raises(PriceArithmeticError):
            price_from_mean_tick(Decimal("1e12"), True, 1)


class TestDecimalScale:
    """Test quote decimal scaling factor."""

    def test_powers_of_ten(self):
        assert decimal_scale(0) == 1
        assert decimal_scale(6) == Decimal(1000000)
        assert decimal_scale(18) == Decimal(10**18)

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            decimal_scale(-1)
