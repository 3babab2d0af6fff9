"""
Price provider republishing a Uniswap TWAP source.
"""

import logging
from decimal import Decimal, localcontext

from ..pricing.codec import decode_price
from ..pricing.tick_math import PRICE_PRECISION, to_decimal

logger = logging.getLogger(__name__)


class UniswapProvider:
    """Decodes source responses and applies a fixed price multiplier."""

    def __init__(self, source, multiplier=1.0):
        """
        Args:
            source: Object with an async read_server_data() -> bytes
            multiplier: Constant the decoded price is multiplied by
        """
        self.source = source
        self.multiplier: Decimal = to_decimal(multiplier)

    def extract_price(self, price_response: bytes) -> float:
        """
        Decode an encoded price and apply the multiplier.

        Raises:
            CodecError: If the response cannot be decoded
        """
        sample = decode_price(price_response)
        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            price = sample.price * self.multiplier
        return float(price)

    async def poll(self) -> float:
        """Read the source once and return the republishable price."""
        response = await self.source.read_server_data()
        price = self.extract_price(response)
        logger.debug(f"polled price {price}")
        return price
