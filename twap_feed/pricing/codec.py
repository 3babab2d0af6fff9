"""
Byte encoding of computed prices.

The price travels as its exact Decimal string so the consumer can decode it
without losing any of the digits the converter produced.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, DecimalException

import ujson

from .errors import CodecError

ENCODING_VERSION = 1


@dataclass(frozen=True)
class PriceSample:
    """A computed price and the wall-clock time it was computed."""

    price: Decimal
    timestamp: datetime

    @classmethod
    def now(cls, price: Decimal) -> "PriceSample":
        return cls(price=price, timestamp=datetime.now(timezone.utc))


def encode_price(sample: PriceSample) -> bytes:
    """Serialize a PriceSample to bytes."""
    payload = {
        "v": ENCODING_VERSION,
        "price": str(sample.price),
        "timestamp": sample.timestamp.isoformat(),
    }
    return ujson.dumps(payload).encode("utf-8")


def decode_price(data: bytes) -> PriceSample:
    """
    Deserialize bytes produced by encode_price.

    Raises:
        CodecError: If the bytes are not a valid encoded price
    """
    try:
        payload = ujson.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, AttributeError) as e:
        raise CodecError(f"Malformed price payload: {e}", data=data) from e

    if not isinstance(payload, dict):
        raise CodecError("Price payload must be an object", data=data)
    version = payload.get("v")
    # bool and float compare equal to 1, so check the type as well
    if type(version) is not int or version != ENCODING_VERSION:
        raise CodecError(f"Unsupported price encoding version: {version!r}", data=data)

    raw_price = payload.get("price")
    raw_timestamp = payload.get("timestamp")
    if not isinstance(raw_price, str) or not isinstance(raw_timestamp, str):
        raise CodecError("Price payload missing price or timestamp", data=data)

    try:
        price = Decimal(raw_price)
    except DecimalException as e:
        raise CodecError(f"Invalid price value: {raw_price!r}", data=data) from e
    if not price.is_finite():
        raise CodecError(f"Price must be finite, got: {raw_price}", data=data)

    try:
        timestamp = datetime.fromisoformat(raw_timestamp)
    except ValueError as e:
        raise CodecError(f"Invalid timestamp: {raw_timestamp!r}", data=data) from e

    return PriceSample(price=price, timestamp=timestamp)
