"""
Exception classes for TWAP price computation.

Every error carries the context needed to log or retry it at a higher layer.
Underlying causes are chained with ``raise ... from``.
"""

from typing import Optional, Sequence


class TwapFeedError(Exception):
    """Base exception for price feed operations."""
    pass


class ConnectionFailedError(TwapFeedError):
    """Raised when the node connection or pool bootstrap cannot be established."""

    def __init__(self, message: str, node_url: Optional[str] = None, attempts: int = 0):
        super().__init__(message)
        self.node_url = node_url
        self.attempts = attempts


class TokenNotInPoolError(TwapFeedError):
    """Raised when the tracked token is neither of the pool's tokens."""

    def __init__(self, token_address: str, token0: str, token1: str):
        super().__init__(
            f"Token {token_address} not found in pool (token0={token0}, token1={token1})"
        )
        self.token_address = token_address
        self.token0 = token0
        self.token1 = token1


class InvalidWindowError(TwapFeedError):
    """Raised when the averaging window is not a positive number of seconds."""

    def __init__(self, window):
        super().__init__(f"Averaging window must be a positive number of seconds, got: {window}")
        self.window = window


class OracleReadFailedError(TwapFeedError):
    """Raised when a pool observe() call fails."""

    def __init__(self, message: str, pool_address: Optional[str] = None,
                 seconds_ago: Optional[Sequence[int]] = None):
        super().__init__(message)
        self.pool_address = pool_address
        self.seconds_ago = list(seconds_ago) if seconds_ago is not None else None


class PriceArithmeticError(TwapFeedError, ArithmeticError):
    """Raised when price arithmetic meets a non-finite or out-of-range value."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class CodecError(TwapFeedError):
    """Raised when an encoded price cannot be decoded."""

    def __init__(self, message: str, data: Optional[bytes] = None):
        super().__init__(message)
        # Keep a bounded preview only
        self.data = data[:64] if data is not None else None


class InvalidAddressError(TwapFeedError, ValueError):
    """Raised when a pool or token address is not a 20-byte hex address."""

    def __init__(self, address, role: str):
        super().__init__(f"Invalid {role} address: {address!r}")
        self.address = address
        self.role = role
