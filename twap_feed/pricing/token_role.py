"""
Resolution of the tracked token's side of a pool.
"""

from .errors import TokenNotInPoolError


def strip_hex_prefix(address: str) -> str:
    """Remove a leading ``0x``/``0X`` from an address string."""
    if address[:2] in ("0x", "0X"):
        return address[2:]
    return address


def normalize_address(address: str) -> str:
    """Canonical comparison form: no prefix, lower-case hex."""
    return strip_hex_prefix(address.strip()).lower()


def resolve_token_is_base(token0: str, token1: str, token_address: str) -> bool:
    """
    Decide whether the tracked token is the pool's base (token0) asset.

    Args:
        token0: Pool's first-listed token address
        token1: Pool's second-listed token address
        token_address: Address of the token being priced

    Returns:
        True if the token is token0, False if it is token1

    Raises:
        TokenNotInPoolError: If the token matches neither side
    """
    tracked = normalize_address(token_address)

    if tracked == normalize_address(token0):
        return True
    if tracked == normalize_address(token1):
        return False

    raise TokenNotInPoolError(token_address, token0, token1)
