"""
Uniswap V3 pool contract handle.

Thin wrapper over a web3 contract exposing only the reads the TWAP source
needs: the two token addresses and the cumulative tick oracle.
"""

import logging
from typing import List, Sequence, Tuple

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address
from web3 import Web3

from ..pricing.token_role import strip_hex_prefix

logger = logging.getLogger(__name__)

UNISWAP_V3_POOL_ABI = [
    {
        "inputs": [],
        "name": "token0",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "token1",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint32[]", "name": "secondsAgos", "type": "uint32[]"}
        ],
        "name": "observe",
        "outputs": [
            {"internalType": "int56[]", "name": "tickCumulatives", "type": "int56[]"},
            {
                "internalType": "uint160[]",
                "name": "secondsPerLiquidityCumulativeX128s",
                "type": "uint160[]",
            },
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


def to_checksum(address: str) -> ChecksumAddress:
    """Checksum an address given with or without the 0x prefix."""
    return to_checksum_address("0x" + strip_hex_prefix(address.strip()))


def connect_web3(node_url: str) -> Web3:
    """
    Open a Web3 connection to the node.

    Raises:
        ConnectionError: If the node does not answer
    """
    w3 = Web3(Web3.HTTPProvider(node_url))
    if not w3.is_connected():
        raise ConnectionError(f"Could not connect to node at {node_url}")
    return w3


class UniswapV3Pool:
    """Callable handle on a deployed Uniswap V3 pool."""

    def __init__(self, web3: Web3, address: str):
        self.web3 = web3
        self.address = to_checksum(address)
        self.contract = web3.eth.contract(address=self.address, abi=UNISWAP_V3_POOL_ABI)
        self.closed = False

    def token0(self) -> str:
        return self.contract.functions.token0().call()

    def token1(self) -> str:
        return self.contract.functions.token1().call()

    def observe(self, seconds_ago: Sequence[int]) -> Tuple[List[int], List[int]]:
        """
        Read cumulative values at each offset.

        Args:
            seconds_ago: Offsets in seconds from the latest block

        Returns:
            (tickCumulatives, secondsPerLiquidityCumulativeX128s)
        """
        tick_cumulatives, seconds_per_liquidity = self.contract.functions.observe(
            list(seconds_ago)
        ).call()
        return list(tick_cumulatives), list(seconds_per_liquidity)

    def close(self):
        """Release the contract and connection references."""
        if self.closed:
            return
        self.contract = None
        self.web3 = None
        self.closed = True
        logger.debug(f"Released pool handle {self.address}")
