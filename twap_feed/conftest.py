"""
Shared pytest fixtures for twap_feed tests.
"""

from unittest.mock import Mock

import pytest


class FakeClock:
    """Monotonic clock whose sleep() advances time instantly."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Provide a controllable clock and sleep."""
    return FakeClock()


@pytest.fixture
def mock_pool():
    """Mock pool handle with a flat cumulative tick oracle."""
    pool = Mock()
    pool.address = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"
    pool.token0.return_value = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
    pool.token1.return_value = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
    pool.observe.return_value = ([0, 0], [0, 0])
    return pool
