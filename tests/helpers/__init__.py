"""Test helpers module for shared test utilities.

- constants: Token and pool addresses
- factories: Pool factory functions
"""

from tests.helpers.constants import (
    DAI,
    FACTORY_X,
    FACTORY_Y,
    POOL_A,
    POOL_B,
    POOL_C,
    POOL_D,
    USDC,
    USDC_E,
    WETH,
)
from tests.helpers.factories import make_pool
from tests.helpers.mocks import MockChain

__all__ = [
    # Constants
    "USDC",
    "USDC_E",
    "WETH",
    "DAI",
    "POOL_A",
    "POOL_B",
    "POOL_C",
    "POOL_D",
    "FACTORY_X",
    "FACTORY_Y",
    # Factories
    "make_pool",
    # Mocks
    "MockChain",
]
