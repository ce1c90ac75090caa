"""Pytest configuration and fixtures."""

import pytest
import structlog

from aggregator.pools.pool import Pool
from aggregator.routing.splitter import ChunkRouter
from tests.helpers import POOL_A, POOL_B, USDC, USDC_E, make_pool


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by the CLI between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pool_a() -> Pool:
    """USDC/WETH pool with 100k/100k raw reserves."""
    return make_pool(100_000, 100_000, name="Pool A", address=POOL_A)


@pytest.fixture
def pool_b() -> Pool:
    """USDC/WETH pool with 50k/50k raw reserves."""
    return make_pool(50_000, 50_000, name="Pool B", address=POOL_B)


@pytest.fixture
def router() -> ChunkRouter:
    """Router selling USDC for WETH, accepting bridged USDC.e."""
    return ChunkRouter(
        input_token=USDC,
        equivalent_tokens=[USDC_E],
        input_decimals=6,
        output_decimals=18,
    )
