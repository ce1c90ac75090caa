"""Configuration for the swap aggregator."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from aggregator.chain.discovery import FactoryPoolSpec, StaticPoolSpec
from aggregator.constants import (
    DEFAULT_NUM_CHUNKS,
    DEFAULT_RPC_URL,
    DEFAULT_TOTAL_INPUT,
    QUICKSWAP_V2_FACTORY,
    SUSHISWAP_V2_FACTORY,
    TOKEN_SYMBOLS,
    UNISWAP_V2_USDC_WETH_POOL,
    USDC,
    USDC_DECIMALS,
    USDC_E,
    WETH,
    WETH_DECIMALS,
)
from aggregator.units import from_decimal

DEFAULT_STATIC_POOLS = (
    StaticPoolSpec(
        dex_name="Uniswap V2",
        address=UNISWAP_V2_USDC_WETH_POOL,
        token_in=USDC,
        token_out=WETH,
    ),
)

DEFAULT_FACTORY_POOLS = (
    FactoryPoolSpec(dex_name="Quickswap", factory=QUICKSWAP_V2_FACTORY, token_in=USDC, token_out=WETH),
    FactoryPoolSpec(dex_name="Sushiswap", factory=SUSHISWAP_V2_FACTORY, token_in=USDC, token_out=WETH),
    FactoryPoolSpec(
        dex_name="Sushiswap", factory=SUSHISWAP_V2_FACTORY, token_in=USDC_E, token_out=WETH
    ),
)


@dataclass(frozen=True)
class AggregatorConfig:
    """Centralized configuration for a routing run.

    Defaults describe the USDC -> WETH trade on Polygon; every field can be
    overridden in code or, for the run parameters, through the environment.

    Attributes:
        rpc_url: HTTP RPC endpoint used for discovery and reserve fetches
        input_token: Token being sold
        output_token: Token being bought
        equivalent_tokens: Tokens routed as if they were input_token
        input_decimals: Decimals of the input token
        output_decimals: Decimals of the output token
        total_input: Total input in token units (e.g. "1000000" USDC)
        num_chunks: Number of equal chunks to split the input into
        static_pools: Pools with known addresses
        factory_pools: Pairs to look up through factories
        symbols: Token address -> symbol, for names and reports
    """

    rpc_url: str = DEFAULT_RPC_URL
    input_token: str = USDC
    output_token: str = WETH
    equivalent_tokens: tuple[str, ...] = (USDC_E,)
    input_decimals: int = USDC_DECIMALS
    output_decimals: int = WETH_DECIMALS
    total_input: str = DEFAULT_TOTAL_INPUT
    num_chunks: int = DEFAULT_NUM_CHUNKS
    static_pools: tuple[StaticPoolSpec, ...] = DEFAULT_STATIC_POOLS
    factory_pools: tuple[FactoryPoolSpec, ...] = DEFAULT_FACTORY_POOLS
    symbols: Mapping[str, str] = field(default_factory=lambda: dict(TOKEN_SYMBOLS))

    def __post_init__(self) -> None:
        if self.num_chunks < 1:
            raise ValueError(f"num_chunks must be at least 1, got {self.num_chunks}")
        # Fail early on malformed amounts
        from_decimal(self.total_input, self.input_decimals)

    @property
    def total_input_raw(self) -> int:
        """Total input in raw units of the input token."""
        return from_decimal(self.total_input, self.input_decimals)

    @property
    def input_symbol(self) -> str:
        return self.symbols.get(self.input_token, self.input_token)

    @property
    def output_symbol(self) -> str:
        return self.symbols.get(self.output_token, self.output_token)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AggregatorConfig:
        """Build a config from environment variables.

        - AGGREGATOR_RPC_URL: RPC endpoint (default: public Polygon RPC)
        - AGGREGATOR_TOTAL_INPUT: Total input in token units (default: 1000000)
        - AGGREGATOR_NUM_CHUNKS: Number of chunks (default: 100)

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        num_chunks_raw = env.get("AGGREGATOR_NUM_CHUNKS", str(DEFAULT_NUM_CHUNKS))
        try:
            num_chunks = int(num_chunks_raw)
        except ValueError as err:
            raise ValueError(f"AGGREGATOR_NUM_CHUNKS must be an integer: '{num_chunks_raw}'") from err

        return cls(
            rpc_url=env.get("AGGREGATOR_RPC_URL", DEFAULT_RPC_URL),
            total_input=env.get("AGGREGATOR_TOTAL_INPUT", DEFAULT_TOTAL_INPUT),
            num_chunks=num_chunks,
        )


# Default configuration instance
DEFAULT_CONFIG = AggregatorConfig()
