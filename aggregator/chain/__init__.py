"""On-chain data access: reserve sources, RPC client and pool discovery."""

from aggregator.chain.discovery import (
    ChainClient,
    DiscoveryFailure,
    DiscoveryReport,
    FactoryPoolSpec,
    PairFactory,
    StaticPoolSpec,
    discover_pools,
    pool_name,
)
from aggregator.chain.reserves import ReserveSource, StaticReserveSource
from aggregator.chain.web3_client import Web3ChainClient

__all__ = [
    "ChainClient",
    "DiscoveryFailure",
    "DiscoveryReport",
    "FactoryPoolSpec",
    "PairFactory",
    "ReserveSource",
    "StaticPoolSpec",
    "StaticReserveSource",
    "Web3ChainClient",
    "discover_pools",
    "pool_name",
]
