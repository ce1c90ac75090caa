"""RPC-backed chain client for UniswapV2-style pairs and factories."""

from __future__ import annotations

from typing import Any

import structlog

from aggregator.errors import PoolDiscoveryError, ReserveFetchError
from aggregator.models.types import ZERO_ADDRESS, normalize_address

logger = structlog.get_logger()

# UniswapV2 pair ABI - minimal, just getReserves
PAIR_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "reserve0", "type": "uint112"},
            {"name": "reserve1", "type": "uint112"},
            {"name": "blockTimestampLast", "type": "uint32"},
        ],
    },
]

# UniswapV2 factory ABI - minimal, just getPair
FACTORY_ABI = [
    {
        "name": "getPair",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokenA", "type": "address"},
            {"name": "tokenB", "type": "address"},
        ],
        "outputs": [{"name": "pair", "type": "address"}],
    },
]


class Web3ChainClient:
    """Chain client that makes eth_call requests through web3.

    Implements both ReserveSource (pair getReserves) and PairFactory
    (factory getPair). Calls are sequential and blocking.
    """

    def __init__(self, rpc_url: str, request_timeout: float = 10.0) -> None:
        """Initialize the client.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://polygon-rpc.com")
            request_timeout: Per-request timeout in seconds
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3ChainClient. Install with: pip install web3"
            ) from e

        self._web3_cls = Web3
        self.rpc_url = rpc_url
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout}))

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self.w3.eth.contract(
            address=self._web3_cls.to_checksum_address(address),
            abi=abi,
        )

    def fetch_reserves(self, pool_address: str) -> tuple[int, int]:
        """Get (reserve0, reserve1) from the pair's getReserves().

        Raises:
            ReserveFetchError: On RPC failure or an unexpected response shape
        """
        address = normalize_address(pool_address)
        logger.debug("fetching_reserves", pool=address, rpc_url=self.rpc_url)
        try:
            result = self._contract(address, PAIR_ABI).functions.getReserves().call()
        except Exception as e:
            raise ReserveFetchError(address, str(e)) from e

        # Result is (reserve0, reserve1, blockTimestampLast)
        if not isinstance(result, list | tuple) or len(result) != 3:
            raise ReserveFetchError(address, f"unexpected getReserves result: {result!r}")

        reserve0, reserve1 = int(result[0]), int(result[1])
        logger.debug("fetched_reserves", pool=address, reserve0=reserve0, reserve1=reserve1)
        return reserve0, reserve1

    def get_pair(self, factory_address: str, token_a: str, token_b: str) -> str | None:
        """Look up the pair for two tokens, or None if the factory has none.

        Raises:
            PoolDiscoveryError: On RPC failure
        """
        factory = normalize_address(factory_address)
        try:
            pair = (
                self._contract(factory, FACTORY_ABI)
                .functions.getPair(
                    self._web3_cls.to_checksum_address(token_a),
                    self._web3_cls.to_checksum_address(token_b),
                )
                .call()
            )
        except Exception as e:
            raise PoolDiscoveryError(factory, str(e)) from e

        pair_address = normalize_address(str(pair))
        if pair_address == ZERO_ADDRESS:
            return None
        return pair_address


__all__ = ["PAIR_ABI", "FACTORY_ABI", "Web3ChainClient"]
