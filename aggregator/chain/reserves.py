"""Reserve sources: where pools get their on-chain state from.

This allows swapping between the real RPC-backed client and an in-memory
source for tests and for callers that already hold reserve snapshots.
"""

from __future__ import annotations

from typing import Protocol

from aggregator.errors import ReserveFetchError
from aggregator.models.types import normalize_address


class ReserveSource(Protocol):
    """Protocol for anything that can report a pair's current reserves."""

    def fetch_reserves(self, pool_address: str) -> tuple[int, int]:
        """Get (reserve0, reserve1) in raw units, in the pair's token order.

        Raises:
            ReserveFetchError: If the reserves cannot be obtained
        """
        ...


class StaticReserveSource:
    """In-memory reserve source.

    Configure with known reserves (and optionally failures), and track
    calls for assertions.
    """

    def __init__(
        self,
        reserves: dict[str, tuple[int, int]] | None = None,
        failures: dict[str, str] | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            reserves: Mapping of pool address -> (reserve0, reserve1)
            failures: Mapping of pool address -> error reason to raise
        """
        self.reserves = {normalize_address(k): v for k, v in (reserves or {}).items()}
        self.failures = {normalize_address(k): v for k, v in (failures or {}).items()}
        self.calls: list[str] = []

    def set_reserves(self, pool_address: str, reserve0: int, reserve1: int) -> None:
        self.reserves[normalize_address(pool_address)] = (reserve0, reserve1)

    def fetch_reserves(self, pool_address: str) -> tuple[int, int]:
        address = normalize_address(pool_address)
        self.calls.append(address)

        if address in self.failures:
            raise ReserveFetchError(address, self.failures[address])
        if address not in self.reserves:
            raise ReserveFetchError(address, "unknown pool")
        return self.reserves[address]


__all__ = ["ReserveSource", "StaticReserveSource"]
