"""Mutable constant product pool state used during routing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from aggregator.amm.uniswap_v2 import uniswap_v2
from aggregator.errors import ReserveFetchError, RoutingInvariantError
from aggregator.models.types import address_key, normalize_address

if TYPE_CHECKING:
    from aggregator.chain.reserves import ReserveSource

logger = structlog.get_logger()


@dataclass
class Pool:
    """A UniswapV2-style pair with its reserves.

    Tokens may be passed in either order; they are stored sorted by numeric
    address value so that token0/token1 line up with the pair contract's
    getReserves() output. Reserves start at zero until refresh() is called,
    and are then mutated in place by apply() for the rest of a routing run.
    """

    address: str
    token0: str
    token1: str
    name: str
    reserve0: int = 0
    reserve1: int = 0

    def __post_init__(self) -> None:
        self.address = normalize_address(self.address)
        self.token0 = normalize_address(self.token0)
        self.token1 = normalize_address(self.token1)
        if self.token0 == self.token1:
            raise ValueError(f"Pool {self.address} has identical tokens {self.token0}")
        if address_key(self.token0) > address_key(self.token1):
            # Keep reserves attached to their token when reordering
            self.token0, self.token1 = self.token1, self.token0
            self.reserve0, self.reserve1 = self.reserve1, self.reserve0
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError(f"Pool {self.address} has negative reserves")

    @classmethod
    def with_reserves(
        cls,
        address: str,
        token_a: str,
        token_b: str,
        name: str,
        source: ReserveSource,
    ) -> Pool:
        """Create a pool and populate its reserves from the chain.

        Raises:
            ReserveFetchError: If the reserves could not be fetched
        """
        pool = cls(address=address, token0=token_a, token1=token_b, name=name)
        pool.refresh(source)
        return pool

    def has_token(self, token: str) -> bool:
        token_norm = normalize_address(token)
        return token_norm == self.token0 or token_norm == self.token1

    def is_token0(self, token: str) -> bool:
        return normalize_address(token) == self.token0

    def reserves_for(self, input_is_token0: bool) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if input_is_token0:
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0

    def quote(self, amount_in: int, input_is_token0: bool) -> int:
        """Output for swapping amount_in against the current reserves. No mutation."""
        reserve_in, reserve_out = self.reserves_for(input_is_token0)
        return uniswap_v2.get_amount_out(amount_in, reserve_in, reserve_out)

    def apply(self, amount_in: int, input_is_token0: bool) -> int:
        """Simulate executing the swap, updating reserves as the pair would.

        The input reserve grows by amount_in and the output reserve shrinks
        by the returned amount, so the next quote sees the price impact.

        Raises:
            ValueError: If amount_in is negative
            RoutingInvariantError: If the output would drain the pool
        """
        if amount_in < 0:
            raise ValueError(f"amount_in must be non-negative, got {amount_in}")

        reserve_in, reserve_out = self.reserves_for(input_is_token0)
        amount_out = uniswap_v2.get_amount_out(amount_in, reserve_in, reserve_out)

        if amount_out > 0 and amount_out >= reserve_out:
            raise RoutingInvariantError(
                f"Pool {self.name} ({self.address}): output {amount_out} "
                f"would drain reserve {reserve_out}"
            )

        new_reserve_in = reserve_in + amount_in
        new_reserve_out = reserve_out - amount_out
        if input_is_token0:
            self.reserve0, self.reserve1 = new_reserve_in, new_reserve_out
        else:
            self.reserve1, self.reserve0 = new_reserve_in, new_reserve_out

        return amount_out

    def refresh(self, source: ReserveSource) -> None:
        """Replace both reserves with the values currently on-chain.

        Reserves are left untouched if the fetch fails.

        Raises:
            ReserveFetchError: If the source fails or returns malformed data
        """
        reserves = source.fetch_reserves(self.address)

        if not isinstance(reserves, tuple | list) or len(reserves) != 2:
            raise ReserveFetchError(self.address, f"malformed reserves: {reserves!r}")
        reserve0, reserve1 = reserves
        for value in (reserve0, reserve1):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ReserveFetchError(self.address, f"invalid reserve value: {value!r}")

        self.reserve0 = reserve0
        self.reserve1 = reserve1
        logger.debug(
            "pool_reserves_refreshed",
            pool=self.name,
            address=self.address,
            reserve0=reserve0,
            reserve1=reserve1,
        )


__all__ = ["Pool"]
