"""Pool discovery: build reserve-populated pools before routing.

Pools come from two places: pair lookups on UniswapV2-style factories, and
statically configured pair addresses. Every pool is refreshed once here;
any pool whose lookup or reserve fetch fails is reported and left out,
so routing can proceed with whatever remains.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import structlog

from aggregator.chain.reserves import ReserveSource
from aggregator.errors import PoolDiscoveryError, ReserveFetchError
from aggregator.models.types import normalize_address
from aggregator.pools.pool import Pool

logger = structlog.get_logger()


class PairFactory(Protocol):
    """Protocol for UniswapV2 factory getPair lookups."""

    def get_pair(self, factory_address: str, token_a: str, token_b: str) -> str | None:
        """Get the pair address, or None if the pair does not exist.

        Raises:
            PoolDiscoveryError: If the lookup itself fails
        """
        ...


class ChainClient(ReserveSource, PairFactory, Protocol):
    """A client able to both look up pairs and fetch their reserves."""


@dataclass(frozen=True)
class FactoryPoolSpec:
    """A token pair to look up on a factory."""

    dex_name: str
    factory: str
    token_in: str
    token_out: str


@dataclass(frozen=True)
class StaticPoolSpec:
    """A pair whose address is known up front."""

    dex_name: str
    address: str
    token_in: str
    token_out: str


@dataclass
class DiscoveryFailure:
    """A pool that could not be used, and why."""

    source: str
    address: str | None
    error: str


@dataclass
class DiscoveryReport:
    """Outcome of pool discovery."""

    pools: list[Pool] = field(default_factory=list)
    failures: list[DiscoveryFailure] = field(default_factory=list)
    # Factory lookups that returned no pair (not an error)
    missing: list[str] = field(default_factory=list)

    @property
    def has_pools(self) -> bool:
        return bool(self.pools)


def pool_name(dex_name: str, token_in: str, token_out: str, symbols: dict[str, str]) -> str:
    """Human-readable pool name such as "Quickswap USDC/WETH"."""
    sym_in = symbols.get(normalize_address(token_in), token_in)
    sym_out = symbols.get(normalize_address(token_out), token_out)
    return f"{dex_name} {sym_in}/{sym_out}"


def _load_pool(
    source: ReserveSource,
    address: str,
    entry: FactoryPoolSpec | StaticPoolSpec,
    name: str,
    report: DiscoveryReport,
) -> None:
    try:
        pool = Pool.with_reserves(address, entry.token_in, entry.token_out, name, source)
    except ReserveFetchError as e:
        logger.warning("pool_reserves_unavailable", pool=name, address=address, error=e.reason)
        report.failures.append(DiscoveryFailure(source=name, address=address, error=e.reason))
        return
    except ValueError as e:
        logger.warning("pool_definition_invalid", pool=name, address=address, error=str(e))
        report.failures.append(DiscoveryFailure(source=name, address=address, error=str(e)))
        return

    logger.info(
        "pool_loaded",
        pool=name,
        address=pool.address,
        token0=pool.token0,
        token1=pool.token1,
        reserve0=pool.reserve0,
        reserve1=pool.reserve1,
    )
    report.pools.append(pool)


def discover_pools(
    chain: ChainClient,
    static_pools: Iterable[StaticPoolSpec] = (),
    factory_pools: Iterable[FactoryPoolSpec] = (),
    symbols: dict[str, str] | None = None,
) -> DiscoveryReport:
    """Build and refresh all configured pools.

    Static pools come first, then factory pools, in the order given; the
    router's tie-break depends on this order.

    Args:
        chain: Client used for factory lookups and reserve fetches
        static_pools: Pairs with known addresses
        factory_pools: Pairs to look up through factories
        symbols: Token address -> symbol, used for pool names

    Returns:
        DiscoveryReport with usable pools and per-pool failures
    """
    symbols = symbols or {}
    report = DiscoveryReport()
    seen: set[str] = set()

    for static in static_pools:
        name = pool_name(static.dex_name, static.token_in, static.token_out, symbols)
        address = normalize_address(static.address)
        if address in seen:
            continue
        seen.add(address)
        _load_pool(chain, address, static, name, report)

    for entry in factory_pools:
        name = pool_name(entry.dex_name, entry.token_in, entry.token_out, symbols)
        try:
            pair = chain.get_pair(entry.factory, entry.token_in, entry.token_out)
        except PoolDiscoveryError as e:
            logger.warning("factory_lookup_failed", pool=name, factory=entry.factory, error=e.reason)
            report.failures.append(DiscoveryFailure(source=name, address=None, error=e.reason))
            continue

        if pair is None:
            logger.info("pair_not_found", pool=name, factory=entry.factory)
            report.missing.append(name)
            continue

        address = normalize_address(pair)
        if address in seen:
            logger.debug("duplicate_pool_skipped", pool=name, address=address)
            continue
        seen.add(address)
        _load_pool(chain, address, entry, name, report)

    logger.info(
        "pool_discovery_complete",
        pool_count=len(report.pools),
        failure_count=len(report.failures),
        missing_count=len(report.missing),
    )
    return report


__all__ = [
    "PairFactory",
    "ChainClient",
    "FactoryPoolSpec",
    "StaticPoolSpec",
    "DiscoveryFailure",
    "DiscoveryReport",
    "pool_name",
    "discover_pools",
]
