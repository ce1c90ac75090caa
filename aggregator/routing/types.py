"""Type definitions for routing module."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class ChunkRoute:
    """Outcome for one chunk of the split trade."""

    chunk_index: int  # 1-based
    pool_name: str  # "" when no pool offered any output
    amount_in: int
    amount_out: int
    amount_in_decimal: Decimal
    amount_out_decimal: Decimal
    pool_address: str | None = None

    @property
    def routed(self) -> bool:
        """Whether a pool was selected for this chunk."""
        return self.pool_address is not None


@dataclass
class SolverResult:
    """Result of routing a split trade.

    chunk_routes is in execution order; the order matters because each
    chunk saw the reserves left behind by the previous ones.
    """

    total_in: int
    total_out: int
    total_out_decimal: Decimal
    chunk_routes: list[ChunkRoute] = field(default_factory=list)

    @property
    def zero_output_chunks(self) -> list[int]:
        """Indices of chunks that found no liquidity."""
        return [route.chunk_index for route in self.chunk_routes if not route.routed]

    def pool_labels(self) -> dict[str, str]:
        """Display label per routed pool address, in order of first use.

        The label is the pool name; names shared by several addresses get
        the address appended so that each pool keeps its own entry.
        """
        names: dict[str, str] = {}
        for route in self.chunk_routes:
            if route.pool_address is not None:
                names.setdefault(route.pool_address, route.pool_name)
        shared = Counter(names.values())
        return {
            address: name if shared[name] == 1 else f"{name} ({address})"
            for address, name in names.items()
        }

    def pool_usage(self) -> dict[str, int]:
        """Number of chunks routed to each pool, keyed by pool_labels()."""
        labels = self.pool_labels()
        usage: dict[str, int] = {}
        for route in self.chunk_routes:
            if route.pool_address is not None:
                label = labels[route.pool_address]
                usage[label] = usage.get(label, 0) + 1
        return usage

    def pool_amounts(self) -> dict[str, tuple[int, int]]:
        """Total (amount_in, amount_out) per pool, keyed by pool_labels()."""
        labels = self.pool_labels()
        amounts: dict[str, tuple[int, int]] = {}
        for route in self.chunk_routes:
            if route.pool_address is None:
                continue
            label = labels[route.pool_address]
            total_in, total_out = amounts.get(label, (0, 0))
            amounts[label] = (total_in + route.amount_in, total_out + route.amount_out)
        return amounts


__all__ = ["ChunkRoute", "SolverResult"]
