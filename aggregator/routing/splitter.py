"""Greedy chunked routing of a single swap across competing pools.

The total input is cut into equal chunks. Each chunk goes, in sequence, to
whichever pool quotes the most output for it right now, and that pool's
reserves are updated as if the chunk had executed. Later chunks therefore
see the price impact of earlier ones and naturally spill over to other
pools once the best one has been pushed far enough.

The policy is myopic: a chunk is never reassigned once committed, and no
lookahead is done. That keeps the cost at O(chunks x pools) but the result
is an approximation of the optimal split, not the optimum itself. Finer
chunks get closer to the optimum at proportionally higher cost.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from aggregator.errors import NoRoutesAvailable
from aggregator.models.types import normalize_address
from aggregator.pools.pool import Pool
from aggregator.routing.types import ChunkRoute, SolverResult
from aggregator.units import to_decimal

logger = structlog.get_logger()


@dataclass
class _Candidate:
    """A pool that can take the input token, and from which side."""

    pool: Pool
    input_is_token0: bool
    via_equivalent: bool


def split_amount(total: int, num_chunks: int) -> list[int]:
    """Split total into num_chunks near-equal raw amounts.

    The first total % num_chunks chunks carry one extra unit so the chunks
    always sum to total exactly.

    Raises:
        ValueError: If num_chunks < 1 or total is negative
    """
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be at least 1, got {num_chunks}")
    if total < 0:
        raise ValueError(f"total input must be non-negative, got {total}")

    base, remainder = divmod(total, num_chunks)
    return [base + 1 if i < remainder else base for i in range(num_chunks)]


class ChunkRouter:
    """Routes a fixed input amount across pools one chunk at a time.

    Args:
        input_token: Token being sold
        equivalent_tokens: Tokens accepted in place of input_token (for
            example a bridged representation). A pool holding the input
            token directly is always matched on that token.
        input_decimals: Decimals of the input token, for reporting
        output_decimals: Decimals of the output token, for reporting
        output_token: Token being bought. When set, pools whose other side
            is a different token are skipped; when None every pool holding
            the input is assumed to pay out the output token.
    """

    def __init__(
        self,
        input_token: str,
        equivalent_tokens: Iterable[str] = (),
        input_decimals: int = 18,
        output_decimals: int = 18,
        output_token: str | None = None,
    ) -> None:
        self.input_token = normalize_address(input_token)
        self.equivalent_tokens = tuple(
            token
            for token in (normalize_address(t) for t in equivalent_tokens)
            if token != self.input_token
        )
        self.input_decimals = input_decimals
        self.output_decimals = output_decimals
        self.output_token = normalize_address(output_token) if output_token else None

    def _pays_output(self, pool: Pool, input_is_token0: bool) -> bool:
        if self.output_token is None:
            return True
        return (pool.token1 if input_is_token0 else pool.token0) == self.output_token

    def _candidate(self, pool: Pool) -> _Candidate | None:
        """Determine whether a pool can take the input, and on which side."""
        if pool.has_token(self.input_token):
            input_is_token0 = pool.is_token0(self.input_token)
            if not self._pays_output(pool, input_is_token0):
                return None
            return _Candidate(pool, input_is_token0, via_equivalent=False)

        for token in self.equivalent_tokens:
            if pool.has_token(token):
                input_is_token0 = pool.is_token0(token)
                if not self._pays_output(pool, input_is_token0):
                    return None
                return _Candidate(pool, input_is_token0, via_equivalent=True)

        return None

    def candidates(self, pools: Sequence[Pool]) -> list[_Candidate]:
        """Pools that trade the input token or an equivalent, in the given order."""
        candidates = []
        for pool in pools:
            candidate = self._candidate(pool)
            if candidate is None:
                logger.debug(
                    "pool_skipped",
                    pool=pool.name,
                    address=pool.address,
                    reason="does not trade the input token (or an equivalent) for the output token",
                )
                continue
            candidates.append(candidate)
        return candidates

    def _select(self, candidates: list[_Candidate], amount_in: int) -> tuple[_Candidate | None, int]:
        """Pick the candidate with the strictly greatest quote.

        Ties keep the earliest candidate. Returns (None, 0) when no pool
        quotes a positive output.
        """
        best: _Candidate | None = None
        best_output = 0
        for candidate in candidates:
            output = candidate.pool.quote(amount_in, candidate.input_is_token0)
            logger.debug(
                "pool_quoted",
                pool=candidate.pool.name,
                amount_in=amount_in,
                amount_out=output,
                via_equivalent=candidate.via_equivalent,
            )
            if output > best_output:
                best = candidate
                best_output = output
        return best, best_output

    def run(self, total_input_amount: int, num_chunks: int, pools: Sequence[Pool]) -> SolverResult:
        """Route total_input_amount across pools in num_chunks sequential chunks.

        Pools must already hold their on-chain reserves. Reserves of the
        selected pools are mutated in place; pass copies to keep the originals.

        Args:
            total_input_amount: Total input in raw units
            num_chunks: Number of chunks to split the input into
            pools: Candidate pools, in tie-break priority order

        Returns:
            SolverResult with one ChunkRoute per chunk

        Raises:
            ValueError: If num_chunks < 1 or the total is negative
            NoRoutesAvailable: If no pool trades the input token or an equivalent
                for the output token
            RoutingInvariantError: If a simulated execution breaks pool invariants
        """
        chunk_amounts = split_amount(total_input_amount, num_chunks)

        if not pools:
            raise NoRoutesAvailable("no pools provided")
        candidates = self.candidates(pools)
        if not candidates:
            wanted = f" paired with {self.output_token}" if self.output_token else ""
            raise NoRoutesAvailable(
                f"none of {len(pools)} pools contains input token {self.input_token}{wanted}"
            )

        logger.info(
            "routing_started",
            total_input=total_input_amount,
            num_chunks=num_chunks,
            chunk_amount=chunk_amounts[0],
            pool_count=len(pools),
            candidate_count=len(candidates),
        )

        chunk_routes: list[ChunkRoute] = []
        total_out = 0

        for index, amount_in in enumerate(chunk_amounts, start=1):
            best, quoted = self._select(candidates, amount_in)

            amount_out = 0
            if best is not None:
                # Only the winner is mutated; other pools keep their reserves
                amount_out = best.pool.apply(amount_in, best.input_is_token0)
                if amount_out != quoted:
                    logger.warning(
                        "quote_apply_mismatch",
                        chunk=index,
                        pool=best.pool.name,
                        quoted=quoted,
                        applied=amount_out,
                    )

            total_out += amount_out
            chunk_routes.append(
                ChunkRoute(
                    chunk_index=index,
                    pool_name=best.pool.name if best is not None else "",
                    amount_in=amount_in,
                    amount_out=amount_out,
                    amount_in_decimal=to_decimal(amount_in, self.input_decimals),
                    amount_out_decimal=to_decimal(amount_out, self.output_decimals),
                    pool_address=best.pool.address if best is not None else None,
                )
            )

            if best is None:
                logger.debug("chunk_unrouted", chunk=index, amount_in=amount_in)
            else:
                logger.debug(
                    "chunk_routed",
                    chunk=index,
                    pool=best.pool.name,
                    amount_in=amount_in,
                    amount_out=amount_out,
                )

        result = SolverResult(
            total_in=total_input_amount,
            total_out=total_out,
            total_out_decimal=to_decimal(total_out, self.output_decimals),
            chunk_routes=chunk_routes,
        )

        logger.info(
            "routing_complete",
            total_input=total_input_amount,
            total_output=total_out,
            pools_used=len(result.pool_usage()),
            zero_output_chunks=len(result.zero_output_chunks),
        )
        return result


__all__ = ["ChunkRouter", "split_amount"]
