"""Plain-text summary of a routing result."""

from __future__ import annotations

import decimal
from decimal import Decimal

from aggregator.routing.types import SolverResult
from aggregator.units import DECIMAL_HIGH_PREC_CONTEXT, to_decimal


def average_price(result: SolverResult, input_decimals: int, output_decimals: int) -> Decimal:
    """Average output received per input token, in token units."""
    if result.total_in == 0:
        return Decimal(0)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        total_in = to_decimal(result.total_in, input_decimals)
        total_out = to_decimal(result.total_out, output_decimals)
        return total_out / total_in


def format_report(
    result: SolverResult,
    input_symbol: str,
    output_symbol: str,
    input_decimals: int,
    preview: int = 5,
) -> str:
    """Render totals, the first few chunk routes and per-pool usage."""
    chunk_count = len(result.chunk_routes)
    lines = [
        f"Chunks processed: {chunk_count}",
        f"Total input: {to_decimal(result.total_in, input_decimals).normalize():f} {input_symbol}",
        f"Total output: {result.total_out_decimal:.6f} {output_symbol} (raw: {result.total_out})",
    ]

    if preview > 0 and result.chunk_routes:
        lines.append("")
        lines.append(f"First {min(preview, chunk_count)} chunks:")
        for route in result.chunk_routes[:preview]:
            pool = route.pool_name or "(no liquidity)"
            lines.append(
                f"  Chunk {route.chunk_index}: {pool} -> "
                f"{route.amount_out_decimal:.6f} {output_symbol}"
            )

    usage = result.pool_usage()
    if usage:
        lines.append("")
        lines.append("Pool usage:")
        for name, count in usage.items():
            percentage = Decimal(count * 100) / Decimal(chunk_count)
            lines.append(f"  {name}: {count} chunks ({percentage:.1f}%)")

    if result.zero_output_chunks:
        lines.append("")
        lines.append(f"Chunks without liquidity: {len(result.zero_output_chunks)}")

    return "\n".join(lines)


__all__ = ["average_price", "format_report"]
