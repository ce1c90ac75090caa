"""Split-trade routing.

Module structure:
- splitter.py: ChunkRouter, the greedy chunk-by-chunk allocator
- types.py: ChunkRoute and SolverResult dataclasses
- report.py: plain-text rendering of a SolverResult
"""

from aggregator.routing.report import format_report
from aggregator.routing.splitter import ChunkRouter, split_amount
from aggregator.routing.types import ChunkRoute, SolverResult

__all__ = [
    "ChunkRoute",
    "ChunkRouter",
    "SolverResult",
    "format_report",
    "split_amount",
]
