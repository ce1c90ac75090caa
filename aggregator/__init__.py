"""Swap Aggregator - greedy chunked routing across constant product pools."""

__version__ = "0.1.0"

from aggregator.pools import Pool  # noqa: E402
from aggregator.routing import ChunkRoute, ChunkRouter, SolverResult  # noqa: E402

__all__ = ["ChunkRoute", "ChunkRouter", "Pool", "SolverResult", "__version__"]
