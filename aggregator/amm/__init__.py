"""AMM (Automated Market Maker) pricing implementations."""

from aggregator.amm.base import AMM
from aggregator.amm.uniswap_v2 import UniswapV2, get_amount_out, uniswap_v2

__all__ = [
    "AMM",
    "UniswapV2",
    "uniswap_v2",
    "get_amount_out",
]
