"""UniswapV2 constant product pricing.

The pair keeps reserve_in * reserve_out constant after taking a 0.3% fee
from the input. Results use the pair contract's integer arithmetic, so
they are exact to the unit, truncation included.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from aggregator.amm.base import AMM
from aggregator.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from aggregator.safe_int import UINT256_MAX, S
from aggregator.units import DECIMAL_HIGH_PREC_CONTEXT


class UniswapV2(AMM):
    """Constant product curve with the 997/1000 input fee.

    amount_out = amount_in * 997 * reserve_out // (reserve_in * 1000 + amount_in * 997)
    """

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Output for an exact input.

        Defined for every input: an empty trade or a pool with an empty
        side yields 0. A positive result is always below reserve_out.
        """
        if amount_in <= 0 or self.is_empty(reserve_in, reserve_out):
            return 0

        effective_in = S(amount_in) * FEE_NUMERATOR
        return (effective_in * reserve_out // (S(reserve_in) * FEE_DENOMINATOR + effective_in)).value

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Input needed for an exact output, rounded up by one unit.

        Returns UINT256_MAX when the pool cannot pay out amount_out at all.
        """
        if amount_out <= 0 or self.is_empty(reserve_in, reserve_out):
            return 0
        if amount_out >= reserve_out:
            return UINT256_MAX

        numerator = S(reserve_in) * amount_out * FEE_DENOMINATOR
        denominator = (S(reserve_out) - amount_out) * FEE_NUMERATOR
        return (numerator // denominator + 1).value

    def spot_price(self, reserve_in: int, reserve_out: int) -> Decimal:
        """Marginal output per unit of input before fees, in raw units."""
        if self.is_empty(reserve_in, reserve_out):
            return Decimal(0)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return Decimal(reserve_out) / Decimal(reserve_in)

    def price_impact(
        self,
        amount_in: int,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
    ) -> Decimal:
        """Share of the spot-price value lost by the trade, fee included.

        Measured against the reserves before the trade, so even a dust
        trade reports about 0.003.
        """
        if amount_in <= 0 or self.is_empty(reserve_in, reserve_out):
            return Decimal(0)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            realized = Decimal(amount_out) * Decimal(reserve_in)
            ideal = Decimal(amount_in) * Decimal(reserve_out)
            return 1 - realized / ideal


uniswap_v2 = UniswapV2()


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Shortcut for uniswap_v2.get_amount_out."""
    return uniswap_v2.get_amount_out(amount_in, reserve_in, reserve_out)


__all__ = [
    "UniswapV2",
    "uniswap_v2",
    "get_amount_out",
]
