"""Conversion between raw on-chain units and human-readable decimals.

Routing works exclusively on raw integers; these helpers exist for
configuration input and reporting output. A 78-digit context keeps every
uint256 value exact.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def to_decimal(raw_amount: int, decimals: int) -> Decimal:
    """Convert a raw amount to token units (e.g. 1_500_000 with 6 decimals -> 1.5)."""
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(raw_amount).scaleb(-decimals)


def from_decimal(amount: Decimal | str | int, decimals: int) -> int:
    """Convert a token-unit amount to raw units, truncating sub-unit dust.

    Raises:
        ValueError: If the amount is negative or not a number
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    try:
        value = Decimal(str(amount))
    except decimal.InvalidOperation as err:
        raise ValueError(f"Invalid token amount: {amount!r}") from err
    if not value.is_finite() or value < 0:
        raise ValueError(f"Token amount must be a non-negative number: {amount!r}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return int(value.scaleb(decimals).to_integral_value(rounding=decimal.ROUND_DOWN))


__all__ = ["DECIMAL_HIGH_PREC_CONTEXT", "to_decimal", "from_decimal"]
