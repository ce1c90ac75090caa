"""Checked unsigned arithmetic for raw token amounts and reserves.

Pair contracts compute in uint256 and revert on underflow or division by
zero. Python ints never overflow, so SafeInt restores the failure modes a
contract would have instead of silently producing a wrong amount.

Usage:
    from aggregator.safe_int import S

    numerator = S(amount_in) * FEE_NUMERATOR * reserve_out
    return (numerator // denominator).value
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

UINT256_MAX = 2**256 - 1

# Pair reserves are stored as uint112 on-chain
UINT112_MAX = 2**112 - 1


class SafeIntError(ArithmeticError):
    """Arithmetic that a pair contract would have reverted on."""


class DivisionByZero(SafeIntError):
    pass


class Underflow(SafeIntError):
    """A subtraction went below zero."""


class Uint256Overflow(SafeIntError):
    pass


def _raw(operand: SafeInt | int) -> int:
    return operand.value if isinstance(operand, SafeInt) else operand


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class SafeInt:
    """An integer amount whose arithmetic fails the way the EVM's does."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, SafeInt):
            object.__setattr__(self, "value", self.value.value)
        elif isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"SafeInt wraps int amounts, got {type(self.value).__name__}")

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self.value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self.value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        rhs = _raw(other)
        if rhs > self.value:
            raise Underflow(f"{self.value} - {rhs} goes below zero")
        return SafeInt(self.value - rhs)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Truncating division, matching the EVM DIV opcode."""
        rhs = _raw(other)
        if rhs == 0:
            raise DivisionByZero(f"{self.value} // 0")
        return SafeInt(self.value // rhs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, SafeInt | int):
            return NotImplemented
        return self.value == _raw(other)

    def __lt__(self, other: SafeInt | int) -> bool:
        return self.value < _raw(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        return str(self.value)

    def to_uint256(self) -> int:
        """The wrapped value, checked to fit a uint256 slot.

        Raises:
            Uint256Overflow: If the value is negative or above 2^256-1
        """
        if not 0 <= self.value <= UINT256_MAX:
            raise Uint256Overflow(f"{self.value} is outside the uint256 range")
        return self.value


S = SafeInt
