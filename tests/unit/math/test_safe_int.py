"""Tests for SafeInt checked arithmetic."""

import pytest

from aggregator.safe_int import (
    UINT112_MAX,
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        assert SafeInt(SafeInt(7)).value == 7

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore

    def test_rejects_bool(self):
        """bool is an int subclass but never a valid amount."""
        with pytest.raises(TypeError):
            SafeInt(True)  # type: ignore

    def test_alias_and_truthiness(self):
        assert S is SafeInt
        assert not S(0)
        assert S(1)

    def test_immutable(self):
        amount = S(3)
        with pytest.raises(AttributeError):
            amount.value = 4  # type: ignore[misc]


class TestSafeIntArithmetic:
    def test_add(self):
        assert (S(2) + S(3)).value == 5
        assert (S(2) + 3).value == 5
        assert (3 + S(2)).value == 5

    def test_mul(self):
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_sub(self):
        assert (S(10) - 4).value == 6
        assert (S(10) - S(10)).value == 0

    def test_sub_underflow(self):
        with pytest.raises(Underflow):
            S(3) - S(4)

    def test_floordiv_truncates(self):
        assert (S(7) // S(2)).value == 3
        assert (S(1) // 2).value == 0

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(1) // S(0)
        with pytest.raises(DivisionByZero):
            S(1) // 0

    def test_errors_share_base(self):
        assert issubclass(DivisionByZero, SafeIntError)
        assert issubclass(Underflow, SafeIntError)
        assert issubclass(Uint256Overflow, SafeIntError)
        assert issubclass(SafeIntError, ArithmeticError)

    def test_large_products_exact(self):
        """uint112 reserves times fee factors stay exact."""
        product = S(UINT112_MAX) * S(997) * S(UINT112_MAX)
        assert product.value == UINT112_MAX * 997 * UINT112_MAX


class TestSafeIntComparison:
    def test_compare_with_int_and_safeint(self):
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(4) < S(5)
        assert S(5) <= 5
        assert S(6) > 5
        assert S(6) >= S(6)

    def test_eq_other_types(self):
        assert S(5) != "5"

    def test_hash_and_int(self):
        assert hash(S(9)) == hash(9)
        assert int(S(9)) == 9
        assert str(S(9)) == "9"
        assert repr(S(9)) == "SafeInt(value=9)"


class TestToUint256:
    def test_in_range(self):
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX
        assert S(0).to_uint256() == 0

    def test_overflow(self):
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX + 1).to_uint256()

    def test_negative(self):
        with pytest.raises(Uint256Overflow):
            S(-1).to_uint256()
