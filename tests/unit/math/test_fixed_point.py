"""Tests for rounding-aware division helpers."""

import pytest

from dynamic_amm.math.fixed_point import Rounding, ceil_div, div_rounding, isqrt, mul_div
from dynamic_amm.safe_int import DivisionByZero, S


class TestDivRounding:
    """Tests for div_rounding."""

    def test_rounds_down_by_default(self):
        """Default rounding truncates."""
        assert div_rounding(7, 2) == 3

    def test_rounds_up(self):
        """Rounding.UP takes the ceiling."""
        assert div_rounding(7, 2, Rounding.UP) == 4
        assert div_rounding(8, 2, Rounding.UP) == 4

    def test_accepts_safeint(self):
        """SafeInt arguments are accepted."""
        assert div_rounding(S(9), S(3)) == 3

    def test_zero_denominator_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            div_rounding(1, 0)
        with pytest.raises(DivisionByZero):
            div_rounding(1, 0, Rounding.UP)


class TestMulDiv:
    """Tests for mul_div."""

    def test_no_intermediate_truncation(self):
        """The product is formed before the division."""
        # 3 * (10 // 4) would be 6
        assert mul_div(3, 10, 4) == 7

    def test_rounding_up(self):
        """Rounding.UP rounds the exact quotient up."""
        assert mul_div(3, 10, 4, Rounding.UP) == 8

    def test_wide_operands(self):
        """Operands wider than u64 stay exact."""
        assert mul_div(2**100, 2**100, 2**150) == 2**50


class TestCeilDivAndIsqrt:
    """Tests for ceil_div and isqrt."""

    def test_ceil_div(self):
        """ceil_div rounds up."""
        assert ceil_div(10, 3) == 4
        assert ceil_div(9, 3) == 3

    def test_ceil_div_zero_raises(self):
        """ceil_div by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            ceil_div(10, 0)

    def test_isqrt_rounds_down(self):
        """isqrt returns the floor of the square root."""
        assert isqrt(16) == 4
        assert isqrt(17) == 4
        assert isqrt(S(10**12)) == 10**6
