"""Tests for the constant product curve."""

from decimal import Decimal

import pytest

from dynamic_amm.curve.base import TradeDirection
from dynamic_amm.curve.constant_product import ConstantProductSwap, price_impact
from dynamic_amm.errors import UnsupportedCurveOperation
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.safe_int import Underflow

RESERVE = 1_000_000


@pytest.fixture
def curve() -> ConstantProductSwap:
    return ConstantProductSwap()


class TestComputeOutAmount:
    """Tests for ConstantProductSwap.compute_out_amount."""

    def test_known_value(self, curve):
        """10,000 into a 1M/1M pool returns 9,900.

        new_destination = ceil(10^12 / 1,010,000) = 990,100
        """
        result = curve.compute_out_amount(10_000, RESERVE, RESERVE, TradeDirection.A_TO_B)
        assert result.out_amount == 9_900

    def test_price_impact(self, curve):
        """Price impact is the shortfall against the spot price."""
        result = curve.compute_out_amount(10_000, RESERVE, RESERVE, TradeDirection.A_TO_B)
        assert result.price_impact == Decimal("0.01")

    def test_zero_input(self, curve):
        """Zero input returns zero output."""
        result = curve.compute_out_amount(0, RESERVE, RESERVE, TradeDirection.A_TO_B)
        assert result.out_amount == 0
        assert result.price_impact == 0

    def test_empty_destination(self, curve):
        """An empty destination reserve pays nothing."""
        assert curve.compute_out_amount(10_000, RESERVE, 0, TradeDirection.A_TO_B).out_amount == 0

    def test_invariant_never_decreases(self, curve):
        """(x + dx) * (y - dy) >= x * y for every trade size."""
        for source_reserve, destination_reserve in ((RESERVE, RESERVE), (3_000_017, 999_983), (10**12, 7)):
            for amount_in in (1, 3, 1_000, 123_457, 10**9):
                out = curve.compute_out_amount(
                    amount_in, source_reserve, destination_reserve, TradeDirection.A_TO_B
                ).out_amount
                assert out < destination_reserve
                k_after = (source_reserve + amount_in) * (destination_reserve - out)
                assert k_after >= source_reserve * destination_reserve

    def test_output_bounded_by_spot_price(self, curve):
        """Output never exceeds amount_in * y / x."""
        for amount_in in (1, 10, 10_000, 10**8):
            out = curve.compute_out_amount(amount_in, RESERVE, 2 * RESERVE, TradeDirection.B_TO_A).out_amount
            assert out <= amount_in * 2

    def test_direction_symmetric(self, curve):
        """Trade direction does not change the constant product math."""
        a_to_b = curve.compute_out_amount(5_000, RESERVE, 2 * RESERVE, TradeDirection.A_TO_B)
        b_to_a = curve.compute_out_amount(5_000, RESERVE, 2 * RESERVE, TradeDirection.B_TO_A)
        assert a_to_b == b_to_a


class TestComputeInAmount:
    """Tests for ConstantProductSwap.compute_in_amount."""

    def test_known_value(self, curve):
        """9,900 out of a 1M/1M pool needs 9,999 in.

        new_source = ceil(10^12 / 990,100) = 1,009,999
        """
        assert curve.compute_in_amount(9_900, RESERVE, RESERVE, TradeDirection.A_TO_B) == 9_999

    def test_input_achieves_output(self, curve):
        """Feeding the estimated input back in yields at least the requested output."""
        for wanted in (1, 100, 9_900, 500_000):
            amount_in = curve.compute_in_amount(wanted, RESERVE, RESERVE, TradeDirection.A_TO_B)
            out = curve.compute_out_amount(amount_in, RESERVE, RESERVE, TradeDirection.A_TO_B).out_amount
            assert out >= wanted

    def test_zero_output(self, curve):
        """Zero output needs zero input."""
        assert curve.compute_in_amount(0, RESERVE, RESERVE, TradeDirection.A_TO_B) == 0

    def test_whole_reserve_raises(self, curve):
        """Draining the destination reserve cannot be priced."""
        with pytest.raises(Underflow):
            curve.compute_in_amount(RESERVE + 1, RESERVE, RESERVE, TradeDirection.A_TO_B)


class TestComputeD:
    """Tests for the constant product invariant."""

    def test_geometric_mean(self, curve):
        """D is the floor of sqrt(a * b)."""
        assert curve.compute_d(4, 9) == 6
        assert curve.compute_d(RESERVE, RESERVE) == RESERVE
        assert curve.compute_d(2, 3) == 2

    def test_empty_side(self, curve):
        """D is zero when either side is empty."""
        assert curve.compute_d(0, 5) == 0
        assert curve.compute_d(5, 0) == 0


class TestUnsupportedOperations:
    """Constant product pools only support balanced liquidity operations."""

    def test_imbalance_deposit_raises(self, curve):
        """Imbalanced deposits are rejected."""
        with pytest.raises(UnsupportedCurveOperation):
            curve.compute_imbalance_deposit(100, 0, RESERVE, RESERVE, RESERVE, PoolFees())

    def test_withdraw_one_raises(self, curve):
        """Single-sided withdrawals are rejected."""
        with pytest.raises(UnsupportedCurveOperation):
            curve.compute_withdraw_one(100, RESERVE, RESERVE, RESERVE, PoolFees(), TradeDirection.A_TO_B)

    def test_no_remaining_accounts(self, curve):
        """The constant product curve needs no extra accounts."""
        assert curve.get_remaining_accounts() == []


class TestPriceImpact:
    """Tests for price_impact."""

    def test_no_shortfall(self):
        """Output at the spot price has zero impact."""
        assert price_impact(100, 200, 1_000, 2_000) == 0

    def test_undefined_spot_price(self):
        """An empty input reserve reports zero impact."""
        assert price_impact(100, 0, 0, 2_000) == 0
