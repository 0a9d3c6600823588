"""Constant product curve.

Uses the x * y = k invariant. Fees are taken by the quote engine before the
curve is called, so the curve itself is fee-free.
"""

from __future__ import annotations

from decimal import Decimal

from dynamic_amm.curve.base import AccountMeta, OutResult, SwapCurve, TradeDirection
from dynamic_amm.errors import UnsupportedCurveOperation
from dynamic_amm.math.fixed_point import ceil_div, isqrt
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.safe_int import S


def price_impact(amount_in: int, amount_out: int, reserve_in: int, reserve_out: int) -> Decimal:
    """Relative shortfall of amount_out against the pre-trade spot price.

    Formula: (ideal - actual) / ideal, ideal = amount_in * reserve_out / reserve_in

    Returns Decimal 0 when the ideal output is undefined or zero.
    """
    if reserve_in == 0:
        return Decimal(0)
    ideal = Decimal(amount_in) * Decimal(reserve_out) / Decimal(reserve_in)
    if ideal == 0:
        return Decimal(0)
    return (ideal - Decimal(amount_out)) / ideal


class ConstantProductSwap(SwapCurve):
    """x * y = k swap curve.

    Formula: amount_out = reserve_out - ceil(reserve_in * reserve_out / (reserve_in + amount_in))

    Rounding the new destination reserve up keeps k from decreasing, so the
    trader never receives more than the invariant allows.
    """

    def compute_out_amount(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> OutResult:
        if source_amount == 0 or swap_destination_amount == 0:
            return OutResult(out_amount=0, price_impact=Decimal(0))

        invariant = S(swap_source_amount) * S(swap_destination_amount)
        new_source = S(swap_source_amount) + S(source_amount)
        new_destination = ceil_div(invariant, new_source)
        out_amount = (S(swap_destination_amount) - new_destination).value

        return OutResult(
            out_amount=out_amount,
            price_impact=price_impact(source_amount, out_amount, swap_source_amount, swap_destination_amount),
        )

    def compute_in_amount(
        self,
        destination_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> int:
        """Input needed to take destination_amount out.

        Formula: ceil(reserve_in * reserve_out / (reserve_out - amount_out)) - reserve_in
        """
        if destination_amount == 0:
            return 0

        invariant = S(swap_source_amount) * S(swap_destination_amount)
        # Underflow if the whole destination reserve (or more) is requested
        new_destination = S(swap_destination_amount) - S(destination_amount)
        new_source = ceil_div(invariant, new_destination)
        return S(new_source).saturating_sub(swap_source_amount).value

    def compute_d(self, token_a_amount: int, token_b_amount: int) -> int:
        """Geometric mean sqrt(a * b); 0 if either side is empty."""
        if token_a_amount == 0 or token_b_amount == 0:
            return 0
        return isqrt(S(token_a_amount) * S(token_b_amount))

    def compute_imbalance_deposit(
        self,
        deposit_a_amount: int,
        deposit_b_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_token_supply: int,
        fees: PoolFees,
    ) -> int:
        raise UnsupportedCurveOperation("Constant product pools only support balanced deposits")

    def compute_withdraw_one(
        self,
        pool_token_amount: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        fees: PoolFees,
        trade_direction: TradeDirection,
    ) -> int:
        raise UnsupportedCurveOperation("Constant product pools only support balanced withdrawals")

    def get_remaining_accounts(self) -> list[AccountMeta]:
        return []
