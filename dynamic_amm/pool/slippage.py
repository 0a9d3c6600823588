"""Slippage bounds on quoted amounts."""

from dynamic_amm.constants import BPS_DENOMINATOR
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.fixed_point import mul_div


def _check_bps(slippage_bps: int) -> None:
    if not 0 <= slippage_bps <= BPS_DENOMINATOR:
        raise InvalidInputError(f"Slippage must be in [0, {BPS_DENOMINATOR}] bps, got {slippage_bps}")


def get_min_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Lowest acceptable amount: amount * (10000 - bps) / 10000, rounded down."""
    _check_bps(slippage_bps)
    return mul_div(amount, BPS_DENOMINATOR - slippage_bps, BPS_DENOMINATOR)


def get_max_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Highest acceptable amount: amount * (10000 + bps) / 10000, rounded down."""
    _check_bps(slippage_bps)
    return mul_div(amount, BPS_DENOMINATOR + slippage_bps, BPS_DENOMINATOR)
