"""Pool fee schedule."""

from __future__ import annotations

from dataclasses import dataclass

from dynamic_amm.constants import BPS_DENOMINATOR
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.fixed_point import mul_div


@dataclass(frozen=True)
class PoolFees:
    """Fee schedule of a pool, as stored by the remote program.

    The trade fee is charged on swap input. The owner (protocol) fee is a cut
    taken out of the trade fee before the remainder accrues to LPs.

    Attributes:
        trade_fee_numerator: Trade fee numerator
        trade_fee_denominator: Trade fee denominator
        owner_trade_fee_numerator: Owner cut numerator
        owner_trade_fee_denominator: Owner cut denominator
    """

    trade_fee_numerator: int = 0
    trade_fee_denominator: int = BPS_DENOMINATOR
    owner_trade_fee_numerator: int = 0
    owner_trade_fee_denominator: int = BPS_DENOMINATOR

    def __post_init__(self) -> None:
        for name in ("trade_fee", "owner_trade_fee"):
            numerator = getattr(self, f"{name}_numerator")
            denominator = getattr(self, f"{name}_denominator")
            if denominator <= 0:
                raise InvalidInputError(f"{name}_denominator must be positive, got {denominator}")
            if not 0 <= numerator <= denominator:
                raise InvalidInputError(f"{name}_numerator must be in [0, {denominator}], got {numerator}")

    @property
    def fee_bps(self) -> int:
        """Trade fee expressed in basis points (rounded down)."""
        return mul_div(self.trade_fee_numerator, BPS_DENOMINATOR, self.trade_fee_denominator)

    def trading_fee(self, amount: int) -> int:
        """Trade fee charged on amount (rounded down)."""
        return mul_div(amount, self.trade_fee_numerator, self.trade_fee_denominator)

    def owner_trading_fee(self, amount: int) -> int:
        """Owner fee schedule applied to amount (rounded down)."""
        return mul_div(amount, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator)
