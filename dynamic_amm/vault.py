"""Vault state and time-decayed withdrawable amount.

Pool reserves are vault shares, not raw token balances. Each vault reports
its strategy profits in one step and then releases ("unlocks") them linearly
over time, so the amount redeemable from a vault depends on the clock. A
snapshot taken at one time misprices quotes at any other time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dynamic_amm.constants import LOCKED_PROFIT_DEGRADATION_DENOMINATOR
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.safe_int import S


@dataclass(frozen=True)
class LockedProfitTracker:
    """Locked-profit bookkeeping of a vault.

    Attributes:
        last_updated_locked_profit: Profit still locked at last_report
        last_report: Timestamp of the last profit report
        locked_profit_degradation: Fraction of the locked profit released per
            second, scaled by LOCKED_PROFIT_DEGRADATION_DENOMINATOR
    """

    last_updated_locked_profit: int = 0
    last_report: int = 0
    locked_profit_degradation: int = 0


@dataclass(frozen=True)
class VaultState:
    """The part of a vault account the quote engine needs."""

    total_amount: int
    locked_profit_tracker: LockedProfitTracker = field(default_factory=LockedProfitTracker)

    def __post_init__(self) -> None:
        if self.total_amount < 0:
            raise InvalidInputError(f"total_amount must be non-negative: {self.total_amount}")


def locked_profit(current_time: int, vault: VaultState) -> int:
    """Profit that is still locked at current_time."""
    tracker = vault.locked_profit_tracker
    duration = max(0, current_time - tracker.last_report)
    locked_fund_ratio = S(duration) * S(tracker.locked_profit_degradation)
    if locked_fund_ratio > LOCKED_PROFIT_DEGRADATION_DENOMINATOR:
        return 0
    return (
        S(tracker.last_updated_locked_profit)
        * (S(LOCKED_PROFIT_DEGRADATION_DENOMINATOR) - locked_fund_ratio)
        // LOCKED_PROFIT_DEGRADATION_DENOMINATOR
    ).value


def withdrawable_amount(current_time: int, vault: VaultState) -> int:
    """Underlying amount redeemable from the vault at current_time.

    Formula:
        ratio = (current_time - last_report) * locked_profit_degradation
        if ratio > DENOMINATOR: total_amount
        else: total_amount - last_updated_locked_profit * (DENOMINATOR - ratio) / DENOMINATOR
    """
    return (S(vault.total_amount) - locked_profit(current_time, vault)).value
