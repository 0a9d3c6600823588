"""Proportional share conversion.

Converts between a share amount (vault LP or pool LP) and the underlying
amount it represents, given the total share supply and total underlying.

Rounding policy:
- DOWN by default, so amounts paid out to the user are never overstated
- UP where the user supplies the amount (balanced deposit inputs)

A zero divisor means the share price is undefined ("no liquidity yet"),
which is a normal state: the converters return 0 unless strict=True.
"""

from __future__ import annotations

from dynamic_amm.errors import UndefinedPriceError
from dynamic_amm.math.fixed_point import Rounding, mul_div
from dynamic_amm.safe_int import S


def share_from_amount(
    amount: int,
    total_amount: int,
    total_shares: int,
    rounding: Rounding = Rounding.DOWN,
    *,
    strict: bool = False,
) -> int:
    """Shares corresponding to an underlying amount.

    Formula: amount * total_shares / total_amount

    Args:
        amount: Underlying amount to convert
        total_amount: Total underlying backing the shares
        total_shares: Total share supply
        rounding: Rounding direction for the division
        strict: Raise UndefinedPriceError instead of returning 0 when
            total_amount is zero

    Returns:
        Share amount
    """
    if total_amount == 0:
        if strict:
            raise UndefinedPriceError("Share price undefined: total amount is zero")
        return 0
    return mul_div(amount, total_shares, total_amount, rounding)


def amount_from_share(
    shares: int,
    total_amount: int,
    total_shares: int,
    rounding: Rounding = Rounding.DOWN,
    *,
    strict: bool = False,
) -> int:
    """Underlying amount corresponding to a share amount.

    Formula: shares * total_amount / total_shares

    Args:
        shares: Share amount to convert
        total_amount: Total underlying backing the shares
        total_shares: Total share supply
        rounding: Rounding direction for the division
        strict: Raise UndefinedPriceError instead of returning 0 when
            total_shares is zero

    Returns:
        Underlying amount
    """
    if total_shares == 0:
        if strict:
            raise UndefinedPriceError("Share price undefined: share supply is zero")
        return 0
    return mul_div(shares, total_amount, total_shares, rounding)


def actual_deposit_amount(
    deposit_amount: int,
    before_amount: int,
    vault_lp_balance: int,
    vault_lp_supply: int,
    vault_total_amount: int,
) -> int:
    """Pool-side value gained by depositing into a vault.

    The vault mints shares for the deposit (rounding down), then the pool's
    enlarged share holding is re-valued against the enlarged vault. The
    difference from the pool's previous claim is what the pool actually
    receives, which can be slightly less than deposit_amount.

    Args:
        deposit_amount: Raw tokens being deposited
        before_amount: Pool's claim on the vault before the deposit
        vault_lp_balance: Vault shares held by the pool
        vault_lp_supply: Total vault share supply
        vault_total_amount: Vault withdrawable amount before the deposit
    """
    if deposit_amount == 0:
        return 0

    vault_lp_minted = share_from_amount(deposit_amount, vault_total_amount, vault_lp_supply)
    new_lp_supply = vault_lp_supply + vault_lp_minted
    new_total_amount = vault_total_amount + deposit_amount
    new_lp_balance = vault_lp_balance + vault_lp_minted

    after_amount = amount_from_share(new_lp_balance, new_total_amount, new_lp_supply)
    return (S(after_amount).saturating_sub(before_amount)).value
