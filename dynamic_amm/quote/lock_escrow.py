"""Fee accrual on locked liquidity.

Locked LP keeps earning trade fees, which show up as growth of the pool's
virtual price. An escrow records the virtual price at its last checkpoint
(lp_per_token); the LP worth of the growth since then is the unclaimed fee.
"""

from dynamic_amm.safe_int import S


def calculate_unclaimed_lock_escrow_fee(
    total_locked_amount: int,
    lp_per_token: int,
    unclaimed_fee_pending: int,
    current_virtual_price_raw: int,
) -> int:
    """Unclaimed fee of an escrow, in LP.

    Formula: total_locked * (vp - lp_per_token) / vp + pending

    Virtual prices are Q64.64 raw values. The growth term saturates at zero if
    the virtual price fell below the checkpoint; an undefined virtual price
    (empty pool) yields zero.
    """
    if current_virtual_price_raw == 0:
        return 0
    growth = S(current_virtual_price_raw).saturating_sub(lp_per_token)
    new_fee = S(total_locked_amount) * growth // current_virtual_price_raw
    return (new_fee + unclaimed_fee_pending).value
