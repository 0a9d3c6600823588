"""Quote records returned by the quote engine.

All amounts are integer base units; only price impact is a Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a swap.

    Attributes:
        swap_in_amount: Input amount as requested
        swap_out_amount: Output the pool pays out
        min_swap_out_amount: Output bound after slippage
        fee: Trade fee retained by liquidity providers
        protocol_fee: Owner cut of the trade fee
        price_impact: Relative shortfall against the pre-trade price
    """

    swap_in_amount: int
    swap_out_amount: int
    min_swap_out_amount: int
    fee: int
    protocol_fee: int
    price_impact: Decimal


@dataclass(frozen=True)
class DepositQuote:
    """Result of quoting a deposit."""

    pool_token_amount_out: int
    min_pool_token_amount_out: int
    token_a_in_amount: int
    token_b_in_amount: int


@dataclass(frozen=True)
class WithdrawQuote:
    """Result of quoting a withdrawal."""

    pool_token_amount_in: int
    token_a_out_amount: int
    token_b_out_amount: int
    min_token_a_out_amount: int
    min_token_b_out_amount: int


@dataclass(frozen=True)
class LockEscrow:
    """Locked-liquidity escrow account of one owner.

    Attributes:
        total_locked_amount: LP locked in the escrow
        lp_per_token: Virtual price (raw) at the last fee checkpoint
        unclaimed_fee_pending: Fee LP accrued before the last checkpoint
        a_fee: Token A fee already claimed
        b_fee: Token B fee already claimed
    """

    total_locked_amount: int
    lp_per_token: int
    unclaimed_fee_pending: int = 0
    a_fee: int = 0
    b_fee: int = 0


@dataclass(frozen=True)
class LockEscrowInfo:
    """Escrow amounts and fees expressed in LP and in pool tokens."""

    amount: int
    claimed_fee_a: int
    claimed_fee_b: int
    unclaimed_fee_lp: int
    unclaimed_fee_a: int
    unclaimed_fee_b: int
