"""Swap, deposit, withdraw and lock-escrow quotes."""

from dynamic_amm.quote.engine import PoolQuoter, QuoteContext
from dynamic_amm.quote.lock_escrow import calculate_unclaimed_lock_escrow_fee
from dynamic_amm.quote.swap import SwapResult, calculate_max_swap_out_amount, calculate_swap_quote
from dynamic_amm.quote.types import DepositQuote, LockEscrow, LockEscrowInfo, SwapQuote, WithdrawQuote

__all__ = [
    # Engine
    "PoolQuoter",
    "QuoteContext",
    # Functions
    "calculate_max_swap_out_amount",
    "calculate_swap_quote",
    "calculate_unclaimed_lock_escrow_fee",
    # Records
    "DepositQuote",
    "LockEscrow",
    "LockEscrowInfo",
    "SwapQuote",
    "SwapResult",
    "WithdrawQuote",
]
