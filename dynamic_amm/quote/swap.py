"""Swap quote math.

The remote program swaps through the vaults, not through raw reserves:
1. The owner fee is split off the input
2. The rest is deposited into the source vault, and the pool's claim on
   the vault is re-valued (vault-share rounding can lose a few units)
3. The LP trade fee is subtracted and the curve prices the remainder
4. Destination-vault shares are burned for the output and re-valued

Each step rounds the way the program does, so the quote matches execution.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dynamic_amm.curve.base import SwapCurve, TradeDirection
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.share import amount_from_share, share_from_amount
from dynamic_amm.pool.snapshot import PoolInfo, ReserveSnapshot
from dynamic_amm.pool.state import PoolState
from dynamic_amm.safe_int import S


@dataclass(frozen=True)
class SwapResult:
    """Unrounded-for-slippage outcome of a swap simulation."""

    out_amount: int
    fee: int
    protocol_fee: int
    price_impact: Decimal


def calculate_max_swap_out_amount(
    out_mint: str,
    pool: PoolState,
    pool_info: PoolInfo,
    snapshot: ReserveSnapshot,
    min_token_left_in_pool: int,
) -> int:
    """Largest output the pool can pay in out_mint.

    Formula: max(0, min(pool_amount - min_token_left_in_pool, vault_reserve))

    Raises:
        InvalidInputError: If out_mint is not one of the pool's tokens
    """
    if out_mint == pool.token_a_mint:
        pool_amount, vault_reserve = pool_info.token_a_amount, snapshot.vault_a_reserve
    elif out_mint == pool.token_b_mint:
        pool_amount, vault_reserve = pool_info.token_b_amount, snapshot.vault_b_reserve
    else:
        raise InvalidInputError(f"Token {out_mint} not in pool")

    max_out = S(pool_amount).saturating_sub(min_token_left_in_pool)
    if vault_reserve is not None:
        max_out = max_out.min(vault_reserve)
    return max_out.value


def calculate_swap_quote(
    in_mint: str,
    in_amount: int,
    pool: PoolState,
    pool_info: PoolInfo,
    snapshot: ReserveSnapshot,
    swap_curve: SwapCurve,
    min_token_left_in_pool: int,
) -> SwapResult:
    """Simulate swapping in_amount of in_mint through the pool.

    Args:
        in_mint: Mint of the input token
        in_amount: Raw input amount
        pool: Pool state (mints and fees)
        pool_info: Token amounts derived from snapshot
        snapshot: Vault positions at quote time
        swap_curve: Curve built for the pool
        min_token_left_in_pool: Output floor passed to the max-out check

    Returns:
        SwapResult with output, LP fee, owner fee and price impact

    Raises:
        InvalidInputError: If in_mint is not a pool token, or the output
            exceeds what the pool can pay
    """
    if in_mint == pool.token_a_mint:
        trade_direction = TradeDirection.A_TO_B
        out_mint = pool.token_b_mint
        source_lp, source_supply, source_withdrawable = (
            snapshot.pool_vault_a_lp,
            snapshot.vault_a_lp_supply,
            snapshot.vault_a_withdrawable,
        )
        dest_supply, dest_withdrawable = snapshot.vault_b_lp_supply, snapshot.vault_b_withdrawable
        swap_source_amount, swap_destination_amount = pool_info.token_a_amount, pool_info.token_b_amount
    elif in_mint == pool.token_b_mint:
        trade_direction = TradeDirection.B_TO_A
        out_mint = pool.token_a_mint
        source_lp, source_supply, source_withdrawable = (
            snapshot.pool_vault_b_lp,
            snapshot.vault_b_lp_supply,
            snapshot.vault_b_withdrawable,
        )
        dest_supply, dest_withdrawable = snapshot.vault_a_lp_supply, snapshot.vault_a_withdrawable
        swap_source_amount, swap_destination_amount = pool_info.token_b_amount, pool_info.token_a_amount
    else:
        raise InvalidInputError(f"Token {in_mint} not in pool")

    fees = pool.fees
    trade_fee = fees.trading_fee(in_amount)
    protocol_fee = fees.owner_trading_fee(trade_fee)
    lp_fee = (S(trade_fee) - protocol_fee).value

    # Deposit into the source vault and re-value the pool's holding
    deposited = (S(in_amount) - protocol_fee).value
    vault_lp_minted = share_from_amount(deposited, source_withdrawable, source_supply)
    after_amount = amount_from_share(
        source_lp + vault_lp_minted,
        source_withdrawable + deposited,
        source_supply + vault_lp_minted,
    )
    actual_source_amount = S(after_amount).saturating_sub(swap_source_amount)
    source_amount_less_fee = actual_source_amount.saturating_sub(lp_fee).value

    curve_result = swap_curve.compute_out_amount(
        source_amount_less_fee,
        swap_source_amount,
        swap_destination_amount,
        trade_direction,
    )

    # Burn destination vault shares for the output
    vault_lp_burned = share_from_amount(curve_result.out_amount, dest_withdrawable, dest_supply)
    out_amount = amount_from_share(vault_lp_burned, dest_withdrawable, dest_supply)

    max_out = calculate_max_swap_out_amount(out_mint, pool, pool_info, snapshot, min_token_left_in_pool)
    if out_amount > max_out:
        raise InvalidInputError(f"Swap output {out_amount} exceeds pool capacity {max_out}")

    return SwapResult(
        out_amount=S(out_amount).to_u64(),
        fee=lp_fee,
        protocol_fee=protocol_fee,
        price_impact=curve_result.price_impact,
    )
