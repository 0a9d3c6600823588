"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_snapshot, make_quoter

    quoter = make_quoter(make_pool(fees=make_fees(trade_fee_bps=0)))
"""

from typing import Any

from dynamic_amm.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from dynamic_amm.curve.types import CurveType, Depeg, DepegType, StableCurveType, TokenMultiplier
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.pool.snapshot import ReserveSnapshot
from dynamic_amm.pool.state import PoolState
from dynamic_amm.quote.engine import PoolQuoter
from tests.helpers.constants import LP_MINT, NOW, USDC, USDT


def make_fees(trade_fee_bps: int = 25, owner_trade_fee_bps: int = 0) -> PoolFees:
    """Create a fee schedule from basis points.

    owner_trade_fee_bps is the owner's cut of the trade fee, not of the input.
    """
    return PoolFees(
        trade_fee_numerator=trade_fee_bps,
        trade_fee_denominator=10_000,
        owner_trade_fee_numerator=owner_trade_fee_bps,
        owner_trade_fee_denominator=10_000,
    )


def make_stable_curve(
    amp: int = 100,
    depeg_type: DepegType | None = None,
    base_virtual_price: int = 1_000_000,
    base_cache_updated: int = NOW,
    token_a_multiplier: int = 1,
    token_b_multiplier: int = 1,
) -> StableCurveType:
    """Create a stable curve type; depeg_type=None means no depeg block."""
    depeg = None
    if depeg_type is not None:
        depeg = Depeg(
            depeg_type=depeg_type,
            base_virtual_price=base_virtual_price,
            base_cache_updated=base_cache_updated,
        )
    return StableCurveType(
        amp=amp,
        token_multiplier=TokenMultiplier(token_a_multiplier, token_b_multiplier),
        depeg=depeg,
    )


def make_pool(
    curve_type: CurveType | None = None,
    fees: PoolFees | None = None,
    token_a_mint: str = USDC,
    token_b_mint: str = USDT,
    total_locked_lp: int = 0,
    stake: str | None = None,
) -> PoolState:
    """Create a pool; constant product with 25 bps fee by default."""
    kwargs: dict[str, Any] = {}
    if curve_type is not None:
        kwargs["curve_type"] = curve_type
    return PoolState(
        token_a_mint=token_a_mint,
        token_b_mint=token_b_mint,
        lp_mint=LP_MINT,
        fees=fees if fees is not None else make_fees(),
        total_locked_lp=total_locked_lp,
        stake=stake,
        **kwargs,
    )


def make_snapshot(
    token_a_amount: int = 1_000_000,
    token_b_amount: int = 1_000_000,
    pool_lp_supply: int = 1_000_000,
    current_time: int = NOW,
    vault_a_reserve: int | None = None,
    vault_b_reserve: int | None = None,
) -> ReserveSnapshot:
    """Create a snapshot where each vault share is worth exactly one token.

    The pool holds every share of both vaults, so pool token amounts equal
    the given amounts.
    """
    return ReserveSnapshot(
        current_time=current_time,
        pool_vault_a_lp=token_a_amount,
        pool_vault_b_lp=token_b_amount,
        vault_a_lp_supply=token_a_amount,
        vault_b_lp_supply=token_b_amount,
        vault_a_withdrawable=token_a_amount,
        vault_b_withdrawable=token_b_amount,
        pool_lp_supply=pool_lp_supply,
        vault_a_reserve=vault_a_reserve,
        vault_b_reserve=vault_b_reserve,
    )


def make_quoter(
    pool: PoolState | None = None,
    snapshot: ReserveSnapshot | None = None,
    base_virtual_price: int | None = None,
    config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
) -> PoolQuoter:
    """Create a PoolQuoter with default pool and snapshot."""
    return PoolQuoter(
        pool if pool is not None else make_pool(),
        snapshot if snapshot is not None else make_snapshot(),
        base_virtual_price=base_virtual_price,
        config=config,
    )


def make_pool_document(
    trade_fee_numerator: int = 0,
    curve_type: dict[str, Any] | None = None,
    token_amount: int = 1_000_000,
    pool_lp_supply: int = 1_000_000,
) -> dict[str, Any]:
    """Create the JSON pool document accepted by the API and CLI."""
    return {
        "pool": {
            "tokenAMint": USDC,
            "tokenBMint": USDT,
            "lpMint": LP_MINT,
            "fees": {
                "tradeFeeNumerator": str(trade_fee_numerator),
                "tradeFeeDenominator": "10000",
                "ownerTradeFeeNumerator": "0",
                "ownerTradeFeeDenominator": "10000",
            },
            "curveType": curve_type or {"kind": "constantProduct"},
            "totalLockedLp": "0",
        },
        "snapshot": {
            "currentTime": str(NOW),
            "poolVaultALp": str(token_amount),
            "poolVaultBLp": str(token_amount),
            "vaultALpSupply": str(token_amount),
            "vaultBLpSupply": str(token_amount),
            "vaultAWithdrawable": str(token_amount),
            "vaultBWithdrawable": str(token_amount),
            "poolLpSupply": str(pool_lp_supply),
        },
    }
