"""Build the swap curve for a pool's curve type."""

from __future__ import annotations

from dataclasses import replace

import structlog

from dynamic_amm.constants import BASE_CACHE_EXPIRES
from dynamic_amm.curve.base import SwapCurve
from dynamic_amm.curve.constant_product import ConstantProductSwap
from dynamic_amm.curve.stable_swap import StableSwap
from dynamic_amm.curve.types import ConstantProductCurveType, CurveType, Depeg, StableCurveType

logger = structlog.get_logger()


def refresh_depeg(depeg: Depeg, current_time: int, base_virtual_price: int | None = None) -> Depeg:
    """Return the depeg parameters to price with at current_time.

    A cached base price older than BASE_CACHE_EXPIRES is replaced by the live
    base_virtual_price when one is supplied. Without a live price the stale
    cache is kept and a warning is logged.
    """
    if not depeg.is_active:
        return depeg
    if current_time <= depeg.base_cache_updated + BASE_CACHE_EXPIRES:
        return depeg
    if base_virtual_price is None:
        logger.warning(
            "depeg_cache_expired",
            depeg_type=depeg.depeg_type.value,
            base_cache_updated=depeg.base_cache_updated,
            current_time=current_time,
        )
        return depeg
    return replace(depeg, base_virtual_price=base_virtual_price, base_cache_updated=current_time)


def build_swap_curve(
    curve_type: CurveType,
    current_time: int,
    *,
    stake: str | None = None,
    base_virtual_price: int | None = None,
) -> SwapCurve:
    """Create the SwapCurve for a curve type descriptor.

    Args:
        curve_type: The pool's curve type
        current_time: Snapshot time, used to age the depeg price cache
        stake: Stake pool address for SPL_STAKE depeg pools
        base_virtual_price: Live depeg base price, if the caller fetched one

    Returns:
        ConstantProductSwap or StableSwap
    """
    if isinstance(curve_type, ConstantProductCurveType):
        return ConstantProductSwap()
    if isinstance(curve_type, StableCurveType):
        depeg = curve_type.depeg
        if depeg is not None:
            depeg = refresh_depeg(depeg, current_time, base_virtual_price)
        return StableSwap(
            amp=curve_type.amp,
            token_multiplier=curve_type.token_multiplier,
            depeg=depeg,
            stake=stake,
        )
    raise TypeError(f"Unknown curve type: {type(curve_type).__name__}")
