"""Swap curves for two-token pools.

Supported curves:
- Constant product (x * y = k)
- StableSwap, with optional depeg scaling for yield-bearing tokens
"""

from dynamic_amm.curve.base import AccountMeta, OutResult, SwapCurve, TradeDirection
from dynamic_amm.curve.constant_product import ConstantProductSwap
from dynamic_amm.curve.factory import build_swap_curve, refresh_depeg
from dynamic_amm.curve.stable_swap import StableSwap
from dynamic_amm.curve.types import (
    ConstantProductCurveType,
    CurveType,
    Depeg,
    DepegType,
    StableCurveType,
    TokenMultiplier,
)

__all__ = [
    # Interface
    "AccountMeta",
    "OutResult",
    "SwapCurve",
    "TradeDirection",
    # Curves
    "ConstantProductSwap",
    "StableSwap",
    "build_swap_curve",
    "refresh_depeg",
    # Curve types
    "ConstantProductCurveType",
    "CurveType",
    "Depeg",
    "DepegType",
    "StableCurveType",
    "TokenMultiplier",
]
