"""Curve type descriptors stored in a pool account.

A pool's curve type is a closed union: ConstantProductCurveType or
StableCurveType. The descriptor only carries parameters; the pricing logic
lives in the SwapCurve built from it by build_swap_curve().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dynamic_amm.errors import InvalidInputError


class DepegType(str, Enum):
    """Which yield-bearing token family a depegged stable pool tracks."""

    NONE = "none"
    MARINADE = "marinade"
    LIDO = "lido"
    SPL_STAKE = "spl_stake"


@dataclass(frozen=True)
class Depeg:
    """Depeg parameters of a stable pool.

    Attributes:
        depeg_type: Token family; NONE disables depeg scaling
        base_virtual_price: Cached price of token B in units of token A,
            scaled by DEPEG_PRICE_PRECISION
        base_cache_updated: Timestamp the cached price was recorded
    """

    depeg_type: DepegType = DepegType.NONE
    base_virtual_price: int = 0
    base_cache_updated: int = 0

    @property
    def is_active(self) -> bool:
        return self.depeg_type is not DepegType.NONE


@dataclass(frozen=True)
class TokenMultiplier:
    """Per-token multipliers that bring both tokens to a common precision.

    Attributes:
        token_a_multiplier: Scale applied to token A amounts
        token_b_multiplier: Scale applied to token B amounts
        precision_factor: Decimals of the common precision
    """

    token_a_multiplier: int = 1
    token_b_multiplier: int = 1
    precision_factor: int = 0

    def __post_init__(self) -> None:
        if self.token_a_multiplier <= 0 or self.token_b_multiplier <= 0:
            raise InvalidInputError(
                f"Token multipliers must be positive: {self.token_a_multiplier}, {self.token_b_multiplier}"
            )


@dataclass(frozen=True)
class ConstantProductCurveType:
    """x * y = k curve; carries no parameters."""


@dataclass(frozen=True)
class StableCurveType:
    """StableSwap curve.

    Attributes:
        amp: Amplification coefficient A (must be positive)
        token_multiplier: Precision normalization of the two tokens
        depeg: Depeg parameters, or None for a plain stable pool
    """

    amp: int
    token_multiplier: TokenMultiplier = field(default_factory=TokenMultiplier)
    depeg: Depeg | None = None

    def __post_init__(self) -> None:
        if self.amp <= 0:
            raise InvalidInputError(f"amp must be positive: {self.amp}")


CurveType = ConstantProductCurveType | StableCurveType
