"""Pool account state consumed by the quote engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from dynamic_amm.curve.types import ConstantProductCurveType, CurveType, DepegType, StableCurveType
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.pool.fees import PoolFees


@dataclass(frozen=True)
class PoolState:
    """The part of a pool account that quoting depends on.

    Attributes:
        token_a_mint: Mint of token A
        token_b_mint: Mint of token B
        lp_mint: Mint of the pool LP token
        fees: Fee schedule
        curve_type: Curve descriptor
        total_locked_lp: LP locked in escrows
        stake: Stake pool address (SPL_STAKE depeg pools only)
    """

    token_a_mint: str
    token_b_mint: str
    lp_mint: str = ""
    fees: PoolFees = field(default_factory=PoolFees)
    curve_type: CurveType = field(default_factory=ConstantProductCurveType)
    total_locked_lp: int = 0
    stake: str | None = None

    def __post_init__(self) -> None:
        if self.token_a_mint == self.token_b_mint:
            raise InvalidInputError(f"Pool tokens must differ: {self.token_a_mint}")
        if self.total_locked_lp < 0:
            raise InvalidInputError(f"total_locked_lp must be non-negative, got {self.total_locked_lp}")

    @property
    def is_stable_pool(self) -> bool:
        return isinstance(self.curve_type, StableCurveType)

    @property
    def depeg_type(self) -> DepegType:
        if isinstance(self.curve_type, StableCurveType) and self.curve_type.depeg is not None:
            return self.curve_type.depeg.depeg_type
        return DepegType.NONE

    def has_mint(self, mint: str) -> bool:
        return mint in (self.token_a_mint, self.token_b_mint)

    def other_mint(self, mint: str) -> str:
        """The pool's other token for mint."""
        if mint == self.token_a_mint:
            return self.token_b_mint
        if mint == self.token_b_mint:
            return self.token_a_mint
        raise InvalidInputError(f"Token {mint} not in pool")
