"""Pydantic models for pool, vault and snapshot documents.

Each model parses the JSON form of an account and converts it into the
frozen domain dataclass the quote engine consumes via to_domain().
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag

from dynamic_amm.curve.types import (
    ConstantProductCurveType,
    CurveType,
    Depeg,
    DepegType,
    StableCurveType,
    TokenMultiplier,
)
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.models.types import U64, U128, Pubkey
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.pool.snapshot import ReserveSnapshot
from dynamic_amm.pool.state import PoolState
from dynamic_amm.quote.types import LockEscrow
from dynamic_amm.vault import LockedProfitTracker, VaultState, withdrawable_amount


class PoolFeesModel(BaseModel):
    """Fee schedule of a pool."""

    trade_fee_numerator: U64 = Field(alias="tradeFeeNumerator")
    trade_fee_denominator: U64 = Field(alias="tradeFeeDenominator")
    owner_trade_fee_numerator: U64 = Field(default="0", alias="ownerTradeFeeNumerator")
    owner_trade_fee_denominator: U64 = Field(default="10000", alias="ownerTradeFeeDenominator")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> PoolFees:
        return PoolFees(
            trade_fee_numerator=int(self.trade_fee_numerator),
            trade_fee_denominator=int(self.trade_fee_denominator),
            owner_trade_fee_numerator=int(self.owner_trade_fee_numerator),
            owner_trade_fee_denominator=int(self.owner_trade_fee_denominator),
        )


class TokenMultiplierModel(BaseModel):
    """Precision multipliers of a stable pool."""

    token_a_multiplier: U64 = Field(default="1", alias="tokenAMultiplier")
    token_b_multiplier: U64 = Field(default="1", alias="tokenBMultiplier")
    precision_factor: int = Field(default=0, ge=0, le=255, alias="precisionFactor")

    model_config = {"populate_by_name": True}


class DepegModel(BaseModel):
    """Depeg parameters of a stable pool."""

    depeg_type: DepegType = Field(default=DepegType.NONE, alias="depegType")
    base_virtual_price: U64 = Field(default="0", alias="baseVirtualPrice")
    base_cache_updated: U64 = Field(default="0", alias="baseCacheUpdated")

    model_config = {"populate_by_name": True}


class ConstantProductCurveModel(BaseModel):
    """Constant product curve descriptor."""

    kind: Literal["constantProduct"] = "constantProduct"


class StableCurveModel(BaseModel):
    """Stable curve descriptor."""

    kind: Literal["stable"] = "stable"
    amp: int = Field(gt=0)
    token_multiplier: TokenMultiplierModel = Field(default_factory=TokenMultiplierModel, alias="tokenMultiplier")
    depeg: DepegModel | None = None

    model_config = {"populate_by_name": True}


def _get_curve_kind(v: Any) -> str:
    """Discriminator function for CurveModel union type."""
    if isinstance(v, dict):
        return str(v.get("kind", "constantProduct"))
    return v.kind


CurveModel = Annotated[
    Annotated[ConstantProductCurveModel, Tag("constantProduct")] | Annotated[StableCurveModel, Tag("stable")],
    Discriminator(_get_curve_kind),
]


def curve_type_from_model(curve: ConstantProductCurveModel | StableCurveModel) -> CurveType:
    """Convert a parsed curve descriptor to its domain curve type."""
    if isinstance(curve, ConstantProductCurveModel):
        return ConstantProductCurveType()

    multiplier = curve.token_multiplier
    token_multiplier = TokenMultiplier(
        token_a_multiplier=int(multiplier.token_a_multiplier),
        token_b_multiplier=int(multiplier.token_b_multiplier),
        precision_factor=multiplier.precision_factor,
    )

    depeg = None
    if curve.depeg is not None:
        depeg = Depeg(
            depeg_type=curve.depeg.depeg_type,
            base_virtual_price=int(curve.depeg.base_virtual_price),
            base_cache_updated=int(curve.depeg.base_cache_updated),
        )
    return StableCurveType(amp=curve.amp, token_multiplier=token_multiplier, depeg=depeg)


class PoolStateModel(BaseModel):
    """Pool account fields needed for quoting."""

    token_a_mint: Pubkey = Field(alias="tokenAMint")
    token_b_mint: Pubkey = Field(alias="tokenBMint")
    lp_mint: Pubkey | None = Field(default=None, alias="lpMint")
    fees: PoolFeesModel
    curve_type: CurveModel = Field(default_factory=ConstantProductCurveModel, alias="curveType")
    total_locked_lp: U64 = Field(default="0", alias="totalLockedLp")
    stake: Pubkey | None = None

    model_config = {"populate_by_name": True}

    def to_domain(self) -> PoolState:
        return PoolState(
            token_a_mint=self.token_a_mint,
            token_b_mint=self.token_b_mint,
            lp_mint=self.lp_mint or "",
            fees=self.fees.to_domain(),
            curve_type=curve_type_from_model(self.curve_type),
            total_locked_lp=int(self.total_locked_lp),
            stake=self.stake,
        )


class LockedProfitTrackerModel(BaseModel):
    """Locked-profit bookkeeping of a vault."""

    last_updated_locked_profit: U64 = Field(default="0", alias="lastUpdatedLockedProfit")
    last_report: U64 = Field(default="0", alias="lastReport")
    locked_profit_degradation: U64 = Field(default="0", alias="lockedProfitDegradation")

    model_config = {"populate_by_name": True}


class VaultModel(BaseModel):
    """Vault account fields needed to compute the withdrawable amount."""

    total_amount: U64 = Field(alias="totalAmount")
    locked_profit_tracker: LockedProfitTrackerModel = Field(
        default_factory=LockedProfitTrackerModel, alias="lockedProfitTracker"
    )

    model_config = {"populate_by_name": True}

    def to_domain(self) -> VaultState:
        tracker = self.locked_profit_tracker
        return VaultState(
            total_amount=int(self.total_amount),
            locked_profit_tracker=LockedProfitTracker(
                last_updated_locked_profit=int(tracker.last_updated_locked_profit),
                last_report=int(tracker.last_report),
                locked_profit_degradation=int(tracker.locked_profit_degradation),
            ),
        )


class SnapshotModel(BaseModel):
    """Reserve snapshot document.

    Each vault's withdrawable amount is given either directly
    (vaultAWithdrawable) or as the vault account (vaultA), in which case it
    is evaluated at currentTime.
    """

    current_time: U64 = Field(alias="currentTime")
    pool_vault_a_lp: U64 = Field(alias="poolVaultALp")
    pool_vault_b_lp: U64 = Field(alias="poolVaultBLp")
    vault_a_lp_supply: U64 = Field(alias="vaultALpSupply")
    vault_b_lp_supply: U64 = Field(alias="vaultBLpSupply")
    pool_lp_supply: U64 = Field(alias="poolLpSupply")
    vault_a_withdrawable: U64 | None = Field(default=None, alias="vaultAWithdrawable")
    vault_b_withdrawable: U64 | None = Field(default=None, alias="vaultBWithdrawable")
    vault_a: VaultModel | None = Field(default=None, alias="vaultA")
    vault_b: VaultModel | None = Field(default=None, alias="vaultB")
    vault_a_reserve: U64 | None = Field(default=None, alias="vaultAReserve")
    vault_b_reserve: U64 | None = Field(default=None, alias="vaultBReserve")

    model_config = {"populate_by_name": True}

    @staticmethod
    def _withdrawable(current_time: int, amount: str | None, vault: VaultModel | None, label: str) -> int:
        if amount is not None:
            return int(amount)
        if vault is not None:
            return withdrawable_amount(current_time, vault.to_domain())
        raise InvalidInputError(f"Snapshot needs vault{label}Withdrawable or vault{label}")

    def to_domain(self) -> ReserveSnapshot:
        current_time = int(self.current_time)
        return ReserveSnapshot(
            current_time=current_time,
            pool_vault_a_lp=int(self.pool_vault_a_lp),
            pool_vault_b_lp=int(self.pool_vault_b_lp),
            vault_a_lp_supply=int(self.vault_a_lp_supply),
            vault_b_lp_supply=int(self.vault_b_lp_supply),
            vault_a_withdrawable=self._withdrawable(current_time, self.vault_a_withdrawable, self.vault_a, "A"),
            vault_b_withdrawable=self._withdrawable(current_time, self.vault_b_withdrawable, self.vault_b, "B"),
            pool_lp_supply=int(self.pool_lp_supply),
            vault_a_reserve=None if self.vault_a_reserve is None else int(self.vault_a_reserve),
            vault_b_reserve=None if self.vault_b_reserve is None else int(self.vault_b_reserve),
        )


class LockEscrowModel(BaseModel):
    """Lock escrow account of one owner."""

    total_locked_amount: U64 = Field(alias="totalLockedAmount")
    lp_per_token: U128 = Field(alias="lpPerToken")
    unclaimed_fee_pending: U64 = Field(default="0", alias="unclaimedFeePending")
    a_fee: U64 = Field(default="0", alias="aFee")
    b_fee: U64 = Field(default="0", alias="bFee")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> LockEscrow:
        return LockEscrow(
            total_locked_amount=int(self.total_locked_amount),
            lp_per_token=int(self.lp_per_token),
            unclaimed_fee_pending=int(self.unclaimed_fee_pending),
            a_fee=int(self.a_fee),
            b_fee=int(self.b_fee),
        )
