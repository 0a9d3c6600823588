"""StableSwap curve with optional depeg scaling.

Amounts are normalized before the stable math runs:
    token A: amount * token_a_multiplier (* DEPEG_PRICE_PRECISION when depegged)
    token B: amount * token_b_multiplier (* base_virtual_price when depegged)

so that a yield-bearing token B is priced at its base virtual price in units
of token A. Results are scaled back with the inverse factors.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from dynamic_amm.constants import DEPEG_PRICE_PRECISION, LIDO_STATE, MARINADE_STATE
from dynamic_amm.curve import stable_math
from dynamic_amm.curve.base import AccountMeta, OutResult, SwapCurve, TradeDirection
from dynamic_amm.curve.types import Depeg, DepegType, TokenMultiplier
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.fixed_point import Rounding, div_rounding
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.safe_int import S

Scaler = Callable[..., int]


@dataclass(frozen=True)
class StableSwap(SwapCurve):
    """StableSwap invariant curve for two correlated tokens.

    Attributes:
        amp: Amplification coefficient A
        token_multiplier: Precision normalization of the two tokens
        depeg: Depeg parameters (base price already refreshed), or None
        stake: Stake pool address, required for SPL_STAKE depeg pools
    """

    amp: int
    token_multiplier: TokenMultiplier
    depeg: Depeg | None = None
    stake: str | None = None

    def __post_init__(self) -> None:
        if self.amp <= 0:
            raise InvalidInputError(f"amp must be positive: {self.amp}")
        if self.depeg is not None and self.depeg.is_active:
            if self.depeg.base_virtual_price <= 0:
                raise InvalidInputError(
                    f"Depegged pool needs a positive base virtual price: {self.depeg.base_virtual_price}"
                )
            if self.depeg.depeg_type is DepegType.SPL_STAKE and not self.stake:
                raise InvalidInputError("SPL stake depeg pool requires the stake pool address")

    @property
    def is_depegged(self) -> bool:
        return self.depeg is not None and self.depeg.is_active

    # --- Normalization ---

    def _factor_a(self) -> int:
        factor = self.token_multiplier.token_a_multiplier
        if self.is_depegged:
            factor *= DEPEG_PRICE_PRECISION
        return factor

    def _factor_b(self) -> int:
        factor = self.token_multiplier.token_b_multiplier
        if self.is_depegged:
            factor *= self.depeg.base_virtual_price
        return factor

    def upscale_a(self, amount: int) -> int:
        return (S(amount) * self._factor_a()).value

    def upscale_b(self, amount: int) -> int:
        return (S(amount) * self._factor_b()).value

    def downscale_a(self, amount: int, rounding: Rounding = Rounding.DOWN) -> int:
        return div_rounding(amount, self._factor_a(), rounding)

    def downscale_b(self, amount: int, rounding: Rounding = Rounding.DOWN) -> int:
        return div_rounding(amount, self._factor_b(), rounding)

    def _scalers(self, trade_direction: TradeDirection) -> tuple[Scaler, Scaler, Scaler, Scaler]:
        """(upscale_source, upscale_destination, downscale_source, downscale_destination)."""
        if trade_direction is TradeDirection.A_TO_B:
            return self.upscale_a, self.upscale_b, self.downscale_a, self.downscale_b
        return self.upscale_b, self.upscale_a, self.downscale_b, self.downscale_a

    # --- SwapCurve ---

    def compute_out_amount(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> OutResult:
        """Output for source_amount, solved on the normalized invariant.

        Price impact is measured against the marginal price of the pre-trade
        reserves, in normalized units.
        """
        if source_amount == 0 or swap_source_amount == 0 or swap_destination_amount == 0:
            return OutResult(out_amount=0, price_impact=Decimal(0))

        up_source, up_destination, _, down_destination = self._scalers(trade_direction)
        normalized_in = up_source(source_amount)
        normalized_source = up_source(swap_source_amount)
        normalized_destination = up_destination(swap_destination_amount)

        d = stable_math.compute_d(self.amp, normalized_source, normalized_destination)
        new_destination = stable_math.compute_y(self.amp, normalized_source + normalized_in, d)
        normalized_out = S(normalized_destination).saturating_sub(new_destination).value

        ideal_out = stable_math.spot_out_amount(self.amp, normalized_in, normalized_source, normalized_destination, d)
        impact = (ideal_out - Decimal(normalized_out)) / ideal_out if ideal_out else Decimal(0)
        return OutResult(out_amount=down_destination(normalized_out), price_impact=impact)

    def compute_in_amount(
        self,
        destination_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> int:
        if destination_amount == 0:
            return 0

        up_source, up_destination, down_source, _ = self._scalers(trade_direction)
        normalized_out = up_destination(destination_amount)
        normalized_source = up_source(swap_source_amount)
        normalized_destination = up_destination(swap_destination_amount)

        d = stable_math.compute_d(self.amp, normalized_source, normalized_destination)
        remaining = (S(normalized_destination) - normalized_out).value
        new_source = stable_math.compute_y(self.amp, remaining, d)
        normalized_in = S(new_source).saturating_sub(normalized_source).value
        return down_source(normalized_in, Rounding.UP)

    def compute_d(self, token_a_amount: int, token_b_amount: int) -> int:
        d = stable_math.compute_d(self.amp, self.upscale_a(token_a_amount), self.upscale_b(token_b_amount))
        if self.is_depegged:
            return d // DEPEG_PRICE_PRECISION
        return d

    def compute_imbalance_deposit(
        self,
        deposit_a_amount: int,
        deposit_b_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_token_supply: int,
        fees: PoolFees,
    ) -> int:
        return stable_math.compute_mint_amount_for_deposit(
            self.amp,
            self.upscale_a(deposit_a_amount),
            self.upscale_b(deposit_b_amount),
            self.upscale_a(swap_token_a_amount),
            self.upscale_b(swap_token_b_amount),
            pool_token_supply,
            fees,
        )

    def compute_withdraw_one(
        self,
        pool_token_amount: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        fees: PoolFees,
        trade_direction: TradeDirection,
    ) -> int:
        """Single-token withdrawal; B_TO_A pays out token A, A_TO_B token B."""
        normalized_a = self.upscale_a(swap_token_a_amount)
        normalized_b = self.upscale_b(swap_token_b_amount)

        if trade_direction is TradeDirection.B_TO_A:
            out = stable_math.compute_withdraw_one_amount(
                self.amp, pool_token_amount, pool_token_supply, normalized_a, normalized_b, fees
            )
            return self.downscale_a(out)

        out = stable_math.compute_withdraw_one_amount(
            self.amp, pool_token_amount, pool_token_supply, normalized_b, normalized_a, fees
        )
        return self.downscale_b(out)

    def get_remaining_accounts(self) -> list[AccountMeta]:
        if self.depeg is None:
            return []
        depeg_type = self.depeg.depeg_type
        if depeg_type is DepegType.MARINADE:
            return [AccountMeta(pubkey=MARINADE_STATE)]
        if depeg_type is DepegType.LIDO:
            return [AccountMeta(pubkey=LIDO_STATE)]
        if depeg_type is DepegType.SPL_STAKE and self.stake:
            return [AccountMeta(pubkey=self.stake)]
        return []
