"""Reserve snapshots and derived pool amounts.

A pool does not hold tokens directly: it holds shares of two vaults. The
token amounts the curve prices against are the pool's vault shares valued
at each vault's withdrawable amount for the snapshot time.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import TYPE_CHECKING

from dynamic_amm.constants import VIRTUAL_PRICE_RAW_SHIFT
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.fixed_point import Rounding
from dynamic_amm.math.share import amount_from_share
from dynamic_amm.safe_int import S
from dynamic_amm.vault import VaultState, withdrawable_amount

if TYPE_CHECKING:
    from dynamic_amm.curve.base import SwapCurve


@dataclass(frozen=True)
class ReserveSnapshot:
    """Point-in-time view of the pool's vault positions.

    Attributes:
        current_time: Timestamp the snapshot was taken at
        pool_vault_a_lp: Vault A shares held by the pool
        pool_vault_b_lp: Vault B shares held by the pool
        vault_a_lp_supply: Total vault A share supply
        vault_b_lp_supply: Total vault B share supply
        vault_a_withdrawable: Vault A withdrawable amount at current_time
        vault_b_withdrawable: Vault B withdrawable amount at current_time
        pool_lp_supply: Pool LP token supply (0 = never bootstrapped)
        vault_a_reserve: Liquid token A balance of vault A (None = uncapped)
        vault_b_reserve: Liquid token B balance of vault B (None = uncapped)
    """

    current_time: int
    pool_vault_a_lp: int
    pool_vault_b_lp: int
    vault_a_lp_supply: int
    vault_b_lp_supply: int
    vault_a_withdrawable: int
    vault_b_withdrawable: int
    pool_lp_supply: int
    vault_a_reserve: int | None = None
    vault_b_reserve: int | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and value < 0:
                raise InvalidInputError(f"{f.name} must be non-negative, got {value}")

    @classmethod
    def from_vaults(
        cls,
        current_time: int,
        vault_a: VaultState,
        vault_b: VaultState,
        *,
        pool_vault_a_lp: int,
        pool_vault_b_lp: int,
        vault_a_lp_supply: int,
        vault_b_lp_supply: int,
        pool_lp_supply: int,
        vault_a_reserve: int | None = None,
        vault_b_reserve: int | None = None,
    ) -> ReserveSnapshot:
        """Build a snapshot, evaluating both vaults' withdrawable amounts at current_time."""
        return cls(
            current_time=current_time,
            pool_vault_a_lp=pool_vault_a_lp,
            pool_vault_b_lp=pool_vault_b_lp,
            vault_a_lp_supply=vault_a_lp_supply,
            vault_b_lp_supply=vault_b_lp_supply,
            vault_a_withdrawable=withdrawable_amount(current_time, vault_a),
            vault_b_withdrawable=withdrawable_amount(current_time, vault_b),
            pool_lp_supply=pool_lp_supply,
            vault_a_reserve=vault_a_reserve,
            vault_b_reserve=vault_b_reserve,
        )


@dataclass(frozen=True)
class PoolInfo:
    """Token amounts and virtual price derived from one snapshot.

    Attributes:
        token_a_amount: Token A the pool's vault A shares are worth
        token_b_amount: Token B the pool's vault B shares are worth
        d: Curve invariant of the two amounts
        virtual_price_raw: (d << 64) // pool_lp_supply, 0 when undefined
        virtual_price: d / pool_lp_supply for display, None when undefined
    """

    token_a_amount: int
    token_b_amount: int
    d: int
    virtual_price_raw: int
    virtual_price: Decimal | None


def calculate_pool_info(snapshot: ReserveSnapshot, swap_curve: SwapCurve) -> PoolInfo:
    """Value the pool's vault shares and compute its virtual price.

    token_x_amount = pool_vault_x_lp * vault_x_withdrawable / vault_x_lp_supply (rounded down)
    """
    token_a_amount = amount_from_share(
        snapshot.pool_vault_a_lp,
        snapshot.vault_a_withdrawable,
        snapshot.vault_a_lp_supply,
        Rounding.DOWN,
    )
    token_b_amount = amount_from_share(
        snapshot.pool_vault_b_lp,
        snapshot.vault_b_withdrawable,
        snapshot.vault_b_lp_supply,
        Rounding.DOWN,
    )
    d = swap_curve.compute_d(token_a_amount, token_b_amount)

    if snapshot.pool_lp_supply == 0:
        return PoolInfo(token_a_amount, token_b_amount, d, virtual_price_raw=0, virtual_price=None)

    virtual_price_raw = ((S(d) << VIRTUAL_PRICE_RAW_SHIFT) // snapshot.pool_lp_supply).to_u128()
    virtual_price = Decimal(d) / Decimal(snapshot.pool_lp_supply)
    return PoolInfo(token_a_amount, token_b_amount, d, virtual_price_raw, virtual_price)
