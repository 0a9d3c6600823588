"""Quote engine for a single pool.

PoolQuoter binds a pool to one reserve snapshot and answers swap, deposit,
withdraw and lock-escrow quotes against it. The pool, snapshot, curve and
derived pool amounts live together in an immutable QuoteContext; every
quote reads the context once, and replace_snapshot() swaps in a new one, so
a quote never mixes two snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from dynamic_amm.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from dynamic_amm.constants import BPS_DENOMINATOR
from dynamic_amm.curve.base import AccountMeta, SwapCurve, TradeDirection
from dynamic_amm.curve.factory import build_swap_curve
from dynamic_amm.curve.types import DepegType, StableCurveType
from dynamic_amm.errors import InvalidInputError
from dynamic_amm.math.fixed_point import Rounding, mul_div
from dynamic_amm.math.share import actual_deposit_amount, amount_from_share, share_from_amount
from dynamic_amm.pool.slippage import get_max_amount_with_slippage, get_min_amount_with_slippage
from dynamic_amm.pool.snapshot import PoolInfo, ReserveSnapshot, calculate_pool_info
from dynamic_amm.pool.state import PoolState
from dynamic_amm.quote.lock_escrow import calculate_unclaimed_lock_escrow_fee
from dynamic_amm.quote.swap import calculate_max_swap_out_amount, calculate_swap_quote
from dynamic_amm.quote.types import DepositQuote, LockEscrow, LockEscrowInfo, SwapQuote, WithdrawQuote
from dynamic_amm.safe_int import S

logger = structlog.get_logger()

# A stable-pool token holding more than this share (bps) of the normalized
# pool value is reported as depegged
DEPEG_SHARE_THRESHOLD_BPS = 9_500


@dataclass(frozen=True)
class QuoteContext:
    """Everything one quote reads, built from a single snapshot."""

    pool: PoolState
    snapshot: ReserveSnapshot
    swap_curve: SwapCurve
    pool_info: PoolInfo

    @classmethod
    def build(
        cls,
        pool: PoolState,
        snapshot: ReserveSnapshot,
        base_virtual_price: int | None = None,
    ) -> QuoteContext:
        swap_curve = build_swap_curve(
            pool.curve_type,
            snapshot.current_time,
            stake=pool.stake,
            base_virtual_price=base_virtual_price,
        )
        return cls(
            pool=pool,
            snapshot=snapshot,
            swap_curve=swap_curve,
            pool_info=calculate_pool_info(snapshot, swap_curve),
        )


class PoolQuoter:
    """Side-effect free quotes for one pool.

    Args:
        pool: Pool state (mints, fees, curve type)
        snapshot: Vault positions to quote against
        base_virtual_price: Live depeg base price, used when the cached one
            has expired
        config: Slack constants and slippage bound
    """

    def __init__(
        self,
        pool: PoolState,
        snapshot: ReserveSnapshot,
        *,
        base_virtual_price: int | None = None,
        config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
    ) -> None:
        self.config = config
        self._context = QuoteContext.build(pool, snapshot, base_virtual_price)

    def replace_snapshot(
        self,
        snapshot: ReserveSnapshot,
        pool: PoolState | None = None,
        base_virtual_price: int | None = None,
    ) -> QuoteContext:
        """Rebuild the context from a fresh snapshot and swap it in.

        Quotes already running keep the context they started with.
        """
        context = QuoteContext.build(pool or self._context.pool, snapshot, base_virtual_price)
        self._context = context
        logger.debug(
            "snapshot_replaced",
            current_time=snapshot.current_time,
            token_a_amount=context.pool_info.token_a_amount,
            token_b_amount=context.pool_info.token_b_amount,
            pool_lp_supply=snapshot.pool_lp_supply,
        )
        return context

    # --- Derived properties ---

    @property
    def context(self) -> QuoteContext:
        return self._context

    @property
    def pool(self) -> PoolState:
        return self._context.pool

    @property
    def snapshot(self) -> ReserveSnapshot:
        return self._context.snapshot

    @property
    def swap_curve(self) -> SwapCurve:
        return self._context.swap_curve

    @property
    def pool_info(self) -> PoolInfo:
        return self._context.pool_info

    @property
    def is_stable_pool(self) -> bool:
        return self._context.pool.is_stable_pool

    @property
    def is_lst(self) -> bool:
        """True for a stable pool of a liquid staking token (depeg enabled)."""
        pool = self._context.pool
        return pool.is_stable_pool and pool.depeg_type is not DepegType.NONE

    @property
    def fee_bps(self) -> int:
        return self._context.pool.fees.fee_bps

    @property
    def depeg_token(self) -> str | None:
        """Mint of the stable-pool token that dominates the pool value, if any.

        Amounts are compared after token multiplier normalization; a token is
        depegged when its share exceeds DEPEG_SHARE_THRESHOLD_BPS.
        """
        ctx = self._context
        curve_type = ctx.pool.curve_type
        if not isinstance(curve_type, StableCurveType):
            return None

        multiplier = curve_type.token_multiplier
        normalized_a = S(ctx.pool_info.token_a_amount) * multiplier.token_a_multiplier
        normalized_b = S(ctx.pool_info.token_b_amount) * multiplier.token_b_multiplier
        total = normalized_a + normalized_b
        if total == 0:
            return None

        if mul_div(normalized_a, BPS_DENOMINATOR, total) > DEPEG_SHARE_THRESHOLD_BPS:
            return ctx.pool.token_a_mint
        if mul_div(normalized_b, BPS_DENOMINATOR, total) > DEPEG_SHARE_THRESHOLD_BPS:
            return ctx.pool.token_b_mint
        return None

    def get_remaining_accounts(self) -> list[AccountMeta]:
        return self._context.swap_curve.get_remaining_accounts()

    def _check_slippage(self, slippage_bps: int) -> None:
        if not 0 <= slippage_bps <= self.config.max_slippage_bps:
            raise InvalidInputError(
                f"Slippage must be in [0, {self.config.max_slippage_bps}] bps, got {slippage_bps}"
            )

    # --- Swap ---

    def get_swap_quote(self, in_mint: str, in_amount: int, slippage_bps: int) -> SwapQuote:
        """Quote swapping in_amount of in_mint into the pool's other token.

        Raises:
            InvalidInputError: Foreign mint, bad slippage, or an output the
                pool cannot pay
        """
        self._check_slippage(slippage_bps)
        ctx = self._context
        result = calculate_swap_quote(
            in_mint,
            in_amount,
            ctx.pool,
            ctx.pool_info,
            ctx.snapshot,
            ctx.swap_curve,
            self.config.min_token_left_in_pool,
        )
        quote = SwapQuote(
            swap_in_amount=in_amount,
            swap_out_amount=result.out_amount,
            min_swap_out_amount=get_min_amount_with_slippage(result.out_amount, slippage_bps),
            fee=result.fee,
            protocol_fee=result.protocol_fee,
            price_impact=result.price_impact,
        )
        logger.debug(
            "swap_quote",
            in_mint=in_mint,
            in_amount=in_amount,
            out_amount=quote.swap_out_amount,
            min_out_amount=quote.min_swap_out_amount,
            fee=quote.fee,
            protocol_fee=quote.protocol_fee,
        )
        return quote

    def get_max_swap_out_amount(self, mint: str) -> int:
        """Largest amount of mint a swap can take out of the pool."""
        ctx = self._context
        return calculate_max_swap_out_amount(
            mint, ctx.pool, ctx.pool_info, ctx.snapshot, self.config.min_token_left_in_pool
        )

    def get_max_swap_in_amount(self, mint: str) -> int:
        """Estimated largest input of mint, from the maximum output of the other token.

        This is an estimate: the fees are taken off the curve input afterwards
        rather than solved for.
        """
        ctx = self._context
        pool = ctx.pool
        if mint == pool.token_a_mint:
            trade_direction = TradeDirection.A_TO_B
            swap_source_amount, swap_destination_amount = ctx.pool_info.token_a_amount, ctx.pool_info.token_b_amount
        elif mint == pool.token_b_mint:
            trade_direction = TradeDirection.B_TO_A
            swap_source_amount, swap_destination_amount = ctx.pool_info.token_b_amount, ctx.pool_info.token_a_amount
        else:
            raise InvalidInputError(f"Token {mint} not in pool")

        max_out = calculate_max_swap_out_amount(
            pool.other_mint(mint), pool, ctx.pool_info, ctx.snapshot, self.config.min_token_left_in_pool
        )
        # The curve cannot price draining the destination completely
        if max_out >= swap_destination_amount:
            max_out = S(swap_destination_amount).saturating_sub(1).value
        if max_out == 0:
            return 0

        max_in = ctx.swap_curve.compute_in_amount(
            max_out, swap_source_amount, swap_destination_amount, trade_direction
        )
        owner_fee = pool.fees.owner_trading_fee(max_in)
        trade_fee = pool.fees.trading_fee(max_in)
        return S(max_in).saturating_sub(owner_fee).saturating_sub(trade_fee).value

    # --- Deposit ---

    def get_deposit_quote(
        self,
        token_a_in_amount: int,
        token_b_in_amount: int,
        balance: bool,
        slippage_bps: int,
    ) -> DepositQuote:
        """Quote LP minted for a deposit.

        Regimes, in order:
        1. Empty pool: bootstrap, LP = compute_d(a, b), inputs as given
        2. One amount zero and balance=True: the other side follows the pool
           ratio, LP is buffered by unlock_amount_buffer_bps
        3. Otherwise: imbalanced deposit priced by the curve

        Raises:
            InvalidInputError: Two-sided deposit into a non-empty constant
                product pool, or both amounts non-zero with balance=True
        """
        self._check_slippage(slippage_bps)
        ctx = self._context
        snapshot = ctx.snapshot
        pool_lp_supply = snapshot.pool_lp_supply

        if not ctx.pool.is_stable_pool and token_a_in_amount and token_b_in_amount and pool_lp_supply:
            raise InvalidInputError("Constant product pools only support balanced deposits")
        if token_a_in_amount and token_b_in_amount and balance:
            raise InvalidInputError("Balanced deposit takes exactly one non-zero token amount")

        if pool_lp_supply == 0:
            pool_token_amount_out = S(ctx.swap_curve.compute_d(token_a_in_amount, token_b_in_amount)).to_u64()
            logger.debug("bootstrap_deposit_quote", pool_token_amount_out=pool_token_amount_out)
            return DepositQuote(
                pool_token_amount_out=pool_token_amount_out,
                min_pool_token_amount_out=pool_token_amount_out,
                token_a_in_amount=token_a_in_amount,
                token_b_in_amount=token_b_in_amount,
            )

        if balance and (token_a_in_amount == 0 or token_b_in_amount == 0):
            return self._balanced_deposit_quote(ctx, token_a_in_amount, token_b_in_amount, slippage_bps)

        actual_a = actual_deposit_amount(
            token_a_in_amount,
            ctx.pool_info.token_a_amount,
            snapshot.pool_vault_a_lp,
            snapshot.vault_a_lp_supply,
            snapshot.vault_a_withdrawable,
        )
        actual_b = actual_deposit_amount(
            token_b_in_amount,
            ctx.pool_info.token_b_amount,
            snapshot.pool_vault_b_lp,
            snapshot.vault_b_lp_supply,
            snapshot.vault_b_withdrawable,
        )
        pool_token_amount_out = ctx.swap_curve.compute_imbalance_deposit(
            actual_a,
            actual_b,
            ctx.pool_info.token_a_amount,
            ctx.pool_info.token_b_amount,
            pool_lp_supply,
            ctx.pool.fees,
        )
        logger.debug(
            "imbalanced_deposit_quote",
            token_a_in_amount=token_a_in_amount,
            token_b_in_amount=token_b_in_amount,
            pool_token_amount_out=pool_token_amount_out,
        )
        return DepositQuote(
            pool_token_amount_out=pool_token_amount_out,
            min_pool_token_amount_out=get_min_amount_with_slippage(pool_token_amount_out, slippage_bps),
            token_a_in_amount=token_a_in_amount,
            token_b_in_amount=token_b_in_amount,
        )

    def _balanced_deposit_quote(
        self,
        ctx: QuoteContext,
        token_a_in_amount: int,
        token_b_in_amount: int,
        slippage_bps: int,
    ) -> DepositQuote:
        snapshot = ctx.snapshot
        pool_info = ctx.pool_info

        if token_a_in_amount == 0:
            pool_token_amount_out = share_from_amount(
                token_b_in_amount, pool_info.token_b_amount, snapshot.pool_lp_supply
            )
        else:
            pool_token_amount_out = share_from_amount(
                token_a_in_amount, pool_info.token_a_amount, snapshot.pool_lp_supply
            )
        buffered = get_min_amount_with_slippage(pool_token_amount_out, self.config.unlock_amount_buffer_bps)
        min_out = get_min_amount_with_slippage(buffered, slippage_bps)

        if ctx.pool.is_stable_pool:
            # Executed as an imbalanced deposit sized to the current ratio
            if token_a_in_amount == 0:
                token_a_in_amount = share_from_amount(
                    token_b_in_amount, pool_info.token_b_amount, pool_info.token_a_amount
                )
            else:
                token_b_in_amount = share_from_amount(
                    token_a_in_amount, pool_info.token_a_amount, pool_info.token_b_amount
                )
            logger.debug(
                "balanced_deposit_quote",
                stable=True,
                pool_token_amount_out=buffered,
                token_a_in_amount=token_a_in_amount,
                token_b_in_amount=token_b_in_amount,
            )
            return DepositQuote(
                pool_token_amount_out=buffered,
                min_pool_token_amount_out=min_out,
                token_a_in_amount=token_a_in_amount,
                token_b_in_amount=token_b_in_amount,
            )

        # Vault shares are what the program mints against: size both inputs
        # by round-tripping the LP amount through them, rounding up
        vault_a_lp = share_from_amount(
            pool_token_amount_out, snapshot.pool_lp_supply, snapshot.pool_vault_a_lp, Rounding.UP
        )
        vault_b_lp = share_from_amount(
            pool_token_amount_out, snapshot.pool_lp_supply, snapshot.pool_vault_b_lp, Rounding.UP
        )
        actual_a = amount_from_share(vault_a_lp, snapshot.vault_a_withdrawable, snapshot.vault_a_lp_supply, Rounding.UP)
        actual_b = amount_from_share(vault_b_lp, snapshot.vault_b_withdrawable, snapshot.vault_b_lp_supply, Rounding.UP)

        logger.debug(
            "balanced_deposit_quote",
            stable=False,
            pool_token_amount_out=buffered,
            token_a_in_amount=actual_a,
            token_b_in_amount=actual_b,
        )
        return DepositQuote(
            pool_token_amount_out=buffered,
            min_pool_token_amount_out=min_out,
            token_a_in_amount=get_max_amount_with_slippage(actual_a, slippage_bps),
            token_b_in_amount=get_max_amount_with_slippage(actual_b, slippage_bps),
        )

    # --- Withdraw ---

    def get_withdraw_quote(
        self,
        pool_token_amount: int,
        slippage_bps: int,
        token_mint: str | None = None,
    ) -> WithdrawQuote:
        """Quote tokens received for burning pool_token_amount LP.

        Without token_mint the withdrawal is balanced. With token_mint the
        whole amount is paid out in that token through the curve.

        Raises:
            InvalidInputError: token_mint is not one of the pool's tokens,
                pool_token_amount exceeds the LP supply, or bad slippage
            UnsupportedCurveOperation: Single-sided withdrawal from a constant
                product pool
        """
        self._check_slippage(slippage_bps)
        ctx = self._context
        if pool_token_amount > ctx.snapshot.pool_lp_supply:
            raise InvalidInputError(
                f"Cannot burn {pool_token_amount} LP, supply is {ctx.snapshot.pool_lp_supply}"
            )
        if token_mint is None:
            return self._balanced_withdraw_quote(ctx, pool_token_amount, slippage_bps)

        if not ctx.pool.has_mint(token_mint):
            raise InvalidInputError(f"Token {token_mint} not in pool")
        if pool_token_amount == 0:
            return WithdrawQuote(0, 0, 0, 0, 0)

        snapshot = ctx.snapshot
        withdrawing_a = token_mint == ctx.pool.token_a_mint
        trade_direction = TradeDirection.B_TO_A if withdrawing_a else TradeDirection.A_TO_B
        out_amount = ctx.swap_curve.compute_withdraw_one(
            pool_token_amount,
            snapshot.pool_lp_supply,
            ctx.pool_info.token_a_amount,
            ctx.pool_info.token_b_amount,
            ctx.pool.fees,
            trade_direction,
        )

        if withdrawing_a:
            vault_lp_supply, vault_total_amount = snapshot.vault_a_lp_supply, snapshot.vault_a_withdrawable
        else:
            vault_lp_supply, vault_total_amount = snapshot.vault_b_lp_supply, snapshot.vault_b_withdrawable
        # Burning whole vault shares loses the remainder
        vault_lp_to_burn = share_from_amount(out_amount, vault_total_amount, vault_lp_supply)
        real_out_amount = amount_from_share(vault_lp_to_burn, vault_total_amount, vault_lp_supply)
        min_real_out_amount = get_min_amount_with_slippage(real_out_amount, slippage_bps)

        logger.debug(
            "single_sided_withdraw_quote",
            token_mint=token_mint,
            pool_token_amount=pool_token_amount,
            out_amount=real_out_amount,
        )
        return WithdrawQuote(
            pool_token_amount_in=pool_token_amount,
            token_a_out_amount=real_out_amount if withdrawing_a else 0,
            token_b_out_amount=0 if withdrawing_a else real_out_amount,
            min_token_a_out_amount=min_real_out_amount if withdrawing_a else 0,
            min_token_b_out_amount=0 if withdrawing_a else min_real_out_amount,
        )

    def _balanced_withdraw_quote(self, ctx: QuoteContext, pool_token_amount: int, slippage_bps: int) -> WithdrawQuote:
        snapshot = ctx.snapshot
        vault_a_lp_burn = share_from_amount(pool_token_amount, snapshot.pool_lp_supply, snapshot.pool_vault_a_lp)
        vault_b_lp_burn = share_from_amount(pool_token_amount, snapshot.pool_lp_supply, snapshot.pool_vault_b_lp)
        token_a_out = amount_from_share(vault_a_lp_burn, snapshot.vault_a_withdrawable, snapshot.vault_a_lp_supply)
        token_b_out = amount_from_share(vault_b_lp_burn, snapshot.vault_b_withdrawable, snapshot.vault_b_lp_supply)

        logger.debug(
            "balanced_withdraw_quote",
            pool_token_amount=pool_token_amount,
            token_a_out_amount=token_a_out,
            token_b_out_amount=token_b_out,
        )
        return WithdrawQuote(
            pool_token_amount_in=pool_token_amount,
            token_a_out_amount=token_a_out,
            token_b_out_amount=token_b_out,
            min_token_a_out_amount=get_min_amount_with_slippage(token_a_out, slippage_bps),
            min_token_b_out_amount=get_min_amount_with_slippage(token_b_out, slippage_bps),
        )

    # --- Locked liquidity ---

    def get_lock_escrow(self, escrow: LockEscrow) -> LockEscrowInfo:
        """Escrow fees in LP and in pool tokens at the current virtual price."""
        unclaimed_fee = calculate_unclaimed_lock_escrow_fee(
            escrow.total_locked_amount,
            escrow.lp_per_token,
            escrow.unclaimed_fee_pending,
            self._context.pool_info.virtual_price_raw,
        )
        withdraw = self.get_withdraw_quote(unclaimed_fee, 0)
        return LockEscrowInfo(
            amount=escrow.total_locked_amount,
            claimed_fee_a=escrow.a_fee,
            claimed_fee_b=escrow.b_fee,
            unclaimed_fee_lp=unclaimed_fee,
            unclaimed_fee_a=withdraw.token_a_out_amount,
            unclaimed_fee_b=withdraw.token_b_out_amount,
        )

    def get_locked_lp_amount(self, locked_ata_amount: int = 0) -> int:
        """LP locked in escrows plus LP held by the pool's own LP account."""
        return (S(self._context.pool.total_locked_lp) + locked_ata_amount).value
