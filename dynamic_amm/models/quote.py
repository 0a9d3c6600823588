"""Pydantic models for quote requests and responses.

Every request carries the pool, a snapshot and the operation's parameters.
Responses serialize integer amounts as decimal strings.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dynamic_amm.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from dynamic_amm.curve.base import AccountMeta
from dynamic_amm.models.pool import LockEscrowModel, PoolStateModel, SnapshotModel
from dynamic_amm.models.types import U64, Pubkey, SlippageBps
from dynamic_amm.quote.engine import PoolQuoter
from dynamic_amm.quote.types import DepositQuote, LockEscrowInfo, SwapQuote, WithdrawQuote


class QuoteRequest(BaseModel):
    """Pool and snapshot shared by every quote request."""

    pool: PoolStateModel
    snapshot: SnapshotModel
    base_virtual_price: U64 | None = Field(
        default=None,
        alias="baseVirtualPrice",
        description="Live depeg base price, used when the cached one has expired.",
    )

    model_config = {"populate_by_name": True}

    def quoter(self, config: QuoteConfig = DEFAULT_QUOTE_CONFIG) -> PoolQuoter:
        """Build a PoolQuoter for this request's pool and snapshot."""
        return PoolQuoter(
            self.pool.to_domain(),
            self.snapshot.to_domain(),
            base_virtual_price=None if self.base_virtual_price is None else int(self.base_virtual_price),
            config=config,
        )


class SwapQuoteRequest(QuoteRequest):
    """Quote a swap of in_amount of in_mint."""

    in_mint: Pubkey = Field(alias="inMint")
    in_amount: U64 = Field(alias="inAmount")
    slippage_bps: SlippageBps = Field(alias="slippageBps")


class MaxSwapRequest(QuoteRequest):
    """Maximum input and output for mint."""

    mint: Pubkey


class DepositQuoteRequest(QuoteRequest):
    """Quote a deposit."""

    token_a_in_amount: U64 = Field(alias="tokenAInAmount")
    token_b_in_amount: U64 = Field(alias="tokenBInAmount")
    balance: bool = False
    slippage_bps: SlippageBps = Field(alias="slippageBps")


class WithdrawQuoteRequest(QuoteRequest):
    """Quote a withdrawal; token_mint selects a single-sided withdrawal."""

    pool_token_amount: U64 = Field(alias="poolTokenAmount")
    slippage_bps: SlippageBps = Field(alias="slippageBps")
    token_mint: Pubkey | None = Field(default=None, alias="tokenMint")


class LockEscrowRequest(QuoteRequest):
    """Value a lock escrow's fees."""

    escrow: LockEscrowModel
    locked_ata_amount: U64 = Field(default="0", alias="lockedAtaAmount")


class AccountMetaModel(BaseModel):
    """Extra account for the transaction builder."""

    pubkey: str
    is_signer: bool = Field(alias="isSigner")
    is_writable: bool = Field(alias="isWritable")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_domain(cls, meta: AccountMeta) -> AccountMetaModel:
        return cls(pubkey=meta.pubkey, is_signer=meta.is_signer, is_writable=meta.is_writable)


class SwapQuoteResponse(BaseModel):
    """Swap quote."""

    swap_in_amount: str = Field(alias="swapInAmount")
    swap_out_amount: str = Field(alias="swapOutAmount")
    min_swap_out_amount: str = Field(alias="minSwapOutAmount")
    fee: str
    protocol_fee: str = Field(alias="protocolFee")
    price_impact: str = Field(alias="priceImpact")
    remaining_accounts: list[AccountMetaModel] = Field(default_factory=list, alias="remainingAccounts")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: SwapQuote, remaining_accounts: list[AccountMeta]) -> SwapQuoteResponse:
        return cls(
            swap_in_amount=str(quote.swap_in_amount),
            swap_out_amount=str(quote.swap_out_amount),
            min_swap_out_amount=str(quote.min_swap_out_amount),
            fee=str(quote.fee),
            protocol_fee=str(quote.protocol_fee),
            price_impact=str(quote.price_impact),
            remaining_accounts=[AccountMetaModel.from_domain(meta) for meta in remaining_accounts],
        )


class MaxSwapResponse(BaseModel):
    """Maximum swap amounts for one mint."""

    mint: str
    max_swap_in_amount: str = Field(alias="maxSwapInAmount")
    max_swap_out_amount: str = Field(alias="maxSwapOutAmount")

    model_config = {"populate_by_name": True}


class DepositQuoteResponse(BaseModel):
    """Deposit quote."""

    pool_token_amount_out: str = Field(alias="poolTokenAmountOut")
    min_pool_token_amount_out: str = Field(alias="minPoolTokenAmountOut")
    token_a_in_amount: str = Field(alias="tokenAInAmount")
    token_b_in_amount: str = Field(alias="tokenBInAmount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: DepositQuote) -> DepositQuoteResponse:
        return cls(
            pool_token_amount_out=str(quote.pool_token_amount_out),
            min_pool_token_amount_out=str(quote.min_pool_token_amount_out),
            token_a_in_amount=str(quote.token_a_in_amount),
            token_b_in_amount=str(quote.token_b_in_amount),
        )


class WithdrawQuoteResponse(BaseModel):
    """Withdrawal quote."""

    pool_token_amount_in: str = Field(alias="poolTokenAmountIn")
    token_a_out_amount: str = Field(alias="tokenAOutAmount")
    token_b_out_amount: str = Field(alias="tokenBOutAmount")
    min_token_a_out_amount: str = Field(alias="minTokenAOutAmount")
    min_token_b_out_amount: str = Field(alias="minTokenBOutAmount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: WithdrawQuote) -> WithdrawQuoteResponse:
        return cls(
            pool_token_amount_in=str(quote.pool_token_amount_in),
            token_a_out_amount=str(quote.token_a_out_amount),
            token_b_out_amount=str(quote.token_b_out_amount),
            min_token_a_out_amount=str(quote.min_token_a_out_amount),
            min_token_b_out_amount=str(quote.min_token_b_out_amount),
        )


class LockEscrowResponse(BaseModel):
    """Lock escrow amounts and fees."""

    amount: str
    claimed_fee_a: str = Field(alias="claimedFeeA")
    claimed_fee_b: str = Field(alias="claimedFeeB")
    unclaimed_fee_lp: str = Field(alias="unclaimedFeeLp")
    unclaimed_fee_a: str = Field(alias="unclaimedFeeA")
    unclaimed_fee_b: str = Field(alias="unclaimedFeeB")
    locked_lp_amount: str = Field(alias="lockedLpAmount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_info(cls, info: LockEscrowInfo, locked_lp_amount: int) -> LockEscrowResponse:
        return cls(
            amount=str(info.amount),
            claimed_fee_a=str(info.claimed_fee_a),
            claimed_fee_b=str(info.claimed_fee_b),
            unclaimed_fee_lp=str(info.unclaimed_fee_lp),
            unclaimed_fee_a=str(info.unclaimed_fee_a),
            unclaimed_fee_b=str(info.unclaimed_fee_b),
            locked_lp_amount=str(locked_lp_amount),
        )
