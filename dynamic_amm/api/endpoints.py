"""API endpoints for the quote service."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from dynamic_amm.config import QuoteConfig
from dynamic_amm.errors import DynamicAmmError, InvalidInputError
from dynamic_amm.models.quote import (
    DepositQuoteRequest,
    DepositQuoteResponse,
    LockEscrowRequest,
    LockEscrowResponse,
    MaxSwapRequest,
    MaxSwapResponse,
    SwapQuoteRequest,
    SwapQuoteResponse,
    WithdrawQuoteRequest,
    WithdrawQuoteResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/quote")


def get_config() -> QuoteConfig:
    """Dependency provider for the quote configuration.

    Override this in tests to inject a custom config:
        app.dependency_overrides[get_config] = lambda: QuoteConfig(...)
    """
    return QuoteConfig.from_env()


def _quote_error(operation: str, err: Exception) -> HTTPException:
    """Map a quote failure to an HTTP error.

    - InvalidInputError: 400 (caller can fix the request)
    - Other engine and arithmetic errors: 422 (request is well-formed but
      the pool state cannot be quoted)
    """
    status_code = 400 if isinstance(err, InvalidInputError) else 422
    logger.warning(
        "quote_failed",
        operation=operation,
        error_type=type(err).__name__,
        error=str(err),
        status_code=status_code,
    )
    return HTTPException(status_code=status_code, detail=str(err))


@router.post("/swap", response_model_exclude_none=True)
def swap_quote(request: SwapQuoteRequest, config: QuoteConfig = Depends(get_config)) -> SwapQuoteResponse:
    """Quote a swap through the pool."""
    try:
        quoter = request.quoter(config)
        quote = quoter.get_swap_quote(request.in_mint, int(request.in_amount), request.slippage_bps)
        remaining_accounts = quoter.get_remaining_accounts()
    except (DynamicAmmError, ArithmeticError) as err:
        raise _quote_error("swap", err) from err

    logger.info("swap_quoted", in_mint=request.in_mint, out_amount=quote.swap_out_amount)
    return SwapQuoteResponse.from_quote(quote, remaining_accounts)


@router.post("/max-swap")
def max_swap(request: MaxSwapRequest, config: QuoteConfig = Depends(get_config)) -> MaxSwapResponse:
    """Maximum input and output amounts for a mint."""
    try:
        quoter = request.quoter(config)
        max_in = quoter.get_max_swap_in_amount(request.mint)
        max_out = quoter.get_max_swap_out_amount(request.mint)
    except (DynamicAmmError, ArithmeticError) as err:
        raise _quote_error("max_swap", err) from err

    return MaxSwapResponse(mint=request.mint, max_swap_in_amount=str(max_in), max_swap_out_amount=str(max_out))


@router.post("/deposit")
def deposit_quote(request: DepositQuoteRequest, config: QuoteConfig = Depends(get_config)) -> DepositQuoteResponse:
    """Quote LP minted for a deposit."""
    try:
        quote = request.quoter(config).get_deposit_quote(
            int(request.token_a_in_amount),
            int(request.token_b_in_amount),
            request.balance,
            request.slippage_bps,
        )
    except (DynamicAmmError, ArithmeticError) as err:
        raise _quote_error("deposit", err) from err

    logger.info("deposit_quoted", pool_token_amount_out=quote.pool_token_amount_out)
    return DepositQuoteResponse.from_quote(quote)


@router.post("/withdraw")
def withdraw_quote(request: WithdrawQuoteRequest, config: QuoteConfig = Depends(get_config)) -> WithdrawQuoteResponse:
    """Quote tokens received for burning LP."""
    try:
        quote = request.quoter(config).get_withdraw_quote(
            int(request.pool_token_amount),
            request.slippage_bps,
            request.token_mint,
        )
    except (DynamicAmmError, ArithmeticError) as err:
        raise _quote_error("withdraw", err) from err

    logger.info(
        "withdraw_quoted",
        token_a_out_amount=quote.token_a_out_amount,
        token_b_out_amount=quote.token_b_out_amount,
    )
    return WithdrawQuoteResponse.from_quote(quote)


@router.post("/lock-escrow")
def lock_escrow(request: LockEscrowRequest, config: QuoteConfig = Depends(get_config)) -> LockEscrowResponse:
    """Value a lock escrow's claimed and unclaimed fees."""
    try:
        quoter = request.quoter(config)
        info = quoter.get_lock_escrow(request.escrow.to_domain())
        locked_lp_amount = quoter.get_locked_lp_amount(int(request.locked_ata_amount))
    except (DynamicAmmError, ArithmeticError) as err:
        raise _quote_error("lock_escrow", err) from err

    return LockEscrowResponse.from_info(info, locked_lp_amount)
