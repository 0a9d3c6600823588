"""Command-line quotes against a pool document.

The pool document is a JSON file with "pool" and "snapshot" objects (the
same shape the HTTP service accepts), plus an optional "baseVirtualPrice"
and, for lock-escrow quotes, an "escrow" object.

Examples:
  dynamic-amm-quote pool.json swap --in-mint <MINT> --amount 1000000 --slippage-bps 50
  dynamic-amm-quote pool.json max-swap --mint <MINT>
  dynamic-amm-quote pool.json deposit --token-a 1000 --token-b 0 --balance
  dynamic-amm-quote pool.json withdraw --lp 500 --mint <MINT>
  dynamic-amm-quote pool.json lock-escrow
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from dynamic_amm.config import QuoteConfig
from dynamic_amm.errors import DynamicAmmError
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


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamic-amm-quote",
        description="Quote swaps, deposits, withdrawals and lock-escrow fees for a dynamic AMM pool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("document", type=Path, help="Pool document JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="operation", required=True)

    swap = subparsers.add_parser("swap", help="Quote a swap")
    swap.add_argument("--in-mint", required=True, help="Mint of the input token")
    swap.add_argument("--amount", required=True, help="Input amount in base units")
    swap.add_argument("--slippage-bps", type=int, default=0, help="Slippage tolerance (bps)")

    max_swap = subparsers.add_parser("max-swap", help="Maximum swap input and output for a mint")
    max_swap.add_argument("--mint", required=True, help="Token mint")

    deposit = subparsers.add_parser("deposit", help="Quote a deposit")
    deposit.add_argument("--token-a", default="0", help="Token A amount in base units")
    deposit.add_argument("--token-b", default="0", help="Token B amount in base units")
    deposit.add_argument("--balance", action="store_true", help="Derive the other side from the pool ratio")
    deposit.add_argument("--slippage-bps", type=int, default=0, help="Slippage tolerance (bps)")

    withdraw = subparsers.add_parser("withdraw", help="Quote a withdrawal")
    withdraw.add_argument("--lp", required=True, help="LP amount to burn")
    withdraw.add_argument("--mint", default=None, help="Withdraw only this token")
    withdraw.add_argument("--slippage-bps", type=int, default=0, help="Slippage tolerance (bps)")

    lock = subparsers.add_parser("lock-escrow", help="Value a lock escrow's fees")
    lock.add_argument("--locked-ata-amount", default="0", help="LP held by the pool's own LP account")

    return parser


def run_quote(document: dict[str, Any], args: argparse.Namespace, config: QuoteConfig) -> BaseModel:
    """Run the quote selected by args against a parsed pool document."""
    if args.operation == "swap":
        swap_request = SwapQuoteRequest.model_validate(
            {**document, "inMint": args.in_mint, "inAmount": args.amount, "slippageBps": args.slippage_bps}
        )
        quoter = swap_request.quoter(config)
        quote = quoter.get_swap_quote(swap_request.in_mint, int(swap_request.in_amount), swap_request.slippage_bps)
        return SwapQuoteResponse.from_quote(quote, quoter.get_remaining_accounts())

    if args.operation == "max-swap":
        max_request = MaxSwapRequest.model_validate({**document, "mint": args.mint})
        quoter = max_request.quoter(config)
        return MaxSwapResponse(
            mint=max_request.mint,
            max_swap_in_amount=str(quoter.get_max_swap_in_amount(max_request.mint)),
            max_swap_out_amount=str(quoter.get_max_swap_out_amount(max_request.mint)),
        )

    if args.operation == "deposit":
        deposit_request = DepositQuoteRequest.model_validate(
            {
                **document,
                "tokenAInAmount": args.token_a,
                "tokenBInAmount": args.token_b,
                "balance": args.balance,
                "slippageBps": args.slippage_bps,
            }
        )
        deposit_quote = deposit_request.quoter(config).get_deposit_quote(
            int(deposit_request.token_a_in_amount),
            int(deposit_request.token_b_in_amount),
            deposit_request.balance,
            deposit_request.slippage_bps,
        )
        return DepositQuoteResponse.from_quote(deposit_quote)

    if args.operation == "withdraw":
        withdraw_request = WithdrawQuoteRequest.model_validate(
            {**document, "poolTokenAmount": args.lp, "tokenMint": args.mint, "slippageBps": args.slippage_bps}
        )
        withdraw_quote = withdraw_request.quoter(config).get_withdraw_quote(
            int(withdraw_request.pool_token_amount),
            withdraw_request.slippage_bps,
            withdraw_request.token_mint,
        )
        return WithdrawQuoteResponse.from_quote(withdraw_quote)

    lock_request = LockEscrowRequest.model_validate({**document, "lockedAtaAmount": args.locked_ata_amount})
    quoter = lock_request.quoter(config)
    info = quoter.get_lock_escrow(lock_request.escrow.to_domain())
    return LockEscrowResponse.from_info(info, quoter.get_locked_lp_amount(int(lock_request.locked_ata_amount)))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    if not args.document.exists():
        logger.error("document_not_found", path=str(args.document))
        return 1

    with open(args.document) as f:
        document = json.load(f)

    try:
        response = run_quote(document, args, QuoteConfig.from_env())
    except ValidationError as err:
        logger.error("invalid_document", path=str(args.document), errors=err.error_count())
        print(err, file=sys.stderr)
        return 2
    except (DynamicAmmError, ArithmeticError) as err:
        logger.error("quote_failed", operation=args.operation, error_type=type(err).__name__, error=str(err))
        return 2

    print(response.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
