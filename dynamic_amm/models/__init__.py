"""Pydantic models for pool documents and quote payloads."""

from dynamic_amm.models.pool import (
    LockEscrowModel,
    PoolFeesModel,
    PoolStateModel,
    SnapshotModel,
    VaultModel,
)
from dynamic_amm.models.quote import (
    DepositQuoteRequest,
    DepositQuoteResponse,
    LockEscrowRequest,
    LockEscrowResponse,
    MaxSwapRequest,
    MaxSwapResponse,
    QuoteRequest,
    SwapQuoteRequest,
    SwapQuoteResponse,
    WithdrawQuoteRequest,
    WithdrawQuoteResponse,
)
from dynamic_amm.models.types import U64, U128, Pubkey, SlippageBps

__all__ = [
    # Types
    "Pubkey",
    "SlippageBps",
    "U64",
    "U128",
    # Pool documents
    "LockEscrowModel",
    "PoolFeesModel",
    "PoolStateModel",
    "SnapshotModel",
    "VaultModel",
    # Requests
    "QuoteRequest",
    "SwapQuoteRequest",
    "MaxSwapRequest",
    "DepositQuoteRequest",
    "WithdrawQuoteRequest",
    "LockEscrowRequest",
    # Responses
    "SwapQuoteResponse",
    "MaxSwapResponse",
    "DepositQuoteResponse",
    "WithdrawQuoteResponse",
    "LockEscrowResponse",
]
