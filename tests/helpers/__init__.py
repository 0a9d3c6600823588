"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token mints and the default snapshot time
- factories: Pool, snapshot and quoter factory functions
"""

from tests.helpers.constants import BONK, LP_MINT, MSOL, NOW, STAKE_POOL, STSOL, USDC, USDT, WSOL
from tests.helpers.factories import (
    make_fees,
    make_pool,
    make_pool_document,
    make_quoter,
    make_snapshot,
    make_stable_curve,
)

__all__ = [
    # Constants
    "USDC",
    "USDT",
    "WSOL",
    "MSOL",
    "STSOL",
    "BONK",
    "LP_MINT",
    "STAKE_POOL",
    "NOW",
    # Factories
    "make_fees",
    "make_pool",
    "make_pool_document",
    "make_quoter",
    "make_snapshot",
    "make_stable_curve",
]
