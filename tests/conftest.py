"""Pytest configuration and fixtures."""

import pytest

from dynamic_amm.pool.state import PoolState
from dynamic_amm.quote.engine import PoolQuoter
from tests.helpers import make_fees, make_pool, make_quoter, make_stable_curve


@pytest.fixture
def fee_free_pool() -> PoolState:
    """Constant product USDC/USDT pool without fees."""
    return make_pool(fees=make_fees(trade_fee_bps=0))


@pytest.fixture
def stable_pool() -> PoolState:
    """Stable USDC/USDT pool (amp 100) without fees."""
    return make_pool(curve_type=make_stable_curve(amp=100), fees=make_fees(trade_fee_bps=0))


@pytest.fixture
def cp_quoter(fee_free_pool: PoolState) -> PoolQuoter:
    """Quoter for a fee-free constant product pool with 1M of each token."""
    return make_quoter(fee_free_pool)


@pytest.fixture
def stable_quoter(stable_pool: PoolState) -> PoolQuoter:
    """Quoter for a fee-free stable pool with 1M of each token and 1M LP."""
    return make_quoter(stable_pool)
