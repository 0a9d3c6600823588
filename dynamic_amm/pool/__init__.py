"""Pool state, fee schedule and reserve snapshots."""

from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.pool.slippage import get_max_amount_with_slippage, get_min_amount_with_slippage
from dynamic_amm.pool.snapshot import PoolInfo, ReserveSnapshot, calculate_pool_info

__all__ = [
    "PoolFees",
    "get_max_amount_with_slippage",
    "get_min_amount_with_slippage",
    "PoolInfo",
    "ReserveSnapshot",
    "calculate_pool_info",
]
