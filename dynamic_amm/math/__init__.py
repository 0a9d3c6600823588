"""Mathematical utilities for the quote engine.

This package provides the integer primitives shared by every quote:
- Rounding-aware mul/div helpers
- Proportional share conversion (vault LP and pool LP)
"""

from dynamic_amm.math.fixed_point import Rounding, ceil_div, div_rounding, isqrt, mul_div
from dynamic_amm.math.share import actual_deposit_amount, amount_from_share, share_from_amount

__all__ = [
    "Rounding",
    "ceil_div",
    "div_rounding",
    "isqrt",
    "mul_div",
    "actual_deposit_amount",
    "amount_from_share",
    "share_from_amount",
]
