"""Rounding-aware integer division helpers.

Every division in the quote engine names its rounding direction:
- Rounding.DOWN for amounts paid out to the user
- Rounding.UP for amounts the user must supply

Products are formed in the arbitrary-precision domain (via SafeInt) before
the single division, so mul_div never loses precision to an intermediate
truncation.
"""

from __future__ import annotations

import math
from enum import Enum

from dynamic_amm.safe_int import DivisionByZero, S, SafeInt

__all__ = [
    "Rounding",
    "div_rounding",
    "mul_div",
    "ceil_div",
    "isqrt",
]


class Rounding(str, Enum):
    """Direction applied to the remainder of an integer division."""

    DOWN = "down"
    UP = "up"


def div_rounding(numerator: SafeInt | int, denominator: SafeInt | int, rounding: Rounding = Rounding.DOWN) -> int:
    """Divide two non-negative integers with explicit rounding.

    Raises:
        DivisionByZero: If denominator is zero
    """
    num = S(numerator)
    if rounding is Rounding.UP:
        return num.ceiling_div(denominator).value
    return (num // denominator).value


def mul_div(
    a: SafeInt | int,
    b: SafeInt | int,
    denominator: SafeInt | int,
    rounding: Rounding = Rounding.DOWN,
) -> int:
    """Compute a * b / denominator exactly, then round.

    Raises:
        DivisionByZero: If denominator is zero
    """
    return div_rounding(S(a) * S(b), denominator, rounding)


def ceil_div(numerator: SafeInt | int, denominator: SafeInt | int) -> int:
    """Ceiling division of non-negative integers."""
    if S(denominator) == 0:
        raise DivisionByZero(f"Ceiling division by zero: {int(numerator)}")
    return div_rounding(numerator, denominator, Rounding.UP)


def isqrt(value: SafeInt | int) -> int:
    """Integer square root, rounding down."""
    return math.isqrt(S(value).value)
