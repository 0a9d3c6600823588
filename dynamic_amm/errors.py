"""Error classes for the dynamic AMM quote engine.

Arithmetic failures (underflow, division by zero, integer-width overflow)
live in dynamic_amm.safe_int and derive from ArithmeticError.
"""


class DynamicAmmError(Exception):
    """Base error for quote engine operations."""

    pass


class InvalidInputError(DynamicAmmError, ValueError):
    """Caller supplied arguments that violate an operation's preconditions.

    Examples: a mint that is not one of the pool's two tokens, a balanced
    deposit with both amounts non-zero, a two-sided deposit into a constant
    product pool that already has liquidity.
    """

    pass


class UnsupportedCurveOperation(InvalidInputError):
    """The active swap curve does not implement the requested operation."""

    pass


class CurveConvergenceError(DynamicAmmError):
    """Stable curve Newton iteration did not converge within its step bound."""

    pass


class UndefinedPriceError(DynamicAmmError):
    """A share price was requested against a zero supply or zero amount.

    Only raised by the strict variants of the share converters; the default
    policy returns zero for an undefined price.
    """

    pass
