"""Shared type definitions for pool and quote payloads.

Integers travel as decimal strings (JSON numbers lose precision past 2^53)
and are range-checked against the on-chain integer width.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from dynamic_amm.safe_int import U64_MAX, U128_MAX


def _validate_unsigned(value: Any, max_value: int, name: str) -> str:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError(f"{name} must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"{name} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"{name} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{name} overflow: {value}")

    return str(int_value)


def validate_u64(value: Any) -> str:
    """Validate a u64 given as int or decimal string; returns the decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    return _validate_unsigned(value, U64_MAX, "U64")


def validate_u128(value: Any) -> str:
    """Validate a u128 given as int or decimal string; returns the decimal string."""
    return _validate_unsigned(value, U128_MAX, "U128")


# 64-bit unsigned integer as decimal string (validated)
U64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# 128-bit unsigned integer as decimal string (validated)
U128 = Annotated[
    str,
    BeforeValidator(validate_u128),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Base58 account address (32-byte public key)
Pubkey = Annotated[str, Field(pattern=r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")]

# Slippage tolerance in basis points
SlippageBps = Annotated[int, Field(ge=0, le=10_000, description="Slippage tolerance in basis points")]
