"""Shared type definitions for request and response models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm.constants import MAX_FEE_RATE_BPS, U64_MAX


def validate_uint64(value: Any) -> str:
    """Validate that a value is a valid uint64 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint64 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within uint64 range
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError("Uint64 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'")
        int_value = int(value)
    else:
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if int_value > U64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")

    return str(int_value)


# 64-bit unsigned integer as decimal string (validated)
Uint64 = Annotated[
    str,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# Opaque asset identifier
AssetId = Annotated[str, Field(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.\-]+$")]

# Account / caller identity
AccountId = Annotated[str, Field(min_length=1, max_length=128)]

# Fee rate in basis points (range checked by the platform, which raises InvalidFeeRate)
BasisPoints = Annotated[int, Field(description=f"Fee rate in basis points, 0 to {MAX_FEE_RATE_BPS}")]
