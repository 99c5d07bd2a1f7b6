"""Shared scalar types for pool snapshots.

Scaled decimals cross the model boundary as decimal strings of the raw
18-decimal integer, so no precision is lost to JSON numbers.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pmm.constants import UINT128_MAX, UINT256_MAX


def _validate_uint(value: Any, bits: int, max_value: int) -> str:
    name = f"Uint{bits}"

    # Accept int directly
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"{name} cannot be negative: {value}")
        if value > max_value:
            raise ValueError(f"{name} overflow: {value} > 2^{bits}-1")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"{name} must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"{name} must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{name} overflow: {value} > 2^{bits}-1")

    return value


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    return _validate_uint(value, 256, UINT256_MAX)


def validate_uint128(value: Any) -> str:
    """Validate that a value fits the persisted 16-byte decimal.

    Raises:
        ValueError: If value is not a non-negative integer within u128 range
    """
    return _validate_uint(value, 128, UINT128_MAX)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Raw scaled FixedDecimal value as decimal string (validated to u128)
Uint128 = Annotated[
    str,
    BeforeValidator(validate_uint128),
    Field(description="18-decimal scaled value as decimal string"),
]
