"""Fixed-width arithmetic for the PMM curve.

This package provides the numeric primitives the curve is built on:
- WideUint: 256-bit unsigned integer with checked arithmetic
- FixedDecimal: 18-decimal fixed-point number on top of WideUint
"""

from pmm.math.fixed_point import FixedDecimal, pack_decimal, unpack_decimal
from pmm.math.wide_uint import W, WideUint

__all__ = ["FixedDecimal", "W", "WideUint", "pack_decimal", "unpack_decimal"]
