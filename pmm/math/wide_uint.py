"""256-bit unsigned integer with checked arithmetic.

WideUint absorbs intermediate overflow when large token quantities are
multiplied by prices: every value stays within [0, 2^256 - 1] and no operation
ever wraps.

Two surfaces are provided:
- Operators (+, -, *, //, %) raise Overflow, Underflow or DivisionByZero.
- checked_* methods return None instead of raising.

Usage pattern:
    from pmm.math.wide_uint import W

    def scaled_product(a: int, b: int, c: int) -> int:
        # Wrap at entry
        wa, wb, wc = W(a), W(b), W(c)

        # Natural arithmetic - automatically checked
        result = (wa * wb) // wc  # Raises if wc == 0 or the product overflows

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

import math

from pmm.constants import UINT256_MAX
from pmm.errors import DivisionByZero, Overflow, Underflow


class WideUint:
    """Immutable unsigned 256-bit integer.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | WideUint) -> None:
        """Create a WideUint from an integer or another WideUint.

        Args:
            value: Integer value to wrap, or WideUint to copy

        Raises:
            TypeError: If value is not an int or WideUint
            Underflow: If value is negative
            Overflow: If value exceeds 2^256 - 1
        """
        if isinstance(value, WideUint):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"WideUint requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"WideUint cannot be negative: {value}")
        if value > UINT256_MAX:
            raise Overflow(f"WideUint exceeds 2^256-1: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"WideUint({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: WideUint | int) -> WideUint:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds 2^256 - 1
        """
        other_val = _extract_value(other)
        result = self._value + other_val
        if result > UINT256_MAX:
            raise Overflow(f"Overflow: {self._value} + {other_val}")
        return WideUint(result)

    def __radd__(self, other: int) -> WideUint:
        return self.__add__(other)

    def __sub__(self, other: WideUint | int) -> WideUint:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return WideUint(result)

    def __rsub__(self, other: int) -> WideUint:
        return WideUint(other).__sub__(self)

    def __mul__(self, other: WideUint | int) -> WideUint:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds 2^256 - 1
        """
        other_val = _extract_value(other)
        result = self._value * other_val
        if result > UINT256_MAX:
            raise Overflow(f"Overflow: {self._value} * {other_val}")
        return WideUint(result)

    def __rmul__(self, other: int) -> WideUint:
        return self.__mul__(other)

    def __floordiv__(self, other: WideUint | int) -> WideUint:
        """Integer division (floor).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return WideUint(self._value // other_val)

    def __rfloordiv__(self, other: int) -> WideUint:
        return WideUint(other).__floordiv__(self)

    def __mod__(self, other: WideUint | int) -> WideUint:
        """Modulo operation.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Modulo by zero: {self._value} % 0")
        return WideUint(self._value % other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WideUint):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: WideUint | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: WideUint | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: WideUint | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: WideUint | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def to_int(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    # --- Named operations ---

    def ceil_div(self, other: WideUint | int) -> WideUint:
        """Ceiling division (rounds up).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        quotient, remainder = divmod(self._value, other_val)
        return WideUint(quotient + 1 if remainder else quotient)

    def isqrt(self) -> WideUint:
        """Floor of the integer square root."""
        return WideUint(math.isqrt(self._value))

    def min(self, other: WideUint | int) -> WideUint:
        """Return minimum of self and other."""
        return WideUint(min(self._value, _extract_value(other)))

    def max(self, other: WideUint | int) -> WideUint:
        """Return maximum of self and other."""
        return WideUint(max(self._value, _extract_value(other)))

    def checked_add(self, other: WideUint | int) -> WideUint | None:
        """Add, returning None on overflow instead of raising."""
        result = self._value + _extract_value(other)
        if result > UINT256_MAX:
            return None
        return WideUint(result)

    def checked_sub(self, other: WideUint | int) -> WideUint | None:
        """Subtract, returning None on underflow instead of raising."""
        result = self._value - _extract_value(other)
        if result < 0:
            return None
        return WideUint(result)

    def checked_mul(self, other: WideUint | int) -> WideUint | None:
        """Multiply, returning None on overflow instead of raising."""
        result = self._value * _extract_value(other)
        if result > UINT256_MAX:
            return None
        return WideUint(result)

    def checked_div(self, other: WideUint | int) -> WideUint | None:
        """Divide, returning None on zero instead of raising."""
        other_val = _extract_value(other)
        if other_val == 0:
            return None
        return WideUint(self._value // other_val)

    def checked_ceil_div(self, other: WideUint | int) -> WideUint | None:
        """Ceiling division, returning None on zero instead of raising."""
        if _extract_value(other) == 0:
            return None
        return self.ceil_div(other)

    @classmethod
    def zero(cls) -> WideUint:
        """Create a WideUint with value 0."""
        return cls(0)

    @classmethod
    def one(cls) -> WideUint:
        """Create a WideUint with value 1."""
        return cls(1)

    @classmethod
    def from_str(cls, s: str) -> WideUint:
        """Parse WideUint from a decimal string.

        Raises:
            ValueError: If string is not a valid integer
        """
        return cls(int(s))


def _extract_value(x: WideUint | int) -> int:
    """Extract integer value from WideUint or int."""
    if isinstance(x, WideUint):
        return x._value
    return x


# Convenience alias for concise code
W = WideUint
