"""18-decimal fixed-point arithmetic for PMM curve math.

All values are non-negative integers scaled by 10^18 and every intermediate
product is carried in WideUint, so an operation either succeeds inside the
256-bit range or fails explicitly. There is no silent wraparound and no
clamping.

Two surfaces are provided, matching WideUint:
- Raising methods (add, sub, mul_down, mul_up, div_down, div_up, sqrt,
  reciprocal) and the operators + - * / raise CurveMathError subclasses.
- try_* / div_floor / div_ceil / mul_floor / mul_ceil return None on failure.

The persisted form is the scaled value as a 16-byte little-endian u128.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

from pmm.constants import DECIMAL_BYTES, HALF_WAD, PERCENT_SCALER, SCALE, UINT128_MAX, WAD
from pmm.errors import CurveMathError, DivisionByZero, Overflow
from pmm.math.wide_uint import W, WideUint

__all__ = [
    "FixedDecimal",
    "pack_decimal",
    "unpack_decimal",
]


class FixedDecimal:
    """18-decimal fixed-point number stored as a scaled int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000
    """

    ONE: ClassVar[int] = WAD

    __slots__ = ("_scaled",)
    _scaled: WideUint

    def __init__(self, value: int | WideUint) -> None:
        """Create FixedDecimal from a raw scaled value.

        Raises:
            Underflow: If value is negative
            Overflow: If value exceeds 2^256 - 1
        """
        self._scaled = W(value)

    @property
    def value(self) -> int:
        """Raw scaled value."""
        return self._scaled.value

    # --- Constructors ---

    @classmethod
    def zero(cls) -> FixedDecimal:
        return cls(0)

    @classmethod
    def one(cls) -> FixedDecimal:
        return cls(WAD)

    @classmethod
    def from_int(cls, i: int) -> FixedDecimal:
        """Create from a whole number (will be scaled by 10^18)."""
        return cls(W(i) * WAD)

    @classmethod
    def from_percent(cls, percent: int) -> FixedDecimal:
        """Create from a whole percentage, e.g. 50 -> 0.5."""
        return cls(W(percent) * PERCENT_SCALER)

    @classmethod
    def from_decimal(cls, d: Decimal) -> FixedDecimal:
        """Create from decimal (will be scaled by 10^18).

        Uses ROUND_HALF_UP for consistent rounding behavior.
        """
        if d < 0:
            raise ValueError(f"FixedDecimal.from_decimal requires non-negative input, got {d}")
        scaled = (d * WAD).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(scaled))

    # --- Conversion ---

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        return Decimal(self.value) / Decimal(WAD)

    def floor_int(self) -> int:
        """Whole part, discarding the fraction."""
        return self.value // WAD

    def ceil_int(self) -> int:
        """Whole part, rounding any fraction up."""
        return self._scaled.ceil_div(WAD).value

    def round_int(self) -> int:
        """Whole part, rounding half up."""
        return ((self._scaled + HALF_WAD) // WAD).value

    def is_zero(self) -> bool:
        return self.value == 0

    # --- Raising arithmetic ---

    def add(self, other: FixedDecimal) -> FixedDecimal:
        return FixedDecimal(self._scaled + other._scaled)

    def sub(self, other: FixedDecimal) -> FixedDecimal:
        """Subtract other from self. Raises Underflow if other > self."""
        return FixedDecimal(self._scaled - other._scaled)

    def mul_down(self, other: FixedDecimal) -> FixedDecimal:
        """Multiply with floor rounding: (a * b) // 10^18"""
        return FixedDecimal((self._scaled * other._scaled) // WAD)

    def mul_up(self, other: FixedDecimal) -> FixedDecimal:
        """Multiply with ceiling rounding."""
        return FixedDecimal((self._scaled * other._scaled).ceil_div(WAD))

    def div_down(self, other: FixedDecimal) -> FixedDecimal:
        """Divide with floor rounding: (a * 10^18) // b"""
        if other.is_zero():
            raise DivisionByZero(f"FixedDecimal division by zero: {self.value} / 0")
        return FixedDecimal((self._scaled * WAD) // other._scaled)

    def div_up(self, other: FixedDecimal) -> FixedDecimal:
        """Divide with ceiling rounding."""
        if other.is_zero():
            raise DivisionByZero(f"FixedDecimal division by zero: {self.value} / 0")
        return FixedDecimal((self._scaled * WAD).ceil_div(other._scaled))

    def mul_int(self, n: int) -> FixedDecimal:
        """Multiply by an unscaled integer."""
        return FixedDecimal(self._scaled * n)

    def sqrt(self) -> FixedDecimal:
        """Square root, rounded down to the last decimal place.

        sqrt(v / 10^18) * 10^18 == isqrt(v * 10^18)
        """
        return FixedDecimal((self._scaled * WAD).isqrt())

    def reciprocal(self) -> FixedDecimal:
        """1 / self, rounded down."""
        return FixedDecimal.one().div_down(self)

    def min(self, other: FixedDecimal) -> FixedDecimal:
        return self if self <= other else other

    def max(self, other: FixedDecimal) -> FixedDecimal:
        return self if self >= other else other

    __add__ = add
    __sub__ = sub
    __mul__ = mul_down
    __truediv__ = div_down

    # --- Checked arithmetic (None on failure) ---

    def try_add(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.add, other)

    def try_sub(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.sub, other)

    def try_mul(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.mul_down, other)

    def try_div(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.div_down, other)

    def mul_floor(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.mul_down, other)

    def mul_ceil(self, other: FixedDecimal) -> FixedDecimal | None:
        """Product rounded up to the next representable unit.

        Used wherever a charge to the trader must not be underquoted.
        """
        return _checked(self.mul_up, other)

    def div_floor(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.div_down, other)

    def div_ceil(self, other: FixedDecimal) -> FixedDecimal | None:
        return _checked(self.div_up, other)

    # --- Encoding ---

    def pack(self) -> bytes:
        """Encode the scaled value as 16 little-endian bytes.

        Raises:
            Overflow: If the scaled value does not fit in a u128
        """
        if self.value > UINT128_MAX:
            raise Overflow(f"FixedDecimal cannot be packed into u128: {self.value}")
        return self.value.to_bytes(DECIMAL_BYTES, "little")

    @classmethod
    def unpack(cls, data: bytes) -> FixedDecimal:
        """Decode 16 little-endian bytes into a FixedDecimal."""
        if len(data) != DECIMAL_BYTES:
            raise ValueError(f"Packed decimal must be {DECIMAL_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: FixedDecimal) -> bool:
        return self.value < other.value

    def __le__(self, other: FixedDecimal) -> bool:
        return self.value <= other.value

    def __gt__(self, other: FixedDecimal) -> bool:
        return self.value > other.value

    def __ge__(self, other: FixedDecimal) -> bool:
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"FixedDecimal({self.value})"

    def __str__(self) -> str:
        whole, frac = divmod(self.value, WAD)
        return f"{whole}.{frac:0{SCALE}d}"


def _checked(
    op: Callable[[FixedDecimal], FixedDecimal], other: FixedDecimal
) -> FixedDecimal | None:
    try:
        return op(other)
    except CurveMathError:
        return None


def pack_decimal(decimal: FixedDecimal) -> bytes:
    return decimal.pack()


def unpack_decimal(data: bytes) -> FixedDecimal:
    return FixedDecimal.unpack(data)
