"""Tests for FixedDecimal 18-decimal fixed-point arithmetic."""

from decimal import Decimal

import pytest

from pmm.constants import UINT128_MAX, UINT256_MAX, WAD
from pmm.errors import DivisionByZero, Overflow, Underflow
from pmm.math.fixed_point import FixedDecimal, pack_decimal, unpack_decimal


class TestFixedDecimalConstruction:
    """Tests for FixedDecimal constructors."""

    def test_from_int(self):
        assert FixedDecimal.from_int(3).value == 3 * WAD

    def test_from_percent(self):
        """50 percent is 0.5."""
        assert FixedDecimal.from_percent(50).value == WAD // 2

    def test_from_decimal(self):
        assert FixedDecimal.from_decimal(Decimal("1.5")).value == WAD * 3 // 2

    def test_from_decimal_rounds_half_up(self):
        """Digits past the 18th place round half up."""
        assert FixedDecimal.from_decimal(Decimal("0.0000000000000000005")).value == 1
        assert FixedDecimal.from_decimal(Decimal("0.0000000000000000004")).value == 0

    def test_from_decimal_negative_raises(self):
        with pytest.raises(ValueError) as exc_info:
            FixedDecimal.from_decimal(Decimal("-1"))
        assert "non-negative" in str(exc_info.value)

    def test_negative_raw_value_raises(self):
        with pytest.raises(Underflow):
            FixedDecimal(-1)

    def test_zero_and_one(self):
        assert FixedDecimal.zero().is_zero()
        assert FixedDecimal.one().value == FixedDecimal.ONE == WAD


class TestFixedDecimalConversion:
    """Tests for conversions out of fixed point."""

    def test_to_decimal(self):
        assert FixedDecimal(WAD * 3 // 2).to_decimal() == Decimal("1.5")

    @pytest.mark.parametrize(
        "raw,floor,ceil,rounded",
        [
            (0, 0, 0, 0),
            (WAD, 1, 1, 1),
            (WAD + 1, 1, 2, 1),
            (WAD * 3 // 2, 1, 2, 2),
            (WAD * 3 // 2 - 1, 1, 2, 1),
        ],
    )
    def test_whole_units(self, raw, floor, ceil, rounded):
        value = FixedDecimal(raw)
        assert value.floor_int() == floor
        assert value.ceil_int() == ceil
        assert value.round_int() == rounded

    def test_str(self):
        assert str(FixedDecimal(WAD * 3 // 2)) == "1.500000000000000000"
        assert str(FixedDecimal(1)) == "0.000000000000000001"

    def test_repr(self):
        assert repr(FixedDecimal(5)) == "FixedDecimal(5)"


class TestFixedDecimalArithmetic:
    """Tests for the raising arithmetic surface."""

    def test_add_sub(self):
        a = FixedDecimal.from_int(5)
        b = FixedDecimal.from_int(3)
        assert (a + b).value == 8 * WAD
        assert (a - b).value == 2 * WAD

    def test_sub_underflow_raises(self):
        with pytest.raises(Underflow):
            FixedDecimal.from_int(3) - FixedDecimal.from_int(5)

    def test_mul_down_and_up(self):
        """1/3 * 1 unit rounds down with mul_down and up with mul_up."""
        third = FixedDecimal.one().div_down(FixedDecimal.from_int(3))
        three = FixedDecimal(3)
        assert third.mul_down(three).value == 0
        assert third.mul_up(three).value == 1

    def test_div_down_and_up(self):
        one = FixedDecimal.one()
        three = FixedDecimal.from_int(3)
        assert one.div_down(three).value == 333333333333333333
        assert one.div_up(three).value == 333333333333333334

    def test_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            FixedDecimal.one() / FixedDecimal.zero()
        with pytest.raises(DivisionByZero):
            FixedDecimal.one().div_up(FixedDecimal.zero())

    def test_mul_overflow_raises(self):
        big = FixedDecimal(UINT256_MAX // 2)
        with pytest.raises(Overflow):
            big * FixedDecimal.from_int(3)

    def test_mul_int(self):
        assert FixedDecimal.from_int(2).mul_int(4).value == 8 * WAD

    @pytest.mark.parametrize(
        "value,expected",
        [
            (FixedDecimal.from_int(4), 2 * WAD),
            (FixedDecimal.from_int(2), 1414213562373095048),
            (FixedDecimal.zero(), 0),
            (FixedDecimal.from_decimal(Decimal("0.25")), WAD // 2),
        ],
    )
    def test_sqrt(self, value, expected):
        """sqrt is the floor of the exact root at 18 decimals."""
        assert value.sqrt().value == expected

    def test_reciprocal(self):
        assert FixedDecimal.from_int(100).reciprocal().value == WAD // 100
        with pytest.raises(DivisionByZero):
            FixedDecimal.zero().reciprocal()

    def test_min_max(self):
        a = FixedDecimal.from_int(1)
        b = FixedDecimal.from_int(2)
        assert a.min(b) == a
        assert a.max(b) == b


class TestFixedDecimalChecked:
    """Tests for the None-on-failure surface."""

    def test_try_ops_success(self):
        a = FixedDecimal.from_int(6)
        b = FixedDecimal.from_int(3)
        assert a.try_add(b) == FixedDecimal.from_int(9)
        assert a.try_sub(b) == FixedDecimal.from_int(3)
        assert a.try_mul(b) == FixedDecimal.from_int(18)
        assert a.try_div(b) == FixedDecimal.from_int(2)

    def test_try_ops_absent(self):
        a = FixedDecimal.from_int(3)
        assert a.try_sub(FixedDecimal.from_int(6)) is None
        assert a.try_div(FixedDecimal.zero()) is None
        assert FixedDecimal(UINT256_MAX).try_add(FixedDecimal(1)) is None
        assert FixedDecimal(UINT256_MAX).try_mul(FixedDecimal.from_int(2)) is None

    def test_div_floor_and_ceil_absent_on_zero(self):
        assert FixedDecimal.one().div_floor(FixedDecimal.zero()) is None
        assert FixedDecimal.one().div_ceil(FixedDecimal.zero()) is None

    @pytest.mark.parametrize(
        "a,b",
        [
            (7 * WAD, 3 * WAD),
            (WAD, 3 * WAD),
            (123456789, 987654321),
            (10**30 + 7, 10**18 + 1),
            (5, 10**36),
        ],
    )
    def test_floor_law(self, a, b):
        """div_floor(a, b) * b <= a < div_floor(a, b) * b + b, in raw units."""
        q = FixedDecimal(a).div_floor(FixedDecimal(b))
        assert q is not None
        # Exact quotient is a * WAD / b
        assert q.value * b <= a * WAD < q.value * b + b

    @pytest.mark.parametrize(
        "a,b",
        [
            (WAD // 3, 3),
            (7, 7),
            (10**20 + 1, 10**17 + 3),
            (WAD, WAD),
        ],
    )
    def test_ceiling_law(self, a, b):
        """mul_ceil is the exact product rounded up to the next unit."""
        product = a * b  # exact value is product / WAD
        result = FixedDecimal(a).mul_ceil(FixedDecimal(b))
        assert result is not None
        assert result.value * WAD >= product
        if product % WAD:
            assert (result.value - 1) * WAD < product
        else:
            assert result.value * WAD == product

    def test_mul_floor_rounds_down(self):
        result = FixedDecimal(WAD // 3).mul_floor(FixedDecimal(3))
        assert result == FixedDecimal.zero()


class TestFixedDecimalEncoding:
    """Tests for the 16-byte little-endian encoding."""

    @pytest.mark.parametrize("raw", [0, 1, WAD, 2**64 + 5, UINT128_MAX])
    def test_round_trip(self, raw):
        value = FixedDecimal(raw)
        packed = value.pack()
        assert len(packed) == 16
        assert FixedDecimal.unpack(packed) == value

    def test_little_endian_layout(self):
        assert FixedDecimal(1).pack() == b"\x01" + b"\x00" * 15
        assert FixedDecimal(WAD).pack() == WAD.to_bytes(16, "little")

    def test_pack_above_u128_raises(self):
        with pytest.raises(Overflow):
            FixedDecimal(UINT128_MAX + 1).pack()

    @pytest.mark.parametrize("data", [b"", b"\x00" * 15, b"\x00" * 17])
    def test_unpack_wrong_length_raises(self, data):
        with pytest.raises(ValueError):
            FixedDecimal.unpack(data)

    def test_module_helpers(self):
        value = FixedDecimal.from_int(42)
        assert unpack_decimal(pack_decimal(value)) == value


class TestFixedDecimalComparison:
    """Tests for equality, ordering and hashing."""

    def test_ordering(self):
        assert FixedDecimal(1) < FixedDecimal(2)
        assert FixedDecimal(2) >= FixedDecimal(2)

    def test_equality_with_other_types(self):
        assert FixedDecimal(1) != 1

    def test_hash(self):
        assert {FixedDecimal(5): "v"}[FixedDecimal(5)] == "v"
