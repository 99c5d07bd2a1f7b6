"""Quadratic solver for the PMM price-impact equation.

Trading along the curve satisfies

    i * deltaB = (Q2 - Q1) * (1 - k + k * Q0^2 / Q1 / Q2)

where Q0 is the target reserve, Q1 the reserve before the trade, Q2 the
reserve after it, i the oracle price and k the curvature. Given Q1 and
i * deltaB this is a quadratic in Q2:

    a * Q2^2 + b * Q2 + c = 0
    a = 1 - k
    -b = (1 - k) * Q1 - k * Q0^2 / Q1 + i * deltaB
    c = -k * Q0^2

    Q2 = (-b + sqrt(b^2 + 4 * (1 - k) * k * Q0^2)) / (2 * (1 - k))

The other root is negative and is discarded. The sign of i * deltaB is given
separately by ``increasing`` because all magnitudes are unsigned.

The inverse problem (Q2 = Q0, solve for Q0 given Q1 and deltaB) has the
closed form

    Q0 = Q1 * (1 + (sqrt(1 + 4 * k * i * deltaB / Q1) - 1) / (2 * k))

k = 0 and k = 1 are handled as separate closed forms: 1 - k vanishes in the
quadratic denominator at k = 1, and k vanishes in the target premium at k = 0.
"""

from __future__ import annotations

from pmm.errors import OutOfDomain, absent_on_fault
from pmm.math.fixed_point import FixedDecimal

ONE = FixedDecimal.one()


def trade_reserve(
    target: FixedDecimal,
    reserve_before: FixedDecimal,
    oracle_notional: FixedDecimal,
    increasing: bool,
    k: FixedDecimal,
) -> FixedDecimal:
    """Reserve level after a trade worth ``oracle_notional`` at the oracle price.

    Args:
        target: Target reserve Q0 of the side being solved
        reserve_before: Reserve Q1 before the trade
        oracle_notional: |i * deltaB|, the trade valued at the oracle price
        increasing: True if the trade adds to the reserve (Q2 >= Q1)
        k: Curvature in [0, 1]

    Returns:
        Reserve Q2 after the trade. Rounded down when increasing and up when
        decreasing, so the difference |Q2 - Q1| never favours the trader on
        the receiving side.

    Raises:
        OutOfDomain: If k > 1, if the trade would drain the reserve, or if
            the root falls outside [0, 2 * target]
        CurveMathError: On overflow or division by zero
    """
    if k > ONE:
        raise OutOfDomain(f"Curvature above one: {k}")
    if oracle_notional.is_zero():
        return reserve_before

    if k.is_zero():
        q2 = _pegged_reserve(reserve_before, oracle_notional, increasing)
    elif k == ONE:
        q2 = _constant_product_reserve(target, reserve_before, oracle_notional, increasing)
    else:
        q2 = _quadratic_reserve(target, reserve_before, oracle_notional, increasing, k)

    if q2 > target.mul_int(2):
        raise OutOfDomain(f"Reserve root {q2} exceeds twice the target {target}")

    # Rounding can leave a residue of one unit on the wrong side of Q1
    if increasing:
        return q2.max(reserve_before)
    return q2.min(reserve_before)


def _pegged_reserve(
    reserve_before: FixedDecimal,
    oracle_notional: FixedDecimal,
    increasing: bool,
) -> FixedDecimal:
    if increasing:
        return reserve_before + oracle_notional
    if oracle_notional > reserve_before:
        raise OutOfDomain(f"Trade of {oracle_notional} drains reserve {reserve_before}")
    return reserve_before - oracle_notional


def _constant_product_reserve(
    target: FixedDecimal,
    reserve_before: FixedDecimal,
    oracle_notional: FixedDecimal,
    increasing: bool,
) -> FixedDecimal:
    # With k == 1: i * deltaB = (Q2 - Q1) * Q0^2 / Q1 / Q2
    target_squared = target * target
    shift = oracle_notional * reserve_before
    if increasing:
        # Q2 = Q1 * Q0^2 / (Q0^2 - i * deltaB * Q1)
        if shift >= target_squared:
            raise OutOfDomain(f"Trade of {oracle_notional} has no finite reserve root")
        return (reserve_before * target_squared).div_down(target_squared - shift)
    # Q2 = Q1 / (1 + i * deltaB * Q1 / Q0^2)
    temp = shift / target_squared
    return reserve_before.div_up(ONE + temp)


def _quadratic_reserve(
    target: FixedDecimal,
    reserve_before: FixedDecimal,
    oracle_notional: FixedDecimal,
    increasing: bool,
    k: FixedDecimal,
) -> FixedDecimal:
    one_minus_k = ONE - k

    # -b = (1-k)Q1 - kQ0^2/Q1 + i*deltaB, split into its two non-negative parts
    k_q0_q0_q1 = (k * target * target) / reserve_before
    b = one_minus_k * reserve_before
    if increasing:
        b = b + oracle_notional
    else:
        k_q0_q0_q1 = k_q0_q0_q1 + oracle_notional

    if b >= k_q0_q0_q1:
        b = b - k_q0_q0_q1
        minus_b_positive = True
    else:
        b = k_q0_q0_q1 - b
        minus_b_positive = False

    # sqrt(b^2 + 4(1-k)kQ0^2)
    discriminant = one_minus_k.mul_int(4) * (k * target * target)
    square_root = (b * b + discriminant).sqrt()

    denominator = one_minus_k.mul_int(2)
    if minus_b_positive:
        numerator = b + square_root
    elif square_root > b:
        numerator = square_root - b
    else:
        numerator = FixedDecimal.zero()

    if increasing:
        return numerator.div_down(denominator)
    return numerator.div_up(denominator)


def target_reserve(
    reserve: FixedDecimal,
    k: FixedDecimal,
    fair_value_delta: FixedDecimal,
) -> FixedDecimal:
    """Target reserve Q0 that a trade of ``fair_value_delta`` would restore.

    Args:
        reserve: Current reserve Q1 of the side in deficit
        k: Curvature in [0, 1]
        fair_value_delta: i * deltaB, the surplus on the other side valued
            in this side's units

    Returns:
        Q0 >= Q1. Intermediate divisions round up so the target is never
        understated.

    Raises:
        OutOfDomain: If k > 1
        CurveMathError: On overflow
    """
    if k > ONE:
        raise OutOfDomain(f"Curvature above one: {k}")
    if reserve.is_zero():
        return FixedDecimal.zero()
    if k.is_zero():
        return reserve + fair_value_delta

    ratio = (k * fair_value_delta).mul_int(4).div_up(reserve)
    square_root = (ratio + ONE).sqrt()
    premium = (square_root - ONE).div_up(k.mul_int(2))
    return reserve * (ONE + premium)


@absent_on_fault
def solve_for_trade(
    target: FixedDecimal,
    reserve_before: FixedDecimal,
    oracle_notional: FixedDecimal,
    increasing: bool,
    k: FixedDecimal,
) -> FixedDecimal:
    """Solve the price-impact quadratic for the reserve after a trade.

    Returns None when the trade is not quotable at this size under the
    current reserves (no root in the valid domain, or arithmetic failure).
    """
    return trade_reserve(target, reserve_before, oracle_notional, increasing, k)


@absent_on_fault
def solve_for_target(
    reserve: FixedDecimal,
    k: FixedDecimal,
    fair_value_delta: FixedDecimal,
) -> FixedDecimal:
    """Solve for the target reserve that a fair-value change would restore.

    Returns None on arithmetic failure.
    """
    return target_reserve(reserve, k, fair_value_delta)
