"""Closed-form integral of the PMM price function.

Between reserve levels V1 and V2 of the side in deficit (target V0), the
marginal price is i * (1 - k + k * V0^2 / V^2). Its antiderivative

    F(V) = (1 - k) * i * V - i * k * V0^2 / V

gives the exact cost (or proceeds) of moving the reserve between two levels
in one step. For V1 >= V2:

    res = F(V1) - F(V2)
        = (1 - k) * i * (V1 - V2) + i * k * V0^2 * (1/V2 - 1/V1)

The bounds may be given in either order. Both terms of F are rounded once per
endpoint before subtracting, so the area over [V2, V1] is exactly the sum of
the areas over [V2, X] and [X, V1] for any X in between.
"""

from __future__ import annotations

from pmm.errors import absent_on_fault
from pmm.math.fixed_point import FixedDecimal

ONE = FixedDecimal.one()


def curve_area(
    b0: FixedDecimal,
    b1: FixedDecimal,
    b2: FixedDecimal,
    oracle_price: FixedDecimal,
    k: FixedDecimal,
) -> FixedDecimal:
    """Integral of the price function over the reserve interval [b1, b2].

    Args:
        b0: Target reserve the curve is anchored to
        b1: One bound of the reserve interval
        b2: The other bound
        oracle_price: Oracle price i
        k: Curvature in [0, 1]

    Returns:
        Amount in the other token. Each endpoint term of F is rounded down.

    Raises:
        CurveMathError: On overflow, division by zero, or k > 1
    """
    high, low = (b1, b2) if b1 >= b2 else (b2, b1)
    if high == low:
        return FixedDecimal.zero()

    # F(V) = slope * V - scale / V
    slope = oracle_price * (ONE - k)
    scale = oracle_price * k * (b0 * b0)
    linear = slope * high - slope * low
    curved = scale / low - scale / high
    return linear + curved


@absent_on_fault
def integrate(
    b0: FixedDecimal,
    b1: FixedDecimal,
    b2: FixedDecimal,
    oracle_price: FixedDecimal,
    k: FixedDecimal,
) -> FixedDecimal:
    """Total cost or proceeds of trading across [b1, b2] anchored at b0.

    Returns None on any intermediate overflow or division by zero.
    """
    return curve_area(b0, b1, b2, oracle_price, k)
