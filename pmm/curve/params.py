"""Curve inputs and regime classification.

CurveParameters is an ephemeral snapshot built from persisted pool state right
before a pricing call. The regime is never stored on it: ``classify`` derives
it from the reserves and targets on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from pmm.math.fixed_point import FixedDecimal


class CurveRegime(Enum):
    """Which side of the pool holds reserves in excess of its target."""

    BALANCED = "balanced"
    BASE_SURPLUS = "base_surplus"
    QUOTE_SURPLUS = "quote_surplus"


@dataclass(frozen=True)
class CurveParameters:
    """Snapshot of the values the PMM curve prices against.

    Attributes:
        k: Curvature in [0, 1]; 0 pegs to the oracle, 1 is constant-product
        oracle_price: Reference price of one base unit in quote units
        base_reserve: Current base token reserve
        quote_reserve: Current quote token reserve
        base_target: Base reserve considered balanced
        quote_target: Quote reserve considered balanced
    """

    k: FixedDecimal
    oracle_price: FixedDecimal
    base_reserve: FixedDecimal
    quote_reserve: FixedDecimal
    base_target: FixedDecimal
    quote_target: FixedDecimal

    @property
    def regime(self) -> CurveRegime:
        """Regime of the current reserves (recomputed on every access)."""
        return classify(self)

    def with_reserves(self, base_reserve: FixedDecimal, quote_reserve: FixedDecimal) -> CurveParameters:
        return replace(self, base_reserve=base_reserve, quote_reserve=quote_reserve)

    def with_targets(self, base_target: FixedDecimal, quote_target: FixedDecimal) -> CurveParameters:
        return replace(self, base_target=base_target, quote_target=quote_target)


def classify(params: CurveParameters) -> CurveRegime:
    """Map reserves and targets to a curve regime.

    A base reserve above target is a base surplus and a quote reserve above
    target is a quote surplus. When neither side exceeds its target, the side
    in deficit decides: a base deficit prices like a quote surplus and a quote
    deficit like a base surplus. Exact equality on both sides is balanced.
    """
    if params.base_reserve > params.base_target:
        return CurveRegime.BASE_SURPLUS
    if params.quote_reserve > params.quote_target:
        return CurveRegime.QUOTE_SURPLUS
    if params.base_reserve < params.base_target:
        return CurveRegime.QUOTE_SURPLUS
    if params.quote_reserve < params.quote_target:
        return CurveRegime.BASE_SURPLUS
    return CurveRegime.BALANCED
