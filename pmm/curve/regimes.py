"""Regime-specific trade quoting.

Each regime prices trades differently because the curve only bends on the
side that is below its target:

- Balanced: both reserves sit on their targets; trades start from the target.
- BaseSurplus: base is above target and quote below it. Moving quote is a
  quadratic solve against the quote target; moving base back toward its
  target is an integral on the quote side.
- QuoteSurplus: quote is above target and base below it. Moving base along the
  deficit side is an integral against the base target; selling quote is a
  quadratic solve on the base side.

All methods expect ``params`` to carry the expected targets (see
``pmm.curve.pricing.get_expected_target``) and raise CurveMathError subclasses
on failure. Amounts are FixedDecimal values in curve-internal units.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from pmm.curve.integrate import curve_area
from pmm.curve.params import CurveParameters, CurveRegime
from pmm.curve.quadratic import target_reserve, trade_reserve
from pmm.errors import OutOfDomain
from pmm.math.fixed_point import FixedDecimal


class RegimeCurve(ABC):
    """Quoting rules for one curve regime."""

    regime: ClassVar[CurveRegime]

    @abstractmethod
    def sell_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        """Quote received for selling ``amount`` base."""
        ...

    @abstractmethod
    def buy_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        """Quote paid for buying ``amount`` base."""
        ...

    @abstractmethod
    def sell_quote(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        """Base received for selling ``amount`` quote."""
        ...

    @abstractmethod
    def back_to_one(self, params: CurveParameters) -> FixedDecimal:
        """Amount that restores the balanced state at the current oracle price.

        For BaseSurplus this is the quote to pay for the spare base; for
        QuoteSurplus it is the base to pay for the spare quote.
        """
        ...


class BalancedCurve(RegimeCurve):
    """R = 1: reserves equal their targets."""

    regime = CurveRegime.BALANCED

    def sell_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        quote_target = params.quote_target
        q2 = trade_reserve(
            quote_target,
            quote_target,
            params.oracle_price * amount,
            False,
            params.k,
        )
        return quote_target - q2

    def buy_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        base_target = params.base_target
        if amount >= base_target:
            raise OutOfDomain(f"Cannot buy {amount} base against target {base_target}")
        b2 = base_target - amount
        return curve_area(base_target, base_target, b2, params.oracle_price, params.k)

    def sell_quote(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        base_target = params.base_target
        b2 = trade_reserve(
            base_target,
            base_target,
            amount / params.oracle_price,
            False,
            params.k,
        )
        return base_target - b2

    def back_to_one(self, params: CurveParameters) -> FixedDecimal:
        return FixedDecimal.zero()


class BaseSurplusCurve(RegimeCurve):
    """R < 1: base reserve above target, quote reserve below it."""

    regime = CurveRegime.BASE_SURPLUS

    def sell_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        quote_reserve = params.quote_reserve
        q2 = trade_reserve(
            params.quote_target,
            quote_reserve,
            params.oracle_price * amount,
            False,
            params.k,
        )
        return quote_reserve - q2

    def buy_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        # Range is limited by the caller: amount never exceeds the spare base
        quote_reserve = params.quote_reserve
        q2 = trade_reserve(
            params.quote_target,
            quote_reserve,
            params.oracle_price.mul_up(amount),
            True,
            params.k,
        )
        return q2 - quote_reserve

    def sell_quote(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        quote_reserve = params.quote_reserve
        return curve_area(
            params.quote_target,
            quote_reserve + amount,
            quote_reserve,
            params.oracle_price.reciprocal(),
            params.k,
        )

    def back_to_one(self, params: CurveParameters) -> FixedDecimal:
        spare_base = params.base_reserve - params.base_target
        fair_amount = spare_base * params.oracle_price
        new_quote_target = target_reserve(params.quote_reserve, params.k, fair_amount)
        return new_quote_target - params.quote_reserve


class QuoteSurplusCurve(RegimeCurve):
    """R > 1: quote reserve above target, base reserve below it."""

    regime = CurveRegime.QUOTE_SURPLUS

    def sell_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        # Range is limited by the caller: the reserve never passes the base target
        base_reserve = params.base_reserve
        return curve_area(
            params.base_target,
            base_reserve + amount,
            base_reserve,
            params.oracle_price,
            params.k,
        )

    def buy_base(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        base_reserve = params.base_reserve
        if amount >= base_reserve:
            raise OutOfDomain(f"Cannot buy {amount} base from reserve {base_reserve}")
        return curve_area(
            params.base_target,
            base_reserve,
            base_reserve - amount,
            params.oracle_price,
            params.k,
        )

    def sell_quote(self, params: CurveParameters, amount: FixedDecimal) -> FixedDecimal:
        base_reserve = params.base_reserve
        b2 = trade_reserve(
            params.base_target,
            base_reserve,
            amount / params.oracle_price,
            False,
            params.k,
        )
        return base_reserve - b2

    def back_to_one(self, params: CurveParameters) -> FixedDecimal:
        spare_quote = params.quote_reserve - params.quote_target
        fair_amount = spare_quote / params.oracle_price
        new_base_target = target_reserve(params.base_reserve, params.k, fair_amount)
        return new_base_target - params.base_reserve


REGIME_CURVES: dict[CurveRegime, RegimeCurve] = {
    curve.regime: curve for curve in (BalancedCurve(), BaseSurplusCurve(), QuoteSurplusCurve())
}


def curve_for(regime: CurveRegime) -> RegimeCurve:
    """Quoting rules for ``regime``."""
    return REGIME_CURVES[regime]
