"""PMM trade quoting across curve regimes.

A trade can start in one regime and end in another. When it crosses the
balanced point, the part up to the balanced point is priced by the current
regime's back-to-one amount and the remainder by the balanced curve:

    sell base in QuoteSurplus, amount > back-to-one base
        -> spare quote + balanced quote for (amount - back-to-one base)

All quotes are computed against the expected targets, i.e. the targets that
the back-to-one rebalance at the current oracle price would restore.

With k = 0 the curve is flat: every unit trades at the oracle price, so the
quote is the amount times the price in every regime and only the resulting
regime depends on the crossing.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pmm.curve.params import CurveParameters, CurveRegime, classify
from pmm.curve.regimes import BalancedCurve, curve_for
from pmm.errors import absent_on_fault
from pmm.math.fixed_point import FixedDecimal

logger = structlog.get_logger()

ONE = FixedDecimal.one()


@dataclass(frozen=True)
class TradeQuote:
    """Amount paid or received for a trade and the regime it leaves behind.

    Attributes:
        amount: Quote in curve-internal scaled units
        new_regime: Regime of the pool once the trade is applied
    """

    amount: FixedDecimal
    new_regime: CurveRegime


class PMMCurve:
    """Regime-aware PMM quoting.

    Public methods return None when the trade cannot be quoted at this size
    under the given state. The ``quote_*`` methods are the raising versions
    used by the pool layer.
    """

    _balanced = BalancedCurve()

    # --- Targets ---

    def expected_targets(self, params: CurveParameters) -> tuple[FixedDecimal, FixedDecimal]:
        """(base_target, quote_target) after a back-to-one rebalance."""
        regime = classify(params)
        if regime is CurveRegime.BALANCED:
            return params.base_target, params.quote_target
        pay = curve_for(regime).back_to_one(params)
        if regime is CurveRegime.BASE_SURPLUS:
            return params.base_target, params.quote_reserve + pay
        return params.base_reserve + pay, params.quote_target

    def expected_params(self, params: CurveParameters) -> CurveParameters:
        base_target, quote_target = self.expected_targets(params)
        return params.with_targets(base_target, quote_target)

    def rebalanced(self, params: CurveParameters) -> CurveParameters:
        """Parameters with both reserves and targets moved to the expected targets."""
        base_target, quote_target = self.expected_targets(params)
        rebalanced = params.with_reserves(base_target, quote_target).with_targets(
            base_target, quote_target
        )
        logger.debug(
            "pmm_back_to_one_applied",
            from_regime=classify(params).value,
            base_target=str(base_target),
            quote_target=str(quote_target),
        )
        return rebalanced

    def mid_price(self, params: CurveParameters) -> FixedDecimal:
        """Instantaneous price of one base unit in quote units.

        The oracle price scaled by R = (1 - k) + k * (target / reserve)^2 on
        the side in deficit: divided by R when quote is short, multiplied by
        R otherwise.
        """
        expected = self.expected_params(params)
        k = params.k
        if classify(params) is CurveRegime.BASE_SURPLUS:
            target = expected.quote_target
            reserve = params.quote_reserve
            ratio = (target * target) / (reserve * reserve)
            return params.oracle_price / (ONE - k + k * ratio)

        target = expected.base_target
        reserve = params.base_reserve
        ratio = (target * target) / (reserve * reserve)
        return params.oracle_price * (ONE - k + k * ratio)

    # --- Raising quotes ---

    def quote_sell_base(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Quote received for selling ``amount`` base."""
        regime = classify(params)
        if amount.is_zero():
            return TradeQuote(FixedDecimal.zero(), regime)

        state = self.expected_params(params)
        if state.k.is_zero():
            balancing = (
                state.base_target - state.base_reserve
                if regime is CurveRegime.QUOTE_SURPLUS
                else FixedDecimal.zero()
            )
            quote = TradeQuote(
                state.oracle_price * amount,
                _regime_after(regime, CurveRegime.BASE_SURPLUS, amount, balancing),
            )
        elif regime is CurveRegime.BALANCED:
            quote = TradeQuote(self._balanced.sell_base(state, amount), CurveRegime.BASE_SURPLUS)
        elif regime is CurveRegime.BASE_SURPLUS:
            quote = TradeQuote(curve_for(regime).sell_base(state, amount), regime)
        else:
            back_to_one_pay_base = state.base_target - state.base_reserve
            back_to_one_receive_quote = state.quote_reserve - state.quote_target
            if amount < back_to_one_pay_base:
                received = curve_for(regime).sell_base(state, amount)
                quote = TradeQuote(received.min(back_to_one_receive_quote), regime)
            elif amount == back_to_one_pay_base:
                quote = TradeQuote(back_to_one_receive_quote, CurveRegime.BALANCED)
            else:
                excess = self._balanced.sell_base(state, amount - back_to_one_pay_base)
                quote = TradeQuote(back_to_one_receive_quote + excess, CurveRegime.BASE_SURPLUS)

        _log_transition("sell_base", regime, quote)
        return quote

    def quote_buy_base(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Quote paid for buying ``amount`` base."""
        regime = classify(params)
        if amount.is_zero():
            return TradeQuote(FixedDecimal.zero(), regime)

        state = self.expected_params(params)
        if state.k.is_zero():
            balancing = (
                state.base_reserve - state.base_target
                if regime is CurveRegime.BASE_SURPLUS
                else FixedDecimal.zero()
            )
            quote = TradeQuote(
                state.oracle_price.mul_up(amount),
                _regime_after(regime, CurveRegime.QUOTE_SURPLUS, amount, balancing),
            )
        elif regime is CurveRegime.BALANCED:
            quote = TradeQuote(self._balanced.buy_base(state, amount), CurveRegime.QUOTE_SURPLUS)
        elif regime is CurveRegime.QUOTE_SURPLUS:
            quote = TradeQuote(curve_for(regime).buy_base(state, amount), regime)
        else:
            back_to_one_receive_base = state.base_reserve - state.base_target
            back_to_one_pay_quote = state.quote_target - state.quote_reserve
            if amount < back_to_one_receive_base:
                quote = TradeQuote(curve_for(regime).buy_base(state, amount), regime)
            elif amount == back_to_one_receive_base:
                quote = TradeQuote(back_to_one_pay_quote, CurveRegime.BALANCED)
            else:
                excess = self._balanced.buy_base(state, amount - back_to_one_receive_base)
                quote = TradeQuote(back_to_one_pay_quote + excess, CurveRegime.QUOTE_SURPLUS)

        _log_transition("buy_base", regime, quote)
        return quote

    def quote_sell_quote(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Base received for selling ``amount`` quote."""
        regime = classify(params)
        if amount.is_zero():
            return TradeQuote(FixedDecimal.zero(), regime)

        state = self.expected_params(params)
        if state.k.is_zero():
            balancing = (
                state.quote_target - state.quote_reserve
                if regime is CurveRegime.BASE_SURPLUS
                else FixedDecimal.zero()
            )
            quote = TradeQuote(
                amount / state.oracle_price,
                _regime_after(regime, CurveRegime.QUOTE_SURPLUS, amount, balancing),
            )
        elif regime is CurveRegime.BALANCED:
            quote = TradeQuote(self._balanced.sell_quote(state, amount), CurveRegime.QUOTE_SURPLUS)
        elif regime is CurveRegime.QUOTE_SURPLUS:
            quote = TradeQuote(curve_for(regime).sell_quote(state, amount), regime)
        else:
            back_to_one_pay_quote = state.quote_target - state.quote_reserve
            back_to_one_receive_base = state.base_reserve - state.base_target
            if amount < back_to_one_pay_quote:
                received = curve_for(regime).sell_quote(state, amount)
                quote = TradeQuote(received.min(back_to_one_receive_base), regime)
            elif amount == back_to_one_pay_quote:
                quote = TradeQuote(back_to_one_receive_base, CurveRegime.BALANCED)
            else:
                excess = self._balanced.sell_quote(state, amount - back_to_one_pay_quote)
                quote = TradeQuote(back_to_one_receive_base + excess, CurveRegime.QUOTE_SURPLUS)

        _log_transition("sell_quote", regime, quote)
        return quote

    # --- Absent-on-failure surface ---

    @absent_on_fault
    def sell_base_token(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Quote received for selling ``amount`` base, or None."""
        return self.quote_sell_base(params, amount)

    @absent_on_fault
    def buy_base_token(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Quote paid for buying ``amount`` base, or None."""
        return self.quote_buy_base(params, amount)

    @absent_on_fault
    def sell_quote_token(self, params: CurveParameters, amount: FixedDecimal) -> TradeQuote:
        """Base received for selling ``amount`` quote, or None."""
        return self.quote_sell_quote(params, amount)

    @absent_on_fault
    def get_expected_target(
        self, params: CurveParameters
    ) -> tuple[FixedDecimal, FixedDecimal]:
        return self.expected_targets(params)

    @absent_on_fault
    def get_mid_price(self, params: CurveParameters) -> FixedDecimal:
        return self.mid_price(params)

    @absent_on_fault
    def back_to_one(self, params: CurveParameters) -> FixedDecimal:
        """Payment that restores the balanced state, or None.

        Quote paid for the spare base in BaseSurplus, base paid for the
        spare quote in QuoteSurplus, zero when balanced.
        """
        return curve_for(classify(params)).back_to_one(params)

    @absent_on_fault
    def apply_back_to_one(self, params: CurveParameters) -> CurveParameters:
        return self.rebalanced(params)


def _regime_after(
    regime: CurveRegime,
    grown: CurveRegime,
    amount: FixedDecimal,
    balancing: FixedDecimal,
) -> CurveRegime:
    """Regime after a trade that pushes the pool toward ``grown``.

    ``balancing`` is the trade size that lands exactly on the balanced state
    from the opposite regime.
    """
    if regime is CurveRegime.BALANCED or regime is grown:
        return grown
    if amount < balancing:
        return regime
    if amount == balancing:
        return CurveRegime.BALANCED
    return grown


def _log_transition(operation: str, regime: CurveRegime, quote: TradeQuote) -> None:
    if quote.new_regime is not regime:
        logger.debug(
            "pmm_regime_transition",
            operation=operation,
            from_regime=regime.value,
            to_regime=quote.new_regime.value,
            amount=str(quote.amount),
        )


# Singleton instance
pmm_curve = PMMCurve()


__all__ = [
    "PMMCurve",
    "TradeQuote",
    "pmm_curve",
]
