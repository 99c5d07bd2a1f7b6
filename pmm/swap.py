"""Swap quoting on top of the PMM curve.

quote_swap turns a curve quote into native token amounts, charges the trade
fee on the output and enforces the caller's minimum. It does not move funds:
the returned SwapQuote carries the post-trade parameters for the caller to
persist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from pmm.curve.params import CurveParameters, CurveRegime, classify
from pmm.curve.pricing import TradeQuote, pmm_curve
from pmm.errors import CurveMathError, ExceededSlippage, InsufficientLiquidity, QuoteUnavailable
from pmm.fees import DEFAULT_FEES, Fees
from pmm.math.fixed_point import FixedDecimal

logger = structlog.get_logger()


class SwapDirection(Enum):
    """Which token the trader pays in."""

    SELL_BASE = "sell_base"
    SELL_QUOTE = "sell_quote"


@dataclass(frozen=True)
class SwapQuote:
    """Outcome of a quoted swap in native token units.

    Attributes:
        direction: Token the trader pays in
        amount_in: Amount paid in by the trader
        amount_out: Amount paid out to the trader, after the trade fee
        trade_fee: Fee withheld from the curve output
        admin_fee: Owner's share of the trade fee, leaving the pool
        params: Curve parameters after the trade, with the targets the
            trade was priced against
    """

    direction: SwapDirection
    amount_in: int
    amount_out: int
    trade_fee: int
    admin_fee: int
    params: CurveParameters

    @property
    def new_regime(self) -> CurveRegime:
        """Regime of the post-trade reserves."""
        return classify(self.params)


def quote_swap(
    params: CurveParameters,
    direction: SwapDirection,
    amount_in: int,
    minimum_amount_out: int = 0,
    fees: Fees = DEFAULT_FEES,
) -> SwapQuote:
    """Quote a swap of ``amount_in`` native units against the curve.

    Args:
        params: Current curve parameters; reserves in native units
        direction: SELL_BASE pays base for quote, SELL_QUOTE pays quote for base
        amount_in: Amount paid in, in native units
        minimum_amount_out: Smallest acceptable output after fees
        fees: Fee schedule

    Returns:
        SwapQuote with output, fees and post-trade parameters

    Raises:
        QuoteUnavailable: If the curve cannot price the trade
        ExceededSlippage: If the output after fees is below minimum_amount_out
        InsufficientLiquidity: If the pool cannot pay out the output
    """
    if amount_in < 0:
        raise ValueError(f"amount_in must be non-negative, got {amount_in}")

    amount = FixedDecimal.from_int(amount_in)
    try:
        if direction is SwapDirection.SELL_BASE:
            trade = pmm_curve.quote_sell_base(params, amount)
        else:
            trade = pmm_curve.quote_sell_quote(params, amount)
        state = pmm_curve.expected_params(params)
    except CurveMathError as err:
        logger.debug(
            "pmm_quote_unavailable",
            direction=direction.value,
            amount_in=amount_in,
            fault=err.kind.value,
        )
        raise QuoteUnavailable(
            f"Cannot quote {direction.value} of {amount_in}: {err.kind.value}"
        ) from err

    receive_amount = trade.amount.floor_int()
    trade_fee = fees.trade_fee(receive_amount)
    admin_fee = fees.admin_trade_fee(trade_fee)
    amount_out = receive_amount - trade_fee

    if amount_out < minimum_amount_out:
        logger.info(
            "pmm_slippage_exceeded",
            direction=direction.value,
            amount_in=amount_in,
            amount_out=amount_out,
            minimum_amount_out=minimum_amount_out,
        )
        raise ExceededSlippage(
            f"Output {amount_out} is below minimum {minimum_amount_out}"
        )

    new_params = _settle(state, direction, amount, amount_out + admin_fee)
    _log_quote(direction, amount_in, amount_out, trade)

    return SwapQuote(
        direction=direction,
        amount_in=amount_in,
        amount_out=amount_out,
        trade_fee=trade_fee,
        admin_fee=admin_fee,
        params=new_params,
    )


def _settle(
    state: CurveParameters,
    direction: SwapDirection,
    amount: FixedDecimal,
    paid_out: int,
) -> CurveParameters:
    """Reserves after taking ``amount`` in and paying ``paid_out`` native units out."""
    outflow = FixedDecimal.from_int(paid_out)
    if direction is SwapDirection.SELL_BASE:
        if outflow > state.quote_reserve:
            raise InsufficientLiquidity(
                f"Quote reserve {state.quote_reserve} cannot pay out {paid_out}"
            )
        return state.with_reserves(state.base_reserve + amount, state.quote_reserve - outflow)

    if outflow > state.base_reserve:
        raise InsufficientLiquidity(f"Base reserve {state.base_reserve} cannot pay out {paid_out}")
    return state.with_reserves(state.base_reserve - outflow, state.quote_reserve + amount)


def _log_quote(direction: SwapDirection, amount_in: int, amount_out: int, trade: TradeQuote) -> None:
    logger.debug(
        "pmm_swap_quoted",
        direction=direction.value,
        amount_in=amount_in,
        amount_out=amount_out,
        curve_regime=trade.new_regime.value,
    )
