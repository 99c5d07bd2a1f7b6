"""Tests for swap quoting with fees and slippage."""

import pytest

from pmm.curve.params import CurveRegime
from pmm.errors import ExceededSlippage, InsufficientLiquidity, QuoteUnavailable
from pmm.fees import DEFAULT_FEES
from pmm.swap import SwapDirection, quote_swap
from tests.helpers import K_ZERO, fd, make_params


class TestSellBase:
    """Tests for SELL_BASE swaps."""

    def test_without_fees(self, balanced_params, no_fees):
        """The curve quote of 995.00012... is floored to 995 native units."""
        result = quote_swap(balanced_params, SwapDirection.SELL_BASE, 10, fees=no_fees)
        assert result.amount_out == 995
        assert result.trade_fee == 0
        assert result.admin_fee == 0
        assert result.params.base_reserve == fd(1010)
        assert result.params.quote_reserve == fd(99_005)
        assert result.new_regime is CurveRegime.BASE_SURPLUS

    def test_with_fees(self, balanced_params, percent_fees):
        """Trade fee 1% of 995 = 9, admin takes half rounded down = 4."""
        result = quote_swap(balanced_params, SwapDirection.SELL_BASE, 10, fees=percent_fees)
        assert result.trade_fee == 9
        assert result.admin_fee == 4
        assert result.amount_out == 986
        # Payout and admin share leave the pool; the rest of the fee stays
        assert result.params.quote_reserve == fd(99_010)

    def test_default_fees(self, balanced_params):
        """Admin share of a 2 unit fee is raised to the one unit minimum."""
        result = quote_swap(balanced_params, SwapDirection.SELL_BASE, 10)
        assert result.trade_fee == 2
        assert result.admin_fee == 1
        assert result.amount_out == 993

    def test_targets_are_expected_targets(self, quote_surplus_params, no_fees):
        result = quote_swap(quote_surplus_params, SwapDirection.SELL_BASE, 5, fees=no_fees)
        assert result.amount_out == 553
        assert result.params.base_target.value == 994987437106619954700
        assert result.params.quote_target == fd(100_000)
        assert result.new_regime is CurveRegime.QUOTE_SURPLUS

    def test_zero_amount(self, balanced_params):
        result = quote_swap(balanced_params, SwapDirection.SELL_BASE, 0, fees=DEFAULT_FEES)
        assert result.amount_out == 0
        assert result.new_regime is CurveRegime.BALANCED


class TestSellQuote:
    """Tests for SELL_QUOTE swaps."""

    def test_without_fees(self, balanced_params, no_fees):
        result = quote_swap(balanced_params, SwapDirection.SELL_QUOTE, 1000, fees=no_fees)
        assert result.amount_out == 9
        assert result.params.base_reserve == fd(991)
        assert result.params.quote_reserve == fd(101_000)
        assert result.new_regime is CurveRegime.QUOTE_SURPLUS


class TestSwapRejections:
    """Tests for rejected swaps."""

    def test_slippage(self, balanced_params, no_fees):
        with pytest.raises(ExceededSlippage):
            quote_swap(balanced_params, SwapDirection.SELL_BASE, 10, 996, fees=no_fees)

    def test_minimum_met_exactly(self, balanced_params, no_fees):
        result = quote_swap(balanced_params, SwapDirection.SELL_BASE, 10, 995, fees=no_fees)
        assert result.amount_out == 995

    def test_unquotable_state(self):
        params = make_params(
            base_reserve=900, quote_reserve=90_000, base_target=1000, quote_target=100_000
        )
        with pytest.raises(QuoteUnavailable):
            quote_swap(params, SwapDirection.SELL_BASE, 10)

    def test_negative_amount(self, balanced_params):
        with pytest.raises(ValueError):
            quote_swap(balanced_params, SwapDirection.SELL_BASE, -1)

    def test_pegged_quote_past_reserve(self, no_fees):
        """At k = 0 the curve prices 20 base at 2000 quote; the pool holds 1000."""
        params = make_params(k=K_ZERO, base_reserve=1000, quote_reserve=1000)
        with pytest.raises(InsufficientLiquidity):
            quote_swap(params, SwapDirection.SELL_BASE, 20, fees=no_fees)
