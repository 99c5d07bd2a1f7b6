"""Pytest configuration and fixtures."""

import pytest

from pmm.curve.params import CurveParameters
from pmm.fees import Fees
from tests.helpers.factories import make_base_surplus, make_params, make_quote_surplus


@pytest.fixture
def balanced_params() -> CurveParameters:
    """Balanced pool: 1,000 base and 100,000 quote at a price of 100, k = 0.5."""
    return make_params()


@pytest.fixture
def base_surplus_params() -> CurveParameters:
    """Pool with 100 spare base and a 10,000 quote shortfall."""
    return make_base_surplus()


@pytest.fixture
def quote_surplus_params() -> CurveParameters:
    """Pool with 10,000 spare quote and a 100 base shortfall."""
    return make_quote_surplus()


@pytest.fixture
def no_fees() -> Fees:
    """Fee schedule that charges nothing."""
    return Fees()


@pytest.fixture
def percent_fees() -> Fees:
    """1% trade and withdraw fees, half of each to the admin."""
    return Fees(
        trade_fee_numerator=1,
        trade_fee_denominator=100,
        admin_trade_fee_numerator=1,
        admin_trade_fee_denominator=2,
        withdraw_fee_numerator=1,
        withdraw_fee_denominator=100,
        admin_withdraw_fee_numerator=1,
        admin_withdraw_fee_denominator=2,
    )
