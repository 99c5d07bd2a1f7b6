"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_params
    # or
    from tests.helpers.factories import fd, make_params

    params = make_params(base_reserve=1_100, quote_reserve=90_000)
"""

from decimal import Decimal

from pmm.constants import WAD
from pmm.curve.params import CurveParameters
from pmm.math.fixed_point import FixedDecimal
from tests.helpers.constants import BASE_DEPTH, HALF, ORACLE_100, QUOTE_DEPTH


def fd(amount: int | str) -> FixedDecimal:
    """FixedDecimal from whole units (int) or a decimal string ("0.5")."""
    if isinstance(amount, str):
        return FixedDecimal.from_decimal(Decimal(amount))
    return FixedDecimal.from_int(amount)


def make_params(
    k: int = HALF,
    oracle_price: int = ORACLE_100,
    base_reserve: int = BASE_DEPTH,
    quote_reserve: int = QUOTE_DEPTH,
    base_target: int | None = None,
    quote_target: int | None = None,
) -> CurveParameters:
    """Create curve parameters with sensible defaults.

    Reserves, targets and the oracle price are whole units; ``k`` is the raw
    scaled curvature (HALF is 0.5). Targets default to the reserves, i.e. a
    balanced pool of 1,000 base and 100,000 quote at a price of 100.

    Args:
        k: Raw scaled curvature (default: 0.5)
        oracle_price: Quote per base in whole units (default: 100)
        base_reserve: Base reserve (default: 1,000)
        quote_reserve: Quote reserve (default: 100,000)
        base_target: Base target (default: base_reserve)
        quote_target: Quote target (default: quote_reserve)

    Returns:
        CurveParameters ready for testing
    """
    if base_target is None:
        base_target = base_reserve
    if quote_target is None:
        quote_target = quote_reserve

    return CurveParameters(
        k=FixedDecimal(k),
        oracle_price=FixedDecimal(oracle_price * WAD),
        base_reserve=FixedDecimal(base_reserve * WAD),
        quote_reserve=FixedDecimal(quote_reserve * WAD),
        base_target=FixedDecimal(base_target * WAD),
        quote_target=FixedDecimal(quote_target * WAD),
    )


def make_base_surplus(k: int = HALF) -> CurveParameters:
    """Pool holding 100 spare base and short 10,000 quote."""
    return make_params(
        k=k,
        base_reserve=1_100,
        quote_reserve=90_000,
        base_target=1_000,
        quote_target=100_000,
    )


def make_quote_surplus(k: int = HALF) -> CurveParameters:
    """Pool holding 10,000 spare quote and short 100 base."""
    return make_params(
        k=k,
        base_reserve=900,
        quote_reserve=110_000,
        base_target=1_000,
        quote_target=100_000,
    )
