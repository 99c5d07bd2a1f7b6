"""Test helpers module for shared test utilities.

- constants: curvature, oracle price and pool depth defaults
- factories: FixedDecimal and CurveParameters factory functions
"""

from tests.helpers.constants import BASE_DEPTH, HALF, K_ONE, K_ZERO, ORACLE_100, QUOTE_DEPTH
from tests.helpers.factories import fd, make_base_surplus, make_params, make_quote_surplus

__all__ = [
    # Constants
    "BASE_DEPTH",
    "HALF",
    "K_ONE",
    "K_ZERO",
    "ORACLE_100",
    "QUOTE_DEPTH",
    # Factories
    "fd",
    "make_base_surplus",
    "make_params",
    "make_quote_surplus",
]
