"""PMM pricing curve - Python Implementation."""

from pmm.curve import CurveParameters, CurveRegime, TradeQuote, classify, pmm_curve
from pmm.fees import DEFAULT_FEES, Fees
from pmm.math import FixedDecimal, WideUint
from pmm.swap import SwapDirection, SwapQuote, quote_swap

__version__ = "0.1.0"
__all__ = [
    "CurveParameters",
    "CurveRegime",
    "DEFAULT_FEES",
    "Fees",
    "FixedDecimal",
    "SwapDirection",
    "SwapQuote",
    "TradeQuote",
    "WideUint",
    "classify",
    "pmm_curve",
    "quote_swap",
    "__version__",
]
