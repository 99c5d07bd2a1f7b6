"""PMM pricing curve.

- params: CurveParameters snapshot and regime classification
- quadratic: price-impact quadratic and its inverse (target solve)
- integrate: closed-form integral of the price function
- regimes: per-regime quoting rules
- pricing: regime-aware quoting with balanced-point transitions
"""

# Inputs and classification
from .params import CurveParameters, CurveRegime, classify

# Solvers
from .integrate import curve_area, integrate
from .quadratic import solve_for_target, solve_for_trade, target_reserve, trade_reserve

# Quoting
from .pricing import PMMCurve, TradeQuote, pmm_curve
from .regimes import (
    BalancedCurve,
    BaseSurplusCurve,
    QuoteSurplusCurve,
    RegimeCurve,
    curve_for,
)

__all__ = [
    "BalancedCurve",
    "BaseSurplusCurve",
    "CurveParameters",
    "CurveRegime",
    "PMMCurve",
    "QuoteSurplusCurve",
    "RegimeCurve",
    "TradeQuote",
    "classify",
    "curve_area",
    "curve_for",
    "integrate",
    "pmm_curve",
    "solve_for_target",
    "solve_for_trade",
    "target_reserve",
    "trade_reserve",
]
