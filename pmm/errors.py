"""Error types for the PMM pricing core.

Arithmetic failures are modelled as CurveMathError subclasses, each tagged with
an ArithmeticFault kind. Curve functions convert them into an absent (None)
result at their public boundary via ``absent_on_fault``; the pool layer raises
PMMError subclasses so callers can reject an operation as a whole.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from enum import Enum
from typing import ClassVar, ParamSpec, TypeVar

import structlog

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")


class ArithmeticFault(Enum):
    """Reasons a checked computation produced no value."""

    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"
    DIVIDE_BY_ZERO = "divide_by_zero"
    OUT_OF_DOMAIN = "out_of_domain"


# =============================================================================
# Arithmetic errors
# =============================================================================


class CurveMathError(ArithmeticError):
    """Base class for checked arithmetic failures."""

    kind: ClassVar[ArithmeticFault]


class Overflow(CurveMathError):
    """Result exceeds the 256-bit range (or 128 bits when packing)."""

    kind = ArithmeticFault.OVERFLOW


class Underflow(CurveMathError):
    """Subtraction would produce a negative result."""

    kind = ArithmeticFault.UNDERFLOW


class DivisionByZero(CurveMathError):
    """Division or modulo by zero."""

    kind = ArithmeticFault.DIVIDE_BY_ZERO


class OutOfDomain(CurveMathError):
    """No economically valid root exists for the requested trade."""

    kind = ArithmeticFault.OUT_OF_DOMAIN


# =============================================================================
# Pool-level errors
# =============================================================================


class PMMError(Exception):
    """Base error for pool operations built on the curve."""

    pass


class QuoteUnavailable(PMMError):
    """The curve could not quote the trade at this size and state."""

    pass


class ExceededSlippage(PMMError):
    """Output amount is below the caller's minimum."""

    pass


class InsufficientLiquidity(PMMError):
    """Pool reserves cannot cover the requested output."""

    pass


class InvalidFee(PMMError):
    """Fee numerator/denominator pair is not a valid fraction."""

    pass


class NoBaseInput(PMMError):
    """Deposit carries no base token."""

    pass


class IncorrectMint(PMMError):
    """Share supply exists but the pool has no base reserve."""

    pass


class WithdrawNotEnough(PMMError):
    """Withdrawn amounts are below the caller's minimums."""

    pass


def absent_on_fault(func: Callable[P, T]) -> Callable[P, T | None]:
    """Return None instead of raising when ``func`` hits an arithmetic fault.

    The fault kind is logged at debug level so that an absent quote can be
    traced back to its cause.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | None:
        try:
            return func(*args, **kwargs)
        except CurveMathError as err:
            logger.debug(
                "pmm_absent_result",
                operation=func.__name__,
                fault=err.kind.value,
                detail=str(err),
            )
            return None

    return wrapper
