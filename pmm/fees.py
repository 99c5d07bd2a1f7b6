"""Pool fee schedule.

Fees are numerator/denominator fractions applied to native token amounts.
The trade fee is charged on the amount a swap pays out and the withdraw fee on
the amounts a withdrawal pays out; the admin fees are the pool owner's share of
those fees.
"""

from dataclasses import dataclass

from pmm.errors import InvalidFee
from pmm.math.wide_uint import W


def calculate_fee(amount: int, numerator: int, denominator: int) -> int:
    """Fee on ``amount`` for the fraction numerator / denominator.

    Zero when either the fraction or the amount is zero; otherwise rounded
    down with a minimum of one unit, so small amounts are never free.
    """
    if numerator == 0 or amount == 0:
        return 0
    fee = (W(amount) * numerator // denominator).value
    return max(fee, 1)


def _validate_fraction(name: str, numerator: int, denominator: int) -> None:
    if numerator < 0 or denominator < 0:
        raise InvalidFee(f"{name} fee must be non-negative, got {numerator}/{denominator}")
    if denominator == 0:
        if numerator != 0:
            raise InvalidFee(f"{name} fee has zero denominator: {numerator}/0")
        return
    if numerator > denominator:
        raise InvalidFee(f"{name} fee exceeds one: {numerator}/{denominator}")


@dataclass(frozen=True)
class Fees:
    """Fee fractions charged by the pool.

    Attributes:
        trade_fee_numerator: Trade fee charged on swap output
        trade_fee_denominator: Denominator of the trade fee
        admin_trade_fee_numerator: Admin share of the trade fee
        admin_trade_fee_denominator: Denominator of the admin trade share
        withdraw_fee_numerator: Fee charged on withdrawn amounts
        withdraw_fee_denominator: Denominator of the withdraw fee
        admin_withdraw_fee_numerator: Admin share of the withdraw fee
        admin_withdraw_fee_denominator: Denominator of the admin withdraw share
    """

    trade_fee_numerator: int = 0
    trade_fee_denominator: int = 0
    admin_trade_fee_numerator: int = 0
    admin_trade_fee_denominator: int = 0
    withdraw_fee_numerator: int = 0
    withdraw_fee_denominator: int = 0
    admin_withdraw_fee_numerator: int = 0
    admin_withdraw_fee_denominator: int = 0

    def __post_init__(self) -> None:
        _validate_fraction("trade", self.trade_fee_numerator, self.trade_fee_denominator)
        _validate_fraction(
            "admin trade", self.admin_trade_fee_numerator, self.admin_trade_fee_denominator
        )
        _validate_fraction("withdraw", self.withdraw_fee_numerator, self.withdraw_fee_denominator)
        _validate_fraction(
            "admin withdraw",
            self.admin_withdraw_fee_numerator,
            self.admin_withdraw_fee_denominator,
        )

    def trade_fee(self, amount: int) -> int:
        return calculate_fee(amount, self.trade_fee_numerator, self.trade_fee_denominator)

    def admin_trade_fee(self, trade_fee: int) -> int:
        """Owner's share of an already computed trade fee."""
        return calculate_fee(
            trade_fee, self.admin_trade_fee_numerator, self.admin_trade_fee_denominator
        )

    def withdraw_fee(self, amount: int) -> int:
        return calculate_fee(amount, self.withdraw_fee_numerator, self.withdraw_fee_denominator)

    def admin_withdraw_fee(self, withdraw_fee: int) -> int:
        """Owner's share of an already computed withdraw fee."""
        return calculate_fee(
            withdraw_fee,
            self.admin_withdraw_fee_numerator,
            self.admin_withdraw_fee_denominator,
        )


# Default fee schedule: 0.3% trade fee, a fifth of it to the admin, no withdraw fee
DEFAULT_FEES = Fees(
    trade_fee_numerator=3,
    trade_fee_denominator=1000,
    admin_trade_fee_numerator=1,
    admin_trade_fee_denominator=5,
)
