"""Liquidity provider share math.

Deposits mint pool shares in proportion to the smaller of the two reserve
increases; withdrawals burn shares for a pro-rata slice of both reserves and
targets. Amounts at this boundary are native token units (ints); reserves and
targets stay FixedDecimal inside CurveParameters.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pmm.curve.params import CurveParameters
from pmm.errors import IncorrectMint, InsufficientLiquidity, NoBaseInput, WithdrawNotEnough
from pmm.fees import DEFAULT_FEES, Fees
from pmm.math.fixed_point import FixedDecimal

logger = structlog.get_logger()


@dataclass(frozen=True)
class ShareMint:
    """Result of a deposit.

    Attributes:
        shares: Pool shares minted to the depositor
        base_input: Base added by the deposit
        quote_input: Quote added by the deposit
        params: Parameters with the new reserves and scaled targets
    """

    shares: int
    base_input: int
    quote_input: int
    params: CurveParameters


@dataclass(frozen=True)
class ShareBurn:
    """Result of a withdrawal.

    Attributes:
        base_out: Base paid to the provider after the withdraw fee
        quote_out: Quote paid to the provider after the withdraw fee
        withdraw_fee_base: Withdraw fee kept from the base slice
        withdraw_fee_quote: Withdraw fee kept from the quote slice
        admin_fee_base: Owner's share of the base withdraw fee
        admin_fee_quote: Owner's share of the quote withdraw fee
        params: Parameters with the reduced reserves and targets
    """

    base_out: int
    quote_out: int
    withdraw_fee_base: int
    withdraw_fee_quote: int
    admin_fee_base: int
    admin_fee_quote: int
    params: CurveParameters


def deposit_adjustment(params: CurveParameters, base_in: int, quote_in: int) -> tuple[int, int]:
    """Amounts of a deposit the pool accepts at its current ratio.

    - Empty pool: the smaller side at the oracle price decides, the other side
      is matched to it.
    - Both reserves positive: the side with the larger relative increase is
      scaled down to the other side's ratio.
    - Otherwise the amounts are accepted unchanged.

    Returns:
        (base_in, quote_in) rounded down to native units
    """
    base_amount = FixedDecimal.from_int(base_in)
    quote_amount = FixedDecimal.from_int(quote_in)
    base_reserve = params.base_reserve
    quote_reserve = params.quote_reserve
    price = params.oracle_price

    if base_reserve.is_zero() and quote_reserve.is_zero():
        if price * base_amount > quote_amount:
            base_amount = quote_amount / price
        quote_amount = base_amount * price
    elif not base_reserve.is_zero() and not quote_reserve.is_zero():
        base_increase_ratio = base_amount / base_reserve
        quote_increase_ratio = quote_amount / quote_reserve
        if base_increase_ratio < quote_increase_ratio:
            quote_amount = quote_reserve * base_increase_ratio
        else:
            base_amount = base_reserve * quote_increase_ratio

    return base_amount.floor_int(), quote_amount.floor_int()


def buy_shares(
    params: CurveParameters,
    base_balance: int,
    quote_balance: int,
    total_supply: int,
) -> ShareMint:
    """Mint shares for balances that already include the deposit.

    Args:
        params: Parameters before the deposit
        base_balance: Pool base balance including the deposit
        quote_balance: Pool quote balance including the deposit
        total_supply: Share supply before minting

    Raises:
        NoBaseInput: If the deposit adds no base
        IncorrectMint: If shares exist but a reserve is empty
        CurveMathError: If a balance is below its reserve
    """
    base_total = FixedDecimal.from_int(base_balance)
    quote_total = FixedDecimal.from_int(quote_balance)
    base_input = base_total - params.base_reserve
    quote_input = quote_total - params.quote_reserve

    if base_input.is_zero():
        raise NoBaseInput("Deposit carries no base token")

    price = params.oracle_price
    if total_supply == 0:
        # Initial supply: one share per base unit at the oracle price
        if price * base_total > quote_total:
            shares = quote_total / price
        else:
            shares = base_total
        base_target = shares
        quote_target = shares * price
    elif not params.base_reserve.is_zero() and not params.quote_reserve.is_zero():
        base_input_ratio = base_input / params.base_reserve
        quote_input_ratio = quote_input / params.quote_reserve
        mint_ratio = base_input_ratio.min(quote_input_ratio)
        shares = mint_ratio.mul_int(total_supply)
        base_target = params.base_target + params.base_target * mint_ratio
        quote_target = params.quote_target + params.quote_target * mint_ratio
    else:
        raise IncorrectMint(f"Cannot mint against supply {total_supply} with an empty reserve")

    minted = shares.floor_int()
    logger.debug(
        "pmm_shares_minted",
        shares=minted,
        total_supply=total_supply,
        base_input=base_input.floor_int(),
        quote_input=quote_input.floor_int(),
    )
    return ShareMint(
        shares=minted,
        base_input=base_input.floor_int(),
        quote_input=quote_input.floor_int(),
        params=params.with_reserves(base_total, quote_total).with_targets(base_target, quote_target),
    )


def sell_shares(
    params: CurveParameters,
    share_amount: int,
    total_supply: int,
    base_min_amount: int = 0,
    quote_min_amount: int = 0,
    fees: Fees = DEFAULT_FEES,
) -> ShareBurn:
    """Burn ``share_amount`` shares for a pro-rata slice of the pool.

    Minimums are checked against the slice before the withdraw fee.

    Raises:
        InsufficientLiquidity: If the supply is empty or share_amount exceeds it
        WithdrawNotEnough: If a slice is below its minimum
    """
    if total_supply == 0:
        raise InsufficientLiquidity("Cannot burn shares from an empty supply")
    if share_amount > total_supply:
        raise InsufficientLiquidity(f"Cannot burn {share_amount} of {total_supply} shares")

    supply = FixedDecimal.from_int(total_supply)
    base_amount = params.base_reserve.mul_int(share_amount) / supply
    quote_amount = params.quote_reserve.mul_int(share_amount) / supply
    base_target = params.base_target - params.base_target.mul_int(share_amount) / supply
    quote_target = params.quote_target - params.quote_target.mul_int(share_amount) / supply

    base_slice = base_amount.floor_int()
    quote_slice = quote_amount.floor_int()
    if base_slice < base_min_amount or quote_slice < quote_min_amount:
        logger.info(
            "pmm_withdraw_below_minimum",
            base_amount=base_slice,
            quote_amount=quote_slice,
            base_min_amount=base_min_amount,
            quote_min_amount=quote_min_amount,
        )
        raise WithdrawNotEnough(
            f"Withdraw of ({base_slice}, {quote_slice}) is below "
            f"minimum ({base_min_amount}, {quote_min_amount})"
        )

    withdraw_fee_base = fees.withdraw_fee(base_slice)
    withdraw_fee_quote = fees.withdraw_fee(quote_slice)
    admin_fee_base = fees.admin_withdraw_fee(withdraw_fee_base)
    admin_fee_quote = fees.admin_withdraw_fee(withdraw_fee_quote)
    base_out = base_slice - withdraw_fee_base
    quote_out = quote_slice - withdraw_fee_quote

    # The provider's payout and the admin share leave the pool; the rest of
    # the withdraw fee stays in the reserves
    base_reserve = params.base_reserve - FixedDecimal.from_int(base_out + admin_fee_base)
    quote_reserve = params.quote_reserve - FixedDecimal.from_int(quote_out + admin_fee_quote)

    return ShareBurn(
        base_out=base_out,
        quote_out=quote_out,
        withdraw_fee_base=withdraw_fee_base,
        withdraw_fee_quote=withdraw_fee_quote,
        admin_fee_base=admin_fee_base,
        admin_fee_quote=admin_fee_quote,
        params=params.with_reserves(base_reserve, quote_reserve).with_targets(
            base_target, quote_target
        ),
    )
