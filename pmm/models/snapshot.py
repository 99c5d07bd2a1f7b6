"""Pool state snapshot ingested from the surrounding system."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from pmm.constants import WAD
from pmm.curve.params import CurveParameters
from pmm.fees import DEFAULT_FEES, Fees
from pmm.liquidity import ShareBurn, ShareMint, buy_shares, sell_shares
from pmm.math.fixed_point import FixedDecimal
from pmm.models.types import Uint128, Uint256


class PoolSnapshot(BaseModel):
    """Persisted pool values, read right before a pricing call.

    All curve values are raw 18-decimal scaled integers as decimal strings,
    e.g. an oracle price of 100 is "100000000000000000000".
    """

    k: Uint128 = Field(description="Curvature, scaled; at most 10^18")
    oracle_price: Uint128 = Field(alias="oraclePrice")
    base_reserve: Uint128 = Field(alias="baseReserve")
    quote_reserve: Uint128 = Field(alias="quoteReserve")
    base_target: Uint128 = Field(alias="baseTarget")
    quote_target: Uint128 = Field(alias="quoteTarget")
    lp_supply: Uint256 = Field(
        default="0",
        alias="lpSupply",
        description="Outstanding pool shares in native units.",
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("k")
    @classmethod
    def _k_at_most_one(cls, value: str) -> str:
        if int(value) > WAD:
            raise ValueError(f"Curvature must be in [0, 1], got scaled value {value}")
        return value

    @property
    def lp_supply_int(self) -> int:
        return int(self.lp_supply)

    def to_curve_parameters(self) -> CurveParameters:
        """Build the ephemeral curve input from this snapshot."""
        return CurveParameters(
            k=FixedDecimal(int(self.k)),
            oracle_price=FixedDecimal(int(self.oracle_price)),
            base_reserve=FixedDecimal(int(self.base_reserve)),
            quote_reserve=FixedDecimal(int(self.quote_reserve)),
            base_target=FixedDecimal(int(self.base_target)),
            quote_target=FixedDecimal(int(self.quote_target)),
        )

    def mint_shares(self, base_balance: int, quote_balance: int) -> ShareMint:
        """Mint shares for a deposit against this snapshot's share supply."""
        return buy_shares(
            self.to_curve_parameters(), base_balance, quote_balance, self.lp_supply_int
        )

    def burn_shares(
        self,
        share_amount: int,
        base_min_amount: int = 0,
        quote_min_amount: int = 0,
        fees: Fees = DEFAULT_FEES,
    ) -> ShareBurn:
        """Burn shares for a withdrawal against this snapshot's share supply."""
        return sell_shares(
            self.to_curve_parameters(),
            share_amount,
            self.lp_supply_int,
            base_min_amount,
            quote_min_amount,
            fees,
        )

    @classmethod
    def from_curve_parameters(cls, params: CurveParameters, lp_supply: int = 0) -> PoolSnapshot:
        """Snapshot of post-operation parameters for the caller to persist.

        Raises:
            ValidationError: If a value does not fit the persisted u128 range
        """
        return cls(
            k=params.k.value,
            oracle_price=params.oracle_price.value,
            base_reserve=params.base_reserve.value,
            quote_reserve=params.quote_reserve.value,
            base_target=params.base_target.value,
            quote_target=params.quote_target.value,
            lp_supply=lp_supply,
        )
