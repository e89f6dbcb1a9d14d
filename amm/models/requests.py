"""Pydantic request models, one per engine operation.

Amounts travel as decimal strings and are validated as uint64 at the
boundary; the ``*_int`` properties hand plain ints to the engine.
"""

from pydantic import BaseModel, Field

from amm.models.types import AccountId, AssetId, BasisPoints, Uint64


class ConfigurePlatformRequest(BaseModel):
    """Create the platform configuration. The caller becomes admin."""

    caller: AccountId
    fee_rate_bps: BasisPoints
    base_asset: AssetId
    fee_collector: AccountId


class SetPauseRequest(BaseModel):
    """Pause or resume the platform."""

    caller: AccountId
    pause: bool


class CreatePairRequest(BaseModel):
    """Register a pair under the literal (asset_a, asset_b) key."""

    caller: AccountId
    asset_a: AssetId
    asset_b: AssetId


class AddLiquidityRequest(BaseModel):
    """Deposit both assets of a pair."""

    caller: AccountId
    amount_a: Uint64
    amount_b: Uint64

    @property
    def amount_a_int(self) -> int:
        return int(self.amount_a)

    @property
    def amount_b_int(self) -> int:
        return int(self.amount_b)


class RemoveLiquidityRequest(BaseModel):
    """Burn shares for a proportional withdrawal."""

    caller: AccountId
    share_amount: Uint64
    min_amount_a: Uint64 = Field(default="0", description="Minimum asset A payout")
    min_amount_b: Uint64 = Field(default="0", description="Minimum asset B payout")

    @property
    def share_amount_int(self) -> int:
        return int(self.share_amount)

    @property
    def min_amount_a_int(self) -> int:
        return int(self.min_amount_a)

    @property
    def min_amount_b_int(self) -> int:
        return int(self.min_amount_b)


class SwapRequest(BaseModel):
    """Sell ``amount_in`` of one side of a pair for the other."""

    caller: AccountId
    amount_in: Uint64
    min_amount_out: Uint64 = Field(description="Slippage bound on the output")
    input_is_asset_a: bool = Field(description="True sells asset A for asset B")

    @property
    def amount_in_int(self) -> int:
        return int(self.amount_in)

    @property
    def min_amount_out_int(self) -> int:
        return int(self.min_amount_out)
