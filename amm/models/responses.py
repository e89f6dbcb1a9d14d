"""Pydantic response models built from engine results."""

from typing import Literal

from pydantic import BaseModel

from amm.effects import BurnShares, Effect, MintShares, Transfer
from amm.liquidity import LiquidityResult
from amm.models.types import Uint64
from amm.platform.config import PlatformConfig, PlatformStats
from amm.pools.types import Pair
from amm.swap import SwapResult


class PairView(BaseModel):
    """Snapshot of a pair's reserves and share supply."""

    asset_a: str
    asset_b: str
    reserve_a: Uint64
    reserve_b: Uint64
    share_supply_total: Uint64

    @classmethod
    def from_pair(cls, pair: Pair) -> "PairView":
        return cls(
            asset_a=pair.asset_a,
            asset_b=pair.asset_b,
            reserve_a=str(pair.reserve_a),
            reserve_b=str(pair.reserve_b),
            share_supply_total=str(pair.share_supply_total),
        )


class PlatformView(BaseModel):
    """Platform configuration as seen by clients."""

    admin: str
    base_asset: str
    fee_collector: str
    protocol_fee_rate_bps: int
    paused: bool
    pause_count: int

    @classmethod
    def from_config(cls, config: PlatformConfig) -> "PlatformView":
        return cls(
            admin=config.admin,
            base_asset=config.base_asset,
            fee_collector=config.fee_collector,
            protocol_fee_rate_bps=config.protocol_fee_rate_bps,
            paused=config.paused,
            pause_count=config.pause_count,
        )


class StatsView(BaseModel):
    """Running platform totals."""

    pair_count: int
    total_volume: str
    total_fees: str

    @classmethod
    def from_stats(cls, stats: PlatformStats) -> "StatsView":
        return cls(
            pair_count=stats.pair_count,
            total_volume=str(stats.total_volume),
            total_fees=str(stats.total_fees),
        )


class EffectView(BaseModel):
    """One executed effect: a transfer, a share mint or a share burn."""

    kind: Literal["transfer", "mint_shares", "burn_shares"]
    amount: Uint64
    asset: str | None = None
    source: str | None = None
    destination: str | None = None
    pair: str | None = None
    owner: str | None = None

    @classmethod
    def from_effect(cls, effect: Effect) -> "EffectView":
        if isinstance(effect, Transfer):
            return cls(
                kind="transfer",
                amount=str(effect.amount),
                asset=effect.asset,
                source=effect.source,
                destination=effect.destination,
            )
        kind: Literal["mint_shares", "burn_shares"] = (
            "mint_shares" if isinstance(effect, MintShares) else "burn_shares"
        )
        return cls(kind=kind, amount=str(effect.amount), pair=str(effect.pair), owner=effect.owner)


class LiquidityResponse(BaseModel):
    """Result of a deposit or withdrawal."""

    pair: PairView
    amount_a: Uint64
    amount_b: Uint64
    shares: Uint64
    effects: list[EffectView]

    @classmethod
    def from_result(cls, result: LiquidityResult, effects: list[Effect]) -> "LiquidityResponse":
        return cls(
            pair=PairView.from_pair(result.pair),
            amount_a=str(result.amount_a),
            amount_b=str(result.amount_b),
            shares=str(result.shares),
            effects=[EffectView.from_effect(e) for e in effects],
        )


class QuoteResponse(BaseModel):
    """Priced swap at the current reserves."""

    asset_in: str
    asset_out: str
    amount_in: Uint64
    protocol_fee: Uint64
    amount_in_net: Uint64
    amount_out: Uint64

    @classmethod
    def from_result(cls, result: SwapResult) -> "QuoteResponse":
        return cls(
            asset_in=result.asset_in,
            asset_out=result.asset_out,
            amount_in=str(result.amount_in),
            protocol_fee=str(result.protocol_fee),
            amount_in_net=str(result.amount_in_net),
            amount_out=str(result.amount_out),
        )


class SwapResponse(QuoteResponse):
    """Executed swap with the post-trade pair and its effects."""

    pair: PairView
    effects: list[EffectView]

    @classmethod
    def from_swap(cls, result: SwapResult, effects: list[Effect]) -> "SwapResponse":
        quote = QuoteResponse.from_result(result)
        return cls(
            **quote.model_dump(),
            pair=PairView.from_pair(result.pair),
            effects=[EffectView.from_effect(e) for e in effects],
        )


class ErrorResponse(BaseModel):
    """Body returned for a rejected operation."""

    error: str
    detail: str
