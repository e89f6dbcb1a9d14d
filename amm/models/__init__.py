"""Pydantic models for the pool engine HTTP surface."""

from amm.models.requests import (
    AddLiquidityRequest,
    ConfigurePlatformRequest,
    CreatePairRequest,
    RemoveLiquidityRequest,
    SetPauseRequest,
    SwapRequest,
)
from amm.models.responses import (
    EffectView,
    ErrorResponse,
    LiquidityResponse,
    PairView,
    PlatformView,
    QuoteResponse,
    StatsView,
    SwapResponse,
)
from amm.models.types import AccountId, AssetId, BasisPoints, Uint64

__all__ = [
    # Types
    "AccountId",
    "AssetId",
    "BasisPoints",
    "Uint64",
    # Requests
    "AddLiquidityRequest",
    "ConfigurePlatformRequest",
    "CreatePairRequest",
    "RemoveLiquidityRequest",
    "SetPauseRequest",
    "SwapRequest",
    # Responses
    "EffectView",
    "ErrorResponse",
    "LiquidityResponse",
    "PairView",
    "PlatformView",
    "QuoteResponse",
    "StatsView",
    "SwapResponse",
]
