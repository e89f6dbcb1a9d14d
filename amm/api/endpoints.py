"""API endpoints for the pool engine.

Handlers are plain (sync) functions: FastAPI runs them in its threadpool and
the engine serializes work per pair with its own locks. Engine errors
propagate to the AmmError handler in amm.api.main.
"""

import structlog
from fastapi import APIRouter, Depends, Query

from amm.constants import U64_MAX
from amm.engine import Engine, get_default_engine
from amm.models.requests import (
    AddLiquidityRequest,
    ConfigurePlatformRequest,
    CreatePairRequest,
    RemoveLiquidityRequest,
    SetPauseRequest,
    SwapRequest,
)
from amm.models.responses import (
    LiquidityResponse,
    PairView,
    PlatformView,
    QuoteResponse,
    StatsView,
    SwapResponse,
)

logger = structlog.get_logger()

router = APIRouter()


def get_engine() -> Engine:
    """Dependency provider for the engine instance.

    Override this in tests to inject a fresh engine:
        app.dependency_overrides[get_engine] = lambda: engine

    Returns:
        The engine instance serving requests.
    """
    return get_default_engine()


# --- Platform ---


@router.get("/platform")
def get_platform(engine: Engine = Depends(get_engine)) -> PlatformView:
    """Current platform configuration (409 until configured)."""
    return PlatformView.from_config(engine.get_platform())


@router.post("/platform", status_code=201)
def configure_platform(
    request: ConfigurePlatformRequest,
    engine: Engine = Depends(get_engine),
) -> PlatformView:
    """Create the platform configuration; the caller becomes admin."""
    config = engine.configure_platform(
        caller=request.caller,
        fee_rate_bps=request.fee_rate_bps,
        base_asset=request.base_asset,
        fee_collector=request.fee_collector,
    )
    return PlatformView.from_config(config)


@router.post("/platform/pause")
def set_pause(request: SetPauseRequest, engine: Engine = Depends(get_engine)) -> PlatformView:
    """Pause or resume swaps and liquidity changes (admin only)."""
    return PlatformView.from_config(engine.set_pause(request.caller, request.pause))


@router.get("/platform/stats")
def get_stats(engine: Engine = Depends(get_engine)) -> StatsView:
    """Running totals over committed operations."""
    return StatsView.from_stats(engine.get_stats())


# --- Pairs ---


@router.post("/pairs", status_code=201)
def create_pair(request: CreatePairRequest, engine: Engine = Depends(get_engine)) -> PairView:
    """Register an empty pair."""
    pair = engine.create_pair(request.caller, request.asset_a, request.asset_b)
    return PairView.from_pair(pair)


@router.get("/pairs/{asset_a}/{asset_b}")
def get_pair(asset_a: str, asset_b: str, engine: Engine = Depends(get_engine)) -> PairView:
    """Current reserves and share supply of a pair."""
    return PairView.from_pair(engine.get_pair(asset_a, asset_b))


@router.post("/pairs/{asset_a}/{asset_b}/liquidity")
def add_liquidity(
    asset_a: str,
    asset_b: str,
    request: AddLiquidityRequest,
    engine: Engine = Depends(get_engine),
) -> LiquidityResponse:
    """Deposit both assets and mint shares to the caller."""
    result = engine.add_liquidity(
        request.caller,
        asset_a,
        asset_b,
        request.amount_a_int,
        request.amount_b_int,
    )
    return LiquidityResponse.from_result(result, result.deposit_effects(request.caller))


@router.post("/pairs/{asset_a}/{asset_b}/liquidity/remove")
def remove_liquidity(
    asset_a: str,
    asset_b: str,
    request: RemoveLiquidityRequest,
    engine: Engine = Depends(get_engine),
) -> LiquidityResponse:
    """Burn the caller's shares for a proportional withdrawal."""
    result = engine.remove_liquidity(
        request.caller,
        asset_a,
        asset_b,
        request.share_amount_int,
        min_amount_a=request.min_amount_a_int,
        min_amount_b=request.min_amount_b_int,
    )
    return LiquidityResponse.from_result(result, result.withdrawal_effects(request.caller))


@router.post("/pairs/{asset_a}/{asset_b}/swap")
def swap(
    asset_a: str,
    asset_b: str,
    request: SwapRequest,
    engine: Engine = Depends(get_engine),
) -> SwapResponse:
    """Execute a single-hop swap."""
    result = engine.swap(
        request.caller,
        asset_a,
        asset_b,
        request.amount_in_int,
        request.min_amount_out_int,
        request.input_is_asset_a,
    )
    fee_collector = engine.get_platform().fee_collector
    return SwapResponse.from_swap(result, result.effects(request.caller, fee_collector))


@router.get("/pairs/{asset_a}/{asset_b}/quote")
def quote(
    asset_a: str,
    asset_b: str,
    amount_in: int = Query(ge=0, le=U64_MAX),
    input_is_asset_a: bool = Query(default=True),
    engine: Engine = Depends(get_engine),
) -> QuoteResponse:
    """Price a swap at the current reserves without executing it."""
    result = engine.quote(asset_a, asset_b, amount_in, input_is_asset_a)
    logger.debug(
        "quote_served",
        pair=f"{asset_a}/{asset_b}",
        amount_in=amount_in,
        amount_out=result.amount_out,
    )
    return QuoteResponse.from_result(result)
