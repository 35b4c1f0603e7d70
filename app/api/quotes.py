"""Lane estimate endpoints"""
from fastapi import APIRouter, Depends

from app.api.deps import get_pricing_config, get_route_resolver
from app.core.config import PricingConfig
from app.core.metrics import quote_estimates
from app.schemas.quote import LaneRequest, QuoteEstimateResponse
from app.schemas.route import AutoDistanceResponse
from app.services.pricing import estimate
from app.services.routing import RouteResolver
from app.services.session import QuoteSession

router = APIRouter(prefix="/quotes", tags=["quotes"])

PLACEHOLDER_MESSAGE = "Enter lane details to see an estimate."


@router.post("/estimate", response_model=QuoteEstimateResponse)
async def estimate_quote(
    lane: LaneRequest,
    pricing: PricingConfig = Depends(get_pricing_config),
):
    result = estimate(lane, pricing)
    if result is None:
        quote_estimates.labels(result="absent").inc()
        return QuoteEstimateResponse(message=PLACEHOLDER_MESSAGE)

    quote_estimates.labels(result="priced").inc()
    return QuoteEstimateResponse(estimate=result)


@router.post("/auto-distance", response_model=AutoDistanceResponse)
async def auto_distance(
    lane: LaneRequest,
    resolver: RouteResolver = Depends(get_route_resolver),
    pricing: PricingConfig = Depends(get_pricing_config),
):
    """Resolve the lane's origin and destination, then re-price with the routed mileage."""
    session = QuoteSession(resolver, lane=lane, pricing=pricing)
    await session.resolve_route()

    result = session.estimate()
    quote_estimates.labels(result="priced" if result else "absent").inc()

    return AutoDistanceResponse(
        lane=session.lane,
        state=session.state,
        route=session.route,
        estimate=result,
        error=session.error.kind if session.error else None,
        message=session.message or (None if result else PLACEHOLDER_MESSAGE),
    )
