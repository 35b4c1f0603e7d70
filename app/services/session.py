import logging
from typing import List, Optional

from app.core.config import PricingConfig
from app.core.enums import ResolutionState
from app.core.errors import ResolutionError
from app.schemas.quote import LaneRequest, RateBreakdown
from app.schemas.route import LatLng, RouteResult
from app.services.pricing import estimate
from app.services.routing import RouteResolver

logger = logging.getLogger(__name__)


class QuoteSession:
    """Lane record plus route preview state for one quoting user.

    Each resolve attempt gets a sequence number; a result arriving after a
    newer attempt has started is dropped, so the lane only ever reflects the
    latest request.
    """

    def __init__(
        self,
        resolver: RouteResolver,
        lane: Optional[LaneRequest] = None,
        pricing: Optional[PricingConfig] = None,
    ):
        self.resolver = resolver
        self.lane = lane or LaneRequest()
        self.pricing = pricing
        self.route: Optional[RouteResult] = None
        self.state = ResolutionState.IDLE
        self.error: Optional[ResolutionError] = None
        self._sequence = 0

    @property
    def polyline(self) -> List[LatLng]:
        return list(self.route.polyline) if self.route else []

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def estimate(self) -> Optional[RateBreakdown]:
        return estimate(self.lane, self.pricing)

    def update(self, **fields) -> Optional[RateBreakdown]:
        for name, value in fields.items():
            setattr(self.lane, name, value)
        return self.estimate()

    async def resolve_route(self) -> ResolutionState:
        self._sequence += 1
        attempt = self._sequence
        self.state = ResolutionState.RESOLVING
        self.error = None

        try:
            result = await self.resolver.resolve(self.lane.origin or "", self.lane.destination or "")
        except ResolutionError as e:
            if attempt != self._sequence:
                logger.info(f"Dropping stale resolution failure from attempt {attempt}")
                return self.state
            self.route = None
            self.error = e
            self.state = ResolutionState.FAILED
            return self.state

        if attempt != self._sequence:
            logger.info(f"Dropping stale route from attempt {attempt}")
            return self.state

        self.route = result
        self.lane.distance_miles = result.distance_miles
        self.state = ResolutionState.SUCCESS
        return self.state
