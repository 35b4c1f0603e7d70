from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.core.enums import ResolutionErrorKind, ResolutionState
from app.schemas.quote import LaneRequest, RateBreakdown

# (latitude, longitude), the order the map widget expects
LatLng = Tuple[float, float]


class RouteQuery(BaseModel):
    origin: str = ""
    destination: str = ""
    api_key: Optional[str] = None


class RouteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    polyline: List[LatLng]
    origin_point: LatLng
    destination_point: LatLng
    distance_meters: float
    distance_miles: int
    center: LatLng
    bounds: Tuple[LatLng, LatLng]


class RouteResponse(BaseModel):
    ok: bool
    route: Optional[RouteResult] = None
    error: Optional[ResolutionErrorKind] = None
    message: Optional[str] = None


class AutoDistanceResponse(BaseModel):
    lane: LaneRequest
    state: ResolutionState
    route: Optional[RouteResult] = None
    estimate: Optional[RateBreakdown] = None
    error: Optional[ResolutionErrorKind] = None
    message: Optional[str] = None
