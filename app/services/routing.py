"""OpenRouteService client: two place names in, a drivable route out.

Phase 1 geocodes origin and destination concurrently, phase 2 asks for a
route between the two points. The provider speaks (lon, lat); everything
returned from here is (lat, lon).
"""
import asyncio
import logging
import math
from typing import Any, List, Optional, Sequence, Tuple

import httpx

from app.core.config import Settings
from app.core.enums import ResolutionErrorKind
from app.core.errors import ResolutionError
from app.core.metrics import track_resolution
from app.schemas.route import LatLng, RouteResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openrouteservice.org"
KM_TO_MILES = 0.621371

LonLat = Tuple[float, float]


def meters_to_miles(meters: float) -> float:
    return meters / 1000 * KM_TO_MILES


def round_miles(miles: float) -> int:
    """Nearest whole mile, halves rounded up."""
    return int(math.floor(miles + 0.5))


def to_lat_lng(position: Sequence[Any]) -> LatLng:
    # positions may carry a third elevation value
    lon, lat = position[0], position[1]
    return float(lat), float(lon)


def route_bounds(polyline: List[LatLng]) -> Tuple[LatLng, LatLng]:
    lats = [p[0] for p in polyline]
    lngs = [p[1] for p in polyline]
    return (min(lats), min(lngs)), (max(lats), max(lngs))


def route_center(polyline: List[LatLng]) -> LatLng:
    (south, west), (north, east) = route_bounds(polyline)
    return (south + north) / 2, (west + east) / 2


def segment_distance_meters(properties: dict) -> float:
    segments = properties.get("segments") or []
    if segments and segments[0].get("distance") is not None:
        return float(segments[0]["distance"])
    summary = properties.get("summary") or {}
    return float(summary.get("distance") or 0.0)


def build_route_result(feature: dict, start: LonLat, end: LonLat) -> RouteResult:
    coordinates = (feature.get("geometry") or {}).get("coordinates") or []
    if not coordinates:
        raise ResolutionError(ResolutionErrorKind.NO_ROUTE)

    polyline = [to_lat_lng(position) for position in coordinates]
    meters = segment_distance_meters(feature.get("properties") or {})

    return RouteResult(
        polyline=polyline,
        origin_point=to_lat_lng(start),
        destination_point=to_lat_lng(end),
        distance_meters=meters,
        distance_miles=round_miles(meters_to_miles(meters)),
        center=route_center(polyline),
        bounds=route_bounds(polyline),
    )


class RouteResolver:
    """Resolves an origin/destination pair to a route polyline and mileage.

    Configuration is passed in at construction; nothing here reads the
    environment. ``transport`` lets tests swap the network for an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        country: str = "US",
        profile: str = "driving-hgv",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.profile = profile
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "RouteResolver":
        return cls(
            api_key=settings.ORS_API_KEY,
            base_url=settings.ORS_BASE_URL,
            country=settings.ROUTE_COUNTRY,
            profile=settings.ROUTE_PROFILE,
            timeout=settings.ROUTE_PHASE_TIMEOUT,
            transport=transport,
        )

    @track_resolution
    async def resolve(self, origin: str, destination: str, api_key: Optional[str] = None) -> RouteResult:
        """Resolve two place names to a route.

        Raises ``ResolutionError`` and nothing else. A single attempt is made;
        retrying is up to the caller.
        """
        key = api_key or self.api_key
        if not key:
            logger.warning("Route resolution skipped: no API key configured")
            raise ResolutionError(ResolutionErrorKind.MISSING_CREDENTIAL)

        origin = (origin or "").strip()
        destination = (destination or "").strip()
        if not origin or not destination:
            raise ResolutionError(ResolutionErrorKind.NO_MATCH)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                start, end = await asyncio.wait_for(
                    self._geocode_pair(client, key, origin, destination),
                    timeout=self.timeout,
                )
                feature = await asyncio.wait_for(
                    self._directions(client, key, start, end),
                    timeout=self.timeout,
                )
            result = build_route_result(feature, start, end)
        except ResolutionError as e:
            logger.warning(f"Route resolution failed ({e.kind}): {origin!r} -> {destination!r}")
            raise
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Routing service timed out for {origin!r} -> {destination!r}: {e!r}")
            raise ResolutionError(ResolutionErrorKind.TRANSPORT) from e
        except httpx.HTTPError as e:
            logger.warning(f"Routing service request failed for {origin!r} -> {destination!r}: {e}")
            raise ResolutionError(ResolutionErrorKind.TRANSPORT) from e
        except (ValueError, KeyError, TypeError, IndexError, AttributeError) as e:
            logger.warning(f"Malformed routing service response for {origin!r} -> {destination!r}: {e!r}")
            raise ResolutionError(ResolutionErrorKind.TRANSPORT) from e
        except Exception as e:
            logger.exception(f"Unexpected route resolution error for {origin!r} -> {destination!r}")
            raise ResolutionError(ResolutionErrorKind.TRANSPORT) from e

        logger.info(
            f"Resolved route {origin!r} -> {destination!r}: "
            f"{result.distance_miles} mi, {len(result.polyline)} points"
        )
        return result

    async def _geocode_pair(
        self, client: httpx.AsyncClient, key: str, origin: str, destination: str
    ) -> Tuple[LonLat, LonLat]:
        results = await asyncio.gather(
            self._geocode(client, key, origin),
            self._geocode(client, key, destination),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results[0], results[1]

    async def _geocode(self, client: httpx.AsyncClient, key: str, text: str) -> LonLat:
        response = await client.get(
            "/geocode/search",
            params={
                "api_key": key,
                "text": text,
                "boundary.country": self.country,
                "size": 1,
            },
        )
        response.raise_for_status()
        features = response.json().get("features") or []
        if not features:
            logger.info(f"No geocode match for {text!r}")
            raise ResolutionError(ResolutionErrorKind.NO_MATCH)
        lon, lat = features[0]["geometry"]["coordinates"][:2]
        return float(lon), float(lat)

    async def _directions(self, client: httpx.AsyncClient, key: str, start: LonLat, end: LonLat) -> dict:
        response = await client.post(
            f"/v2/directions/{self.profile}/geojson",
            json={"coordinates": [list(start), list(end)]},
            headers={"Authorization": key},
        )
        # the provider answers 404 when the points cannot be connected
        if response.status_code == 404:
            raise ResolutionError(ResolutionErrorKind.NO_ROUTE)
        response.raise_for_status()
        features = response.json().get("features") or []
        if not features:
            raise ResolutionError(ResolutionErrorKind.NO_ROUTE)
        return features[0]
