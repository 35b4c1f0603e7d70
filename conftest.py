import asyncio
import inspect

import httpx
import pytest

from app.core.config import PricingConfig
from app.main import app
from app.api.deps import get_route_resolver
from app.schemas.quote import LaneRequest
from app.services.routing import RouteResolver


MIAMI = [-80.19, 25.77]
ATLANTA = [-84.39, 33.75]


class FakeRoutingService:
    """In-process stand-in for the geocode and directions endpoints.

    ``places`` maps query text to a [lon, lat] point; unknown text returns an
    empty feature collection. Every request is recorded in ``requests``.
    """

    def __init__(self, places=None, route=None, directions_status=200, geocode_status=200, fail=None, delay=0.0):
        self.places = places if places is not None else {}
        self.route = route
        self.directions_status = directions_status
        self.geocode_status = geocode_status
        self.fail = fail
        self.delay = delay
        self.requests = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail == "connect":
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail == "timeout":
            raise httpx.ReadTimeout("read timed out", request=request)

        if request.url.path == "/geocode/search":
            if self.geocode_status != 200:
                return httpx.Response(self.geocode_status, json={"error": "geocoder unavailable"})
            point = self.places.get(request.url.params["text"])
            features = [{"type": "Feature", "geometry": {"type": "Point", "coordinates": point}}] if point else []
            return httpx.Response(200, json={"type": "FeatureCollection", "features": features})

        if request.url.path.startswith("/v2/directions/"):
            if self.directions_status != 200:
                return httpx.Response(self.directions_status, json={"error": {"code": 2009, "message": "Route could not be found"}})
            features = [self.route] if self.route else []
            return httpx.Response(200, json={"type": "FeatureCollection", "features": features})

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def resolver(self, api_key="test-key", **kwargs) -> RouteResolver:
        return RouteResolver(api_key=api_key, transport=self.transport, **kwargs)


def route_feature(coordinates, meters):
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": coordinates},
        "properties": {
            "segments": [{"distance": meters, "duration": meters / 25.0}],
            "summary": {"distance": meters, "duration": meters / 25.0},
        },
    }


@pytest.fixture
def routing_service():
    """Factory for FakeRoutingService instances"""
    return FakeRoutingService


@pytest.fixture
def make_route_feature():
    return route_feature


@pytest.fixture
def miami_atlanta_route():
    return route_feature([MIAMI, [-82.0, 29.5], ATLANTA], 1067000.0)


@pytest.fixture
def fake_ors(miami_atlanta_route):
    return FakeRoutingService(
        places={"Miami, FL": MIAMI, "Atlanta, GA": ATLANTA},
        route=miami_atlanta_route,
    )


@pytest.fixture
def pricing_config():
    return PricingConfig()


@pytest.fixture
def golden_lane():
    return LaneRequest(
        origin="Miami, FL",
        destination="Atlanta, GA",
        distance_miles=663,
        weight_lbs=120,
        urgency="expedited",
    )


@pytest.fixture
def valid_lane_data():
    return {
        "origin": "Miami, FL",
        "destination": "Atlanta, GA",
        "distance_miles": "663",
        "weight_lbs": "120",
        "urgency": "expedited",
        "accessorials": {
            "inside_delivery": False,
            "white_glove": False,
            "after_hours": False,
        },
    }


@pytest.fixture
async def test_client():
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def override_resolver():
    def _override(resolver: RouteResolver):
        app.dependency_overrides[get_route_resolver] = lambda: resolver
    return _override



def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "routing: marks tests related to route resolution"
    )
    config.addinivalue_line(
        "markers", "session: marks tests related to the quote session"
    )
    config.addinivalue_line(
        "markers", "api: marks tests that go through the HTTP layer"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
