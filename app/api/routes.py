"""Route preview endpoint"""
from fastapi import APIRouter, Depends

from app.api.deps import get_route_resolver
from app.core.errors import ResolutionError
from app.schemas.route import RouteQuery, RouteResponse
from app.services.routing import RouteResolver

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/resolve", response_model=RouteResponse)
async def resolve_route(
    query: RouteQuery,
    resolver: RouteResolver = Depends(get_route_resolver),
):
    try:
        route = await resolver.resolve(query.origin, query.destination, api_key=query.api_key)
    except ResolutionError as e:
        return RouteResponse(ok=False, error=e.kind, message=e.message)

    return RouteResponse(ok=True, route=route)
