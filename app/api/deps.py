from app.core.config import PricingConfig, settings
from app.services.routing import RouteResolver


def get_pricing_config() -> PricingConfig:
    return settings.pricing()


def get_route_resolver() -> RouteResolver:
    return RouteResolver.from_settings(settings)
