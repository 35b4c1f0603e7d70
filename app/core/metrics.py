"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quote_estimates = Counter(
    'quote_estimates_total',
    'Total lane estimates computed',
    ['result'],
    registry=registry
)

route_resolutions = Counter(
    'route_resolutions_total',
    'Total route resolution attempts',
    ['outcome'],
    registry=registry
)

route_resolution_duration = Histogram(
    'route_resolution_duration_seconds',
    'Route resolution duration in seconds',
    ['outcome'],
    registry=registry
)


def track_resolution(func: Callable) -> Callable:
    """Decorator to record outcome and duration of a route resolution"""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            outcome = str(getattr(e, 'kind', 'error'))
            duration = time.time() - start_time
            route_resolutions.labels(outcome=outcome).inc()
            route_resolution_duration.labels(outcome=outcome).observe(duration)
            raise
        duration = time.time() - start_time
        route_resolutions.labels(outcome='success').inc()
        route_resolution_duration.labels(outcome='success').observe(duration)
        return result
    return wrapper


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
