"""
Prometheus metrics for auth and event activity, served at /metrics.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Auth metrics
auth_attempts = Counter(
    'eventhub_auth_attempts_total',
    'Authentication attempts',
    ['action', 'status']  # register/login/guest_login/convert_guest, success/rejected/error
)

# Event metrics
event_actions = Counter(
    'eventhub_event_actions_total',
    'Event mutations',
    ['action', 'status']  # create/update/delete/join/leave, success/rejected
)

request_latency = Histogram(
    'eventhub_request_latency_seconds',
    'HTTP request latency',
    ['method'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# Cache metrics
cache_operations = Counter(
    'eventhub_cache_operations_total',
    'Event list cache operations',
    ['operation', 'result']  # get/set/invalidate, hit/miss/ok/error
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_auth_attempt(action: str, status: str):
    """Status: success, rejected, error"""
    auth_attempts.labels(action=action, status=status).inc()


def record_event_action(action: str, status: str):
    """Status: success, rejected"""
    event_actions.labels(action=action, status=status).inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()


def observe_request(method: str, seconds: float):
    request_latency.labels(method=method).observe(seconds)
