"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

booking_attempts = Counter(
    'hotel_booking_attempts_total',
    'Total booking operations by outcome',
    ['operation', 'status']  # operation: create/read/update; status: success/forbidden/not_found/conflict
)

booking_latency = Histogram(
    'hotel_booking_latency_seconds',
    'Booking operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

room_slot_conflicts = Counter(
    'hotel_booking_room_slot_conflicts_total',
    'Slot claims lost to a concurrent booking after the vacancy check passed'
)


def metrics_endpoint() -> Response:
    """Render the default registry in the Prometheus text format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(operation: str, status: str):
    """Record a booking operation. Status: success, forbidden, not_found, conflict"""
    booking_attempts.labels(operation=operation, status=status).inc()


def record_slot_conflict():
    room_slot_conflicts.inc()
