"""Prometheus metrics definitions and helpers.

Provides the metric set for the color lookup service: HTTP request
metrics recorded by middleware and lookup metrics recorded by the
lookup service.
"""

from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    CollectorRegistry,
)


class ColorServiceMetrics:
    """Color lookup service metrics."""

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize color service metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry

        # HTTP requests
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=registry,
        )

        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=registry,
        )

        # Lookups by outcome: resolved, unknown, unavailable
        self.color_lookups = Counter(
            "color_lookups_total",
            "Total number of color name lookups",
            ["outcome"],
            registry=registry,
        )

        self.color_lookup_duration = Histogram(
            "color_lookup_duration_seconds",
            "Time spent resolving color names",
            buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
            registry=registry,
        )


def get_metrics_handler(registry: CollectorRegistry) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Args:
        registry: Registry whose metrics are exposed

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
