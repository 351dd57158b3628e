"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    ColorServiceMetrics,
    get_metrics_handler,
)

__all__ = [
    "ColorServiceMetrics",
    "get_metrics_handler",
]
