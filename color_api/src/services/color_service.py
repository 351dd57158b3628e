"""
Color lookup service.

Wraps a ColorNameResolver with logging, metrics and tracing. One instance
is built during application startup and handed to request handlers through
FastAPI dependency injection; it holds no per-request state.
"""

import time
from typing import Optional

import structlog

from color_api.src.models.color import ColorQuery, ColorResult
from color_api.src.services.color_resolver import (
    ColorNameResolver,
    ResolverUnavailableError,
    UnknownColorNameError,
)
from shared.metrics import ColorServiceMetrics
from shared.tracing import trace_function

logger = structlog.get_logger(__name__)

# Name every resolver is expected to know; used by readiness probes.
PROBE_COLOR_NAME = "black"


class ColorLookupService:
    """Read-only handle used by request handlers to resolve colors."""

    def __init__(
        self,
        resolver: ColorNameResolver,
        metrics: Optional[ColorServiceMetrics] = None,
    ):
        self._resolver = resolver
        self._metrics = metrics

    def _record(self, outcome: str, started: float) -> None:
        if self._metrics is None:
            return
        self._metrics.color_lookups.labels(outcome=outcome).inc()
        self._metrics.color_lookup_duration.observe(time.perf_counter() - started)

    @trace_function("color_lookup")
    def lookup(self, query: ColorQuery) -> ColorResult:
        """
        Resolve a color query.

        Args:
            query: Color name from the request

        Returns:
            Resolved color

        Raises:
            UnknownColorNameError: Name not known to the resolver
            ResolverUnavailableError: Resolver failed to answer
        """
        started = time.perf_counter()
        try:
            result = self._resolver.resolve(query.name)
        except UnknownColorNameError:
            self._record("unknown", started)
            logger.info("color_name_unknown", name=query.name)
            raise
        except ResolverUnavailableError as e:
            self._record("unavailable", started)
            logger.error("color_resolver_unavailable", name=query.name, reason=e.reason)
            raise

        self._record("resolved", started)
        logger.debug("color_resolved", name=query.name, hex=result.hex)
        return result

    def is_ready(self) -> bool:
        """Check that the resolver answers a probe lookup."""
        try:
            self._resolver.resolve(PROBE_COLOR_NAME)
        except (UnknownColorNameError, ResolverUnavailableError) as e:
            logger.error("color_resolver_probe_failed", error=str(e))
            return False
        return True
