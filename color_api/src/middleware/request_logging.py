"""
Request logging, metrics and security header middleware.

Provides:
- Correlation IDs (echoed from X-Correlation-ID or generated)
- Structured request/response logging
- Prometheus HTTP metrics
- Security response headers
"""

import time
import uuid

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.logging import bind_context, unbind_context
from shared.metrics import ColorServiceMetrics

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Metric label for requests no route matched.
UNMATCHED_ENDPOINT = "unmatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics."""

    def __init__(self, app, metrics: ColorServiceMetrics = None):
        super().__init__(app)
        self.metrics = metrics

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        # Route template keeps metric cardinality bounded (/css/{name}).
        route = request.scope.get("route")
        return getattr(route, "path", UNMATCHED_ENDPOINT)

    def _observe(self, method: str, endpoint: str, status_code: int, duration: float) -> None:
        if not self.metrics:
            return
        self.metrics.http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status=status_code
        ).inc()
        self.metrics.http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        bind_context(correlation_id=correlation_id)
        start_time = time.perf_counter()

        if self.metrics:
            self.metrics.http_requests_in_progress.labels(method=method).inc()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)

            duration = time.perf_counter() - start_time
            self._observe(method, self._endpoint_label(request), response.status_code, duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s",
            )

        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            # Answered here so the outer middleware still decorates the 500.
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"}
            )
            self._observe(method, self._endpoint_label(request), response.status_code, duration)

        finally:
            if self.metrics:
                self.metrics.http_requests_in_progress.labels(method=method).dec()
            unbind_context("correlation_id")

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
