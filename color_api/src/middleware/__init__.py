"""FastAPI middleware components.

This package contains custom middleware for request/response processing:
logging, correlation IDs, metrics and security headers.
"""

from color_api.src.middleware.request_logging import (
    CORRELATION_ID_HEADER,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

__all__ = [
    "CORRELATION_ID_HEADER",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
