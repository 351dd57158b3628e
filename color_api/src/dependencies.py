"""
FastAPI dependency injection for the color lookup service.

The lookup service is built once during application startup and kept on
``app.state``; handlers receive it through these dependencies instead of
reading a module-level global.
"""

import structlog
from fastapi import Request

from color_api.src.services.color_resolver import ResolverUnavailableError
from color_api.src.services.color_service import ColorLookupService

logger = structlog.get_logger(__name__)


def get_color_service(request: Request) -> ColorLookupService:
    """
    Get the process-wide color lookup service.

    Args:
        request: Incoming request

    Returns:
        ColorLookupService built during startup

    Raises:
        ResolverUnavailableError: If startup has not initialized the service
    """
    service = getattr(request.app.state, "color_service", None)
    if service is None:
        logger.error("color_service_not_initialized")
        raise ResolverUnavailableError("color service not initialized")
    return service
