"""Business logic services for the FastAPI application."""

from color_api.src.services.color_resolver import (
    ColorNameResolver,
    ColorResolutionError,
    PillowColorNameResolver,
    ResolverUnavailableError,
    UnknownColorNameError,
)
from color_api.src.services.color_service import ColorLookupService
from color_api.src.services.rendering import render_heading

__all__ = [
    "ColorNameResolver",
    "ColorResolutionError",
    "PillowColorNameResolver",
    "ResolverUnavailableError",
    "UnknownColorNameError",
    "ColorLookupService",
    "render_heading",
]
