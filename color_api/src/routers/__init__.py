"""API routers."""

from color_api.src.routers.colors import colors_router, css_router

__all__ = ["colors_router", "css_router"]
