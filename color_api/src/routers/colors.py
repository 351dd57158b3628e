"""
Color lookup routers.

Provides:
- GET /css/{name}: HTML heading styled with the resolved color
- GET {api_prefix}/colors/{name}: the same lookup as JSON

Resolution errors propagate to the exception handlers registered in
main.py (404 for unknown names, 503 when the resolver is unavailable).
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse

from color_api.src.dependencies import get_color_service
from color_api.src.models.color import ColorQuery, ColorResult, ErrorResponse
from color_api.src.services.color_service import ColorLookupService
from color_api.src.services.rendering import render_heading

_error_responses = {
    404: {"model": ErrorResponse, "description": "Unknown color name"},
    503: {"model": ErrorResponse, "description": "Color resolver unavailable"},
}

css_router = APIRouter(
    prefix="/css",
    tags=["CSS"],
    responses=_error_responses,
)

colors_router = APIRouter(
    prefix="/colors",
    tags=["Colors"],
    responses=_error_responses,
)


@css_router.get(
    "/{name}",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="Render Color Heading",
    description="""
    Resolve a color name and render it as an HTML heading.

    **Path Parameters:**
    - name: Color name, e.g. `red` or `cornflowerblue`

    **Success Response (200):**
    `<h1 style="color: #rrggbb" >#rrggbb</h1>`
    """,
)
async def render_color(
    name: str,
    color_service: ColorLookupService = Depends(get_color_service),
) -> HTMLResponse:
    result = color_service.lookup(ColorQuery(name=name))
    return HTMLResponse(content=render_heading(result))


@colors_router.get(
    "/{name}",
    response_model=ColorResult,
    status_code=status.HTTP_200_OK,
    summary="Resolve Color Name",
)
async def get_color(
    name: str,
    color_service: ColorLookupService = Depends(get_color_service),
) -> ColorResult:
    """Resolve a color name to its hex triplet."""
    return color_service.lookup(ColorQuery(name=name))
