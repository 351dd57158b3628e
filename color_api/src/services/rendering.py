"""HTML rendering of resolved colors."""

import html

from color_api.src.models.color import ColorResult


def render_heading(result: ColorResult) -> str:
    """
    Render a resolved color as an inline-styled heading.

    The hex value appears twice: as the CSS color and as the visible text.
    It is HTML-escaped before interpolation even though resolvers only
    produce ``#rrggbb`` strings.

    Args:
        result: Resolved color

    Returns:
        HTML fragment, e.g. ``<h1 style="color: #ff0000" >#ff0000</h1>``
    """
    color = html.escape(result.hex, quote=True)
    return f'<h1 style="color: {color}" >{color}</h1>'
