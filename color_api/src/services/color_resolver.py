"""
Color name resolution.

Provides:
- ColorNameResolver: the single-method capability the service depends on
- PillowColorNameResolver: resolver backed by Pillow's named-color table
- The resolution error taxonomy mapped to HTTP responses in main.py

The named-color database itself (CSS3 / X11 keywords) belongs to Pillow and
is not duplicated here.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping

import structlog
from PIL import ImageColor

from color_api.src.models.color import ColorResult

logger = structlog.get_logger(__name__)


class ColorResolutionError(Exception):
    """Base class for color resolution failures."""


class UnknownColorNameError(ColorResolutionError):
    """The resolver has no entry for the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown color name: {name!r}")


class ResolverUnavailableError(ColorResolutionError):
    """The resolver could not be reached or was never initialized."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Color resolver unavailable: {reason}")


class ColorNameResolver(ABC):
    """Maps a human-readable color name to its hex representation."""

    @abstractmethod
    def resolve(self, name: str) -> ColorResult:
        """
        Resolve a color name.

        Args:
            name: Color name exactly as received from the client

        Returns:
            ColorResult with a lowercase #rrggbb hex value

        Raises:
            UnknownColorNameError: If the name is not in the database
        """


class PillowColorNameResolver(ColorNameResolver):
    """
    Resolver backed by ``PIL.ImageColor``.

    The color table is snapshotted once at construction into a read-only
    mapping, so a single instance can be shared by concurrent requests.
    Lookups are case-insensitive, as in Pillow itself.
    """

    def __init__(self):
        try:
            table = {
                name: self._to_hex(ImageColor.getrgb(name))
                for name in list(ImageColor.colormap)
            }
        except (ValueError, TypeError) as e:
            logger.error("color_table_load_failed", error=str(e))
            raise ResolverUnavailableError(f"cannot load Pillow color table: {e}") from e

        self._table: Mapping[str, str] = MappingProxyType(table)
        logger.info("color_table_loaded", colors=len(self._table))

    @staticmethod
    def _to_hex(rgb) -> str:
        red, green, blue = rgb[:3]
        return f"#{red:02x}{green:02x}{blue:02x}"

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._table

    def resolve(self, name: str) -> ColorResult:
        hex_value = self._table.get(name.lower())
        if hex_value is None:
            raise UnknownColorNameError(name)
        return ColorResult(name=name, hex=hex_value)
