"""Data models for the FastAPI service.

This package contains Pydantic models for request/response validation
and the transient color lookup entities.
"""

from color_api.src.models.color import ColorQuery, ColorResult, ErrorResponse

__all__ = ["ColorQuery", "ColorResult", "ErrorResponse"]
