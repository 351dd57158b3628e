"""
Color lookup models.

Pydantic schemas for:
- The incoming color query (name taken verbatim from the path)
- The resolved color (lowercase #rrggbb hex)
- Error responses returned by the exception handlers

Both lookup entities are transient: created per request and discarded
once the response is written.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


HEX_PATTERN = r"^#[0-9a-f]{6}$"


class ColorQuery(BaseModel):
    """Color name as supplied by the client, unvalidated."""

    name: str = Field(
        ...,
        description="Human-readable color name, e.g. 'red' or 'cornflowerblue'"
    )

    model_config = ConfigDict(frozen=True)


class ColorResult(BaseModel):
    """Resolved color."""

    name: str = Field(
        ...,
        description="Color name the result was resolved from"
    )
    hex: str = Field(
        ...,
        pattern=HEX_PATTERN,
        description="Lowercase CSS hex triplet"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "cornflowerblue",
                "hex": "#6495ed"
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(
        ...,
        min_length=1,
        description="Error message"
    )
    error_code: Optional[str] = Field(
        None,
        description="Error code"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "Unknown color name: 'notacolor123'",
                "error_code": "COLOR_NOT_FOUND"
            }
        }
    )
