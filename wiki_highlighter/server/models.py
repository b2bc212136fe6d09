"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request parsing, response
serialization, and automatic OpenAPI documentation.

HOW: One model per request/response body. Field names are snake_case in
Python and camelCase on the wire via aliases, matching what the browser
client sends and reads.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- FormatRequest.selected_text is Optional so null/missing reach the
  endpoint and get a 400 (not a 422 from schema validation)
- Responses serialize by alias (formattedText, selectedText)
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FormatRequest(BaseModel):
    """Body of POST /format."""

    model_config = ConfigDict(populate_by_name=True)

    selected_text: Optional[str] = Field(
        default=None,
        alias="selectedText",
        description="The text the user selected. Must be non-empty.",
    )


class FormatResponse(BaseModel):
    """Formatted text and the highlight color for it."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"formattedText": "Hello World", "color": "#2a9d8f"}]},
    )

    formatted_text: str = Field(
        alias="formattedText",
        description="The selected text with each word capitalized.",
    )
    color: str = Field(description="Highlight color as a 7-character '#rrggbb' string.")


class ColorResponse(BaseModel):
    """A single random palette color."""

    color: str = Field(description="Highlight color as a 7-character '#rrggbb' string.")


class ArticleResponse(BaseModel):
    """The article excerpt served to the client."""

    title: str = Field(description="Article title.")
    extract: str = Field(description="Plain-text excerpt, at most 500 words.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
