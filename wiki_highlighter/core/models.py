"""Article and format result dataclasses shared by server and client.

WHY: The server builds these from the MediaWiki response and from the
capitalizer; the client parses them back out of the HTTP JSON. One typed
definition keeps both sides in agreement on field names.

HOW: Frozen dataclasses with from_dict factories that read the camelCase
wire names.

RULES:
- Article is immutable once built; a reload replaces it wholesale
- FormatResult.color is a 7-character "#rrggbb" string
- from_dict raises ValueError on missing or mistyped fields
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Article:
    """A titled article excerpt."""

    title: str
    extract: str

    @classmethod
    def from_dict(cls, data: dict) -> Article:
        """Parse an Article from the /wikipedia JSON body.

        RULES:
        - Missing or empty title becomes "Article"
        - Missing extract becomes ""
        """
        if not isinstance(data, dict):
            raise ValueError("article payload must be an object")
        return cls(
            title=data.get("title") or "Article",
            extract=data.get("extract") or "",
        )


@dataclass(frozen=True)
class FormatResult:
    """Formatted text plus the highlight color to render it with."""

    formatted_text: str
    color: str

    @classmethod
    def from_dict(cls, data: dict) -> FormatResult:
        if not isinstance(data, dict):
            raise ValueError("format payload must be an object")
        text = data.get("formattedText")
        color = data.get("color")
        if not isinstance(text, str) or not isinstance(color, str):
            raise ValueError("format payload needs string formattedText and color")
        return cls(formatted_text=text, color=color)

    def to_dict(self) -> dict:
        return {"formattedText": self.formatted_text, "color": self.color}
