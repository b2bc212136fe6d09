"""Async HTTP client for the Wiki Highlighter API.

WHY: The article view needs two calls: load the article excerpt and format
a selected string. This module hides the HTTP details behind one client
class so the view and the CLI only deal with Article and FormatResult.

HOW: Wraps httpx.AsyncClient. HighlighterClient is an async context
manager. Enter it to open the connection pool, exit to close it. Non-2xx
responses raise ApiError carrying the status code and body.

RULES:
- Always use the async context manager (async with HighlighterClient() as client:)
- base_url defaults to API_BASE_URL from config
- No retries and no cancellation: a request always runs to completion
- Transport errors propagate as httpx.HTTPError
"""

from __future__ import annotations

import logging

import httpx

from wiki_highlighter.config import API_BASE_URL
from wiki_highlighter.core.models import Article, FormatResult

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API returns a non-success response.

    RULES:
    - Always include status_code and message
    - message is the response body text or a summary
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error {status_code}: {message}")


class HighlighterClient:
    """Async client for the /wikipedia and /format endpoints.

    ``transport`` lets tests plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or API_BASE_URL).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HighlighterClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            timeout=httpx.Timeout(30.0, connect=10.0),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "HighlighterClient must be used as an async context manager: "
                "async with HighlighterClient() as client: ..."
            )
        return self._client

    async def fetch_article(self) -> Article:
        """GET /wikipedia and return the article excerpt.

        Raises:
            ApiError: on a non-2xx response.
        """
        client = self._ensure_client()
        resp = await client.get("/wikipedia")
        if not resp.is_success:
            raise ApiError(resp.status_code, resp.text)
        return Article.from_dict(resp.json())

    async def format_text(self, selected_text: str) -> FormatResult:
        """POST /format with the selected text.

        Raises:
            ApiError: on a non-2xx response, including 400 for empty text.
        """
        client = self._ensure_client()
        logger.debug("Formatting %d characters", len(selected_text))
        resp = await client.post("/format", json={"selectedText": selected_text})
        if not resp.is_success:
            raise ApiError(resp.status_code, resp.text)
        return FormatResult.from_dict(resp.json())
