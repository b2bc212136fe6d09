"""Async client for the MediaWiki extracts API.

WHY: The /wikipedia endpoint serves one fixed article excerpt. Fetching it
from the MediaWiki API keeps the content current without storing anything,
and trimming it here keeps the client page small.

HOW: One GET to api.php with action=query&prop=extracts&explaintext=true.
The first page in query.pages is taken, its extract split on spaces (empty
tokens dropped) and the first ARTICLE_WORD_LIMIT words rejoined.

RULES:
- Always sends a User-Agent header (MediaWiki rejects anonymous bots)
- Non-2xx responses and transport errors raise WikipediaError
- A page without a title falls back to the requested title
- A page without an extract yields an empty extract
"""

from __future__ import annotations

import logging

import httpx

from wiki_highlighter.config import (
    ARTICLE_WORD_LIMIT,
    WIKIPEDIA_API_URL,
    WIKIPEDIA_TITLE,
    WIKIPEDIA_USER_AGENT,
)
from wiki_highlighter.core.models import Article

logger = logging.getLogger(__name__)


class WikipediaError(Exception):
    """Raised when the article cannot be fetched from MediaWiki.

    RULES:
    - status_code is the upstream HTTP status, or None for transport errors
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def limit_words(text: str, limit: int = ARTICLE_WORD_LIMIT) -> str:
    """Keep the first ``limit`` space-delimited words, joined by single spaces."""
    words = [w for w in text.split(" ") if w]
    return " ".join(words[:limit])


class WikipediaClient:
    """Fetches one article excerpt per call.

    ``transport`` lets tests plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        title: str | None = None,
        api_url: str | None = None,
        word_limit: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.title = title or WIKIPEDIA_TITLE
        self.api_url = api_url or WIKIPEDIA_API_URL
        self.word_limit = word_limit if word_limit is not None else ARTICLE_WORD_LIMIT
        self._transport = transport

    async def fetch_article(self) -> Article:
        params = {
            "action": "query",
            "titles": self.title,
            "prop": "extracts",
            "explaintext": "true",
            "format": "json",
        }
        async with httpx.AsyncClient(
            headers={"User-Agent": WIKIPEDIA_USER_AGENT},
            transport=self._transport,
            timeout=httpx.Timeout(15.0, connect=5.0),
        ) as client:
            try:
                resp = await client.get(self.api_url, params=params)
            except httpx.HTTPError as exc:
                raise WikipediaError("Wikipedia request failed: {}".format(exc)) from exc

        if not resp.is_success:
            raise WikipediaError(
                "Wikipedia returned HTTP {}".format(resp.status_code),
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise WikipediaError("Wikipedia returned invalid JSON") from exc

        page = _first_page(data)
        title = page.get("title") or self.title
        extract = page.get("extract") or ""
        logger.debug("Fetched %r (%d chars before trimming)", title, len(extract))
        return Article(title=title, extract=limit_words(extract, self.word_limit))


def _first_page(data: object) -> dict:
    """Return the first entry of query.pages, or {} when there is none."""
    if not isinstance(data, dict) or not isinstance(data.get("query"), dict):
        return {}
    pages = data["query"].get("pages")
    if not isinstance(pages, dict):
        return {}
    for page in pages.values():
        if isinstance(page, dict):
            return page
    return {}
