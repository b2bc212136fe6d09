"""Tests for the MediaWiki client.

WHY: The article endpoint depends on parsing an upstream JSON shape we do
not control and on trimming it to a word limit. Failures upstream must
surface as WikipediaError, never as a half-built Article.

HOW: httpx.MockTransport stands in for MediaWiki; handlers record the
request so tests can check query parameters and headers. Coroutines run
with asyncio.run().
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from wiki_highlighter.server.wikipedia import WikipediaClient, WikipediaError, limit_words


def _mediawiki_body(title="Norge", extract="Norge er et land i Nord-Europa."):
    page = {"pageid": 123, "ns": 0}
    if title is not None:
        page["title"] = title
    if extract is not None:
        page["extract"] = extract
    return {"batchcomplete": "", "query": {"pages": {"123": page}}}


def _client_returning(response: httpx.Response, seen: list | None = None, **kwargs) -> WikipediaClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return response

    return WikipediaClient(transport=httpx.MockTransport(handler), **kwargs)


class TestLimitWords:

    def test_keeps_first_words(self):
        assert limit_words("a b c d", limit=2) == "a b"

    def test_collapses_runs_of_spaces(self):
        assert limit_words("a  b   c", limit=10) == "a b c"

    def test_short_text_unchanged(self):
        assert limit_words("one two", limit=500) == "one two"

    def test_empty(self):
        assert limit_words("", limit=5) == ""


class TestFetchArticle:

    def test_parses_first_page(self):
        client = _client_returning(httpx.Response(200, json=_mediawiki_body()))
        article = asyncio.run(client.fetch_article())
        assert article.title == "Norge"
        assert article.extract == "Norge er et land i Nord-Europa."

    def test_sends_query_and_user_agent(self):
        seen = []
        client = _client_returning(
            httpx.Response(200, json=_mediawiki_body()),
            seen,
            title="Sverige",
            api_url="https://sv.wikipedia.org/w/api.php",
        )
        asyncio.run(client.fetch_article())

        request = seen[0]
        assert request.url.host == "sv.wikipedia.org"
        assert request.url.params["titles"] == "Sverige"
        assert request.url.params["prop"] == "extracts"
        assert request.url.params["explaintext"] == "true"
        assert request.url.params["format"] == "json"
        assert request.headers["user-agent"]

    def test_truncates_to_word_limit(self):
        extract = " ".join("word{}".format(i) for i in range(600))
        client = _client_returning(httpx.Response(200, json=_mediawiki_body(extract=extract)))
        article = asyncio.run(client.fetch_article())
        words = article.extract.split(" ")
        assert len(words) == 500
        assert words[-1] == "word499"

    def test_custom_word_limit(self):
        client = _client_returning(
            httpx.Response(200, json=_mediawiki_body(extract="a b c d")), word_limit=3
        )
        assert asyncio.run(client.fetch_article()).extract == "a b c"

    def test_missing_title_falls_back_to_requested(self):
        client = _client_returning(
            httpx.Response(200, json=_mediawiki_body(title=None)), title="Danmark"
        )
        assert asyncio.run(client.fetch_article()).title == "Danmark"

    def test_missing_extract_is_empty(self):
        client = _client_returning(httpx.Response(200, json=_mediawiki_body(extract=None)))
        assert asyncio.run(client.fetch_article()).extract == ""

    def test_no_pages_gives_empty_article(self):
        client = _client_returning(httpx.Response(200, json={"query": {}}), title="Norge")
        article = asyncio.run(client.fetch_article())
        assert article.title == "Norge"
        assert article.extract == ""


class TestFetchFailures:

    def test_non_2xx_raises(self):
        client = _client_returning(httpx.Response(503, text="maintenance"))
        with pytest.raises(WikipediaError) as excinfo:
            asyncio.run(client.fetch_article())
        assert excinfo.value.status_code == 503

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("no route", request=request)

        client = WikipediaClient(transport=httpx.MockTransport(handler))
        with pytest.raises(WikipediaError) as excinfo:
            asyncio.run(client.fetch_article())
        assert excinfo.value.status_code is None

    def test_invalid_json_raises(self):
        client = _client_returning(httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(WikipediaError):
            asyncio.run(client.fetch_article())
