"""Tests for HighlighterClient against a mocked HTTP transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from wiki_highlighter.client.api import ApiError, HighlighterClient


def _run_with(handler, coro_factory):
    async def _run():
        async with HighlighterClient(
            base_url="http://api.test/", transport=httpx.MockTransport(handler)
        ) as client:
            return await coro_factory(client)

    return asyncio.run(_run())


class TestFetchArticle:

    def test_parses_article(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/wikipedia"
            return httpx.Response(200, json={"title": "Norge", "extract": "norway"})

        article = _run_with(handler, lambda c: c.fetch_article())
        assert article.title == "Norge"
        assert article.extract == "norway"

    def test_missing_title_gets_default(self):
        def handler(request):
            return httpx.Response(200, json={"extract": "text"})

        assert _run_with(handler, lambda c: c.fetch_article()).title == "Article"

    def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(502, json={"detail": "Failed to fetch Wikipedia data"})

        with pytest.raises(ApiError) as excinfo:
            _run_with(handler, lambda c: c.fetch_article())
        assert excinfo.value.status_code == 502


class TestFormatText:

    def test_posts_selected_text(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"formattedText": "Hello World", "color": "#e63946"})

        result = _run_with(handler, lambda c: c.format_text("hello world"))
        assert seen == {"path": "/format", "body": {"selectedText": "hello world"}}
        assert result.formatted_text == "Hello World"
        assert result.color == "#e63946"

    def test_bad_request_raises(self):
        def handler(request):
            return httpx.Response(400, json={"detail": "selectedText is required"})

        with pytest.raises(ApiError) as excinfo:
            _run_with(handler, lambda c: c.format_text(""))
        assert excinfo.value.status_code == 400
        assert "selectedText is required" in excinfo.value.message

    def test_malformed_payload_raises_value_error(self):
        def handler(request):
            return httpx.Response(200, json={"formattedText": "x"})

        with pytest.raises(ValueError):
            _run_with(handler, lambda c: c.format_text("x"))


class TestContextManager:

    def test_use_outside_context_raises(self):
        client = HighlighterClient(base_url="http://api.test")
        with pytest.raises(RuntimeError):
            asyncio.run(client.fetch_article())
