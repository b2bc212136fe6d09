"""Shared test fixtures for the wiki_highlighter test suite.

WHY: The view, formatter and HTTP tests all need the same sample article
and a stand-in for the API client. Centralizing them here keeps the
sample text used in offset assertions in one place.

HOW: sample_article is a short lowercase excerpt so capitalization is
visible. fake_api is a MagicMock shaped like HighlighterClient whose
coroutines are AsyncMocks; format_text really capitalizes, with a fixed
color. loaded_view is an ArticleView that has already loaded the sample.

RULES:
- Tests find offsets with extract.index(...) rather than hardcoding numbers
- fixed_color is a real palette entry
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from wiki_highlighter.client.api import HighlighterClient
from wiki_highlighter.client.view import ArticleView
from wiki_highlighter.core.capitalizer import capitalize_words
from wiki_highlighter.core.models import Article, FormatResult

_SAMPLE = Article(title="Norge", extract="norway is a country in northern europe")
_FIXED_COLOR = "#2a9d8f"


@pytest.fixture
def sample_article() -> Article:
    """The article every fake API serves."""
    return _SAMPLE


@pytest.fixture
def fixed_color() -> str:
    """The color fake_api assigns to every formatted selection."""
    return _FIXED_COLOR


@pytest.fixture
def fake_api():
    """A HighlighterClient stand-in with awaitable fetch/format methods."""
    api = MagicMock(spec=HighlighterClient)
    api.fetch_article = AsyncMock(return_value=_SAMPLE)
    api.format_text = AsyncMock(
        side_effect=lambda text: FormatResult(formatted_text=capitalize_words(text), color=_FIXED_COLOR)
    )
    return api


@pytest.fixture
def loaded_view(fake_api):
    """An ArticleView with the sample article already loaded."""
    view = ArticleView(fake_api)
    assert asyncio.run(view.load_article()) is True
    return view
