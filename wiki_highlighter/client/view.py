"""Article view: the page that loads the excerpt and applies highlights.

WHY: Ties the client pieces together the way the browser page does, so the
CLI and the tests drive the whole select → format → patch flow through a
single object.

HOW: ArticleView builds a small tree:
  section#content
    h2#article-title
    p#article-text      ← the managed container
load_article() fills it from GET /wikipedia. The owning code (CLI, tests)
changes ``view.selection`` and calls on_selection_change(), then
format_selection() to run the RangeFormatter.

RULES:
- A failed load shows no content, only the error message
- Reloading replaces title and text wholesale (highlights are dropped)
- format_selection() is a no-op while the action is disabled
"""

from __future__ import annotations

import logging

import httpx

from wiki_highlighter.client.api import ApiError, HighlighterClient
from wiki_highlighter.client.formatter import RangeFormatter
from wiki_highlighter.client.state import ViewState
from wiki_highlighter.client.tracker import SelectionTracker
from wiki_highlighter.core.document import Element, Selection

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to fetch data from API"


class ArticleView:
    """One article page bound to one API client."""

    def __init__(self, api: HighlighterClient) -> None:
        self.api = api
        self.state = ViewState()
        self.selection = Selection()

        self.title_el = Element("h2", attrs={"id": "article-title"})
        self.text_el = Element("p", attrs={"id": "article-text"})
        self.root = Element(
            "section",
            children=[self.title_el, self.text_el],
            attrs={"id": "content"},
        )

        self.tracker = SelectionTracker(self.text_el, self.state)
        self.formatter = RangeFormatter(self.text_el, self.state, api)

    @property
    def content_visible(self) -> bool:
        return self.state.article is not None

    @property
    def format_enabled(self) -> bool:
        return self.state.format_enabled

    async def load_article(self) -> bool:
        """Fetch the article and render it; return True on success."""
        self.state.start_loading()
        try:
            article = await self.api.fetch_article()
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Article load failed: %s", exc)
            self._show_load_error()
            return False
        except Exception:
            logger.exception("Unexpected error while loading the article")
            self._show_load_error()
            return False

        self.selection.remove_all_ranges()
        self.state.clear_selection()
        self.title_el.set_text(article.title)
        self.text_el.set_text(article.extract)
        self.state.finish_loading(article)
        return True

    def _show_load_error(self) -> None:
        self.title_el.set_text("")
        self.text_el.set_text("")
        self.state.fail_loading(LOAD_ERROR_MESSAGE)

    def on_selection_change(self) -> str:
        """Handle a selection-change notification."""
        return self.tracker.handle_selection_change(self.selection)

    def select_text(self, start: int, end: int) -> str:
        """Select characters ``start..end`` of the article text and track it."""
        self.selection.select_text(self.text_el, start, end)
        return self.on_selection_change()

    async def format_selection(self) -> Element | None:
        """Run the format action for the current selection."""
        return await self.formatter.format_selection(self.selection)

    def render_html(self) -> str:
        """The page's content section as HTML ("" before a successful load)."""
        if not self.content_visible:
            return ""
        return self.root.to_html()
