"""Range formatting: replace the selected range with a highlight span.

WHY: This is the one place the view edits the article tree. It has to hit
exactly the characters the user selected, stay inside the article body even
if the selection's boundary points have drifted outside it, and leave the
tree untouched if the server call fails.

HOW: format_selection() snapshots the selection's first range and the
tracked text, clamps the range to the container's contents, asks the API
to format the text, then deletes the range's contents and inserts a new
span holding the formatted text. The in-flight flag lives in ViewState and
is cleared in a finally block.

RULES:
- No-op (no request) when nothing is selected, a request is in flight,
  or the selection has no range
- The request carries the tracked text, not text re-read from the clamped range
- Replacement is destructive: spans wholly inside the range are discarded
- Formatting inside an existing span nests the new span inside it
- On any failure the tree is unchanged and state.error is set
"""

from __future__ import annotations

import logging

import httpx

from wiki_highlighter.client.api import ApiError, HighlighterClient
from wiki_highlighter.client.state import ViewState
from wiki_highlighter.core.document import Element, Range, Selection

logger = logging.getLogger(__name__)

FORMAT_ERROR_MESSAGE = "Failed to format text"
HIGHLIGHT_CLASS = "highlight"


def clamp_range(rng: Range, container: Element) -> Range:
    """Pull ``rng``'s ends back inside ``container``'s contents, in place."""
    bounds = Range.around_contents(container)
    if rng.compare_boundary_points(Range.START_TO_START, bounds) < 0:
        rng.set_start(bounds.start_container, bounds.start_offset)
    if rng.compare_boundary_points(Range.END_TO_END, bounds) > 0:
        rng.set_end(bounds.end_container, bounds.end_offset)
    return rng


def make_highlight(text: str, color: str) -> Element:
    """Build the inline span for one formatting application."""
    span = Element("span", attrs={"class": HIGHLIGHT_CLASS}, style={"background-color": color})
    span.set_text(text)
    return span


class RangeFormatter:
    """Sends the selected text to the API and patches the tree with the result."""

    def __init__(self, container: Element, state: ViewState, api: HighlighterClient) -> None:
        self.container = container
        self.state = state
        self.api = api

    async def format_selection(self, selection: Selection) -> Element | None:
        """Format the current selection; return the inserted span, or None."""
        selected_text = self.state.selected_text
        if not selected_text or self.state.formatting:
            return None
        if selection.range_count == 0:
            return None

        rng = clamp_range(selection.get_range_at(0).clone(), self.container)

        self.state.start_formatting()
        try:
            result = await self.api.format_text(selected_text)

            span = make_highlight(result.formatted_text, result.color)
            rng.delete_contents()
            rng.insert_node(span)

            selection.remove_all_ranges()
            self.state.clear_selection()
            logger.info("Highlighted %d characters with %s", len(result.formatted_text), result.color)
            return span
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Format request failed: %s", exc)
            self.state.error = FORMAT_ERROR_MESSAGE
            return None
        except Exception:
            logger.exception("Unexpected error while formatting")
            self.state.error = FORMAT_ERROR_MESSAGE
            return None
        finally:
            self.state.finish_formatting()
