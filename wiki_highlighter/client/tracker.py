"""Selection tracking for the article text container.

WHY: The format action must only ever apply to text inside the article
body. Browsers (and our Selection) happily report selections that start in
the title and end in the body; those must never enable formatting.

HOW: On every selection-change notification, read the selection's string,
trim it, and check that both the anchor and the focus node sit inside the
container. Valid selections are stored in the view state; anything else
clears it.

RULES:
- Recomputed on every change, so a half-finished drag may briefly clear the state
- Both anchor and focus must be inside the container (inclusive)
- Whitespace-only selections count as empty
"""

from __future__ import annotations

from wiki_highlighter.client.state import ViewState
from wiki_highlighter.core.document import Element, Selection


def is_selection_inside(selection: Selection | None, container: Element) -> bool:
    """True if the selection has a range and both its ends lie in ``container``."""
    if selection is None or selection.range_count == 0:
        return False
    if not container.contains(selection.anchor_node):
        return False
    if not container.contains(selection.focus_node):
        return False
    return True


class SelectionTracker:
    """Keeps ``state.selected_text`` in step with the live selection."""

    def __init__(self, container: Element, state: ViewState) -> None:
        self.container = container
        self.state = state

    def handle_selection_change(self, selection: Selection | None) -> str:
        """Recompute the selected text and return it ("" when invalid)."""
        text = selection.to_string().strip() if selection is not None else ""
        if not text or not is_selection_inside(selection, self.container):
            text = ""
        self.state.update_selection(text)
        return text
