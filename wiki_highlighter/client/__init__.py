"""Client side: API client, selection tracking and range formatting.

WHY: The client half of the app loads the article, follows the user's
selection and patches the content tree with formatted spans.

HOW: api.py talks HTTP, state.py holds per-view state, tracker.py and
formatter.py implement the select → format → patch loop, view.py wires them.

RULES:
- All HTTP calls go through HighlighterClient
- All tree edits go through RangeFormatter
"""

from wiki_highlighter.client.api import ApiError, HighlighterClient
from wiki_highlighter.client.view import ArticleView

__all__ = ["ApiError", "ArticleView", "HighlighterClient"]
