"""Wiki Highlighter: select text in a Wikipedia excerpt and format it.

WHY: A small demo of the "select, send, patch" loop: a backend serves a
fixed article excerpt and a formatting endpoint, and a client view wraps
exactly the text the user selected in a colored span.

HOW: Three layers: core (capitalizer, palette, content tree), server
(FastAPI app + Wikipedia proxy), client (API client, selection tracker,
range formatter, view state). Each layer is independently testable.

RULES:
- The server is stateless across requests
- The client owns its state in one ViewState per view (no module globals)
- Formatting is additive: re-formatting inside a span nests a new span
"""

__version__ = "0.1.0"
