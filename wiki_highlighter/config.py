"""Configuration constants and .env loading.

WHY: Centralizes all configurable values (API base URL, CORS origins,
Wikipedia source) so they are easy to find, update, and override per
deployment without touching code.

HOW: python-dotenv loads the .env file on import. Constants are module-level
strings and ints read from the environment with sensible local defaults.
load_cors_origins() parses the comma-separated origin list.

RULES:
- All defaults can be overridden via environment variables
- API_BASE_URL falls back to the local development server
- ARTICLE_WORD_LIMIT caps the excerpt at 500 space-delimited words
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "5000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:8080")

# ---------------------------------------------------------------------------
# Article source
# ---------------------------------------------------------------------------

WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://no.wikipedia.org/w/api.php")
WIKIPEDIA_TITLE = os.getenv("WIKIPEDIA_TITLE", "Norge")
WIKIPEDIA_USER_AGENT = os.getenv("WIKIPEDIA_USER_AGENT", "WikiHighlighter/0.1")
ARTICLE_WORD_LIMIT = int(os.getenv("ARTICLE_WORD_LIMIT", "500"))

# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")


def load_cors_origins(raw: str | None = None) -> list[str]:
    """Parse the allowed CORS origins.

    RULES:
    - Comma-separated, whitespace around entries is ignored
    - Empty entries are dropped
    - Trailing slashes are stripped (browsers never send them in Origin)
    """
    value = CORS_ORIGINS if raw is None else raw
    return [o.strip().rstrip("/") for o in value.split(",") if o.strip()]
