"""FastAPI application serving the article excerpt and the format endpoint.

WHY: The client page needs two things from a backend: a fixed article
excerpt to render and a way to turn a selected string into formatted text
plus a highlight color. FastAPI gives request parsing, OpenAPI docs and
CORS handling with very little code.

HOW: A single FastAPI app exposes the routes below. The Wikipedia client
is a module-level singleton (tests patch its fetch_article). A catch-all
route at the end returns the plain-text 404 for anything unmatched.

  GET  /              plain-text welcome
  GET  /wikipedia     {title, extract}, extract capped at 500 words
  POST /format        {selectedText} → {formattedText, color}
  GET  /format/color  {color}
  GET  /health        {status, version}

RULES:
- Stateless: nothing survives between requests
- Empty, null, missing or mistyped selectedText → 400, never a partial result
- Upstream Wikipedia failure → 502 with an ErrorResponse body
- CORS allows the origins from CORS_ORIGINS, any method and header, no credentials
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from wiki_highlighter import __version__
from wiki_highlighter.config import SERVER_HOST, SERVER_PORT, load_cors_origins
from wiki_highlighter.core.capitalizer import capitalize_words
from wiki_highlighter.core.palette import pick_color
from wiki_highlighter.server.models import (
    ArticleResponse,
    ColorResponse,
    ErrorResponse,
    FormatRequest,
    FormatResponse,
    HealthResponse,
)
from wiki_highlighter.server.wikipedia import WikipediaClient, WikipediaError

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to the Wiki Highlighter API"
NOT_FOUND_MESSAGE = "Page/endpoint not found"
SELECTED_TEXT_REQUIRED = "selectedText is required"

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

wikipedia_client = WikipediaClient()

app = FastAPI(
    title="Wiki Highlighter API",
    description=(
        "Serves a fixed Wikipedia article excerpt and formats selected text: "
        "each word is capitalized and a random highlight color is assigned."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed /format bodies get the same 400 as a missing selectedText."""
    if request.url.path == "/format":
        logger.debug("Rejected /format body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"detail": SELECTED_TEXT_REQUIRED})
    return await request_validation_exception_handler(request, exc)


# ---------------------------------------------------------------------------
# Endpoints: Root
# ---------------------------------------------------------------------------


@app.api_route(
    "/",
    methods=["GET", "HEAD"],
    response_class=PlainTextResponse,
    tags=["root"],
    summary="Welcome message",
)
async def root() -> str:
    return WELCOME_MESSAGE


# ---------------------------------------------------------------------------
# Endpoints: Article
# ---------------------------------------------------------------------------


@app.get(
    "/wikipedia",
    response_model=ArticleResponse,
    tags=["article"],
    summary="Get the article excerpt",
    description=(
        "Fetches the configured Wikipedia article and returns its title and "
        "the first 500 words of its plain-text extract."
    ),
    responses={
        502: {"model": ErrorResponse, "description": "Wikipedia could not be reached"},
    },
)
async def get_article() -> ArticleResponse:
    try:
        article = await wikipedia_client.fetch_article()
    except WikipediaError:
        logger.exception("Failed to fetch article %r", wikipedia_client.title)
        raise HTTPException(status_code=502, detail="Failed to fetch Wikipedia data")
    return ArticleResponse(title=article.title, extract=article.extract)


# ---------------------------------------------------------------------------
# Endpoints: Format
# ---------------------------------------------------------------------------


@app.post(
    "/format",
    response_model=FormatResponse,
    tags=["format"],
    summary="Format selected text",
    description=(
        "Capitalizes the first letter of each space-delimited word in "
        "selectedText and picks a random highlight color."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "selectedText missing or empty"},
    },
)
async def format_text(
    request: Optional[FormatRequest] = Body(default=None),
) -> FormatResponse:
    if request is None or not request.selected_text:
        raise HTTPException(status_code=400, detail=SELECTED_TEXT_REQUIRED)

    formatted = capitalize_words(request.selected_text)
    color = pick_color()
    logger.debug("Formatted %d characters with %s", len(formatted), color)
    return FormatResponse(formatted_text=formatted, color=color)


@app.get(
    "/format/color",
    response_model=ColorResponse,
    tags=["format"],
    summary="Pick a highlight color",
)
async def format_color() -> ColorResponse:
    return ColorResponse(color=pick_color())


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


# ---------------------------------------------------------------------------
# Fallback (must stay last)
# ---------------------------------------------------------------------------


@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def not_found(path: str) -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)


def run_api(host: str | None = None, port: int | None = None) -> None:
    """Serve the app with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=host or SERVER_HOST, port=port or SERVER_PORT)
