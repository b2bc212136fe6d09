"""Command-line interface for the Wiki Highlighter.

WHY: One entry point runs the API server and a terminal version of the
client page, so the whole select → format → patch loop can be tried
without a browser.

HOW: argparse subcommands:
  serve                  run the FastAPI app under uvicorn
  article                load the article through the API and print it
  highlight START END    load the article, select characters START..END of
                         its text, format them and print the rendered HTML
The client commands run their async work with asyncio.run(). Errors go to
stderr with exit code 1.

RULES:
- --api-url overrides API_BASE_URL for client commands
- --verbose turns on DEBUG logging
- Status and errors go to stderr; results go to stdout
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from wiki_highlighter.client.api import HighlighterClient
from wiki_highlighter.client.view import ArticleView
from wiki_highlighter.config import API_BASE_URL, SERVER_HOST, SERVER_PORT
from wiki_highlighter.core.document import IndexSizeError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiki-highlighter",
        description="Serve or try out the Wiki Highlighter.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server.")
    serve.add_argument("--host", default=SERVER_HOST, help="Bind address (default: %(default)s).")
    serve.add_argument("--port", type=int, default=SERVER_PORT, help="Port (default: %(default)s).")

    article = sub.add_parser("article", help="Print the article served by the API.")
    article.add_argument("--api-url", default=API_BASE_URL, help="API base URL (default: %(default)s).")

    highlight = sub.add_parser("highlight", help="Highlight a character range of the article.")
    highlight.add_argument("start", type=int, help="First character offset (inclusive).")
    highlight.add_argument("end", type=int, help="Last character offset (exclusive).")
    highlight.add_argument("--api-url", default=API_BASE_URL, help="API base URL (default: %(default)s).")

    return parser


async def _print_article(api_url: str) -> int:
    async with HighlighterClient(base_url=api_url) as client:
        view = ArticleView(client)
        if not await view.load_article():
            print(view.state.error, file=sys.stderr)
            return 1
    article = view.state.article
    print(article.title)
    print()
    print(article.extract)
    return 0


async def _highlight(api_url: str, start: int, end: int) -> int:
    async with HighlighterClient(base_url=api_url) as client:
        view = ArticleView(client)
        if not await view.load_article():
            print(view.state.error, file=sys.stderr)
            return 1

        try:
            selected = view.select_text(start, end)
        except IndexSizeError as exc:
            print("Invalid range: {}".format(exc), file=sys.stderr)
            return 1
        if not view.format_enabled:
            print("Nothing to format in range {}..{}".format(start, end), file=sys.stderr)
            return 1

        print('Formatting "{}"'.format(selected), file=sys.stderr)
        span = await view.format_selection()
        if span is None:
            print(view.state.error, file=sys.stderr)
            return 1

    print(view.render_html())
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve":
        from wiki_highlighter.server.app import run_api
        run_api(host=args.host, port=args.port)
        return

    if args.command == "article":
        code = asyncio.run(_print_article(args.api_url))
    else:
        code = asyncio.run(_highlight(args.api_url, args.start, args.end))
    sys.exit(code)


if __name__ == "__main__":
    main()
