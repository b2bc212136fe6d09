"""Package entry point for ``python -m wiki_highlighter``.

WHY: Users run the server as ``python -m wiki_highlighter serve`` and the
terminal client as ``python -m wiki_highlighter highlight 0 5``.

HOW: Delegates to the CLI's main() function.
"""

from wiki_highlighter.cli import main

if __name__ == "__main__":
    main()
