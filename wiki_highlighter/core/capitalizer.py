"""Word capitalization for the format endpoint."""

from __future__ import annotations


def capitalize_words(text: str) -> str:
    """Uppercase the first character of every space-delimited word.

    WHY: The format endpoint turns a selection like "the quick fox" into
    "The Quick Fox" without touching anything else, so the client can swap
    the text in place without shifting the surrounding content.

    HOW: Split on a single ASCII space (consecutive spaces yield empty
    tokens), uppercase the first character of each non-empty token, join
    back with single spaces.

    RULES:
    - Length and space positions never change
    - Interior letters are never lowercased ("mcDonald" -> "McDonald")
    - Empty and all-space strings come back unchanged
    - Idempotent
    """
    if not text:
        return text

    return " ".join(_capitalize_word(w) for w in text.split(" "))


def _capitalize_word(word: str) -> str:
    if not word:
        return word
    first = word[0].upper()
    # "ß".upper() is "SS"; keep such characters as-is so length is stable
    if len(first) != 1:
        first = word[0]
    return first + word[1:]
