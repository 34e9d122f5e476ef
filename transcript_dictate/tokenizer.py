"""Token helpers shared by the post-processing stages."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

QUOTE_MARKS = "\"'"


def tokenize(text: str) -> list[str]:
    """Split text on literal spaces, keeping punctuation attached to tokens."""

    if not text:
        return []
    return text.split(" ")


def _is_trimmable(char: str) -> bool:
    return char in QUOTE_MARKS or unicodedata.category(char).startswith("P")


def normalize_token(token: str) -> str:
    """Lowercase a token and trim surrounding punctuation and quote marks.

    The result is only used for comparisons; callers keep emitting the
    original token.
    """

    start = 0
    end = len(token)
    while start < end and _is_trimmable(token[start]):
        start += 1
    while end > start and _is_trimmable(token[end - 1]):
        end -= 1
    return token[start:end].lower()


def has_trailing_mark(token: str, marks: Iterable[str]) -> bool:
    """Return True when the token, ignoring quote marks, ends with one of ``marks``."""

    trimmed = token.strip(QUOTE_MARKS)
    return bool(trimmed) and trimmed[-1] in marks


def has_sentence_ending(token: str) -> bool:
    return has_trailing_mark(token, ".!?")
