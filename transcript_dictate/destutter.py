"""Removal of immediately repeated words from dictated text."""

from __future__ import annotations

from transcript_dictate.lexicon import ALLOWED_DUPLICATES
from transcript_dictate.tokenizer import normalize_token, tokenize


def de_stutter(text: str) -> str:
    """Drop a word when it repeats the previous kept word ("the the" -> "the").

    Comparison is case-insensitive and ignores surrounding punctuation.
    Allow-listed words such as "that" or "very" may repeat.
    """

    tokens = tokenize(text)
    if len(tokens) < 2:
        return text

    kept = [tokens[0]]
    previous = normalize_token(tokens[0])
    for token in tokens[1:]:
        current = normalize_token(token)
        if current and current == previous and current not in ALLOWED_DUPLICATES:
            continue
        kept.append(token)
        previous = current
    return " ".join(kept)
