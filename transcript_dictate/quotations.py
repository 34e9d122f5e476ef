"""Heuristic insertion of quotation marks around reported speech.

A dictated sentence such as ``he said I am going home`` has no quotation
marks.  The detector looks for a speech introducer ("said", "asked",
"was like", ...), guesses where the quoted material ends, scores how much
the span looks like direct speech, and punctuates the spans that pass::

    he said, "I am going home."

No grammar parsing is involved; decisions come from the word tables in
:mod:`transcript_dictate.lexicon`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from transcript_dictate.lexicon import (
    BE_VERBS,
    CONJUNCTION_BOUNDARIES,
    CONVERSATIONAL_PRONOUNS,
    DISCOURSE_BOUNDARIES,
    IMPERATIVE_STARTERS,
    INDIRECT_OPENERS,
    INTERJECTIONS,
    LIKELY_SUBJECTS,
    QUOTE_RECIPIENTS,
    SPEECH_VERBS,
)
from transcript_dictate.tokenizer import has_sentence_ending, has_trailing_mark, normalize_token

QUOTE = '"'

# Longest span, in tokens, considered for a single quotation.
MAX_QUOTE_WINDOW = 18
MIN_ACCEPT_SCORE = 2

INTRO_MARKS = ",:;.!?"
CLOSING_MARKS = ".!?,"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class QuoteCandidate:
    """A possible quotation: the introducer's last token and the span [start, end)."""

    introducer_end: int
    start: int
    end: int


def speech_introducer_length(tokens: list[str], index: int) -> int:
    """Return 1 for a speech verb, 2 for "<be-verb> like", else 0."""

    if index >= len(tokens):
        return 0
    current = normalize_token(tokens[index])
    if current in SPEECH_VERBS:
        return 1
    if (
        current in BE_VERBS
        and index + 1 < len(tokens)
        and normalize_token(tokens[index + 1]) == "like"
    ):
        return 2
    return 0


def adjusted_quote_start(tokens: list[str], index: int) -> int:
    """Skip a recipient ("to me", "him") directly after the introducer."""

    if index >= len(tokens):
        return index
    if (
        normalize_token(tokens[index]) == "to"
        and index + 1 < len(tokens)
        and normalize_token(tokens[index + 1]) in QUOTE_RECIPIENTS
    ):
        return index + 2
    if normalize_token(tokens[index]) in QUOTE_RECIPIENTS:
        return index + 1
    return index


def should_break_at_conjunction(tokens: list[str], index: int) -> bool:
    """Decide whether the conjunction at ``index`` opens a new clause."""

    if index + 1 >= len(tokens):
        return False
    following = normalize_token(tokens[index + 1])
    if following in LIKELY_SUBJECTS:
        return True
    if speech_introducer_length(tokens, index + 1) > 0:
        return True
    return (
        index + 2 < len(tokens)
        and following in LIKELY_SUBJECTS
        and speech_introducer_length(tokens, index + 2) > 0
    )


def quote_end(tokens: list[str], start: int) -> int:
    """Find the exclusive end of the quoted span beginning at ``start``."""

    limit = min(len(tokens), start + MAX_QUOTE_WINDOW)
    for idx in range(start + 1, limit):
        token = tokens[idx]
        if has_sentence_ending(token):
            return idx + 1
        if speech_introducer_length(tokens, idx) > 0:
            return idx
        word = normalize_token(token)
        if word in DISCOURSE_BOUNDARIES:
            return idx
        if word in CONJUNCTION_BOUNDARIES and should_break_at_conjunction(tokens, idx):
            return idx
    return limit


def quote_score(tokens: list[str], start: int, end: int) -> int | None:
    """Score how much tokens[start:end] reads like direct speech.

    Returns None when the span holds no words at all.
    """

    words = [word for word in (normalize_token(t) for t in tokens[start:end]) if word]
    if not words:
        return None

    first = words[0]
    score = 0
    if len(words) <= 12:
        score += 2
    elif len(words) <= 18:
        score += 1
    else:
        score -= 2

    if first in INDIRECT_OPENERS:
        score -= 4
    if any(word in INTERJECTIONS for word in words):
        score += 1
    if first in IMPERATIVE_STARTERS:
        score += 2
    if any(word in CONVERSATIONAL_PRONOUNS for word in words):
        score += 1
    if any(word in DISCOURSE_BOUNDARIES for word in words):
        score -= 1
    return score


def find_quote_candidates(tokens: list[str]) -> list[QuoteCandidate]:
    """Scan tokens left to right and return accepted, non-overlapping candidates."""

    candidates: list[QuoteCandidate] = []
    i = 0
    while i < len(tokens):
        length = speech_introducer_length(tokens, i)
        if length == 0:
            i += 1
            continue

        introducer_end = i + length - 1
        start = adjusted_quote_start(tokens, introducer_end + 1)
        if start >= len(tokens):
            i = introducer_end + 1
            continue

        if QUOTE in tokens[start] or normalize_token(tokens[start]) in INDIRECT_OPENERS:
            i = start + 1
            continue

        end = quote_end(tokens, start)
        if end <= start:
            i = start + 1
            continue

        score = quote_score(tokens, start, end)
        if score is not None and score >= MIN_ACCEPT_SCORE:
            candidates.append(QuoteCandidate(introducer_end, start, end))
            i = end
        else:
            i = start + 1
    return candidates


def _ensure_intro_punctuation(token: str) -> str:
    if has_trailing_mark(token, INTRO_MARKS):
        return token
    return token + ","


def _ensure_closing_quote(token: str, preferred: str) -> str:
    core = token[:-1] if token.endswith(QUOTE) else token
    if not has_trailing_mark(core, CLOSING_MARKS):
        core += preferred
    return core + QUOTE


def detect_quotations(text: str) -> str:
    """Insert quotation marks around likely direct speech.

    Whitespace is always collapsed to single spaces. Text without an
    accepted candidate comes back otherwise unchanged.
    """

    compact = _WHITESPACE_RE.sub(" ", text).strip()
    if not compact:
        return text

    tokens = compact.split(" ")
    if len(tokens) <= 2:
        return compact

    candidates = find_quote_candidates(tokens)
    if not candidates:
        return compact

    for candidate in candidates:
        tokens[candidate.introducer_end] = _ensure_intro_punctuation(
            tokens[candidate.introducer_end]
        )

        if not tokens[candidate.start].startswith(QUOTE):
            tokens[candidate.start] = QUOTE + tokens[candidate.start]

        last = candidate.end - 1
        preferred = "," if candidate.end < len(tokens) else "."
        tokens[last] = _ensure_closing_quote(tokens[last], preferred)

    return " ".join(tokens)
