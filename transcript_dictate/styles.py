"""Output style policies applied as the last pipeline stage."""

from __future__ import annotations

import re
from enum import Enum

# A period with no digit on either side ("3.5" keeps its point).
_NON_NUMERIC_PERIOD_RE = re.compile(r"(?<![0-9])\.(?![0-9])")
_SPACE_RUN_RE = re.compile(r" +")


class OutputStyle(str, Enum):
    """Casing/punctuation policy. Values are the persisted setting strings."""

    FORMAL = "Formal"
    NO_CAPITALS = "No Capitals"
    CASUAL = "Casual"

    @classmethod
    def lookup(cls, value: object) -> OutputStyle | None:
        """Find the style named by ``value``, or None.

        "No Capitals", "no capitals", "NO_CAPITALS" and "no-capitals" all match.
        """

        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace("_", " ").replace("-", " ")
        for style in cls:
            if text in (style.value.lower(), style.name.lower().replace("_", " ")):
                return style
        return None

    @classmethod
    def parse(cls, value: object) -> OutputStyle:
        """Map a stored value or member name to a style, defaulting to Formal."""

        return cls.lookup(value) or cls.FORMAL


def to_casual(text: str) -> str:
    result = _NON_NUMERIC_PERIOD_RE.sub("", text.lower())
    result = _SPACE_RUN_RE.sub(" ", result)
    return result.strip()


def apply_style(style: OutputStyle, text: str) -> str:
    """Return text rendered in the given output style."""

    if style is OutputStyle.NO_CAPITALS:
        return text.lower()
    if style is OutputStyle.CASUAL:
        return to_casual(text)
    return text
