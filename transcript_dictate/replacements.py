"""Replacement rules: whole-word substitutions, persistence, and CSV exchange."""

from __future__ import annotations

import csv
import json
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from io import StringIO
from pathlib import Path

from transcript_dictate.config import APP_DIR
from transcript_dictate.settings_store import parse_bool

logger = logging.getLogger(__name__)

RULES_FILE = APP_DIR / "replacement_rules.json"

CSV_FIELDS = ["pattern", "replacement", "enabled"]


@dataclass
class ReplacementRule:
    """A single user-defined substitution."""

    pattern: str = ""
    replacement: str = ""
    enabled: bool = True

    def to_dict(self) -> dict:
        """Serialize the rule to a JSON-friendly dict."""

        return {
            "pattern": self.pattern,
            "replacement": self.replacement,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ReplacementRule:
        """Create a rule from a persisted dictionary."""

        return cls(
            pattern=str(data.get("pattern", "")),
            replacement=str(data.get("replacement", "")),
            enabled=parse_bool(data.get("enabled"), True),
        )

    def compile_pattern(self) -> re.Pattern[str]:
        """Compile a case-insensitive, word-bounded matcher for the literal pattern."""

        return re.compile(rf"\b{re.escape(self.pattern)}\b", re.IGNORECASE)


def apply_replacements(text: str, rules: Sequence[ReplacementRule]) -> str:
    """Apply enabled rules in list order; later rules see earlier output."""

    if not text or not rules:
        return text

    result = text
    for rule in rules:
        if not rule.enabled or not rule.pattern:
            continue
        try:
            pattern = rule.compile_pattern()
        except re.error as e:
            logger.debug(f"Skipping replacement rule {rule.pattern!r}: {e}")
            continue
        replacement = rule.replacement
        result = pattern.sub(lambda _match: replacement, result)
    return result


class ReplacementStore:
    """Ordered replacement rules with JSON persistence."""

    def __init__(self, rules: Iterable[ReplacementRule] | None = None):
        self.rules: list[ReplacementRule] = list(rules or [])

    # ------------------------------------------------------------------
    # Loading / saving
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: Path | None = None) -> ReplacementStore:
        """Load rules from disk, returning an empty store when nothing usable exists."""

        path = path or RULES_FILE

        if not path.is_file():
            return cls()

        try:
            content = path.read_text(encoding="utf-8").strip()
            if not content:
                return cls()
            data = json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            # OSError: File access errors
            # UnicodeDecodeError: Invalid UTF-8 encoding
            # JSONDecodeError: Invalid JSON format
            logger.error(f"Could not read replacement rules: {e}")
            return cls()

        if not isinstance(data, list):
            logger.error("Could not read replacement rules: expected a JSON list")
            return cls()

        return cls(ReplacementRule.from_dict(item) for item in data if isinstance(item, dict))

    def save(self, path: Path | None = None) -> bool:
        """Persist rules to disk as JSON. Returns True on success."""

        path = path or RULES_FILE

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(
                [rule.to_dict() for rule in self.rules], indent=2, ensure_ascii=False
            )
            path.write_text(payload, encoding="utf-8")
            return True
        except (OSError, UnicodeEncodeError, TypeError, ValueError) as e:
            # OSError: File/directory write errors
            # UnicodeEncodeError: Invalid character encoding
            # TypeError / ValueError: Non-serializable values in rules
            logger.error(f"Could not save replacement rules: {e}")
            return False

    # ------------------------------------------------------------------
    # Rule manipulation
    # ------------------------------------------------------------------
    def add_rule(self, rule: ReplacementRule | None = None) -> ReplacementRule:
        """Append a rule (a blank, enabled one by default) and return it."""

        rule = rule or ReplacementRule()
        self.rules.append(rule)
        return rule

    def remove_rule(self, index: int) -> None:
        """Remove the rule at ``index``."""

        del self.rules[index]

    def set_enabled(self, index: int, enabled: bool) -> None:
        self.rules[index].enabled = enabled

    def import_csv(self, csv_text: str) -> int:
        """Append rules from CSV text (pattern,replacement,enabled). Returns the count added."""

        added = 0
        reader = csv.DictReader(csv_text.splitlines())
        for row in reader:
            pattern = (row.get("pattern") or "").strip()
            if not pattern:
                continue
            self.rules.append(
                ReplacementRule(
                    pattern=pattern,
                    replacement=(row.get("replacement") or "").strip(),
                    enabled=str(row.get("enabled") or "true").strip().lower() != "false",
                )
            )
            added += 1
        return added

    def export_csv(self) -> str:
        """Export rules as CSV text."""

        if not self.rules:
            return ""

        buffer = StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for rule in self.rules:
            writer.writerow(
                {
                    "pattern": rule.pattern,
                    "replacement": rule.replacement,
                    "enabled": str(rule.enabled).lower(),
                }
            )
        return buffer.getvalue().strip()

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------
    def apply(self, text: str) -> str:
        """Apply the stored rules to text."""

        return apply_replacements(text, self.rules)


def load_replacement_store() -> ReplacementStore:
    """Load the replacement store from its default location."""

    return ReplacementStore.load()
