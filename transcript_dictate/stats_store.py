"""Usage statistics recorded after each dictation session."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import date

from transcript_dictate.config import APP_DIR

logger = logging.getLogger(__name__)

STATS_FILE = APP_DIR / "stats.json"

# Below this much recorded time the words-per-minute figure is meaningless
MIN_SECONDS_FOR_WPM = 5.0


def today_key() -> str:
    return date.today().isoformat()


@dataclass
class UsageStats:
    """Running totals across sessions plus a per-day word count."""

    total_words: int = 0
    total_sessions: int = 0
    total_recording_seconds: float = 0.0
    words_today: int = 0
    today_key: str = field(default_factory=today_key)

    @property
    def average_wpm(self) -> float:
        if self.total_recording_seconds <= MIN_SECONDS_FOR_WPM:
            return 0.0
        return self.total_words / (self.total_recording_seconds / 60.0)

    @property
    def formatted_recording_time(self) -> str:
        total = int(self.total_recording_seconds)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        if minutes > 0:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"

    def roll_day(self, today: str | None = None) -> None:
        """Reset the daily counter when the calendar day has changed."""
        today = today or today_key()
        if self.today_key != today:
            self.words_today = 0
            self.today_key = today

    def record_session(self, text: str, duration_seconds: float, today: str | None = None) -> int:
        """Add one session's output to the totals. Returns the word count added."""
        words = len(text.split())
        self.total_words += words
        self.total_sessions += 1
        self.total_recording_seconds += duration_seconds
        self.roll_day(today)
        self.words_today += words
        return words

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> UsageStats:
        return cls(
            total_words=int(data.get("total_words", 0)),
            total_sessions=int(data.get("total_sessions", 0)),
            total_recording_seconds=float(data.get("total_recording_seconds", 0.0)),
            words_today=int(data.get("words_today", 0)),
            today_key=str(data.get("today_key") or today_key()),
        )


def load_stats() -> UsageStats:
    """Load statistics from disk; a stale daily count is reset on load."""
    stats = UsageStats()
    try:
        if STATS_FILE.is_file():
            data = json.loads(STATS_FILE.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("stats file must contain a JSON object")
            stats = UsageStats.from_dict(data)
    except (OSError, UnicodeDecodeError, TypeError, ValueError) as e:
        # ValueError also covers JSONDecodeError and non-numeric counters
        logger.error(f"Could not read usage statistics: {e}")
        stats = UsageStats()
    stats.roll_day()
    return stats


def save_stats(stats: UsageStats) -> bool:
    """Persist statistics to disk. Returns True on success, False otherwise."""
    try:
        STATS_FILE.parent.mkdir(parents=True, exist_ok=True)
        STATS_FILE.write_text(json.dumps(stats.to_dict(), indent=2), encoding="utf-8")
        return True
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Could not save usage statistics: {e}")
        return False
