"""Persistent settings storage for transcript-dictate."""

import json
import logging
from typing import Any

from transcript_dictate.config import (
    APP_DIR,
    DEFAULT_AUTO_PASTE,
    DEFAULT_COMPUTE,
    DEFAULT_DETECT_QUOTATIONS,
    DEFAULT_DEVICE,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_STYLE,
    DEFAULT_PUSH_TO_TALK_KEY,
    DEFAULT_REMOVE_STUTTERING,
)

logger = logging.getLogger(__name__)

SETTINGS_FILE = APP_DIR / "settings.json"

TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off"}


def default_settings() -> dict[str, Any]:
    return {
        "remove_stuttering": DEFAULT_REMOVE_STUTTERING,
        "detect_quotations": DEFAULT_DETECT_QUOTATIONS,
        "output_style": DEFAULT_OUTPUT_STYLE,
        "input_device": "",
        "model": DEFAULT_MODEL,
        "device": DEFAULT_DEVICE,
        "compute_type": DEFAULT_COMPUTE,
        "push_to_talk_key": DEFAULT_PUSH_TO_TALK_KEY,
        "auto_paste": DEFAULT_AUTO_PASTE,
    }


def parse_bool(value: Any, default: Any) -> Any:
    """Read a boolean setting, accepting hand-edited strings like "false" or "on".

    Returns ``default`` for anything that is not recognisably true or false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return default


def load_settings() -> dict[str, Any]:
    """Load saved settings from disk, returning defaults on failure.

    Keys missing from the file are filled in from the defaults.
    """
    defaults = default_settings()

    try:
        if SETTINGS_FILE.is_file():
            settings = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
            if not isinstance(settings, dict):
                raise ValueError("settings file must contain a JSON object")

            for key, value in defaults.items():
                settings.setdefault(key, value)
            return settings
    except (OSError, UnicodeDecodeError, ValueError) as e:
        # OSError: File access errors
        # UnicodeDecodeError: Invalid UTF-8 encoding
        # ValueError: Invalid JSON (JSONDecodeError) or wrong top-level type
        logger.error(f"Could not read saved settings: {e}")
    return defaults


def save_settings(settings: dict[str, Any]) -> bool:
    """Persist settings to disk. Returns True on success, False otherwise."""
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_FILE.write_text(json.dumps(settings, indent=2), encoding="utf-8")
        return True
    except (OSError, UnicodeEncodeError, TypeError, ValueError) as e:
        # OSError: File/directory write errors
        # UnicodeEncodeError: Invalid character encoding
        # TypeError: Non-serializable values in settings
        # ValueError: Invalid JSON structure
        logger.error(f"Could not save settings: {e}")
        return False
