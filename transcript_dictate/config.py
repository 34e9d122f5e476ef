"""Configuration defaults for transcript-dictate."""

from pathlib import Path
from typing import Literal

# All persisted files (settings, rules, stats, logs) live here
APP_DIR = Path.home() / ".transcript_dictate"

# Audio defaults
SAMPLE_RATE = 16000
INPUT_CHANNELS = 1
CHUNK_MS = 50

# Level meter shown while recording
LEVEL_BARS = 5
LEVEL_SMOOTHING = 0.3  # weight kept from the previous level
LEVEL_GAIN = 5.0  # RMS multiplier before clamping to [0, 1]
LEVEL_POLL_SECONDS = 0.1  # redraw interval for the terminal meter

# Whisper defaults
DEFAULT_MODEL = "base.en"  # whisper model: tiny.en, base.en, small, medium, large-v3
DEFAULT_DEVICE: Literal["cpu", "cuda"] = "cpu"
DEFAULT_COMPUTE = "int8"  # CPU-safe default; coerced per device
DEFAULT_LANGUAGE = "en"
DEFAULT_BEAM_SIZE = 5

# Post-processing defaults
DEFAULT_REMOVE_STUTTERING = True
DEFAULT_DETECT_QUOTATIONS = False
DEFAULT_OUTPUT_STYLE = "Formal"

# Session timing (seconds)
PASTE_DELAY_SECONDS = 0.06
SUCCESS_DISMISS_SECONDS = 1.5
ERROR_DISMISS_SECONDS = 2.5

# Push-to-talk key, as a pynput Key name (right Alt / Option)
DEFAULT_PUSH_TO_TALK_KEY = "alt_r"
DEFAULT_AUTO_PASTE = True


def normalize_compute_type(device: str, compute_type: str) -> str:
    """Keep compute types compatible with the selected device."""
    if device == "cpu" and "float16" in compute_type:
        return "int8"
    if device == "cuda" and compute_type in ("int8", "int8_float32", "float32"):
        return "float16"
    return compute_type
