"""Transcript Dictate - push-to-talk dictation with deterministic text post-processing."""

__version__ = "0.1.0"

__all__ = [
    "audio",
    "config",
    "destutter",
    "hotkeys",
    "levels",
    "lexicon",
    "pipeline",
    "quotations",
    "replacements",
    "session",
    "settings_store",
    "stats_store",
    "styles",
    "tokenizer",
    "transcription",
]
