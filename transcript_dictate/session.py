"""Dictation session controller: record, transcribe, post-process, deliver."""

from __future__ import annotations

import logging
import sys
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

import pyperclip

try:
    import pyautogui

    pyautogui.FAILSAFE = False
except Exception:  # pragma: no cover - optional dependency / no display
    pyautogui = None  # type: ignore[assignment]

from transcript_dictate.config import (
    DEFAULT_AUTO_PASTE,
    ERROR_DISMISS_SECONDS,
    PASTE_DELAY_SECONDS,
    SUCCESS_DISMISS_SECONDS,
)
from transcript_dictate.pipeline import PipelineConfig, process_text
from transcript_dictate.replacements import ReplacementStore, load_replacement_store
from transcript_dictate.settings_store import load_settings, parse_bool
from transcript_dictate.stats_store import UsageStats, load_stats, save_stats

logger = logging.getLogger(__name__)


class SessionPhase(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SessionStatus:
    phase: SessionPhase
    message: str | None = None

    @property
    def is_visible(self) -> bool:
        return self.phase is not SessionPhase.IDLE


class Recorder(Protocol):
    def start(self, device: int | None = None) -> None: ...

    def stop(self) -> Any: ...


def paste_clipboard() -> None:
    """Send the platform paste shortcut to the focused window."""
    if pyautogui is None:
        logger.warning("Auto-paste requested, but pyautogui is not available")
        return
    modifier = "command" if sys.platform == "darwin" else "ctrl"
    try:
        pyautogui.hotkey(modifier, "v")
    except Exception as e:  # pragma: no cover - UI automation issues
        logger.warning(f"Auto-paste failed: {e}")


class DictationSession:
    """Push-to-talk dictation flow.

    ``start`` begins recording; ``stop`` transcribes the audio, runs the
    post-processing pipeline with freshly loaded settings and rules,
    records statistics, and delivers the result to the clipboard.
    Only one recording is in flight at a time.
    """

    def __init__(
        self,
        recorder: Recorder,
        transcribe: Callable[[Any], str],
        device: int | None = None,
        stats: UsageStats | None = None,
        on_status: Optional[Callable[[SessionStatus], None]] = None,
        settings_loader: Callable[[], dict] = load_settings,
        rules_loader: Callable[[], ReplacementStore] = load_replacement_store,
        copy: Callable[[str], None] = pyperclip.copy,
        paste: Callable[[], None] = paste_clipboard,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., Any] = threading.Timer,
    ):
        self.recorder = recorder
        self.transcribe = transcribe
        self.device = device
        self.stats = stats if stats is not None else load_stats()
        self.on_status = on_status
        self.settings_loader = settings_loader
        self.rules_loader = rules_loader
        self.copy = copy
        self.paste = paste
        self.clock = clock
        self.timer_factory = timer_factory

        self.status = SessionStatus(SessionPhase.IDLE)
        self._lock = threading.Lock()
        self._recording = False
        self._started_at: float | None = None
        self._dismiss_timer: Any = None

    # ------------------------------------------------------------------
    # Status handling
    # ------------------------------------------------------------------
    def _set_status(self, phase: SessionPhase, message: str | None = None) -> None:
        self.status = SessionStatus(phase, message)
        logger.debug(f"Session phase: {phase.value} {message or ''}".rstrip())
        if self.on_status:
            self.on_status(self.status)

    def _cancel_dismiss(self) -> None:
        if self._dismiss_timer is not None:
            self._dismiss_timer.cancel()
            self._dismiss_timer = None

    def _schedule_dismiss(self, seconds: float) -> None:
        self._cancel_dismiss()
        timer = self.timer_factory(seconds, self._dismiss)
        timer.daemon = True
        timer.start()
        self._dismiss_timer = timer

    def _dismiss(self) -> None:
        with self._lock:
            if self._recording:
                return
            self._dismiss_timer = None
        self._set_status(SessionPhase.IDLE)

    # ------------------------------------------------------------------
    # Dictation flow
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin recording. Ignored while a recording is already running."""
        with self._lock:
            if self._recording:
                return
            self._recording = True
            self._cancel_dismiss()

        self._started_at = self.clock()
        self._set_status(SessionPhase.RECORDING)
        try:
            self.recorder.start(self.device)
        except Exception as e:
            logger.error(f"Could not start input device: {e}")
            with self._lock:
                self._recording = False
            self._set_status(SessionPhase.ERROR, str(e))
            self._schedule_dismiss(ERROR_DISMISS_SECONDS)

    def stop(self) -> str | None:
        """Finish recording and deliver the processed text.

        Returns the delivered text, or None when nothing was delivered.
        """
        with self._lock:
            if not self._recording:
                return None
            self._recording = False

        self._set_status(SessionPhase.PROCESSING)
        try:
            return self._finish()
        finally:
            self._schedule_dismiss(SUCCESS_DISMISS_SECONDS)

    def _finish(self) -> str | None:
        audio = self.recorder.stop()
        now = self.clock()
        duration = now - self._started_at if self._started_at is not None else 0.0

        text = ""
        if audio is not None:
            try:
                text = self.transcribe(audio)
            except Exception as e:
                logger.error(f"Could not transcribe recording: {e}")
                self._set_status(SessionPhase.ERROR, "Transcription failed")
                return None

        if not text or not text.strip():
            self._set_status(SessionPhase.ERROR, "No speech detected")
            return None

        settings = self.settings_loader()
        rules = self.rules_loader().rules
        processed = process_text(text, rules, PipelineConfig.from_settings(settings))

        words = self.stats.record_session(processed, duration)
        save_stats(self.stats)
        logger.info(f"Dictated {words} words in {duration:.1f}s")

        try:
            self.copy(processed)
        except pyperclip.PyperclipException as e:
            logger.error(f"Clipboard copy failed: {e}")
            self._set_status(SessionPhase.ERROR, "Clipboard unavailable")
            return None

        if parse_bool(settings.get("auto_paste"), DEFAULT_AUTO_PASTE):
            self._set_status(SessionPhase.SUCCESS, "Pasted")
            paste_timer = self.timer_factory(PASTE_DELAY_SECONDS, self.paste)
            paste_timer.daemon = True
            paste_timer.start()
        else:
            self._set_status(SessionPhase.SUCCESS, "Copied")
        return processed
