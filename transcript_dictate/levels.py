"""Microphone level metering for the recording indicator."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence

import numpy as np

from transcript_dictate.config import LEVEL_BARS, LEVEL_GAIN, LEVEL_POLL_SECONDS, LEVEL_SMOOTHING

# Index 0 is silence, the last entry is full scale
BAR_CHARS = " ▁▂▃▄▅▆▇█"


def rms_level(block: np.ndarray, gain: float = LEVEL_GAIN) -> float:
    """Return the block's RMS amplitude scaled by ``gain`` and clamped to [0, 1]."""
    if block.size == 0:
        return 0.0
    rms = float(np.sqrt(np.mean(np.square(block, dtype=np.float64))))
    return min(1.0, max(0.0, rms * gain))


class LevelMeter:
    """Smoothed history of the most recent input levels."""

    def __init__(self, bars: int = LEVEL_BARS, smoothing: float = LEVEL_SMOOTHING):
        self.bars = bars
        self.smoothing = smoothing
        self._lock = threading.Lock()
        self._smoothed = 0.0
        self._levels = [0.0] * bars

    def push(self, raw: float) -> None:
        """Blend a new raw level into the history, dropping the oldest bar."""
        with self._lock:
            self._smoothed = self._smoothed * self.smoothing + raw * (1.0 - self.smoothing)
            self._levels = self._levels[1:] + [self._smoothed]

    def reset(self) -> None:
        with self._lock:
            self._smoothed = 0.0
            self._levels = [0.0] * self.bars

    @property
    def levels(self) -> list[float]:
        with self._lock:
            return list(self._levels)


def render_bars(levels: Sequence[float]) -> str:
    """Draw one block character per level."""
    steps = len(BAR_CHARS) - 1
    return "".join(BAR_CHARS[round(min(1.0, max(0.0, level)) * steps)] for level in levels)


class LevelMonitor:
    """Redraws a meter from a background thread until stopped.

    ``write`` receives the rendered bars every ``interval`` seconds.
    """

    def __init__(
        self,
        meter: LevelMeter,
        write: Callable[[str], None],
        interval: float = LEVEL_POLL_SECONDS,
    ):
        self.meter = meter
        self.write = write
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.write(render_bars(self.meter.levels))
            self._stop_event.wait(self.interval)

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
