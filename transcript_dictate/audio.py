"""Audio recording with background buffering and level metering."""

from __future__ import annotations

import logging
import queue
import threading

import numpy as np
import sounddevice as sd

from transcript_dictate.config import CHUNK_MS, INPUT_CHANNELS, SAMPLE_RATE
from transcript_dictate.levels import LevelMeter, rms_level

logger = logging.getLogger(__name__)


class AudioDeviceError(Exception):
    """Raised when the input stream cannot be opened."""


def resolve_input_device(spec: int | str | None) -> int | None:
    """
    Map an input device index or name substring to a device index.

    Returns None (the system default) when nothing is selected or the
    selection is not found.
    """
    if spec is None or spec == "":
        return None

    try:
        devices = sd.query_devices()
    except sd.PortAudioError as e:
        logger.warning(f"Could not list input devices: {e}")
        return None

    text = str(spec).strip()
    if text.isdigit():
        index = int(text)
        if 0 <= index < len(devices) and devices[index]["max_input_channels"] > 0:
            return index
    else:
        lowered = text.lower()
        for index, device in enumerate(devices):
            if device["max_input_channels"] > 0 and lowered in device["name"].lower():
                return index

    logger.warning(f"Input device {spec!r} not found; falling back to system default")
    return None


class AudioRecorder:
    """Records mono float32 audio into an in-memory buffer."""

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        channels: int = INPUT_CHANNELS,
        chunk_ms: float = CHUNK_MS,
        meter: LevelMeter | None = None,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.chunk_ms = chunk_ms
        self.meter = meter or LevelMeter()

        self._recording = False
        self._audio_queue: queue.Queue[np.ndarray] = queue.Queue()
        self._audio_buffer: list[np.ndarray] = []
        self._buffer_lock = threading.Lock()
        self._stream: sd.InputStream | None = None
        self._collector: threading.Thread | None = None
        self._stop_collector = threading.Event()

    def _audio_callback(self, indata: np.ndarray, frames: int, time_info, status) -> None:
        if status:
            logger.debug(f"Audio status: {status}")
        data = indata if indata.ndim == 1 else np.mean(indata, axis=1)
        self.meter.push(rms_level(data))
        self._audio_queue.put_nowait(data.copy())

    def _collect(self) -> None:
        """Move queued chunks into the buffer until asked to stop."""
        while not self._stop_collector.is_set():
            try:
                chunk = self._audio_queue.get(timeout=0.1)
            except queue.Empty:
                continue
            with self._buffer_lock:
                self._audio_buffer.append(chunk)

    def _drain_queue(self) -> None:
        with self._buffer_lock:
            while True:
                try:
                    self._audio_buffer.append(self._audio_queue.get_nowait())
                except queue.Empty:
                    break

    def start(self, device: int | None = None) -> None:
        """
        Start recording from ``device`` (None for the system default).

        Raises:
            AudioDeviceError: If the input stream cannot be opened
        """
        with self._buffer_lock:
            self._audio_buffer = []
        self.meter.reset()

        if self._collector is None or not self._collector.is_alive():
            self._stop_collector.clear()
            self._collector = threading.Thread(target=self._collect, daemon=True)
            self._collector.start()

        try:
            self._stream = sd.InputStream(
                channels=self.channels,
                samplerate=self.sample_rate,
                dtype="float32",
                callback=self._audio_callback,
                blocksize=int(self.sample_rate * (self.chunk_ms / 1000.0)),
                device=device,
            )
            self._stream.start()
        except (sd.PortAudioError, ValueError) as e:
            self._stream = None
            raise AudioDeviceError(f"Microphone error: {e}") from e
        self._recording = True
        logger.debug(f"Recording started (device={device})")

    def stop(self) -> np.ndarray | None:
        """Stop recording and return the captured audio, or None if nothing was captured."""
        if self._stream:
            try:
                self._stream.stop()
                self._stream.close()
            except (sd.PortAudioError, RuntimeError) as e:
                logger.debug(f"Ignoring error while closing stream: {e}")
            self._stream = None
        self._recording = False
        self._drain_queue()

        with self._buffer_lock:
            if not self._audio_buffer:
                return None
            audio = np.concatenate(self._audio_buffer).astype(np.float32)
            self._audio_buffer.clear()
            return audio

    @property
    def is_recording(self) -> bool:
        return self._recording

    def shutdown(self) -> None:
        """Stop recording and join the collector thread."""
        self.stop()
        self._stop_collector.set()
        if self._collector and self._collector.is_alive():
            self._collector.join(timeout=1.0)
