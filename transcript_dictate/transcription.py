"""Speech-to-text via faster-whisper."""

from __future__ import annotations

import logging
from typing import Any

from faster_whisper import WhisperModel

from transcript_dictate.config import DEFAULT_BEAM_SIZE, DEFAULT_LANGUAGE, normalize_compute_type

logger = logging.getLogger(__name__)


class TranscriptionError(Exception):
    """Raised when transcription fails."""


def load_model(model_name: str, device: str, compute_type: str) -> WhisperModel:
    """Load a Whisper model with a compute type the device supports."""
    compute = normalize_compute_type(device, compute_type)
    logger.info(f"Loading Whisper model: {model_name} on {device} ({compute})")
    return WhisperModel(model_name, device=device, compute_type=compute)


def transcribe_audio(
    model: WhisperModel,
    audio: Any,
    beam_size: int = DEFAULT_BEAM_SIZE,
    language: str = DEFAULT_LANGUAGE,
    vad_filter: bool = False,
) -> str:
    """
    Transcribe recorded audio to text.

    Args:
        model: Loaded WhisperModel instance
        audio: Mono float32 samples at 16 kHz
        beam_size: Beam size for decoding
        language: Language code
        vad_filter: Whether to drop non-speech with Silero VAD

    Returns:
        Transcribed text with surrounding whitespace removed

    Raises:
        TranscriptionError: If the model fails
    """
    try:
        segments, _info = model.transcribe(
            audio,
            beam_size=beam_size,
            language=language,
            vad_filter=vad_filter,
        )
        return "".join(segment.text for segment in segments).strip()
    except Exception as e:
        raise TranscriptionError(f"Transcription failed: {e}") from e
