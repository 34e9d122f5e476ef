"""Push-to-talk dictation from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from transcript_dictate.audio import AudioRecorder, resolve_input_device
from transcript_dictate.config import DEFAULT_LANGUAGE
from transcript_dictate.hotkeys import HotkeyError, PushToTalkHotkey
from transcript_dictate.levels import LevelMeter, LevelMonitor
from transcript_dictate.logging_config import setup_logging
from transcript_dictate.session import DictationSession, SessionPhase, SessionStatus
from transcript_dictate.settings_store import load_settings
from transcript_dictate.transcription import load_model, transcribe_audio

logger = logging.getLogger(__name__)


class StatusPrinter:
    """Prints session status lines, with a live input meter while recording."""

    def __init__(self, meter: LevelMeter | None = None, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self.monitor = LevelMonitor(meter, self._write_levels) if meter is not None else None

    def _write_levels(self, bars: str) -> None:
        self.stream.write(f"\r[REC] {bars}")
        self.stream.flush()

    def _print(self, line: str) -> None:
        print(line, file=self.stream, flush=True)

    def _stop_meter(self) -> None:
        if self.monitor is not None and self.monitor.is_running:
            self.monitor.stop()
            # End the line the meter was redrawing
            self._print("")

    def __call__(self, status: SessionStatus) -> None:
        if status.phase is SessionPhase.RECORDING:
            self._print("[REC] Speak now. Release the key to stop.")
            if self.monitor is not None:
                self.monitor.start()
            return

        self._stop_meter()
        if not status.is_visible:
            return
        if status.phase is SessionPhase.PROCESSING:
            self._print("[REC] Stopped. Transcribing...")
        elif status.message:
            self._print(f"({status.message})")


def run(args: argparse.Namespace) -> None:
    model = load_model(args.model, args.device, args.compute_type)
    device = resolve_input_device(args.input_device)
    recorder = AudioRecorder()
    printer = StatusPrinter(recorder.meter)

    def transcribe(audio) -> str:
        return transcribe_audio(model, audio, language=args.language)

    session = DictationSession(
        recorder,
        transcribe,
        device=device,
        on_status=printer,
    )

    def on_up() -> None:
        text = session.stop()
        if text:
            print(text)

    hotkey = PushToTalkHotkey(session.start, on_up, key_name=args.key)
    try:
        hotkey.start()
    except HotkeyError as e:
        logger.error(str(e))
        recorder.shutdown()
        return

    print(f"Ready. Hold {args.key} to dictate, Ctrl+C to quit.")
    try:
        hotkey.join()
    except KeyboardInterrupt:
        print("Quitting.")
    finally:
        hotkey.stop()
        session.stop()
        recorder.shutdown()
        stats = session.stats
        print(
            f"Words: {stats.total_words} total, {stats.words_today} today, "
            f"{stats.average_wpm:.0f} wpm over {stats.formatted_recording_time}"
        )


def build_parser(settings: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-dictate",
        description="Local push-to-talk dictation with text post-processing",
    )
    parser.add_argument(
        "--key",
        default=settings["push_to_talk_key"],
        help="Push-to-talk key name (e.g. alt_r, f9, or a single character)",
    )
    parser.add_argument("--model", default=settings["model"], help="Whisper model size")
    parser.add_argument(
        "--device", default=settings["device"], choices=["cpu", "cuda"], help="Inference device"
    )
    parser.add_argument(
        "--compute-type", default=settings["compute_type"], help="CTranslate2 compute_type"
    )
    parser.add_argument(
        "--input-device",
        default=settings["input_device"] or None,
        help="Input device index or name substring",
    )
    parser.add_argument("--language", default=DEFAULT_LANGUAGE, help="Spoken language code")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the console")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    argv = list(argv) if argv is not None else sys.argv[1:]
    # Handlers must exist before the settings file is read
    setup_logging(logging.DEBUG if "--verbose" in argv else logging.INFO)
    args = build_parser(load_settings()).parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
