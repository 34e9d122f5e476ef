"""Global push-to-talk hotkey built on pynput."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

try:
    from pynput import keyboard
except Exception:  # pragma: no cover - no display server / unsupported platform
    keyboard = None  # type: ignore[assignment]

from transcript_dictate.config import DEFAULT_PUSH_TO_TALK_KEY

logger = logging.getLogger(__name__)


class HotkeyError(Exception):
    """Raised when the push-to-talk key cannot be used."""


def parse_key_name(name: str) -> Any:
    """
    Resolve a key name to a pynput key.

    Accepts special key names from ``pynput.keyboard.Key`` (e.g. "alt_r",
    "f9") or a single printable character.

    Raises:
        HotkeyError: If pynput is unavailable
        ValueError: If the key name is unknown
    """
    if keyboard is None:
        raise HotkeyError("Keyboard monitoring is unavailable on this platform.")

    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Empty key name")
    if len(cleaned) == 1:
        return keyboard.KeyCode.from_char(cleaned.lower())

    key = getattr(keyboard.Key, cleaned.lower(), None)
    if key is None:
        raise ValueError(f"Unknown key: {name}")
    return key


class PushToTalkHotkey:
    """Calls ``on_down`` when the key is pressed and ``on_up`` when it is released.

    Auto-repeat while the key is held does not re-trigger ``on_down``.
    """

    def __init__(
        self,
        on_down: Callable[[], None],
        on_up: Callable[[], None],
        key_name: str = DEFAULT_PUSH_TO_TALK_KEY,
    ):
        self.on_down = on_down
        self.on_up = on_up
        self.key_name = key_name
        self._key: Any = None
        self._pressed = False
        self._lock = threading.Lock()
        self._listener: Optional[Any] = None

    def _matches(self, key: Any) -> bool:
        if key == self._key:
            return True
        # Character keys arrive with the case of the current modifiers
        char = getattr(key, "char", None)
        target = getattr(self._key, "char", None)
        return char is not None and target is not None and char.lower() == target

    def _handle_press(self, key: Any) -> None:
        if not self._matches(key):
            return
        with self._lock:
            if self._pressed:
                return
            self._pressed = True
        self.on_down()

    def _handle_release(self, key: Any) -> None:
        if not self._matches(key):
            return
        with self._lock:
            if not self._pressed:
                return
            self._pressed = False
        self.on_up()

    def start(self) -> None:
        """
        Start listening for the key in a background thread.

        Raises:
            HotkeyError: If the key is invalid or the listener cannot start
        """
        try:
            self._key = parse_key_name(self.key_name)
        except ValueError as e:
            raise HotkeyError(f"Invalid push-to-talk key: {e}") from e

        self.stop()
        try:
            self._listener = keyboard.Listener(
                on_press=self._handle_press,
                on_release=self._handle_release,
            )
            self._listener.start()
        except Exception as e:
            self._listener = None
            raise HotkeyError(f"Could not start keyboard listener: {e}") from e
        logger.info(f"Push-to-talk key: {self.key_name}")

    def stop(self) -> None:
        """Stop the listener if it is running."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
        with self._lock:
            self._pressed = False

    def join(self) -> None:
        """Block until the listener thread exits."""
        if self._listener is not None:
            self._listener.join()
