"""Textual-backed implementation of the Terminal protocol.

The edit loop runs on a worker thread and blocks in ``read_key``; the app
feeds keys from its event handlers and paints frames handed over with
``call_from_thread``.
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Mapping, Optional

from nomad_editor.keymaps import KeyInput
from nomad_editor.render import Frame
from nomad_editor.terminal import TerminalModeError

NAMED_KEYS: Mapping[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}


def normalize_key(event: Any) -> Optional[KeyInput]:
    """Convert a ``textual.events.Key`` into a KeyInput, or None to drop it."""

    key = str(event.key)
    named = NAMED_KEYS.get(key)
    if named is not None:
        return KeyInput(named)
    if key.startswith("ctrl+"):
        base = key[len("ctrl+") :]
        if len(base) == 1:
            return KeyInput.ctrl(base)
        return None
    character = getattr(event, "character", None)
    if character and getattr(event, "is_printable", False):
        return KeyInput.char(character)
    return None


class TextualTerminal:
    """Queue-fed key source and frame sink bound to a running Textual app."""

    def __init__(self, app: Any, *, ready_timeout: float = 5.0) -> None:
        self._app = app
        self._keys: "queue.Queue[Optional[KeyInput]]" = queue.Queue()
        self._ready = threading.Event()
        self._closed = False
        self._ready_timeout = ready_timeout

    # app side ------------------------------------------------------------

    def mark_ready(self) -> None:
        self._ready.set()

    def feed(self, key: KeyInput) -> None:
        if not self._closed:
            self._keys.put(key)

    def close(self) -> None:
        """Unblock ``read_key`` for good; the app is going away."""

        self._closed = True
        self._keys.put(None)

    @property
    def closed(self) -> bool:
        return self._closed

    # loop side -----------------------------------------------------------

    def enter(self) -> None:
        if not self._ready.wait(self._ready_timeout):
            raise TerminalModeError("Textual app did not start")

    def restore(self) -> None:
        if self._closed:
            return
        self._app.call_from_thread(self._app.exit)

    def read_key(self) -> Optional[KeyInput]:
        return self._keys.get()

    def draw(self, frame: Frame) -> None:
        if self._closed:
            return
        self._app.call_from_thread(self._app.show_frame, frame)


__all__ = ["NAMED_KEYS", "TextualTerminal", "normalize_key"]
