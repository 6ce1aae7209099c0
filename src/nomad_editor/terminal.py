"""Terminal collaborator boundary and its scoped raw-mode handle."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from nomad_editor.keymaps import KeyInput
from nomad_editor.render import Frame
from nomad_editor.runtime import telemetry


class Terminal(Protocol):
    """What the edit loop needs from a screen.

    ``read_key`` blocks until the next key and returns ``None`` once input
    is closed.
    """

    def enter(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def read_key(self) -> Optional[KeyInput]:
        ...

    def draw(self, frame: Frame) -> None:
        ...


class TerminalModeError(RuntimeError):
    """Entering or restoring raw terminal mode failed."""


@contextmanager
def raw_terminal(terminal: Terminal) -> Iterator[Terminal]:
    """Hold ``terminal`` in raw mode for the duration of the block.

    Restore runs on every exit path, including a failed ``enter``. When the
    block is already failing, a restore error is logged and the original
    exception keeps propagating.
    """

    try:
        terminal.enter()
    except Exception as exc:
        _restore_after_error(terminal)
        raise TerminalModeError(f"could not enter raw mode: {exc}") from exc

    try:
        yield terminal
    except BaseException:
        _restore_after_error(terminal)
        raise

    try:
        terminal.restore()
    except Exception as exc:
        raise TerminalModeError(f"could not restore terminal: {exc}") from exc


def _restore_after_error(terminal: Terminal) -> None:
    try:
        terminal.restore()
    except Exception as exc:
        telemetry.record_event(
            "terminal.restore_failed", level="error", data={"reason": str(exc)}
        )


__all__ = ["Terminal", "TerminalModeError", "raw_terminal"]
