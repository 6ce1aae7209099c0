"""Boundary types handed from buffers to renderers."""

from __future__ import annotations

from dataclasses import dataclass

from .state import Cursor


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Read-only snapshot of a buffer for one redraw."""

    lines: tuple[str, ...]
    cursor: Cursor
    dirty: bool = False


class BufferValidationError(RuntimeError):
    """Raised when a cursor would leave the bounds of its document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
