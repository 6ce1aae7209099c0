"""Cursor state for text buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor position tied to a LineDocument."""

    cursor: Cursor = (0, 0)

    @property
    def row(self) -> int:
        return self.cursor[0]

    @property
    def col(self) -> int:
        return self.cursor[1]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)
