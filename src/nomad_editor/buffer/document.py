"""Line storage backing every TextBuffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

LINE_SEPARATOR = "\n"


def split_lines(text: str) -> List[str]:
    """Split ``text`` on ``\\n`` only; a trailing separator ends the last line.

    ``"a\\nb\\n"`` and ``"a\\nb"`` both give ``["a", "b"]``. ``\\r`` is kept
    as ordinary line content. An empty result becomes ``[""]``.
    """

    lines = text.split(LINE_SEPARATOR)
    if text.endswith(LINE_SEPARATOR):
        lines.pop()
    return lines or [""]


@dataclass(slots=True)
class LineDocument:
    """Ordered list of lines; never empty.

    Every mutating method marks the document dirty until ``mark_clean``
    is called after a save.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "LineDocument":
        return cls(_lines=split_lines(text))

    def text(self) -> str:
        return LINE_SEPARATOR.join(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self._touch()

    def insert_line(self, index: int, text: str) -> None:
        self._lines.insert(index, text)
        self._touch()

    def append_line(self, text: str = "") -> None:
        self._lines.append(text)
        self._touch()

    def remove_line(self, index: int) -> str:
        removed = self._lines.pop(index)
        if not self._lines:
            self._lines.append("")
        self._touch()
        return removed

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.dirty = True
