"""TextBuffer: line document plus cursor, with the editing and motion verbs."""

from __future__ import annotations

from typing import Optional, Sequence

from .document import LineDocument
from .state import BufferState, Cursor
from .sync import BufferMirror
from .validation import ensure_cursor


class TextBuffer:
    """Ordered lines and a cursor, mutated in place.

    Invariants: at least one line; ``0 <= cursor_row < len(lines)``;
    ``0 <= cursor_col <= len(lines[cursor_row])``. Columns count code points.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or LineDocument()
        self.state = state or BufferState()
        ensure_cursor(self.document, self.state.cursor)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "TextBuffer":
        return cls(name=name, document=LineDocument.from_text(text))

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def cursor_row(self) -> int:
        return self.state.row

    @property
    def cursor_col(self) -> int:
        return self.state.col

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    def set_cursor(self, row: int, col: int) -> None:
        ensure_cursor(self.document, (row, col))
        self.state.set_cursor(row, col)

    def _line(self, row: Optional[int] = None) -> str:
        return self.document.get_line(self.cursor_row if row is None else row)

    def _last_row(self) -> int:
        return self.document.line_count - 1

    # -- edits ---------------------------------------------------------

    def insert_char(self, char: str) -> None:
        row, col = self.cursor
        if row == self.document.line_count:
            self.document.append_line()
        line = self._line(row)
        self.document.set_line(row, line[:col] + char + line[col:])
        self.move_right()

    def insert_newline(self) -> None:
        row, col = self.cursor
        line = self._line(row)
        self.document.set_line(row, line[:col])
        self.document.insert_line(row + 1, line[col:])
        self.set_cursor(row + 1, 0)

    def delete_char(self) -> None:
        """Backspace: drop the character left of the cursor or join lines."""

        row, col = self.cursor
        if col > 0:
            line = self._line(row)
            self.document.set_line(row, line[: col - 1] + line[col:])
            self.set_cursor(row, col - 1)
        elif row > 0:
            previous = self._line(row - 1)
            current = self.document.remove_line(row)
            self.document.set_line(row - 1, previous + current)
            self.set_cursor(row - 1, len(previous))

    def cut_line(self) -> str:
        """Remove the cursor row and return its text."""

        row, col = self.cursor
        removed = self.document.remove_line(row)
        row = min(row, self._last_row())
        self.set_cursor(row, min(col, len(self._line(row))))
        return removed

    def paste_line(self, text: str) -> None:
        """Insert ``text`` as a new line above the cursor row."""

        row, col = self.cursor
        self.document.insert_line(row, text)
        self.set_cursor(row + 1, col)

    # -- motions -------------------------------------------------------

    def move_left(self) -> None:
        row, col = self.cursor
        if col > 0:
            self.set_cursor(row, col - 1)
        elif row > 0:
            self.set_cursor(row - 1, len(self._line(row - 1)))

    def move_right(self) -> None:
        row, col = self.cursor
        if col < len(self._line(row)):
            self.set_cursor(row, col + 1)
        elif row < self._last_row():
            self.set_cursor(row + 1, 0)

    def move_up(self) -> None:
        row, col = self.cursor
        if row > 0:
            self.set_cursor(row - 1, min(col, len(self._line(row - 1))))

    def move_down(self) -> None:
        row, col = self.cursor
        if row < self._last_row():
            self.set_cursor(row + 1, min(col, len(self._line(row + 1))))

    def move_to_start(self) -> None:
        self.set_cursor(0, 0)

    def move_to_end(self) -> None:
        last = self._last_row()
        self.set_cursor(last, len(self._line(last)))

    # -- whole-buffer --------------------------------------------------

    def content(self) -> str:
        return self.document.text()

    def load(self, text: str) -> None:
        """Replace every line with ``text`` and home the cursor."""

        self.document = LineDocument.from_text(text)
        self.state.set_cursor(0, 0)

    def mark_saved(self) -> None:
        self.document.mark_clean()

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            lines=tuple(self.document.snapshot()),
            cursor=self.cursor,
            dirty=self.document.dirty,
        )


__all__ = ["TextBuffer"]
