"""Cursor bounds checks shared by buffer operations."""

from __future__ import annotations

from .document import LineDocument
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(document: LineDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > len(document.get_line(row)):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor
