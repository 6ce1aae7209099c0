"""Text buffer model: line storage, cursor, and editing verbs."""

from .buffer import TextBuffer
from .document import LineDocument, split_lines
from .registers import LineClipboard
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_cursor

__all__ = [
    "TextBuffer",
    "LineDocument",
    "LineClipboard",
    "BufferState",
    "BufferMirror",
    "BufferValidationError",
    "Cursor",
    "ensure_cursor",
    "split_lines",
]
