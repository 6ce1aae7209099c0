"""Pure screen model computed from a SessionState for each redraw."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from nomad_editor.buffer.state import Cursor

if TYPE_CHECKING:
    from nomad_editor.session.state import SessionState

TITLE = "Nomad Editor"


@dataclass(frozen=True, slots=True)
class RenderedLine:
    text: str
    current: bool = False


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a terminal needs to repaint the screen once.

    ``cursor`` is ``(col, row)`` inside the buffer area. When ``prompt`` is
    set the visible cursor belongs at the end of the prompt line instead.
    """

    title: str
    lines: tuple[RenderedLine, ...]
    status: str
    cursor: Cursor
    prompt: Optional[str] = None


def _one_line(message: str) -> str:
    return " ".join(message.splitlines())


def render_title(state: SessionState) -> str:
    name = state.filename or "[No Name]"
    marker = " [+]" if state.buffer.dirty else ""
    return f"{TITLE} - {name}{marker}"


def render_status(state: SessionState, legend: str) -> str:
    col, row = state.buffer.cursor_col, state.buffer.cursor_row
    parts = [f"Cursor: ({col}, {row})"]
    if state.status_message:
        parts.append(_one_line(state.status_message))
    if legend:
        parts.append(legend)
    return " | ".join(parts)


def render_frame(state: SessionState, legend: str = "") -> Frame:
    buffer = state.buffer
    mirror = buffer.mirror()
    current_row = mirror.cursor[0]
    lines = tuple(
        RenderedLine(text=line, current=index == current_row)
        for index, line in enumerate(mirror.lines)
    )
    prompt = None
    if state.prompt is not None:
        prompt = f"{state.prompt.label}: {state.prompt.text}"
    return Frame(
        title=render_title(state),
        lines=lines,
        status=render_status(state, legend),
        cursor=(buffer.cursor_col, buffer.cursor_row),
        prompt=prompt,
    )


__all__ = ["Frame", "RenderedLine", "TITLE", "render_frame"]
