"""Textual application hosting one EditSession."""

from __future__ import annotations

from typing import Any, Optional

try:
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use nomad_editor.adapters.textual"
    ) from exc

from nomad_editor.keymaps import KeyInput
from nomad_editor.render import Frame
from nomad_editor.runtime import telemetry
from nomad_editor.session import EditSession, SessionState

from .controller import TextualTerminal, normalize_key

CURRENT_LINE_STYLE = "on grey23"
CURSOR_STYLE = "reverse"


def render_buffer(frame: Frame) -> Text:
    """Buffer lines with the current row shaded and the cursor cell reversed."""

    col = frame.cursor[0]
    text = Text(no_wrap=True, overflow="ellipsis")
    for index, line in enumerate(frame.lines):
        if index:
            text.append("\n")
        rendered = Text(line.text)
        if line.current:
            rendered.stylize(CURRENT_LINE_STYLE)
            if frame.prompt is None:
                _mark_cursor(rendered, col)
        text.append_text(rendered)
    return text


def render_prompt(frame: Frame) -> Text:
    if frame.prompt is None:
        return Text("")
    text = Text(frame.prompt, style="bold yellow")
    text.append(" ", style=CURSOR_STYLE)
    return text


def scroll_offset(row: int, top: int, height: int) -> int:
    """Smallest move of the viewport ``top`` that keeps ``row`` visible."""

    if height <= 0 or row < top:
        return row
    if row >= top + height:
        return row - height + 1
    return top


def follow_cursor(area: Any, row: int) -> None:
    """Scroll ``area`` so the buffer line ``row`` is on screen."""

    top = int(area.scroll_y)
    target = scroll_offset(row, top, area.scrollable_content_region.height)
    if target != top:
        area.scroll_to(y=target, animate=False)


def _mark_cursor(line: Text, col: int) -> None:
    if col >= len(line.plain):
        line.append(" ", style=CURSOR_STYLE)
    else:
        line.stylize(CURSOR_STYLE, col, col + 1)


class NomadEditorApp(App[None]):
    """Full-screen editor; quitting the session exits the app."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
		border: round $accent;
	}

	#buffer-view {
		padding: 0 1;
	}

	#prompt-line {
		height: auto;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		color: $text;
		padding: 0 1;
	}
	"""

    def __init__(self, session: EditSession) -> None:
        super().__init__()
        self.session = session
        self.terminal = TextualTerminal(self)
        self.error: Optional[BaseException] = None
        self._buffer_area: VerticalScroll | None = None
        self._buffer_widget: Static | None = None
        self._prompt_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._buffer_area = VerticalScroll(id="buffer-area")
        with self._buffer_area:
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._prompt_widget = Static("", id="prompt-line")
        self._status_widget = Static("", id="status-line")
        yield self._prompt_widget
        yield self._status_widget

    def on_mount(self) -> None:
        self.show_frame(self.session.frame())
        self.terminal.mark_ready()
        self.run_worker(
            self._run_session,
            name="edit-session",
            thread=True,
            exit_on_error=False,
        )

    def on_unmount(self) -> None:
        self.terminal.close()

    def _run_session(self) -> None:
        try:
            self.session.run(self.terminal)
        except Exception as exc:
            self.error = exc
            telemetry.record_event(
                "session.failed",
                level="error",
                data={"error": type(exc).__name__, "reason": str(exc)},
            )

    async def on_key(self, event: events.Key) -> None:
        key = normalize_key(event)
        if key is None:
            return
        self.terminal.feed(key)
        event.stop()
        event.prevent_default()

    async def action_quit(self) -> None:
        # Textual's own quit binding goes through the session like any key.
        self.terminal.feed(KeyInput.ctrl("q"))

    def show_frame(self, frame: Frame) -> None:
        self.title = frame.title
        if self._buffer_widget is not None:
            self._buffer_widget.update(render_buffer(frame))
        if self._buffer_area is not None:
            # The new text must be laid out before its height can be scrolled.
            self.call_after_refresh(follow_cursor, self._buffer_area, frame.cursor[1])
        if self._prompt_widget is not None:
            self._prompt_widget.update(render_prompt(frame))
            self._prompt_widget.display = frame.prompt is not None
        if self._status_widget is not None:
            self._status_widget.update(Text(frame.status, style="cyan"))


def run_app(session: EditSession) -> SessionState:
    """Run the editor full-screen; re-raise whatever stopped the session."""

    app = NomadEditorApp(session)
    app.run()
    if app.error is not None:
        raise app.error
    return session.state


__all__ = [
    "NomadEditorApp",
    "follow_cursor",
    "render_buffer",
    "render_prompt",
    "run_app",
    "scroll_offset",
]
