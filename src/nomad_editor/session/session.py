"""EditSession: key translation, dispatch, and the blocking redraw loop."""

from __future__ import annotations

from typing import Optional, cast

from nomad_editor.buffer import TextBuffer
from nomad_editor.commands import (
    Command,
    InsertChar,
    PromptInput,
    Quit,
    command_name,
)
from nomad_editor.keymaps import (
    EDITING,
    KeyInput,
    KeymapRegistry,
    KeymapResolver,
    legend,
    load_default_keymaps,
)
from nomad_editor.render import Frame, render_frame
from nomad_editor.runtime import telemetry
from nomad_editor.terminal import Terminal, raw_terminal

from .reducer import reduce
from .state import SessionServices, SessionState


def create_default_resolver() -> KeymapResolver:
    registry = KeymapRegistry(logger_name="nomad_editor.keymaps")
    load_default_keymaps(registry)
    return KeymapResolver(registry, logger_name="nomad_editor.keymaps")


class EditSession:
    """Owns one buffer and drives it from key events until quit."""

    def __init__(
        self,
        *,
        buffer: Optional[TextBuffer] = None,
        filename: Optional[str] = None,
        services: Optional[SessionServices] = None,
        resolver: Optional[KeymapResolver] = None,
    ) -> None:
        self.state = SessionState(buffer=buffer or TextBuffer(), filename=filename)
        self.services = services or SessionServices()
        self.resolver = resolver or create_default_resolver()
        self._legend = legend(self.resolver.registry, EDITING)

    @classmethod
    def open(
        cls,
        filename: str,
        *,
        services: Optional[SessionServices] = None,
        resolver: Optional[KeymapResolver] = None,
    ) -> "EditSession":
        """Session on ``filename``, loaded when it already exists."""

        services = services or SessionServices()
        session = cls(filename=filename, services=services, resolver=resolver)
        if services.files.exists(filename):
            session.state.buffer.load(services.files.read_text(filename))
            session.state.status_message = f"Loaded file: {filename}"
        else:
            session.state.status_message = f"File name set to: {filename}"
        return session

    @property
    def buffer(self) -> TextBuffer:
        return self.state.buffer

    @property
    def filename(self) -> Optional[str]:
        return self.state.filename

    @property
    def status_message(self) -> str:
        return self.state.status_message

    @property
    def terminated(self) -> bool:
        return self.state.terminated

    def translate(self, key: KeyInput) -> Optional[Command]:
        """Map a key to a command for the current mode, or None to ignore it."""

        mode = self.state.mode
        result = self.resolver.resolve(mode, key)
        if result.match is not None:
            return cast(Command, result.match(key))
        if key.printable and key.text is not None and len(key.text) == 1:
            if mode == EDITING:
                return InsertChar(key.text)
            return PromptInput(key.text)
        return None

    def dispatch(self, command: Command) -> SessionState:
        was_terminated = self.state.terminated
        with telemetry.span(
            name=f"session::{command_name(command)}",
            component="session",
            metadata={"mode": self.state.mode},
        ):
            reduce(self.state, command, self.services)
        if self.state.terminated and not was_terminated:
            telemetry.record_event(
                "session.terminated", data={"filename": self.state.filename}
            )
        return self.state

    def handle_key(self, key: KeyInput) -> Optional[Command]:
        command = self.translate(key)
        if command is not None:
            self.dispatch(command)
        return command

    def frame(self) -> Frame:
        return render_frame(self.state, self._legend)

    def run(self, terminal: Terminal) -> SessionState:
        """Read, dispatch and redraw until the session terminates.

        Every processed key is followed by exactly one full redraw. Closed
        input counts as quit. Errors from file I/O propagate after the
        terminal has been restored.
        """

        telemetry.record_event("session.start", data={"filename": self.filename})
        with raw_terminal(terminal):
            terminal.draw(self.frame())
            while not self.terminated:
                key = terminal.read_key()
                if key is None:
                    self.dispatch(Quit())
                    break
                self.handle_key(key)
                terminal.draw(self.frame())
        return self.state


__all__ = ["EditSession", "create_default_resolver"]
