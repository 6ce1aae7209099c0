"""Command-line entry point: argument parsing and the startup menu."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence

from nomad_editor.buffer import TextBuffer
from nomad_editor.config import EditorConfig
from nomad_editor.runtime import telemetry
from nomad_editor.session import EditSession, SessionServices, SessionState
from nomad_editor.terminal import TerminalModeError
from nomad_editor.transform import BACKENDS, run_transform

Launcher = Callable[[EditSession], SessionState]
ReadLine = Callable[[str], str]
Write = Callable[[str], None]

MENU = (
    "Welcome to Nomad!",
    "1. Create/Edit a note",
    "2. Load a note",
    "3. Exit",
)
SHORTCUTS = (
    "Editor shortcuts:",
    "Ctrl-Q: Quit, Ctrl-S: Save, Ctrl-O: Open/Set filename, Ctrl-L: Transform",
    "Ctrl-G: Move to end, Ctrl-A: Move to start",
    "Ctrl-K: Cut line, Ctrl-U: Paste line",
)
GOODBYE = "Thank you for using Nomad. Goodbye!"
INVALID_CHOICE = "Invalid option. Please choose 1, 2, or 3."


def default_launcher(session: EditSession) -> SessionState:
    from nomad_editor.adapters.textual.app import run_app

    return run_app(session)


def build_services(config: EditorConfig) -> SessionServices:
    return SessionServices(
        transformer=config.build_transformer(),
        transform_timeout=config.transform_timeout,
    )


class StartupMenu:
    """Interactive menu shown when no file is named on the command line."""

    def __init__(
        self,
        *,
        services: SessionServices,
        launch: Launcher = default_launcher,
        read_line: ReadLine = input,
        write: Write = print,
    ) -> None:
        self.services = services
        self._launch = launch
        self._read_line = read_line
        self._write = write

    def _ask(self, prompt: str) -> Optional[str]:
        try:
            return self._read_line(prompt)
        except EOFError:
            return None

    def _say(self, *lines: str) -> None:
        for line in lines:
            self._write(line)

    def run(self) -> int:
        while True:
            self._say(*MENU)
            choice = self._ask("Choose an option (1, 2, or 3): ")
            if choice is None or choice.strip() == "3":
                self._say(GOODBYE)
                return 0

            choice = choice.strip()
            if choice in {"1", "2"}:
                session = self._new_session(load=choice == "2")
                if session is None:
                    self._say(GOODBYE)
                    return 0
                self._edit(session)
            else:
                self._say(INVALID_CHOICE)

            if self._ask("\nPress Enter to continue...") is None:
                self._say(GOODBYE)
                return 0

    def _new_session(self, *, load: bool) -> Optional[EditSession]:
        if not load:
            return EditSession(services=self.services)
        filename = self._ask("Enter the filename to load: ")
        if filename is None:
            return None
        filename = filename.strip()
        text = self.services.files.read_text(filename)
        session = EditSession(
            buffer=TextBuffer.from_text(text), filename=filename, services=self.services
        )
        session.state.status_message = f"Loaded file: {filename}"
        return session

    def _edit(self, session: EditSession) -> None:
        self._say(*SHORTCUTS)
        if self._ask("Press Enter to start editing...") is None:
            return
        state = self._launch(session)
        content = state.buffer.content()
        self._say("Note content:", content)

        instruction = self._ask(
            "Enter an instruction for the transform (starting with @) "
            "or press Enter to skip: "
        )
        if instruction and instruction.strip().startswith("@"):
            outcome = run_transform(
                self.services.transformer,
                instruction.strip()[1:].strip(),
                content,
                timeout=self.services.transform_timeout,
            )
            self._say("Transform response:", outcome.message)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nomad", description="Edit a plain-text note in the terminal."
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="File to edit; loaded if it exists. Without it the startup menu runs.",
    )
    parser.add_argument(
        "--transform",
        choices=BACKENDS,
        default=None,
        help="Transform backend (default: $NOMAD_TRANSFORM or placeholder)",
    )
    parser.add_argument(
        "--transform-timeout",
        type=float,
        default=None,
        help="Seconds to wait for a transform, 0 or less to wait forever "
        "(default: $NOMAD_TRANSFORM_TIMEOUT or 30)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $NOMAD_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file (default: $NOMAD_LOG_FILE)",
    )
    return parser.parse_args(argv)


def main(
    argv: Optional[Sequence[str]] = None, *, launch: Launcher = default_launcher
) -> int:
    args = _parse_args(argv)
    try:
        config = EditorConfig.from_env().with_overrides(
            transform_backend=args.transform,
            transform_timeout=args.transform_timeout,
            log_level=args.log_level.upper() if args.log_level else None,
            log_file=args.log_file,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    telemetry.configure(level=config.log_level, log_file=config.log_file or None)
    services = build_services(config)

    try:
        if args.file:
            launch(EditSession.open(args.file, services=services))
            return 0
        return StartupMenu(services=services, launch=launch).run()
    except (OSError, TerminalModeError) as exc:
        telemetry.record_event(
            "cli.failed",
            level="error",
            data={"error": type(exc).__name__, "reason": str(exc)},
        )
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["StartupMenu", "build_services", "default_launcher", "main"]
