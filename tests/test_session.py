from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from nomad_editor.buffer import TextBuffer
from nomad_editor.commands import (
    CutLine,
    DeleteChar,
    InsertChar,
    InsertNewline,
    Motion,
    Move,
    OpenPrompt,
    PasteLine,
    PromptBackspace,
    PromptCancel,
    PromptCommit,
    PromptInput,
    Quit,
    Save,
    TransformPrompt,
)
from nomad_editor.keymaps import KeyInput
from nomad_editor.render import Frame
from nomad_editor.session import (
    NO_FILENAME_MESSAGE,
    EditSession,
    PromptKind,
    SessionServices,
    SessionState,
    reduce,
)
from nomad_editor.terminal import TerminalModeError


class RecordingTransformer:
    name = "recording"

    def __init__(self, reply: str = "done") -> None:
        self.reply = reply
        self.calls: List[tuple[str, str]] = []

    def transform(self, instruction: str, content: str) -> str:
        self.calls.append((instruction, content))
        return self.reply


class FailingTransformer:
    name = "failing"

    def transform(self, instruction: str, content: str) -> str:
        raise ConnectionError("backend unreachable")


class SlowTransformer:
    name = "slow"

    def transform(self, instruction: str, content: str) -> str:
        time.sleep(1.0)
        return "too late"


class ScriptedTerminal:
    """Terminal fake fed from a fixed list of keys."""

    def __init__(
        self,
        keys: Iterable[Optional[KeyInput]] = (),
        *,
        fail_enter: bool = False,
    ) -> None:
        self.keys = list(keys)
        self.fail_enter = fail_enter
        self.frames: List[Frame] = []
        self.entered = 0
        self.restored = 0

    def enter(self) -> None:
        self.entered += 1
        if self.fail_enter:
            raise OSError("not a tty")

    def restore(self) -> None:
        self.restored += 1

    def read_key(self) -> Optional[KeyInput]:
        if not self.keys:
            return None
        return self.keys.pop(0)

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)


def make_state(lines: List[str] | None = None, **kwargs: object) -> SessionState:
    buffer = TextBuffer.from_text("\n".join(lines)) if lines else TextBuffer()
    return SessionState(buffer=buffer, **kwargs)  # type: ignore[arg-type]


def apply(state: SessionState, *commands: object, services=None) -> SessionState:
    services = services or SessionServices()
    for command in commands:
        reduce(state, command, services)  # type: ignore[arg-type]
    return state


def type_text(text: str) -> List[PromptInput]:
    return [PromptInput(char) for char in text]


def keys(text: str) -> List[KeyInput]:
    return [KeyInput.char(char) for char in text]


# -- reducer ---------------------------------------------------------------


def test_edit_commands_apply_to_buffer_without_touching_status() -> None:
    state = make_state(status_message="Loaded file: a.txt")

    apply(
        state,
        InsertChar("a"),
        InsertChar("b"),
        InsertNewline(),
        InsertChar("c"),
        Move(Motion.LEFT),
        DeleteChar(),
    )

    assert state.buffer.lines == ("abc",)
    assert state.buffer.cursor == (0, 2)
    assert state.status_message == "Loaded file: a.txt"


def test_move_commands_cover_every_motion() -> None:
    state = make_state(["abc", "de"])

    apply(state, Move(Motion.END))
    assert state.buffer.cursor == (1, 2)
    apply(state, Move(Motion.UP))
    assert state.buffer.cursor == (0, 2)
    apply(state, Move(Motion.RIGHT), Move(Motion.RIGHT))
    assert state.buffer.cursor == (1, 0)
    apply(state, Move(Motion.DOWN), Move(Motion.START))
    assert state.buffer.cursor == (0, 0)


def test_save_without_filename_sets_hint() -> None:
    state = make_state(["text"])

    apply(state, Save())

    assert state.status_message == NO_FILENAME_MESSAGE
    assert state.buffer.dirty is False


def test_save_writes_buffer_content(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    state = make_state(filename=str(target))

    apply(state, InsertChar("x"), InsertNewline(), InsertChar("y"), Save())

    assert target.read_text(encoding="utf-8") == "x\ny"
    assert state.status_message == f"Saved file: {target}"
    assert state.buffer.dirty is False


def test_save_error_propagates(tmp_path: Path) -> None:
    state = make_state(filename=str(tmp_path / "missing-dir" / "note.txt"))

    with pytest.raises(OSError):
        apply(state, Save())


def test_open_prompt_routes_characters_to_prompt() -> None:
    state = make_state(["keep"])

    apply(state, OpenPrompt(), *type_text("ab"), InsertChar("z"))

    assert state.prompt is not None
    assert state.prompt.kind is PromptKind.FILENAME
    assert state.prompt.text == "ab"
    assert state.buffer.lines == ("keep",)


def test_prompt_backspace_and_cancel() -> None:
    state = make_state(["keep"])

    apply(state, OpenPrompt(), *type_text("abc"), PromptBackspace())
    assert state.prompt is not None and state.prompt.text == "ab"

    apply(state, PromptCancel())
    assert state.prompt is None
    assert state.filename is None
    assert state.status_message == "Cancelled."


def test_prompt_backspace_on_empty_text_is_noop() -> None:
    state = make_state()

    apply(state, OpenPrompt(), PromptBackspace())

    assert state.prompt is not None and state.prompt.text == ""


def test_filename_commit_for_missing_file_sets_name(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"
    state = make_state(["draft"])

    apply(state, OpenPrompt(), *type_text(f"  {target}  "), PromptCommit())

    assert state.prompt is None
    assert state.filename == str(target)
    assert state.status_message == f"File name set to: {target}"
    assert state.buffer.lines == ("draft",)


def test_filename_commit_loads_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "existing.txt"
    target.write_text("one\ntwo", encoding="utf-8")
    state = make_state(["draft"])

    apply(state, OpenPrompt(), *type_text(str(target)), PromptCommit())

    assert state.filename == str(target)
    assert state.buffer.lines == ("one", "two")
    assert state.buffer.cursor == (0, 0)
    assert state.status_message == f"Loaded file: {target}"


def test_empty_filename_commit_is_rejected() -> None:
    state = make_state(filename="kept.txt")

    apply(state, OpenPrompt(), *type_text("   "), PromptCommit())

    assert state.filename == "kept.txt"
    assert state.status_message == "No filename entered."


def test_filename_commit_on_undecodable_file_raises(tmp_path: Path) -> None:
    target = tmp_path / "binary.bin"
    target.write_bytes(b"\xff\xfe\x00bad")
    state = make_state()

    with pytest.raises(OSError):
        apply(state, OpenPrompt(), *type_text(str(target)), PromptCommit())


def test_transform_commit_shows_result_and_keeps_buffer() -> None:
    transformer = RecordingTransformer(reply="Summary: hi")
    services = SessionServices(transformer=transformer)
    state = make_state(["hi", "there"])

    apply(
        state,
        TransformPrompt(),
        *type_text("summarize"),
        PromptCommit(),
        services=services,
    )

    assert transformer.calls == [("summarize", "hi\nthere")]
    assert state.status_message == "Summary: hi"
    assert state.buffer.lines == ("hi", "there")
    assert state.prompt is None


def test_transform_failure_becomes_status() -> None:
    services = SessionServices(transformer=FailingTransformer())
    state = make_state(["x"])

    apply(state, TransformPrompt(), PromptCommit(), services=services)

    assert state.status_message == "Transform failed: backend unreachable"
    assert state.terminated is False


def test_transform_timeout_becomes_status() -> None:
    services = SessionServices(transformer=SlowTransformer(), transform_timeout=0.05)
    state = make_state(["x"])

    started = time.monotonic()
    apply(state, TransformPrompt(), PromptCommit(), services=services)

    assert time.monotonic() - started < 0.9
    assert state.status_message == "Transform failed: timed out after 0.05s"


def test_cut_and_paste_line() -> None:
    state = make_state(["a", "b", "c"])

    apply(state, Move(Motion.DOWN), CutLine())
    assert state.buffer.lines == ("a", "c")
    assert state.status_message == "Cut line 2."
    assert state.clipboard.text == "b"

    apply(state, PasteLine())
    assert state.buffer.lines == ("a", "b", "c")
    assert state.buffer.cursor == (2, 0)
    assert state.status_message == "Pasted line."


def test_paste_with_empty_clipboard() -> None:
    state = make_state(["a"])

    apply(state, PasteLine())

    assert state.buffer.lines == ("a",)
    assert state.status_message == "Clipboard is empty."


def test_quit_terminates_and_later_commands_are_ignored() -> None:
    state = make_state(["a"])

    apply(state, Quit(), InsertChar("b"), Save())

    assert state.terminated is True
    assert state.buffer.lines == ("a",)
    assert state.status_message == ""


def test_quit_is_ignored_while_prompt_is_open() -> None:
    state = make_state()

    apply(state, OpenPrompt(), Quit())

    assert state.terminated is False
    assert state.prompt is not None


def test_prompt_commands_ignored_in_editing_mode() -> None:
    state = make_state(["a"])

    apply(state, PromptInput("x"), PromptCommit(), PromptCancel())

    assert state.buffer.lines == ("a",)
    assert state.status_message == ""


# -- EditSession -----------------------------------------------------------


def test_translate_maps_keys_per_mode() -> None:
    session = EditSession()

    assert session.translate(KeyInput.char("a")) == InsertChar("a")
    assert session.translate(KeyInput.ctrl("o")) == OpenPrompt()
    assert session.translate(KeyInput("ESC")) is None

    session.dispatch(OpenPrompt())
    assert session.translate(KeyInput.char("a")) == PromptInput("a")
    assert session.translate(KeyInput("ESC")) == PromptCancel()
    assert session.translate(KeyInput.ctrl("q")) is None


def test_open_existing_file_loads_content(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    target.write_text("hello\nworld\n", encoding="utf-8")

    session = EditSession.open(str(target))

    assert session.buffer.lines == ("hello", "world")
    assert session.filename == str(target)
    assert session.status_message == f"Loaded file: {target}"


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    target = tmp_path / "fresh.txt"

    session = EditSession.open(str(target))

    assert session.buffer.lines == ("",)
    assert session.status_message == f"File name set to: {target}"
    assert not target.exists()


def test_run_draws_once_per_key_plus_initial_frame() -> None:
    session = EditSession()
    terminal = ScriptedTerminal([*keys("hi"), KeyInput("LEFT"), KeyInput.ctrl("q")])

    state = session.run(terminal)

    assert state.terminated is True
    assert state.buffer.lines == ("hi",)
    assert len(terminal.frames) == 5
    assert terminal.frames[0].lines[0].text == ""
    assert terminal.frames[-1].cursor == (1, 0)
    assert terminal.entered == 1
    assert terminal.restored == 1


def test_unbound_keys_still_redraw() -> None:
    session = EditSession()
    terminal = ScriptedTerminal([KeyInput("ESC"), KeyInput.ctrl("q")])

    session.run(terminal)

    assert len(terminal.frames) == 3
    assert session.buffer.lines == ("",)


def test_run_treats_closed_input_as_quit() -> None:
    session = EditSession()
    terminal = ScriptedTerminal(keys("x"))

    state = session.run(terminal)

    assert state.terminated is True
    assert state.buffer.lines == ("x",)
    assert terminal.restored == 1


def test_run_save_and_prompt_flow(tmp_path: Path) -> None:
    target = tmp_path / "saved.txt"
    session = EditSession()
    script = [
        *keys("note"),
        KeyInput.ctrl("s"),
        KeyInput.ctrl("o"),
        *keys(str(target)),
        KeyInput("ENTER"),
        KeyInput.ctrl("s"),
        KeyInput.ctrl("q"),
    ]
    terminal = ScriptedTerminal(script)

    session.run(terminal)

    assert target.read_text(encoding="utf-8") == "note"
    assert NO_FILENAME_MESSAGE in terminal.frames[5].status
    prompt_frames = [frame for frame in terminal.frames if frame.prompt is not None]
    assert prompt_frames[0].prompt == "Enter filename: "
    assert f"Saved file: {target}" in terminal.frames[-2].status


def test_run_restores_terminal_when_save_fails(tmp_path: Path) -> None:
    session = EditSession(filename=str(tmp_path / "no-such-dir" / "x.txt"))
    terminal = ScriptedTerminal([KeyInput.ctrl("s")])

    with pytest.raises(OSError):
        session.run(terminal)

    assert terminal.restored == 1


def test_run_raises_when_terminal_cannot_enter_raw_mode() -> None:
    session = EditSession()
    terminal = ScriptedTerminal(fail_enter=True)

    with pytest.raises(TerminalModeError):
        session.run(terminal)

    assert terminal.restored == 1
    assert terminal.frames == []
