"""Apply one command to a SessionState.

Buffer commands are pure with respect to the outside world; ``Save``, the
filename commit and the transform commit go through ``SessionServices``.
File errors propagate to the caller. Transform errors become status text.
"""

from __future__ import annotations

from typing import Callable, Dict, MutableMapping

from nomad_editor.commands import (
    Command,
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
from nomad_editor.runtime import telemetry
from nomad_editor.transform import run_transform

from .state import Phase, PromptKind, PromptState, SessionServices, SessionState

Handler = Callable[[SessionState, Command, SessionServices], None]
PromptCommitAction = Callable[[SessionState, str, SessionServices], None]

NO_FILENAME_MESSAGE = "No filename set. Use Ctrl-O to set filename."


def reduce(
    state: SessionState, command: Command, services: SessionServices
) -> SessionState:
    """Apply ``command`` and return ``state``.

    Commands that do not belong to the current sub-state are ignored, as is
    everything once the session has terminated.
    """

    if state.terminated:
        return state
    table = _PROMPT_HANDLERS if state.prompt is not None else _EDITING_HANDLERS
    handler = table.get(type(command))
    if handler is not None:
        handler(state, command, services)
    return state


# -- editing ---------------------------------------------------------------


def _quit(state: SessionState, command: Command, services: SessionServices) -> None:
    del command, services
    state.prompt = None
    state.phase = Phase.TERMINATED


def _save(state: SessionState, command: Command, services: SessionServices) -> None:
    del command
    if state.filename is None:
        state.status_message = NO_FILENAME_MESSAGE
        return
    services.files.write_text(state.filename, state.buffer.content())
    state.buffer.mark_saved()
    state.status_message = f"Saved file: {state.filename}"
    telemetry.record_event("file.saved", data={"path": state.filename})


def _open_prompt(kind: PromptKind) -> Handler:
    def handler(
        state: SessionState, command: Command, services: SessionServices
    ) -> None:
        del command, services
        state.prompt = PromptState(kind=kind)

    return handler


def _insert_char(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del services
    assert isinstance(command, InsertChar)
    state.buffer.insert_char(command.char)


def _insert_newline(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    state.buffer.insert_newline()


def _delete_char(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    state.buffer.delete_char()


def _move(state: SessionState, command: Command, services: SessionServices) -> None:
    del services
    assert isinstance(command, Move)
    buffer = state.buffer
    motions = {
        Motion.LEFT: buffer.move_left,
        Motion.RIGHT: buffer.move_right,
        Motion.UP: buffer.move_up,
        Motion.DOWN: buffer.move_down,
        Motion.START: buffer.move_to_start,
        Motion.END: buffer.move_to_end,
    }
    motions[command.motion]()


def _cut_line(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    row = state.buffer.cursor_row
    state.clipboard.store(state.buffer.cut_line())
    state.status_message = f"Cut line {row + 1}."


def _paste_line(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    text = state.clipboard.text
    if text is None:
        state.status_message = "Clipboard is empty."
        return
    state.buffer.paste_line(text)
    state.status_message = "Pasted line."


# -- modal prompt ----------------------------------------------------------


def _prompt_input(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del services
    assert isinstance(command, PromptInput) and state.prompt is not None
    state.prompt.text += command.char


def _prompt_backspace(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    assert state.prompt is not None
    state.prompt.text = state.prompt.text[:-1]


def _prompt_cancel(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command, services
    state.prompt = None
    state.status_message = "Cancelled."


def _prompt_commit(
    state: SessionState, command: Command, services: SessionServices
) -> None:
    del command
    assert state.prompt is not None
    prompt = state.prompt
    state.prompt = None
    _PROMPT_COMMITS[prompt.kind](state, prompt.text, services)


def _commit_filename(
    state: SessionState, text: str, services: SessionServices
) -> None:
    name = text.strip()
    if not name:
        state.status_message = "No filename entered."
        return
    if services.files.exists(name):
        content = services.files.read_text(name)
        state.buffer.load(content)
        state.filename = name
        state.status_message = f"Loaded file: {name}"
        telemetry.record_event(
            "file.loaded",
            data={"path": name, "lines": len(state.buffer.lines)},
        )
        return
    state.filename = name
    state.status_message = f"File name set to: {name}"


def _commit_instruction(
    state: SessionState, text: str, services: SessionServices
) -> None:
    outcome = run_transform(
        services.transformer,
        text,
        state.buffer.content(),
        timeout=services.transform_timeout,
    )
    state.status_message = outcome.message


_EDITING_HANDLERS: MutableMapping[type, Handler] = {
    Quit: _quit,
    Save: _save,
    OpenPrompt: _open_prompt(PromptKind.FILENAME),
    TransformPrompt: _open_prompt(PromptKind.INSTRUCTION),
    InsertChar: _insert_char,
    InsertNewline: _insert_newline,
    DeleteChar: _delete_char,
    Move: _move,
    CutLine: _cut_line,
    PasteLine: _paste_line,
}

_PROMPT_HANDLERS: MutableMapping[type, Handler] = {
    PromptInput: _prompt_input,
    PromptBackspace: _prompt_backspace,
    PromptCancel: _prompt_cancel,
    PromptCommit: _prompt_commit,
}

_PROMPT_COMMITS: Dict[PromptKind, PromptCommitAction] = {
    PromptKind.FILENAME: _commit_filename,
    PromptKind.INSTRUCTION: _commit_instruction,
}


__all__ = ["NO_FILENAME_MESSAGE", "reduce"]
