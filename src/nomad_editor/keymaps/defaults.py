"""Built-in bindings for the editing and prompt modes."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from nomad_editor.commands import (
    Command,
    CutLine,
    DeleteChar,
    InsertNewline,
    Motion,
    Move,
    OpenPrompt,
    PasteLine,
    PromptBackspace,
    PromptCancel,
    PromptCommit,
    Quit,
    Save,
    TransformPrompt,
)

from .models import ActionRef, Binding, KeyInput, KeyStroke
from .registry import KeymapRegistry

EDITING = "editing"
PROMPT = "prompt"
LEGEND_TAG = "legend"


def emit(command: Command) -> Callable[[KeyInput], Command]:
    """Action handler that ignores the key and returns ``command``."""

    def handler(key: KeyInput) -> Command:
        del key
        return command

    return handler


def _action(action_id: str, command: Command, description: str) -> ActionRef:
    return ActionRef(id=action_id, handler=emit(command), description=description)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    _action("session.quit", Quit(), "Quit the editor"),
    _action("session.save", Save(), "Save the buffer to its file"),
    _action("session.open_prompt", OpenPrompt(), "Open or name a file"),
    _action("session.transform_prompt", TransformPrompt(), "Transform the buffer"),
    _action("edit.newline", InsertNewline(), "Split the line at the cursor"),
    _action("edit.backspace", DeleteChar(), "Delete before the cursor"),
    _action("edit.cut_line", CutLine(), "Cut the current line"),
    _action("edit.paste_line", PasteLine(), "Paste the cut line"),
    _action("move.left", Move(Motion.LEFT), "Cursor left"),
    _action("move.right", Move(Motion.RIGHT), "Cursor right"),
    _action("move.up", Move(Motion.UP), "Cursor up"),
    _action("move.down", Move(Motion.DOWN), "Cursor down"),
    _action("move.start", Move(Motion.START), "Jump to start of buffer"),
    _action("move.end", Move(Motion.END), "Jump to end of buffer"),
    _action("prompt.commit", PromptCommit(), "Accept the prompt"),
    _action("prompt.backspace", PromptBackspace(), "Delete last prompt character"),
    _action("prompt.cancel", PromptCancel(), "Cancel the prompt"),
)


def _editing(
    name: str, stroke: KeyStroke, action_id: str, description: str, *tags: str
) -> Binding:
    return Binding(
        id=f"{EDITING}.{name}",
        mode=EDITING,
        stroke=stroke,
        action_id=action_id,
        description=description,
        tags=tags,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _editing("quit", KeyStroke.ctrl("q"), "session.quit", "Quit", LEGEND_TAG),
    _editing("save", KeyStroke.ctrl("s"), "session.save", "Save", LEGEND_TAG),
    _editing("open", KeyStroke.ctrl("o"), "session.open_prompt", "Open", LEGEND_TAG),
    _editing(
        "transform",
        KeyStroke.ctrl("l"),
        "session.transform_prompt",
        "Transform",
        LEGEND_TAG,
    ),
    _editing("start", KeyStroke.ctrl("a"), "move.start", "Start", LEGEND_TAG),
    _editing("end", KeyStroke.ctrl("g"), "move.end", "End", LEGEND_TAG),
    _editing("cut", KeyStroke.ctrl("k"), "edit.cut_line", "Cut", LEGEND_TAG),
    _editing("paste", KeyStroke.ctrl("u"), "edit.paste_line", "Paste", LEGEND_TAG),
    _editing("newline", KeyStroke("ENTER"), "edit.newline", "Newline"),
    _editing("backspace", KeyStroke("BACKSPACE"), "edit.backspace", "Backspace"),
    _editing("left", KeyStroke("LEFT"), "move.left", "Left"),
    _editing("right", KeyStroke("RIGHT"), "move.right", "Right"),
    _editing("up", KeyStroke("UP"), "move.up", "Up"),
    _editing("down", KeyStroke("DOWN"), "move.down", "Down"),
    Binding(
        id=f"{PROMPT}.commit",
        mode=PROMPT,
        stroke=KeyStroke("ENTER"),
        action_id="prompt.commit",
        description="Accept",
    ),
    Binding(
        id=f"{PROMPT}.backspace",
        mode=PROMPT,
        stroke=KeyStroke("BACKSPACE"),
        action_id="prompt.backspace",
        description="Backspace",
    ),
    Binding(
        id=f"{PROMPT}.cancel",
        mode=PROMPT,
        stroke=KeyStroke("ESC"),
        action_id="prompt.cancel",
        description="Cancel",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> KeymapRegistry:
    """Register the built-in actions and bindings, then any extras."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)
    return registry


def legend(registry: KeymapRegistry, mode: str = EDITING) -> str:
    """``Ctrl-Q: Quit, Ctrl-S: Save, ...`` from the legend-tagged bindings."""

    return ", ".join(
        f"{binding.stroke.label}: {binding.description}"
        for binding in registry.tagged(LEGEND_TAG, mode=mode)
    )


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "EDITING",
    "LEGEND_TAG",
    "PROMPT",
    "emit",
    "legend",
    "load_default_keymaps",
]
