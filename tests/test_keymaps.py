from __future__ import annotations

import pytest

from nomad_editor.commands import InsertNewline, Motion, Move, PromptCommit, Quit
from nomad_editor.keymaps import (
    EDITING,
    PROMPT,
    ActionRef,
    Binding,
    KeyInput,
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    legend,
    load_default_keymaps,
)


def make_action(action_id: str, result: object = None) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda key: result)


def make_binding(
    binding_id: str,
    *,
    mode: str = EDITING,
    stroke: KeyStroke = KeyStroke.ctrl("x"),
    action_id: str = "test.action",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=stroke,
        action_id=action_id,
    )


def default_resolver() -> KeymapResolver:
    return KeymapResolver(load_default_keymaps(KeymapRegistry()))


def test_key_tokens_normalize_modifiers() -> None:
    assert KeyInput("q", modifiers=("CTRL",)).token == "ctrl+q"
    assert KeyInput.ctrl("S").token == KeyStroke.ctrl("s").token
    assert KeyInput("ENTER").token == "ENTER"


def test_printable_requires_text_without_modifiers() -> None:
    assert KeyInput.char("a").printable is True
    assert KeyInput.char(" ").printable is True
    assert KeyInput.ctrl("a").printable is False
    assert KeyInput("ENTER").printable is False
    assert KeyInput.char("\t").printable is False


def test_keystroke_labels() -> None:
    assert KeyStroke.ctrl("q").label == "Ctrl-Q"
    assert KeyStroke("ENTER").label == "Enter"


def test_binding_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding("editing.x"))


def test_duplicate_key_in_same_mode_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("test.action"))
    registry.register_binding(make_binding("editing.first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding("editing.second"))

    assert [binding.id for binding in excinfo.value.conflicts] == ["editing.first"]


def test_same_key_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("test.action"))
    registry.register_binding(make_binding("editing.x"))

    registry.register_binding(make_binding("prompt.x", mode=PROMPT))

    resolver = KeymapResolver(registry)
    assert resolver.resolve(EDITING, KeyInput.ctrl("x")).status == "match"
    assert resolver.resolve(PROMPT, KeyInput.ctrl("x")).status == "match"


def test_replace_swaps_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("test.action"))
    registry.register_action(make_action("test.other", result="other"))
    registry.register_binding(make_binding("editing.first"))

    registry.register_binding(
        make_binding("editing.second", action_id="test.other"), replace=True
    )

    assert [b.id for b in registry.iter_bindings(EDITING)] == ["editing.second"]
    result = KeymapResolver(registry).resolve(EDITING, KeyInput.ctrl("x"))
    assert result.match is not None
    assert result.match(KeyInput.ctrl("x")) == "other"


def test_default_keymaps_map_editor_keys() -> None:
    resolver = default_resolver()

    quit_match = resolver.resolve(EDITING, KeyInput.ctrl("q")).match
    enter_match = resolver.resolve(EDITING, KeyInput("ENTER")).match
    left_match = resolver.resolve(EDITING, KeyInput("LEFT")).match
    commit_match = resolver.resolve(PROMPT, KeyInput("ENTER")).match

    assert quit_match is not None and quit_match(KeyInput.ctrl("q")) == Quit()
    assert enter_match is not None and enter_match(KeyInput("ENTER")) == InsertNewline()
    assert left_match is not None and left_match(KeyInput("LEFT")) == Move(Motion.LEFT)
    assert commit_match is not None and commit_match(KeyInput("ENTER")) == PromptCommit()


def test_prompt_mode_does_not_bind_quit() -> None:
    resolver = default_resolver()

    assert resolver.resolve(PROMPT, KeyInput.ctrl("q")).status == "miss"
    assert resolver.resolve(EDITING, KeyInput("ESC")).status == "miss"


def test_printable_keys_are_not_bound() -> None:
    resolver = default_resolver()

    assert resolver.resolve(EDITING, KeyInput.char("q")).status == "miss"


def test_exclude_bindings_skips_defaults() -> None:
    registry = load_default_keymaps(
        KeymapRegistry(), exclude_bindings=["editing.cut", "editing.paste"]
    )

    assert "Ctrl-K" not in legend(registry)
    assert KeymapResolver(registry).resolve(EDITING, KeyInput.ctrl("k")).match is None


def test_legend_lists_tagged_bindings_in_order() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    text = legend(registry)

    assert text.startswith("Ctrl-Q: Quit, Ctrl-S: Save, Ctrl-O: Open, Ctrl-L: Transform")
    assert "Ctrl-K: Cut" in text
    assert "Enter" not in text
    assert legend(registry, PROMPT) == ""
