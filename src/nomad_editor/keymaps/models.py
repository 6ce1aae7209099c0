"""Dataclasses describing keys, bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, MutableMapping, Optional

NAMED_KEY_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "ENTER": "Enter",
        "BACKSPACE": "Backspace",
        "ESC": "Esc",
        "LEFT": "Left",
        "RIGHT": "Right",
        "UP": "Up",
        "DOWN": "Down",
    }
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def _token(key: str, modifiers: tuple[str, ...]) -> str:
    if modifiers:
        return f"{'+'.join(modifiers)}+{key}"
    return key


@dataclass(frozen=True, slots=True)
class KeyInput:
    """One key event as read from the terminal.

    ``key`` is either an upper-case named key (``ENTER``, ``LEFT`` ...) or the
    pressed character; ``text`` is set only when the key produces printable
    text.
    """

    key: str
    modifiers: tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def char(cls, text: str) -> "KeyInput":
        return cls(key=text, text=text)

    @classmethod
    def ctrl(cls, key: str) -> "KeyInput":
        return cls(key=key.lower(), modifiers=("ctrl",))

    @property
    def token(self) -> str:
        return _token(self.key, self.modifiers)

    @property
    def printable(self) -> bool:
        return bool(self.text) and not self.modifiers and self.text.isprintable()


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Key half of a binding."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def ctrl(cls, key: str) -> "KeyStroke":
        return cls(key=key.lower(), modifiers=("ctrl",))

    @property
    def token(self) -> str:
        return _token(self.key, self.modifiers)

    @property
    def label(self) -> str:
        """Human form used in the status-line legend, e.g. ``Ctrl-Q``."""

        base = NAMED_KEY_LABELS.get(self.key, self.key.upper())
        prefix = "".join(f"{modifier.capitalize()}-" for modifier in self.modifiers)
        return f"{prefix}{base}"


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named factory turning a key event into a command."""

    id: str
    handler: Callable[[KeyInput], object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, key: KeyInput) -> object:
        return self.handler(key)


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
            result.append(cleaned)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a keystroke in one mode with an action."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "tags", _normalize_tags(self.tags))

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = [
    "KeyInput",
    "KeyStroke",
    "ActionRef",
    "Binding",
]
