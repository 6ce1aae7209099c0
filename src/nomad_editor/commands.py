"""Tagged command variants consumed by the session reducer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Motion(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    START = "start"
    END = "end"


@dataclass(frozen=True, slots=True)
class Quit:
    pass


@dataclass(frozen=True, slots=True)
class Save:
    pass


@dataclass(frozen=True, slots=True)
class OpenPrompt:
    """Ask for a filename; an existing file is loaded on commit."""


@dataclass(frozen=True, slots=True)
class TransformPrompt:
    """Ask for an instruction and run the transform on commit."""


@dataclass(frozen=True, slots=True)
class InsertChar:
    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("InsertChar expects exactly one character")


@dataclass(frozen=True, slots=True)
class InsertNewline:
    pass


@dataclass(frozen=True, slots=True)
class DeleteChar:
    pass


@dataclass(frozen=True, slots=True)
class Move:
    motion: Motion


@dataclass(frozen=True, slots=True)
class CutLine:
    pass


@dataclass(frozen=True, slots=True)
class PasteLine:
    pass


@dataclass(frozen=True, slots=True)
class PromptInput:
    char: str


@dataclass(frozen=True, slots=True)
class PromptBackspace:
    pass


@dataclass(frozen=True, slots=True)
class PromptCommit:
    pass


@dataclass(frozen=True, slots=True)
class PromptCancel:
    pass


Command = Union[
    Quit,
    Save,
    OpenPrompt,
    TransformPrompt,
    InsertChar,
    InsertNewline,
    DeleteChar,
    Move,
    CutLine,
    PasteLine,
    PromptInput,
    PromptBackspace,
    PromptCommit,
    PromptCancel,
]


def command_name(command: Command) -> str:
    if isinstance(command, Move):
        return f"move_{command.motion.value}"
    return type(command).__name__


__all__ = [
    "Command",
    "CutLine",
    "DeleteChar",
    "InsertChar",
    "InsertNewline",
    "Motion",
    "Move",
    "OpenPrompt",
    "PasteLine",
    "PromptBackspace",
    "PromptCancel",
    "PromptCommit",
    "PromptInput",
    "Quit",
    "Save",
    "TransformPrompt",
    "command_name",
]
