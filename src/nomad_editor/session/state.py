"""Session state: buffer, file association, status line and modal prompt."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from nomad_editor.buffer import LineClipboard, TextBuffer
from nomad_editor.files import TextFileStore
from nomad_editor.keymaps import EDITING, PROMPT
from nomad_editor.transform import PlaceholderTransformer, Transformer


class Phase(str, Enum):
    EDITING = "editing"
    TERMINATED = "terminated"


class PromptKind(str, Enum):
    FILENAME = "filename"
    INSTRUCTION = "instruction"


PROMPT_LABELS = {
    PromptKind.FILENAME: "Enter filename",
    PromptKind.INSTRUCTION: "Enter transform instruction",
}


@dataclass(slots=True)
class PromptState:
    """Scratch text collected while a modal prompt is open."""

    kind: PromptKind
    text: str = ""

    @property
    def label(self) -> str:
        return PROMPT_LABELS[self.kind]


@dataclass(slots=True)
class SessionServices:
    """Side-effecting collaborators the reducer may call."""

    files: TextFileStore = field(default_factory=TextFileStore)
    transformer: Transformer = field(default_factory=PlaceholderTransformer)
    transform_timeout: Optional[float] = None


@dataclass(slots=True)
class SessionState:
    buffer: TextBuffer = field(default_factory=TextBuffer)
    filename: Optional[str] = None
    status_message: str = ""
    prompt: Optional[PromptState] = None
    clipboard: LineClipboard = field(default_factory=LineClipboard)
    phase: Phase = Phase.EDITING

    @property
    def terminated(self) -> bool:
        return self.phase is Phase.TERMINATED

    @property
    def mode(self) -> str:
        """Keymap mode the next key resolves in."""

        return PROMPT if self.prompt is not None else EDITING


__all__ = [
    "Phase",
    "PromptKind",
    "PromptState",
    "SessionServices",
    "SessionState",
]
