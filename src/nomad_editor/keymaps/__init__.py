"""Declarative key bindings for the editor modes."""

from .models import ActionRef, Binding, KeyInput, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import EDITING, PROMPT, legend, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyInput",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "EDITING",
    "PROMPT",
    "legend",
    "load_default_keymaps",
]
