"""Textual host for the edit session."""

from .controller import TextualTerminal, normalize_key

__all__ = ["TextualTerminal", "normalize_key"]
