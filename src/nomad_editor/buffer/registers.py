"""One-line clipboard used by the cut/paste line commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class LineClipboard:
    text: Optional[str] = None

    def store(self, line: str) -> None:
        self.text = line
