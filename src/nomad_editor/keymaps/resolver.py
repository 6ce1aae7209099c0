"""Key-to-action resolution per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from nomad_editor.runtime.telemetry import span

from .models import ActionRef, Binding, KeyInput
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef

    def __call__(self, key: KeyInput) -> object:
        return self.action(key)


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Finds the binding for a key in a mode."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, mode: str, key: KeyInput) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": key.token},
        ) as handle:
            binding = self._registry.lookup(mode, key.token)
            if binding is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", binding.id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match", match=ResolutionMatch(binding=binding, action=action)
            )


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
