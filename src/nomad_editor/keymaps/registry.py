"""Keymap registry holding actions and per-mode bindings."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from nomad_editor.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """A key is already bound in the binding's mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' reuses {binding.stroke.label} "
            f"from '{existing.id}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.conflicts = (existing,)


class KeymapRegistry:
    """Actions by id, and at most one binding per key in each mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # mode -> key token -> binding id
        self._keys: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.stroke`` in ``binding.mode``.

        With ``replace`` an existing binding on the same key, or with the
        same id, is dropped first; otherwise either case is an error.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            existing = self.lookup(binding.mode, binding.key_signature)
            if existing is not None and existing.id != binding.id:
                if not replace:
                    raise KeymapConflictError(binding, existing)
                handle.add_metadata("replaced", existing.id)
                self._drop(existing)
            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._drop(self._bindings[binding.id])

            self._bindings[binding.id] = binding
            self._keys.setdefault(binding.mode, {})[binding.key_signature] = binding.id
            return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        """Bindings in registration order, optionally for one mode."""

        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def lookup(self, mode: str, token: str) -> Optional[Binding]:
        binding_id = self._keys.get(mode, {}).get(token)
        return None if binding_id is None else self._bindings[binding_id]

    def tagged(self, tag: str, *, mode: Optional[str] = None) -> list[Binding]:
        return [binding for binding in self.iter_bindings(mode) if tag in binding.tags]

    def _drop(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        keys = self._keys[binding.mode]
        del keys[binding.key_signature]
        if not keys:
            del self._keys[binding.mode]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
