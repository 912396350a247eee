"""Keymap registry mapping key strokes to editing intents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from piece_editor.editor.intents import InsertChar, Intent
from piece_editor.runtime.telemetry import span

from .models import ActionRef, Binding, KeyInput, KeyStroke


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a stroke is already bound to another binding."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.key_signature}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the stroke -> binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: Dict[str, str] = {}
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
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "stroke": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            existing_id = self._by_signature.get(binding.key_signature)
            if existing_id is not None and existing_id != binding.id:
                if not replace:
                    raise KeymapConflictError(binding, self._bindings[existing_id])
                self.unregister_binding(existing_id)
            elif binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self.unregister_binding(binding.id)

            self._bindings[binding.id] = binding
            self._by_signature[binding.key_signature] = binding.id
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._by_signature.pop(binding.key_signature, None)
        return binding

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def binding_for(self, stroke: KeyStroke) -> Optional[Binding]:
        binding_id = self._by_signature.get(stroke.token)
        return self._bindings[binding_id] if binding_id is not None else None

    def resolve(self, key: KeyInput) -> Optional[Intent]:
        """Intent for ``key``: its binding, else typed text, else ``None``."""

        binding = self.binding_for(KeyStroke.from_input(key))
        if binding is not None:
            return self.get_action(binding.action_id)(key)
        if key.text and len(key.text) == 1 and _is_typed_text(key):
            return InsertChar(key.text)
        return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
        )


def _is_typed_text(key: KeyInput) -> bool:
    if any(modifier.lower() in {"ctrl", "alt", "meta"} for modifier in key.modifiers):
        return False
    return key.text is not None and (key.text.isprintable() or key.text == "\t")


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
