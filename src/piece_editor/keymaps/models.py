"""Dataclasses describing key input, bindings and the actions they run."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional, Tuple

from piece_editor.editor.intents import Intent


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a host adapter."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single key press, identified by its ``token``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return f"{'+'.join(self.modifiers)}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+s"`` / ``"LEFT"`` style text."""

        *modifiers, key = spec.split("+")
        return cls(key, tuple(modifiers))

    @classmethod
    def from_input(cls, key: KeyInput) -> "KeyStroke":
        return cls(key.key, key.modifiers)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named factory turning a key input into an intent."""

    id: str
    handler: Callable[[KeyInput], Intent]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, key: KeyInput) -> Intent:
        return self.handler(key)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with a registered action."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = ["ActionRef", "Binding", "KeyInput", "KeyStroke"]
