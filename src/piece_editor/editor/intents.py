"""Abstract editing intents consumed one at a time by a session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class InsertChar:
    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("InsertChar expects exactly one character")


@dataclass(frozen=True, slots=True)
class InsertLineBreak:
    pass


@dataclass(frozen=True, slots=True)
class Backspace:
    pass


@dataclass(frozen=True, slots=True)
class MoveLeft:
    pass


@dataclass(frozen=True, slots=True)
class MoveRight:
    pass


@dataclass(frozen=True, slots=True)
class MoveUp:
    pass


@dataclass(frozen=True, slots=True)
class MoveDown:
    pass


@dataclass(frozen=True, slots=True)
class Save:
    pass


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Intent = Union[
    InsertChar,
    InsertLineBreak,
    Backspace,
    MoveLeft,
    MoveRight,
    MoveUp,
    MoveDown,
    Save,
    Quit,
]


@dataclass(slots=True)
class IntentResult:
    """Outcome of ``EditorSession.dispatch``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


__all__ = [
    "Backspace",
    "InsertChar",
    "InsertLineBreak",
    "Intent",
    "IntentResult",
    "MoveDown",
    "MoveLeft",
    "MoveRight",
    "MoveUp",
    "Quit",
    "Save",
]
