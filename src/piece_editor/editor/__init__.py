"""Editor orchestration, editing intents, and the session loop."""

from .editor import Editor
from .intents import (
    Backspace,
    InsertChar,
    InsertLineBreak,
    Intent,
    IntentResult,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
    Quit,
    Save,
)
from .session import DEFAULT_WINDOW_HEIGHT, EditorSession, EventBus, SessionTerminated

__all__ = [
    "Editor",
    "EditorSession",
    "EventBus",
    "SessionTerminated",
    "DEFAULT_WINDOW_HEIGHT",
    "Intent",
    "IntentResult",
    "InsertChar",
    "InsertLineBreak",
    "Backspace",
    "MoveLeft",
    "MoveRight",
    "MoveUp",
    "MoveDown",
    "Save",
    "Quit",
]
