"""Editing session: consumes intents in order and drives one Editor."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from piece_editor.render import RenderFrame, build_frame
from piece_editor.runtime import telemetry
from piece_editor.storage import IoFailure, PathLike, load_lines

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

DEFAULT_WINDOW_HEIGHT = 24


class SessionTerminated(RuntimeError):
    """Raised when an intent arrives after the session has quit."""


class EventBus:
    """Minimal event bus letting hosts observe session transitions."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class EditorSession:
    """Owns the editor for the lifetime of one editing session.

    The session is either active or terminated. ``dispatch`` applies exactly
    one intent and returns with the buffer and the cursor consistent again;
    nothing is ever left half-applied between two intents.
    """

    def __init__(
        self,
        editor: Editor,
        *,
        path: Optional[PathLike] = None,
        window_height: int = DEFAULT_WINDOW_HEIGHT,
        bus: Optional[EventBus] = None,
    ) -> None:
        if window_height < 2:
            raise ValueError("window_height must leave room for one text line")
        self.editor = editor
        self.path = path
        self.window_height = window_height
        self.editor.cursor.fit_window(window_height)
        self.bus = bus or EventBus()
        self._active = True
        self._handlers: Dict[type, Callable[[Intent], IntentResult]] = {
            InsertChar: self._insert_char,
            InsertLineBreak: self._insert_line_break,
            Backspace: self._backspace,
            MoveLeft: self._move_left,
            MoveRight: self._move_right,
            MoveUp: self._move_up,
            MoveDown: self._move_down,
            Save: self._save,
            Quit: self._quit,
        }

    @classmethod
    def open(
        cls,
        path: Optional[PathLike],
        *,
        window_height: int = DEFAULT_WINDOW_HEIGHT,
        bus: Optional[EventBus] = None,
    ) -> "EditorSession":
        """Start a session on ``path``; unreadable files open as empty."""

        editor = Editor.from_lines(load_lines(path))
        telemetry.record_event(
            "session.open",
            data={"path": path, "lines": editor.get_number_of_lines()},
            logger_name="piece_editor.session",
        )
        return cls(editor, path=path, window_height=window_height, bus=bus)

    @property
    def active(self) -> bool:
        return self._active

    def resize(self, window_height: int) -> None:
        if window_height < 2:
            raise ValueError("window_height must leave room for one text line")
        self.window_height = window_height
        self.editor.cursor.fit_window(window_height)

    def dispatch(self, intent: Intent) -> IntentResult:
        if not self._active:
            raise SessionTerminated("Session already terminated")
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent {intent!r}")
        return handler(intent)

    def run(self, intents: Iterable[Intent]) -> int:
        """Apply ``intents`` in order until ``Quit``; return how many ran."""

        processed = 0
        for intent in intents:
            self.dispatch(intent)
            processed += 1
            if not self._active:
                break
        return processed

    def visible_lines(self) -> list[str]:
        return self.editor.get_editor_lines(self.window_height)

    def frame(self, width: int) -> RenderFrame:
        return build_frame(
            self.visible_lines(),
            first_line=self.editor.cursor.y_offset + 1,
            total_lines=self.editor.get_number_of_lines(),
            cursor=self.editor.cursor,
            width=width,
        )

    # -- handlers ------------------------------------------------------------

    def _insert_char(self, intent: Intent) -> IntentResult:
        assert isinstance(intent, InsertChar)
        self.editor.insert(intent.char, self.window_height)
        return IntentResult(consumed=True)

    def _insert_line_break(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.insert("\n", self.window_height)
        return IntentResult(consumed=True)

    def _backspace(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.remove(self.window_height)
        return IntentResult(consumed=True)

    def _move_left(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.move_left()
        return IntentResult(consumed=True)

    def _move_right(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.move_right()
        return IntentResult(consumed=True)

    def _move_up(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.move_up()
        return IntentResult(consumed=True)

    def _move_down(self, intent: Intent) -> IntentResult:
        del intent
        self.editor.move_down(self.window_height)
        return IntentResult(consumed=True)

    def _save(self, intent: Intent) -> IntentResult:
        del intent
        if self.path is None:
            return IntentResult(
                consumed=True, status="save_skipped", message="no file name"
            )
        try:
            written = self.editor.save(self.path)
        except IoFailure as exc:
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"path": self.path, "reason": exc.reason},
                logger_name="piece_editor.session",
            )
            self.bus.emit("editor.save_failed", exc)
            return IntentResult(consumed=True, status="save_failed", message=str(exc))

        telemetry.record_event(
            "session.save",
            data={"path": self.path, "chars": written},
            logger_name="piece_editor.session",
        )
        self.bus.emit("editor.save", self.path)
        return IntentResult(consumed=True, status="saved", message=f"{written} chars")

    def _quit(self, intent: Intent) -> IntentResult:
        del intent
        self._active = False
        telemetry.record_event("session.quit", logger_name="piece_editor.session")
        self.bus.emit("editor.quit", None)
        return IntentResult(consumed=True, status="quit")


__all__ = ["DEFAULT_WINDOW_HEIGHT", "EditorSession", "EventBus", "SessionTerminated"]
