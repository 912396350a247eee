"""Textual adapter wiring key events into an EditorSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from piece_editor.editor import EditorSession, IntentResult
from piece_editor.keymaps import KeyInput, KeymapRegistry, load_default_keymaps
from piece_editor.render import RenderFrame


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[RenderFrame], None]
    update_status: Callable[[str], None] = _noop
    exit: Callable[[], None] = _noop
    # Debug line per handled key, for hosts that surface a log pane
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges host key events to intents and session results to the UI."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        registry: Optional[KeymapRegistry] = None,
        width: int = 80,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.registry = registry or load_default_keymaps(
            KeymapRegistry(logger_name="piece_editor.keymaps")
        )
        self.width = width
        self._refresh_view()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[IntentResult]:
        """Resolve a key to an intent and apply it; unbound keys are ignored."""

        if not self.session.active:
            return None
        key_input = KeyInput(
            key=key,
            text=text,
            modifiers=tuple(str(mod).upper() for mod in modifiers),
        )
        intent = self.registry.resolve(key_input)
        self._log_state("key ->", key=key, text=text, intent=intent)
        if intent is None:
            return None

        result = self.session.dispatch(intent)
        self._after_result(result)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def resize(self, window_height: int, width: int) -> None:
        self.session.resize(window_height)
        self.width = width
        self._refresh_view()

    def _after_result(self, result: IntentResult) -> None:
        if result.status == "quit":
            self.hooks.exit()
            return
        if result.status != "ok":
            self.hooks.update_status(_status_text(result))
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.session.frame(self.width))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "cursor": (
                self.session.editor.cursor.x,
                self.session.editor.cursor.y,
                self.session.editor.cursor.y_offset,
            ),
            "lines": self.session.editor.get_number_of_lines(),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def _status_text(result: IntentResult) -> str:
    if result.status == "saved":
        return f"Saved ({result.message})"
    if result.status == "save_skipped":
        return "Nothing to save to: start the editor with a file name"
    if result.status == "save_failed":
        return f"Save failed: {result.message}"
    return result.message or result.status


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
