"""Built-in bindings for the editing keys."""

from __future__ import annotations

from typing import Iterable

from piece_editor.editor import intents

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="editor.insert_line_break",
        handler=lambda key: intents.InsertLineBreak(),
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="editor.backspace",
        handler=lambda key: intents.Backspace(),
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="editor.move_left",
        handler=lambda key: intents.MoveLeft(),
        description="Move cursor left",
    ),
    ActionRef(
        id="editor.move_right",
        handler=lambda key: intents.MoveRight(),
        description="Move cursor right",
    ),
    ActionRef(
        id="editor.move_up",
        handler=lambda key: intents.MoveUp(),
        description="Move cursor up",
    ),
    ActionRef(
        id="editor.move_down",
        handler=lambda key: intents.MoveDown(),
        description="Move cursor down",
    ),
    ActionRef(
        id="editor.save",
        handler=lambda key: intents.Save(),
        description="Write the document to its file",
    ),
    ActionRef(
        id="editor.quit",
        handler=lambda key: intents.Quit(),
        description="Leave the editor",
    ),
)


def _binding(binding_id: str, stroke: str, action_id: str) -> Binding:
    return Binding(id=binding_id, stroke=KeyStroke.parse(stroke), action_id=action_id)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _binding("enter", "ENTER", "editor.insert_line_break"),
    _binding("backspace", "BACKSPACE", "editor.backspace"),
    _binding("left", "LEFT", "editor.move_left"),
    _binding("right", "RIGHT", "editor.move_right"),
    _binding("up", "UP", "editor.move_up"),
    _binding("down", "DOWN", "editor.move_down"),
    _binding("save", "ctrl+s", "editor.save"),
    _binding("escape", "ESC", "editor.quit"),
    _binding("quit", "ctrl+q", "editor.quit"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> KeymapRegistry:
    """Register the built-in actions and bindings, then ``extra_bindings``."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)
    return registry


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
