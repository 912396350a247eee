"""Key stroke bindings producing editing intents."""

from .models import ActionRef, Binding, KeyInput, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyInput",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]
