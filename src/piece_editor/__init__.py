"""Terminal text editor built on a piece table buffer."""

__all__ = [
    "adapters",
    "buffer",
    "editor",
    "keymaps",
    "render",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
