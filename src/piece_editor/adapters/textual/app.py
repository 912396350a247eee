"""Executable Textual app hosting an editing session."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use piece_editor.adapters.textual.app"
    ) from exc

from piece_editor.editor import EditorSession
from piece_editor.render import RenderFrame
from piece_editor.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

TITLE = "piece-editor: ESC to quit, Ctrl+S to save"
_NAMED_KEYS = {"escape": "ESC", "enter": "ENTER", "return": "ENTER"}


class TooManyArguments(RuntimeError):
    """Raised when more than one file is given on the command line."""


def render_frame(frame: RenderFrame) -> Text:
    """Rich text for ``frame`` with the cursor cell reverse-styled."""

    text = Text("\n".join(frame.rows), no_wrap=True, overflow="crop")
    column, row = frame.cursor
    line_index = row - 2  # terminal row 1 is the title line
    if 0 <= line_index < len(frame.rows):
        start = sum(len(r) + 1 for r in frame.rows[:line_index]) + column - 1
        if column - 1 < len(frame.rows[line_index]):
            text.stylize("reverse", start, start + 1)
    return text


class PieceEditorApp(App[None]):
    """Title line, buffer view and status line around one session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#title-line {
		height: 1;
		color: $error;
		text-style: bold;
	}

	#buffer-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}
	"""

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")

    def compose(self) -> ComposeResult:
        yield Static(TITLE, id="title-line")
        yield self._buffer_widget
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            exit=self.exit,
            log=self.log.debug,
        )
        self.adapter = TextualEditorAdapter(
            self.session, hooks, width=max(self.size.width, 1)
        )
        self._apply_size(self.size.width, self.size.height)

    def on_resize(self, event: events.Resize) -> None:
        self._apply_size(event.size.width, event.size.height)

    def _apply_size(self, width: int, height: int) -> None:
        if not self.adapter:
            return
        # The status line takes one row; the session counts the title row
        # as part of its window.
        self.adapter.resize(max(2, height - 1), max(width, 1))

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text, modifiers = self._normalize_key(event)
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_view(self, frame: RenderFrame) -> None:
        self._buffer_widget.update(render_frame(frame))

    def _update_status(self, status: str) -> None:
        self._status_widget.update(status)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Tuple[str, Optional[str], Tuple[str, ...]]:
        *modifiers, name = event.key.split("+")
        if event.is_printable and event.character and not modifiers:
            return (event.character, event.character, ())
        if name == "tab" and not modifiers:
            return ("TAB", "\t", ())
        if name in _NAMED_KEYS:
            name = _NAMED_KEYS[name]
        elif len(name) > 1:
            name = name.upper()
        return (name, None, tuple(mod.upper() for mod in modifiers))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="piece-editor", description="Edit a text file in the terminal."
    )
    parser.add_argument("paths", nargs="*", metavar="FILE", help="File to edit")
    parser.add_argument(
        "--telemetry-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("PIECE_EDITOR_TELEMETRY_PRESET", "production"),
        help="Logging preset (default: production, logs to piece_editor.log)",
    )
    args = parser.parse_args(argv)
    if len(args.paths) > 1:
        raise TooManyArguments(
            f"Too many arguments: expected at most one file, got {len(args.paths)}"
        )
    args.path = args.paths[0] if args.paths else None
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        args = parse_args(argv)
    except TooManyArguments as exc:
        print(f"piece-editor: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    telemetry.configure(preset=args.telemetry_preset)
    session = EditorSession.open(args.path)
    PieceEditorApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
