"""Pure presentation of the visible window: gutter, padding, cursor cell.

Nothing here reads the document; callers hand over the windowed lines the
editor exposes plus the cursor coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from piece_editor.buffer import CursorPosition

GUTTER_SEPARATOR = ". "


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """One screenful: formatted rows and the 1-based terminal cursor cell."""

    rows: tuple[str, ...]
    cursor: tuple[int, int]
    gutter_width: int
    first_line: int = 1


def digit_count(number: int) -> int:
    return len(str(number))


def render_line_number(left_pad: int, line_number: int) -> str:
    return str(line_number).rjust(left_pad)


def fit_line(content: str, width: int, left_pad: int) -> str:
    """Pad ``content`` with blanks, then cut it to what fits after the gutter."""

    available = max(0, width - left_pad - len(GUTTER_SEPARATOR))
    return content.ljust(available)[:available]


def cursor_screen_position(cursor: CursorPosition, left_pad: int) -> tuple[int, int]:
    """Terminal ``(column, row)`` of the cursor; row 1 is the title line."""

    return left_pad + cursor.x + len(GUTTER_SEPARATOR), cursor.y + 1


def build_frame(
    lines: Sequence[str],
    *,
    first_line: int,
    total_lines: int,
    cursor: CursorPosition,
    width: int,
) -> RenderFrame:
    left_pad = digit_count(total_lines)
    rows = tuple(
        render_line_number(left_pad, first_line + index)
        + GUTTER_SEPARATOR
        + fit_line(line, width, left_pad)
        for index, line in enumerate(lines)
    )
    return RenderFrame(
        rows=rows,
        cursor=cursor_screen_position(cursor, left_pad),
        gutter_width=left_pad + len(GUTTER_SEPARATOR),
        first_line=first_line,
    )


__all__ = [
    "GUTTER_SEPARATOR",
    "RenderFrame",
    "build_frame",
    "cursor_screen_position",
    "digit_count",
    "fit_line",
    "render_line_number",
]
