"""Cursor position and the line oracle it moves against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


class LineOracle(Protocol):
    """Read-only view of line lengths the cursor clamps against."""

    def get_number_of_lines(self) -> int:
        ...

    def line_length(self, index: int) -> int:
        """Length of the 0-based line ``index``."""
        ...


class StaticLines:
    """``LineOracle`` over an already materialized sequence of lines."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = tuple(lines) or ("",)

    def get_number_of_lines(self) -> int:
        return len(self._lines)

    def line_length(self, index: int) -> int:
        return len(self._lines[index])


@dataclass(slots=True)
class CursorPosition:
    """Screen cursor: 1-based column ``x``, 1-based visible row ``y``.

    ``y_offset`` counts the document lines scrolled above the window, so the
    cursor sits on document line ``y + y_offset``. Movement never touches the
    buffer; it only reads line lengths through a ``LineOracle``.
    """

    x: int = 1
    y: int = 1
    y_offset: int = 0

    def get_y_position_in_file(self) -> int:
        return self.y + self.y_offset

    def move_left(self) -> None:
        self.x = max(1, self.x - 1)

    def move_right(self, current_line_length: int) -> None:
        self.x = min(self.x + 1, current_line_length + 1)

    def move_up(self, lines: LineOracle) -> None:
        file_line = self.get_y_position_in_file()
        if file_line > 1:
            self.x = min(self.x, lines.line_length(file_line - 2) + 1)
        if self.y == 1 and self.y_offset >= 1:
            self.y_offset -= 1
        else:
            self.y = max(2, self.y) - 1

    def move_down(self, lines: LineOracle, window_height: int) -> None:
        file_line = self.get_y_position_in_file()
        if file_line >= lines.get_number_of_lines():
            return
        self.x = min(self.x, lines.line_length(file_line) + 1)
        if self.y >= window_height - 1:
            self.y_offset += 1
        else:
            self.y += 1

    def fit_window(self, window_height: int) -> None:
        """Scroll so row ``y`` fits a window of ``window_height``.

        The document line under the cursor does not change.
        """

        excess = self.y - (window_height - 1)
        if excess > 0:
            self.y -= excess
            self.y_offset += excess

    def move_to_end_of_line(self, lines: LineOracle) -> None:
        self.x = lines.line_length(self.get_y_position_in_file() - 1) + 1


__all__ = ["CursorPosition", "LineOracle", "StaticLines"]
