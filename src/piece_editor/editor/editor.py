"""Editor: keeps a piece table and a cursor consistent across edits."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from piece_editor.buffer import CursorPosition, PieceTable
from piece_editor.runtime import telemetry
from piece_editor.storage import PathLike, save_lines


class Editor:
    """Translates cursor-relative edits into piece table mutations.

    The editor is the only owner of its ``PieceTable`` and
    ``CursorPosition``. Every operation that needs the visible window takes
    ``window_height`` explicitly: the window shows ``window_height - 1``
    document lines, the remaining row belongs to the title line.
    """

    def __init__(
        self,
        piece_table: Optional[PieceTable] = None,
        cursor: Optional[CursorPosition] = None,
    ) -> None:
        self.piece_table = piece_table if piece_table is not None else PieceTable()
        self.cursor = cursor if cursor is not None else CursorPosition()

    @classmethod
    def from_lines(
        cls, lines: Sequence[str], *, cursor: Optional[CursorPosition] = None
    ) -> "Editor":
        return cls(PieceTable("\n".join(lines)), cursor)

    @classmethod
    def from_text(
        cls, text: str, *, cursor: Optional[CursorPosition] = None
    ) -> "Editor":
        return cls(PieceTable(text), cursor)

    # -- reads ---------------------------------------------------------------

    def get_text(self) -> str:
        return self.piece_table.get_text()

    def get_all_lines(self) -> List[str]:
        return self.piece_table.get_all_lines()

    def get_range_lines(self, start: int, stop: int) -> List[str]:
        return self.piece_table.get_range_lines(start, stop)

    def get_number_of_lines(self) -> int:
        return self.piece_table.get_number_of_lines()

    def get_editor_lines(self, window_height: int) -> List[str]:
        """Lines currently inside the scroll window."""

        y_offset = self.cursor.y_offset
        max_line = min(self.get_number_of_lines(), window_height - 1 + y_offset)
        return self.get_range_lines(y_offset, max_line)

    def get_cursor_position_in_file(self) -> int:
        """Absolute document offset of the cursor."""

        file_line = self.cursor.get_y_position_in_file()
        lines = self.get_range_lines(0, file_line)
        before = sum(len(line) + 1 for line in lines[:-1])
        return before + min(self.cursor.x - 1, len(lines[-1]))

    # -- edits ---------------------------------------------------------------

    def insert(self, character: str, window_height: int) -> None:
        if len(character) != 1:
            raise ValueError("Editor.insert expects a single character")

        with telemetry.span(
            "editor::insert",
            logger_name="piece_editor.editor",
            component="editor",
            metadata={"line_break": character == "\n"},
        ):
            self.piece_table.insert(self.get_cursor_position_in_file(), character)
            if character != "\n":
                self.cursor.x += 1
                return
            self.cursor.x = 1
            if self.cursor.y == window_height - 1:
                self.cursor.y_offset += 1
            else:
                self.cursor.y += 1

    def remove(self, window_height: int) -> None:
        """Backspace: drop the character before the cursor or join lines."""

        file_line = self.cursor.get_y_position_in_file()
        if self.cursor.x == 1 and file_line == 1:
            return

        with telemetry.span(
            "editor::remove",
            logger_name="piece_editor.editor",
            component="editor",
            metadata={"join": self.cursor.x == 1},
        ):
            start = self.get_cursor_position_in_file()
            if self.cursor.x > 1:
                self.piece_table.remove(start - 1, 1)
                self.cursor.x -= 1
                return
            self._join_with_previous_line(start, window_height)

    def _join_with_previous_line(self, start: int, window_height: int) -> None:
        before = replace(self.cursor)
        previous_length = self.piece_table.line_length(
            before.get_y_position_in_file() - 2
        )
        self.cursor.move_up(self.piece_table)
        self.cursor.x = previous_length + 1
        self.piece_table.remove(start - 1, 1)

        # Scrolling up already kept the cursor on its row; otherwise pull the
        # window down so the cursor stays where it was on screen.
        moved_row = self.cursor.y != before.y
        if (
            moved_row
            and self.cursor.y_offset > 0
            and self.get_number_of_lines() - self.cursor.y_offset < window_height
        ):
            self.cursor.y_offset -= 1
            self.cursor.y = before.y

    # -- movement ------------------------------------------------------------

    def move_left(self) -> None:
        self.cursor.move_left()

    def move_right(self) -> None:
        file_line = self.cursor.get_y_position_in_file()
        self.cursor.move_right(self.piece_table.line_length(file_line - 1))

    def move_up(self) -> None:
        self.cursor.move_up(self.piece_table)

    def move_down(self, window_height: int) -> None:
        self.cursor.move_down(self.piece_table, window_height)

    def move_to_end_of_line(self) -> None:
        self.cursor.move_to_end_of_line(self.piece_table)

    # -- persistence ---------------------------------------------------------

    def save(self, path: PathLike) -> int:
        """Write the whole document to ``path``; ``IoFailure`` propagates."""

        return save_lines(path, self.get_all_lines())


__all__ = ["Editor"]
