from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

import pytest

from piece_editor.buffer import CursorPosition
from piece_editor.editor import (
    Backspace,
    Editor,
    EditorSession,
    EventBus,
    InsertChar,
    InsertLineBreak,
    Intent,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
    Quit,
    Save,
    SessionTerminated,
)


def make_session(
    lines: List[str], *, path: Path | None = None, window_height: int = 10
) -> EditorSession:
    return EditorSession(
        Editor.from_lines(lines), path=path, window_height=window_height
    )


def test_run_applies_intents_in_order() -> None:
    session = make_session([""])

    processed = session.run(
        [InsertChar("h"), InsertChar("i"), InsertLineBreak(), InsertChar("!")]
    )

    assert processed == 4
    assert session.editor.get_all_lines() == ["hi", "!"]
    assert session.active


def test_run_stops_at_quit_without_looking_ahead() -> None:
    session = make_session([""])
    consumed: List[Intent] = []

    def source() -> Iterator[Intent]:
        for intent in (InsertChar("a"), Quit(), InsertChar("b")):
            consumed.append(intent)
            yield intent

    processed = session.run(source())

    assert processed == 2
    assert consumed == [InsertChar("a"), Quit()]
    assert session.editor.get_text() == "a"
    assert not session.active


def test_dispatch_after_quit_raises() -> None:
    session = make_session([""])
    session.dispatch(Quit())

    with pytest.raises(SessionTerminated):
        session.dispatch(InsertChar("x"))


def test_movement_and_backspace_intents() -> None:
    session = make_session(["abc", "de"])

    session.dispatch(MoveDown())
    session.dispatch(MoveRight())
    session.dispatch(MoveRight())
    session.dispatch(MoveRight())
    session.dispatch(MoveUp())
    session.dispatch(MoveLeft())
    session.dispatch(Backspace())

    assert session.editor.get_all_lines() == ["bc", "de"]
    cursor = session.editor.cursor
    assert (cursor.x, cursor.y, cursor.y_offset) == (1, 1, 0)


def test_line_break_on_window_floor_scrolls() -> None:
    editor = Editor.from_lines(
        ["this is a test"], cursor=CursorPosition(x=15, y=4, y_offset=0)
    )
    session = EditorSession(editor, window_height=5)

    session.dispatch(InsertLineBreak())

    assert editor.get_number_of_lines() == 2
    assert (editor.cursor.x, editor.cursor.y, editor.cursor.y_offset) == (1, 4, 1)
    assert session.visible_lines() == [""]


def test_save_writes_file_and_emits_event(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("old content\nmore", encoding="utf-8")
    bus = EventBus()
    saved: List[object] = []
    bus.subscribe("editor.save", saved.append)
    session = EditorSession.open(target, bus=bus)

    session.run([InsertChar(">"), Save()])

    assert target.read_text(encoding="utf-8") == ">old content\nmore"
    assert saved == [target]


def test_save_without_path_is_skipped() -> None:
    session = make_session(["text"])

    result = session.dispatch(Save())

    assert result.status == "save_skipped"


def test_save_failure_is_surfaced_and_buffer_kept(tmp_path: Path) -> None:
    bus = EventBus()
    failures: List[object] = []
    bus.subscribe("editor.save_failed", failures.append)
    session = EditorSession(
        Editor.from_lines(["keep"]),
        path=tmp_path / "missing" / "doc.txt",
        bus=bus,
    )

    result = session.dispatch(Save())

    assert result.status == "save_failed"
    assert result.message
    assert len(failures) == 1
    assert session.active
    assert session.editor.get_all_lines() == ["keep"]


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    session = EditorSession.open(tmp_path / "nope.txt")

    assert session.editor.get_all_lines() == [""]
    assert session.path == tmp_path / "nope.txt"


def test_frame_reflects_scroll_window() -> None:
    lines = [f"line {n}" for n in range(1, 13)]
    editor = Editor.from_lines(lines, cursor=CursorPosition(x=3, y=2, y_offset=9))
    session = EditorSession(editor, window_height=4)

    frame = session.frame(width=20)

    assert frame.rows == tuple(
        f"{n}. " + f"line {n}".ljust(16) for n in (10, 11, 12)
    )
    assert frame.cursor == (7, 3)
    assert frame.first_line == 10


def test_window_height_must_fit_one_line() -> None:
    with pytest.raises(ValueError):
        make_session([""], window_height=1)

    session = make_session([""])
    with pytest.raises(ValueError):
        session.resize(0)
    session.resize(3)
    assert session.window_height == 3


def test_shrinking_window_keeps_cursor_visible() -> None:
    lines = [f"line {n}" for n in range(1, 21)]
    editor = Editor.from_lines(lines, cursor=CursorPosition(x=1, y=9, y_offset=0))
    session = EditorSession(editor, window_height=10)

    session.resize(5)

    assert (editor.cursor.x, editor.cursor.y, editor.cursor.y_offset) == (1, 4, 5)
    assert session.visible_lines() == ["line 6", "line 7", "line 8", "line 9"]

    session.dispatch(InsertLineBreak())
    assert (editor.cursor.x, editor.cursor.y, editor.cursor.y_offset) == (1, 4, 6)

    session.dispatch(MoveDown())
    assert (editor.cursor.x, editor.cursor.y, editor.cursor.y_offset) == (1, 4, 7)
    assert session.visible_lines() == ["line 8", "", "line 9", "line 10"]
    assert session.frame(width=20).cursor == (5, 5)


def test_session_fits_cursor_into_initial_window() -> None:
    editor = Editor.from_lines(
        [f"line {n}" for n in range(1, 11)], cursor=CursorPosition(x=2, y=8)
    )

    EditorSession(editor, window_height=4)

    assert (editor.cursor.x, editor.cursor.y, editor.cursor.y_offset) == (2, 3, 5)
