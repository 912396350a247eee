from __future__ import annotations

import random

import pytest

from piece_editor.buffer import (
    InvalidRange,
    Overlap,
    Piece,
    PieceTable,
    Source,
    classify_overlap,
)


def assert_partition(table: PieceTable) -> None:
    text = table.get_text()
    assert sum(piece.length for piece in table.pieces) == len(text) == len(table)
    for piece in table.pieces:
        assert piece.length > 0
        buffer = table.original if piece.source is Source.ORIGINAL else table.added
        assert piece.end <= len(buffer)


def test_new_holds_original_text_in_one_piece() -> None:
    table = PieceTable("This is a text")

    assert table.get_text() == "This is a text"
    assert table.pieces == (Piece(Source.ORIGINAL, 0, 14),)


def test_empty_table_has_no_pieces_and_one_line() -> None:
    table = PieceTable()

    assert table.pieces == ()
    assert table.get_text() == ""
    assert table.get_all_lines() == [""]
    assert table.get_number_of_lines() == 1


def test_push_appends_text() -> None:
    table = PieceTable("This is a text")

    table.push(".")

    assert table.get_text() == "This is a text."


def test_insert_at_piece_boundary() -> None:
    table = PieceTable("This is a text")
    table.push("...")

    table.insert(10, "new ")

    assert table.get_text() == "This is a new text..."
    assert table.pieces == (
        Piece(Source.ORIGINAL, 0, 10),
        Piece(Source.ADDED, 3, 4),
        Piece(Source.ORIGINAL, 10, 4),
        Piece(Source.ADDED, 0, 3),
    )


def test_insert_at_start_of_document() -> None:
    table = PieceTable("text")

    table.insert(0, "a ")

    assert table.get_text() == "a text"
    assert table.pieces == (
        Piece(Source.ADDED, 0, 2),
        Piece(Source.ORIGINAL, 0, 4),
    )


def test_insert_into_empty_document() -> None:
    table = PieceTable()

    table.insert(0, "x")

    assert table.get_text() == "x"
    assert table.pieces == (Piece(Source.ADDED, 0, 1),)


def test_sequential_typing_extends_one_piece() -> None:
    table = PieceTable("abc")

    for index, char in enumerate("defg"):
        table.insert(3 + index, char)

    assert table.get_text() == "abcdefg"
    assert table.pieces == (
        Piece(Source.ORIGINAL, 0, 3),
        Piece(Source.ADDED, 0, 4),
    )


def test_typing_in_the_middle_extends_the_new_run() -> None:
    table = PieceTable("this is  test")

    table.insert(8, "a")
    table.insert(9, "n")

    assert table.get_text() == "this is an test"
    assert len(table.pieces) == 3


def test_insert_empty_text_is_noop() -> None:
    table = PieceTable("abc")

    table.insert(1, "")

    assert table.pieces == (Piece(Source.ORIGINAL, 0, 3),)
    assert table.added == ""


def test_split_removal_inside_one_piece() -> None:
    table = PieceTable("This is a text...")

    table.remove(15, 2)

    assert table.get_text() == "This is a text."


def test_removal_strictly_inside_piece_keeps_prefix_and_suffix() -> None:
    table = PieceTable("abcdef")

    table.remove(2, 2)

    assert table.get_text() == "abef"
    assert table.pieces == (
        Piece(Source.ORIGINAL, 0, 2),
        Piece(Source.ORIGINAL, 4, 2),
    )


def test_cross_piece_removal() -> None:
    table = PieceTable("This is a text.")
    table.push(" This is a text.xx")
    table.push("xx This is a text.")

    table.remove(31, 4)

    assert table.get_text() == "This is a text. This is a text. This is a text."
    assert_partition(table)


def test_removal_spanning_two_added_pieces() -> None:
    table = PieceTable("This is a text.")
    table.push(" This is a text.xx")
    table.insert(0, "Q")
    table.remove(0, 1)
    table.push("xx This is a text.")
    assert len(table.pieces) == 3

    table.remove(31, 4)

    assert table.get_text() == "This is a text. This is a text. This is a text."
    assert table.pieces == (
        Piece(Source.ORIGINAL, 0, 15),
        Piece(Source.ADDED, 0, 16),
        Piece(Source.ADDED, 21, 16),
    )


def test_removal_of_whole_piece_leaves_no_empty_piece() -> None:
    table = PieceTable("abc")
    table.push("def")

    table.remove(3, 3)

    assert table.pieces == (Piece(Source.ORIGINAL, 0, 3),)


def test_remove_everything() -> None:
    table = PieceTable("abc")
    table.push("def")

    table.remove(0, 6)

    assert table.pieces == ()
    assert table.get_all_lines() == [""]


def test_zero_length_removal_is_noop() -> None:
    table = PieceTable("abc")

    table.remove(3, 0)

    assert table.get_text() == "abc"


@pytest.mark.parametrize(
    ("index",),
    [(-1,), (4,)],
)
def test_insert_out_of_range(index: int) -> None:
    table = PieceTable("abc")

    with pytest.raises(InvalidRange):
        table.insert(index, "x")


@pytest.mark.parametrize(
    ("start", "length"),
    [(-1, 1), (0, -1), (2, 2), (4, 0)],
)
def test_remove_out_of_range(start: int, length: int) -> None:
    table = PieceTable("abc")

    with pytest.raises(InvalidRange):
        table.remove(start, length)

    assert table.get_text() == "abc"


def test_piece_rejects_empty_length() -> None:
    with pytest.raises(ValueError):
        Piece(Source.ADDED, 0, 0)


@pytest.mark.parametrize(
    ("removal", "expected"),
    [
        ((0, 5), Overlap.NONE),
        ((15, 20), Overlap.NONE),
        ((12, 13), Overlap.CONTAINED),
        ((5, 20), Overlap.COVERED),
        ((10, 15), Overlap.COVERED),
        ((12, 18), Overlap.TAIL),
        ((12, 15), Overlap.TAIL),
        ((8, 12), Overlap.HEAD),
        ((10, 12), Overlap.HEAD),
    ],
)
def test_classify_overlap(removal: tuple[int, int], expected: Overlap) -> None:
    start, end = removal

    assert classify_overlap(10, 15, start, end) is expected


def test_line_helpers() -> None:
    table = PieceTable("first\nsecond\n\nfourth")

    assert table.get_number_of_lines() == 4
    assert table.get_all_lines() == ["first", "second", "", "fourth"]
    assert table.get_range_lines(1, 3) == ["second", ""]
    assert table.get_range_lines(3, 10) == ["fourth"]
    assert table.line_length(1) == 6
    assert table.line_length(2) == 0
    with pytest.raises(InvalidRange):
        table.line_length(4)


def test_trailing_newline_counts_as_a_line() -> None:
    table = PieceTable("this is a test")

    table.push("\n")

    assert table.get_number_of_lines() == 2
    assert table.get_all_lines() == ["this is a test", ""]


def test_original_is_never_mutated_and_added_only_grows() -> None:
    table = PieceTable("hello world")
    seen_added = ""

    for index, text in ((5, ","), (0, ">> "), (15, "!")):
        table.insert(index, text)
        assert table.added.startswith(seen_added)
        seen_added = table.added
    table.remove(0, 3)

    assert table.original == "hello world"
    assert table.added == seen_added
    assert table.get_text() == "hello, world!"


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_edits_match_reference_string(seed: int) -> None:
    rng = random.Random(seed)
    reference = "The quick brown fox\njumps over\nthe lazy dog"
    table = PieceTable(reference)

    for _ in range(300):
        if reference and rng.random() < 0.4:
            start = rng.randrange(len(reference))
            length = rng.randint(0, min(6, len(reference) - start))
            table.remove(start, length)
            reference = reference[:start] + reference[start + length :]
        else:
            index = rng.randint(0, len(reference))
            text = rng.choice(["a", "bc", "\n", "xyz", " "])
            table.insert(index, text)
            reference = reference[:index] + text + reference[index:]

        assert table.get_text() == reference
        assert_partition(table)

    assert table.get_all_lines() == reference.split("\n")
