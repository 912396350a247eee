"""Piece table text storage.

The document is never edited as one string. ``original`` holds the content
the table was created with and is never touched again; ``added`` is an
append-only log of every inserted string. The ordered ``pieces`` list says
which slices of those two buffers, concatenated, make up the document::

    original  "This is a text"
    added     "...new "
    pieces    [O(0, 10) A(3, 4) O(10, 4) A(0, 3)]
    text      "This is a new text..."

Inserting or removing therefore only rewrites the few pieces around the
edit point.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .validation import ensure_line, ensure_offset, ensure_span


class Source(str, Enum):
    """Backing buffer a piece points into."""

    ORIGINAL = "original"
    ADDED = "added"


class Overlap(str, Enum):
    """How a removal range relates to a single piece."""

    NONE = "none"
    CONTAINED = "contained"  # removal strictly inside the piece
    COVERED = "covered"  # piece fully inside the removal
    TAIL = "tail"  # removal starts inside the piece and runs past its end
    HEAD = "head"  # removal starts at/before the piece and ends inside it


@dataclass(frozen=True, slots=True)
class Piece:
    source: Source
    start: int
    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Piece length must be positive")
        if self.start < 0:
            raise ValueError("Piece start cannot be negative")

    @property
    def end(self) -> int:
        return self.start + self.length


def _piece(source: Source, start: int, length: int) -> Optional[Piece]:
    if length <= 0:
        return None
    return Piece(source, start, length)


def classify_overlap(
    piece_start: int, piece_end: int, start: int, end: int
) -> Overlap:
    """Classify the removal ``[start, end)`` against ``[piece_start, piece_end)``.

    Ranges that only share an edge do not overlap.
    """

    if end <= piece_start or start >= piece_end:
        return Overlap.NONE
    if start > piece_start and end < piece_end:
        return Overlap.CONTAINED
    if start <= piece_start and end >= piece_end:
        return Overlap.COVERED
    if start > piece_start:
        return Overlap.TAIL
    return Overlap.HEAD


class PieceTable:
    """Mutable document made of pieces over an original and an added buffer."""

    def __init__(self, original: str = "") -> None:
        self._original = original
        self._added = ""
        self._pieces: List[Piece] = []
        if original:
            self._pieces.append(Piece(Source.ORIGINAL, 0, len(original)))
        self._length = len(original)
        self._text: Optional[str] = original

    @property
    def original(self) -> str:
        return self._original

    @property
    def added(self) -> str:
        return self._added

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return tuple(self._pieces)

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"PieceTable(length={self._length}, pieces={len(self._pieces)})"

    # -- reads ---------------------------------------------------------------

    def _slice(self, piece: Piece) -> str:
        buffer = self._original if piece.source is Source.ORIGINAL else self._added
        return buffer[piece.start : piece.end]

    def get_text(self) -> str:
        if self._text is None:
            self._text = "".join(self._slice(piece) for piece in self._pieces)
        return self._text

    def get_all_lines(self) -> List[str]:
        return self.get_text().split("\n")

    def get_range_lines(self, start: int, stop: int) -> List[str]:
        # TODO: keep an incremental line-start index so off-screen lines are
        # not materialized for every viewport read.
        return self.get_all_lines()[start:stop]

    def get_number_of_lines(self) -> int:
        return self.get_text().count("\n") + 1

    def line_length(self, index: int) -> int:
        lines = self.get_all_lines()
        ensure_line(index, len(lines))
        return len(lines[index])

    # -- mutations -----------------------------------------------------------

    def push(self, text: str) -> None:
        """Append ``text`` at the end of the document."""

        self.insert(self._length, text)

    def insert(self, index: int, text: str) -> None:
        ensure_offset(index, self._length)
        if not text:
            return

        added_start = len(self._added)
        self._added += text
        new_piece = Piece(Source.ADDED, added_start, len(text))
        self._length += len(text)
        self._text = None

        if not self._pieces:
            self._pieces.append(new_piece)
            return

        position, piece, doc_start = self._locate(index)
        split = index - doc_start
        left = _piece(piece.source, piece.start, split)
        right = _piece(piece.source, piece.start + split, piece.length - split)

        if (
            left is not None
            and left.source is Source.ADDED
            and left.end == added_start
        ):
            replacement = [Piece(Source.ADDED, left.start, left.length + len(text))]
        else:
            replacement = [p for p in (left, new_piece) if p is not None]
        if right is not None:
            replacement.append(right)

        self._pieces[position : position + 1] = replacement

    def remove(self, start: int, length: int) -> None:
        start, end = ensure_span(start, length, self._length)
        if length == 0:
            return

        kept: List[Piece] = []
        doc_start = 0
        for piece in self._pieces:
            doc_end = doc_start + piece.length
            kept.extend(_trim(piece, doc_start, doc_end, start, end))
            doc_start = doc_end

        self._pieces = kept
        self._length -= length
        self._text = None

    def _locate(self, index: int) -> tuple[int, Piece, int]:
        """Return ``(position, piece, piece_doc_start)`` for ``index``.

        An index on a boundary belongs to the piece on its left, so that
        typing at the end of an inserted run extends that run.
        """

        doc_start = 0
        for position, piece in enumerate(self._pieces):
            doc_end = doc_start + piece.length
            if index <= doc_end:
                return position, piece, doc_start
            doc_start = doc_end
        raise AssertionError("offset validated against document length")


def _trim(
    piece: Piece, piece_start: int, piece_end: int, start: int, end: int
) -> Sequence[Piece]:
    overlap = classify_overlap(piece_start, piece_end, start, end)
    if overlap is Overlap.NONE:
        return (piece,)
    if overlap is Overlap.COVERED:
        return ()

    kept: List[Piece] = []
    if overlap in (Overlap.CONTAINED, Overlap.TAIL):
        kept.append(Piece(piece.source, piece.start, start - piece_start))
    if overlap in (Overlap.CONTAINED, Overlap.HEAD):
        kept.append(
            Piece(piece.source, piece.start + (end - piece_start), piece_end - end)
        )
    return kept


__all__ = ["Overlap", "Piece", "PieceTable", "Source", "classify_overlap"]
