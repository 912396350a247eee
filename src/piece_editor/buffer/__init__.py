"""Piece table storage and cursor arithmetic."""

from .cursor import CursorPosition, LineOracle, StaticLines
from .piece_table import Overlap, Piece, PieceTable, Source, classify_overlap
from .validation import InvalidRange, ensure_line, ensure_offset, ensure_span

__all__ = [
    "CursorPosition",
    "LineOracle",
    "StaticLines",
    "Overlap",
    "Piece",
    "PieceTable",
    "Source",
    "classify_overlap",
    "InvalidRange",
    "ensure_line",
    "ensure_offset",
    "ensure_span",
]
