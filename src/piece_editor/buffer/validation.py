"""Range checks shared by the piece table and its callers."""

from __future__ import annotations


class InvalidRange(RuntimeError):
    """Raised when an offset or line index falls outside the document."""

    def __init__(
        self, message: str, *, index: int | None = None, length: int | None = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.length = length


def ensure_offset(index: int, document_length: int) -> int:
    if index < 0 or index > document_length:
        raise InvalidRange(
            f"Offset {index} outside document of length {document_length}",
            index=index,
        )
    return index


def ensure_span(start: int, length: int, document_length: int) -> tuple[int, int]:
    if start < 0 or length < 0 or start + length > document_length:
        raise InvalidRange(
            f"Span [{start}, {start + length}) outside document of length "
            f"{document_length}",
            index=start,
            length=length,
        )
    return start, start + length


def ensure_line(index: int, line_count: int) -> int:
    if index < 0 or index >= line_count:
        raise InvalidRange(
            f"Line {index} outside document of {line_count} lines", index=index
        )
    return index
