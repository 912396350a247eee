"""Loading and saving documents as lines of text."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from piece_editor.runtime import telemetry

PathLike = Union[str, "os.PathLike[str]"]

LOGGER_NAME = "piece_editor.storage"


class IoFailure(RuntimeError):
    """Raised when a document cannot be written to (or read from) disk."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"{os.fspath(path)}: {reason}")
        self.path = Path(path)
        self.reason = reason


def read_lines(path: PathLike) -> List[str]:
    """Return the lines of ``path`` without their terminators.

    A trailing newline does not start an extra line, and an empty file reads
    as a single empty line.
    """

    try:
        with open(path, "r", encoding="utf-8") as handle:
            lines = [line.rstrip("\n") for line in handle]
    except (OSError, UnicodeDecodeError) as exc:
        raise IoFailure(path, str(exc)) from exc
    return lines or [""]


def load_lines(path: Optional[PathLike]) -> List[str]:
    """Like ``read_lines`` but never fails: unreadable files open empty."""

    if path is None:
        return [""]
    try:
        return read_lines(path)
    except IoFailure as exc:
        telemetry.record_event(
            "storage.load_fallback",
            level="warning",
            data={"path": os.fspath(path), "reason": exc.reason},
            logger_name=LOGGER_NAME,
        )
        return [""]


def save_lines(path: PathLike, lines: Sequence[str]) -> int:
    """Overwrite ``path`` with ``lines`` joined by ``"\\n"``.

    Returns the number of characters written.
    """

    content = "\n".join(lines)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise IoFailure(path, exc.strerror or str(exc)) from exc
    # Fetched per call: ``telemetry.configure`` resets the logger cache.
    logger = telemetry.get_logger(LOGGER_NAME)
    logger.debug(f"saved {len(content)} chars to {os.fspath(path)}")
    return len(content)


__all__ = ["IoFailure", "PathLike", "load_lines", "read_lines", "save_lines"]
