"""Persistence of documents to plain text files."""

from .files import IoFailure, PathLike, load_lines, read_lines, save_lines

__all__ = ["IoFailure", "PathLike", "load_lines", "read_lines", "save_lines"]
