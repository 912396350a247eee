"""Presentation helpers for host adapters."""

from .viewport import (
    GUTTER_SEPARATOR,
    RenderFrame,
    build_frame,
    cursor_screen_position,
    digit_count,
    fit_line,
    render_line_number,
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
