"""Line parsing and indent normalisation for bullet lines."""

from betterbullets.parsing.line_parser import (
    BULLET_LINE_PATTERN,
    normalize_indent,
    parse_bullet_line,
    parse_document,
)

__all__ = [
    "BULLET_LINE_PATTERN",
    "normalize_indent",
    "parse_bullet_line",
    "parse_document",
]
