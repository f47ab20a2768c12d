"""Classify lines as bullets and split them into their components.

A bullet line is leading whitespace, one of ``-``, ``*`` or ``+``, exactly
one whitespace character, then the rest of the line (possibly empty).
Anything else is plain text and is never decorated.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from betterbullets.models import BulletLineInfo

if TYPE_CHECKING:
    from collections.abc import Iterable

BULLET_LINE_PATTERN = re.compile(r"^(\s*)([-*+])(\s)(.*)$")


def normalize_indent(indent: str, tab_width: int) -> int:
    """Return the column width of *indent*, expanding each tab to *tab_width*."""
    return sum(tab_width if ch == "\t" else 1 for ch in indent)


def parse_bullet_line(line: str, tab_width: int) -> BulletLineInfo | None:
    """Parse *line*, returning ``None`` when it is not a bullet line."""
    match = BULLET_LINE_PATTERN.match(line)
    if match is None:
        return None

    indent_string, bullet_char, separator_space, raw_text = match.groups()
    text = raw_text.strip()
    # Stripping only removes whitespace from the ends, so the leading
    # difference is the offset of the trimmed text.
    trim_offset = len(raw_text) - len(raw_text.lstrip()) if text else 0

    return BulletLineInfo(
        indent_string=indent_string,
        normalized_indent=normalize_indent(indent_string, tab_width),
        bullet_char=bullet_char,
        separator_space=separator_space,
        raw_text=raw_text,
        text=text,
        trim_offset=trim_offset,
    )


def parse_document(lines: Iterable[str], tab_width: int) -> list[BulletLineInfo | None]:
    """Parse every line; the result is indexed by line number."""
    return [parse_bullet_line(line, tab_width) for line in lines]
