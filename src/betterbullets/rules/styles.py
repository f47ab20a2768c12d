"""CSS declaration helpers and the style vocabulary used by the rules.

Style strings are flat ``property: value`` lists separated by ``;``.
``parse_declarations`` and ``format_declarations`` convert between that
form and an ordered mapping so overlapping styles can be merged per
property.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from betterbullets.config import LevelStyle

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

BOLD = "font-weight: bold"
NORMAL_WEIGHT = "font-weight: normal"
ITALIC = "font-style: italic"
UNDERLINE = "text-decoration: underline"
HIGHLIGHT = "background-color: var(--text-highlight-bg)"

LEVEL_STYLE_DECLARATIONS: dict[LevelStyle, tuple[str, ...]] = {
    LevelStyle.NONE: (),
    LevelStyle.BOLD: (BOLD,),
    LevelStyle.ITALIC: (ITALIC,),
    LevelStyle.BOLD_ITALIC: (BOLD, ITALIC),
    LevelStyle.UNDERLINE: (UNDERLINE,),
    LevelStyle.BOLD_UNDERLINE: (BOLD, UNDERLINE),
}


def format_size(multiplier: float) -> str:
    """Render a font-size multiplier as an ``em`` length (``1.2`` -> ``1.2em``)."""
    return f"{multiplier:g}em"


def color(value: str) -> str:
    return f"color: {value}"


def font_size(multiplier: float) -> str:
    return f"font-size: {format_size(multiplier)}"


def join_declarations(declarations: Iterable[str]) -> str:
    """Join declarations into one style string, skipping empty entries."""
    return "; ".join(d for d in declarations if d)


def parse_declarations(style: str) -> dict[str, str]:
    """Split a style string into an ordered ``{property: value}`` mapping.

    Later declarations of the same property replace earlier ones but keep
    the position of the first.  Fragments without a colon are ignored.
    """
    result: dict[str, str] = {}
    for fragment in style.split(";"):
        prop, sep, value = fragment.partition(":")
        prop = prop.strip().lower()
        if not sep or not prop:
            continue
        result[prop] = value.strip()
    return result


def format_declarations(declarations: Mapping[str, str]) -> str:
    """Inverse of ``parse_declarations``."""
    return join_declarations(f"{prop}: {value}" for prop, value in declarations.items())


def merge_styles(styles: Iterable[str]) -> str:
    """Merge style strings in order; the last value of each property wins."""
    merged: dict[str, str] = {}
    for style in styles:
        merged.update(parse_declarations(style))
    return format_declarations(merged)
