"""Terminal rendering of decorated documents with Rich.

A stand-in for an editor's widget layer: symbol decorations become their
glyph, style decorations become Rich styles.  ``font-size`` has no terminal
equivalent and is dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text

from betterbullets.models import DecorationKind
from betterbullets.rules.styles import parse_declarations

if TYPE_CHECKING:
    from collections.abc import Sequence

    from betterbullets.models import Decoration

logger = logging.getLogger(__name__)

# Editor theme variables referenced by the rules, mapped to terminal colours.
CSS_VARIABLES: dict[str, str] = {
    "--text-highlight-bg": "grey35",
}


def _resolve_color(value: str) -> str | None:
    value = value.strip()
    if value.startswith("var(") and value.endswith(")"):
        value = CSS_VARIABLES.get(value[4:-1].strip(), "")
    if not value:
        return None
    try:
        Color.parse(value)
    except ColorParseError:
        logger.warning("Ignoring colour Rich cannot display: %r", value)
        return None
    return value


def css_to_rich_style(style: str | None) -> Style:
    """Translate a CSS declaration string into a Rich ``Style``."""
    if not style:
        return Style.null()

    declarations = parse_declarations(style)
    weight = declarations.get("font-weight")
    font_style = declarations.get("font-style")
    decoration = declarations.get("text-decoration", "")

    return Style(
        bold=True if weight == "bold" else None,
        italic=True if font_style == "italic" else None,
        underline=True if "underline" in decoration.split() else None,
        color=_resolve_color(declarations.get("color", "")),
        bgcolor=_resolve_color(declarations.get("background-color", "")),
    )


def render_lines(lines: Sequence[str], decorations: Sequence[Decoration]) -> Text:
    """Render *lines* with *decorations* applied.

    Decorations must use code-point offsets and be sorted and disjoint,
    as produced by ``build_decorations``.
    """
    document = "\n".join(lines)
    output = Text()
    cursor = 0

    for decoration in decorations:
        if decoration.start > cursor:
            output.append(document[cursor : decoration.start])
        segment_style = css_to_rich_style(decoration.style)
        if decoration.kind is DecorationKind.SYMBOL:
            output.append(decoration.symbol or "", style=segment_style)
        else:
            covered = document[decoration.start : decoration.end]
            output.append(covered, style=segment_style)
        cursor = decoration.end

    output.append(document[cursor:])
    return output
