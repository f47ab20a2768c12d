"""Pattern rules that turn one bullet line into a glyph and style ranges.

Rules run in a fixed order.  Each may replace the glyph (the last one to
fire wins) and append style ranges over the trimmed text:

1. structure      depth glyph, font size and weight for non-leaf lines
2. note           ``Note: ...``
3. definition     ``Term | Definition``
4. important      text ending in ``!``
5. quote          every ``"..."`` span
6. parenthetical  every ``(...)`` span
7. year           every standalone four-digit number

Ranges are in line-local columns and may overlap; the assembler flattens
them (see ``betterbullets.decorations.regions``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from betterbullets.models import BulletType, RuleKind, StyleRange
from betterbullets.rules.styles import (
    BOLD,
    HIGHLIGHT,
    ITALIC,
    LEVEL_STYLE_DECLARATIONS,
    NORMAL_WEIGHT,
    UNDERLINE,
    color,
    font_size,
    join_declarations,
    merge_styles,
)

if TYPE_CHECKING:
    from betterbullets.config import Settings
    from betterbullets.models import BulletLineInfo

NOTE_PREFIX = "Note: "
NOTE_TOKEN_LENGTH = len("Note:")
DEFINITION_SEPARATOR = " | "

QUOTE_PATTERN = re.compile(r'"([^"]+)"')
PARENTHETICAL_PATTERN = re.compile(r"\([^)]+\)")
YEAR_PATTERN = re.compile(r"\b\d{4}\b", re.ASCII)

_PATTERN_RULES: tuple[tuple[RuleKind, re.Pattern[str], str], ...] = (
    (RuleKind.QUOTE, QUOTE_PATTERN, ITALIC),
    (RuleKind.PARENTHETICAL, PARENTHETICAL_PATTERN, ITALIC),
    (RuleKind.YEAR, YEAR_PATTERN, UNDERLINE),
)


@dataclass
class RuleResult:
    """Glyph for the bullet plus the style ranges for its text."""

    bullet: BulletType
    ranges: list[StyleRange] = field(default_factory=list)


@dataclass
class _LineState:
    """Mutable state threaded through the rules for one line."""

    text: str
    base: int
    symbol: str
    symbol_styles: list[str] = field(default_factory=list)
    ranges: list[StyleRange] = field(default_factory=list)

    def add(self, start: int, end: int, style: str, rule: RuleKind) -> None:
        """Append a range given in trimmed-text positions; empty ranges are dropped."""
        if start < end and style:
            self.ranges.append(
                StyleRange(self.base + start, self.base + end, style, rule)
            )


def _apply_structure(state: _LineState, depth: int, settings: Settings) -> None:
    formatting = settings.formatting
    preset = formatting.preset_for_depth(depth)
    state.symbol = preset.symbol
    preset_declarations = LEVEL_STYLE_DECLARATIONS[preset.style]

    if depth == 0:
        style = merge_styles(preset_declarations)
        state.add(0, len(state.text), style, RuleKind.STRUCTURE)
        return

    state.symbol_styles.append(font_size(preset.size))
    bold = formatting.bold_non_leaf_text
    if bold:
        state.symbol_styles.append(BOLD)

    style = merge_styles(
        (font_size(preset.size), BOLD if bold else NORMAL_WEIGHT, *preset_declarations)
    )
    state.add(0, len(state.text), style, RuleKind.STRUCTURE)


def _apply_note(state: _LineState, settings: Settings) -> None:
    if not state.text.startswith(NOTE_PREFIX):
        return
    state.symbol = settings.symbols.note
    state.add(0, NOTE_TOKEN_LENGTH, join_declarations((BOLD, ITALIC)), RuleKind.NOTE)
    state.add(NOTE_TOKEN_LENGTH + 1, len(state.text), ITALIC, RuleKind.NOTE)


def _apply_definition(state: _LineState, settings: Settings) -> None:
    separator = state.text.find(DEFINITION_SEPARATOR)
    if separator == -1:
        return
    if settings.formatting.use_definition_symbol:
        state.symbol = settings.symbols.definition
    state.add(0, separator, join_declarations((BOLD, HIGHLIGHT)), RuleKind.DEFINITION)
    state.add(
        separator + len(DEFINITION_SEPARATOR),
        len(state.text),
        ITALIC,
        RuleKind.DEFINITION,
    )


def _apply_important(state: _LineState, settings: Settings) -> None:
    if not state.text.endswith("!"):
        return
    text_color = color(settings.formatting.exclamation_text_color)
    state.symbol = settings.symbols.important
    state.symbol_styles.extend((BOLD, text_color))
    state.add(
        0, len(state.text), join_declarations((BOLD, text_color)), RuleKind.IMPORTANT
    )


def _apply_patterns(state: _LineState) -> None:
    for rule, pattern, style in _PATTERN_RULES:
        for match in pattern.finditer(state.text):
            state.add(match.start(), match.end(), style, rule)


def apply_rules(info: BulletLineInfo, depth: int, settings: Settings) -> RuleResult:
    """Run every rule over one bullet line.

    Args:
        info: The parsed line.
        depth: Decoration depth from the hierarchy (0 = leaf).
        settings: Read-only configuration for this recompute.

    Returns:
        The glyph and the style ranges, in line-local columns, in the
        order the rules produced them.
    """
    state = _LineState(text=info.text, base=info.text_column, symbol="")

    _apply_structure(state, depth, settings)
    _apply_note(state, settings)
    _apply_definition(state, settings)
    _apply_important(state, settings)
    _apply_patterns(state)

    bullet = BulletType(
        symbol=state.symbol,
        style=merge_styles(state.symbol_styles) or None,
    )
    return RuleResult(bullet=bullet, ranges=state.ranges)
