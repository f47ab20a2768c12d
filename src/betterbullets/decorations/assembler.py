"""Assemble the document-wide decoration sequence.

Runs the whole pipeline for one recompute: parse every line, compute
levels, apply the rules per bullet line, flatten each line's style ranges,
add the glyph replacement over the bullet character, sort the line's
decorations by start and append them in document order.

The output is strictly ordered by start offset and pairwise
non-overlapping, which range-indexed renderers require.  Nothing here
raises for any input text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from betterbullets.config import OffsetUnit
from betterbullets.decorations.regions import flatten_ranges
from betterbullets.hierarchy import compute_levels, depth_of
from betterbullets.models import Decoration, DecorationKind
from betterbullets.parsing import parse_document
from betterbullets.rules import apply_rules

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from betterbullets.config import Settings
    from betterbullets.models import BulletLineInfo

logger = logging.getLogger(__name__)


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


class _OffsetMapper:
    """Map line-local columns of one line to document offsets."""

    __slots__ = ("line", "line_start", "utf16")

    def __init__(self, line: str, line_start: int, *, utf16: bool) -> None:
        self.line = line
        self.line_start = line_start
        self.utf16 = utf16

    def __call__(self, column: int) -> int:
        if self.utf16:
            return self.line_start + _utf16_length(self.line[:column])
        return self.line_start + column

    @property
    def line_length(self) -> int:
        return _utf16_length(self.line) if self.utf16 else len(self.line)


def _decorate_line(
    info: BulletLineInfo,
    depth: int,
    settings: Settings,
    to_offset: _OffsetMapper,
) -> list[Decoration]:
    result = apply_rules(info, depth, settings)

    pending = [
        Decoration(
            start=to_offset(region.start),
            end=to_offset(region.end),
            kind=DecorationKind.STYLE,
            style=region.style,
        )
        for region in flatten_ranges(result.ranges)
    ]
    pending.append(
        Decoration(
            start=to_offset(info.bullet_column),
            end=to_offset(info.bullet_column + len(info.bullet_char)),
            kind=DecorationKind.SYMBOL,
            style=result.bullet.style,
            symbol=result.bullet.symbol,
        )
    )
    pending.sort(key=lambda d: d.start)
    return pending


def build_decorations(
    lines: Iterable[str],
    settings: Settings,
    *,
    tab_width: int | None = None,
) -> list[Decoration]:
    """Compute the decorations for a whole document.

    Args:
        lines: The document's lines, without their newline characters.
        settings: Read-only configuration for this recompute.
        tab_width: Tab width supplied by the host; falls back to
            ``settings.editor.tab_width``.

    Returns:
        Decorations over document offsets, where each line is followed by
        one newline character.  Offsets count code points, or UTF-16 code
        units when ``settings.editor.offset_unit`` is ``utf16``.
    """
    lines = list(lines)
    width = tab_width or settings.editor.tab_width
    utf16 = settings.editor.offset_unit is OffsetUnit.UTF16

    infos = parse_document(lines, width)
    levels = compute_levels(
        [info.normalized_indent if info is not None else None for info in infos],
        include_root_bullets=settings.formatting.root_bullets_in_hierarchy,
    )

    decorations: list[Decoration] = []
    line_start = 0
    for line, info, level in zip(lines, infos, levels, strict=True):
        to_offset = _OffsetMapper(line, line_start, utf16=utf16)
        depth = depth_of(level)
        if info is not None and depth is not None:
            decorations.extend(_decorate_line(info, depth, settings, to_offset))
        line_start += to_offset.line_length + 1

    overlap = find_overlap(decorations)
    if overlap is not None:
        logger.error("Decorations out of order or overlapping: %r / %r", *overlap)

    logger.debug(
        "Decorated %d lines: %d bullets, %d decorations",
        len(lines),
        sum(info is not None for info in infos),
        len(decorations),
    )
    return decorations


def decorate_text(
    text: str,
    settings: Settings,
    *,
    tab_width: int | None = None,
) -> list[Decoration]:
    """Split *text* on ``"\\n"`` and delegate to ``build_decorations``."""
    return build_decorations(text.split("\n"), settings, tab_width=tab_width)


def find_overlap(
    decorations: Sequence[Decoration],
) -> tuple[Decoration, Decoration] | None:
    """Return the first consecutive pair that breaks ordering, or ``None``.

    A pair breaks ordering when the second decoration starts before the
    first one ends.
    """
    for prev, current in zip(decorations, decorations[1:]):
        if current.start < prev.end:
            return prev, current
    return None
