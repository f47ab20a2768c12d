"""Nesting levels for bullet lines, inferred from indentation.

Levels are computed over the whole document in two passes:

1. Seed every bullet line with level 1 (non-bullet lines stay at 0).
2. Walk the lines backwards.  For each line, scan forward until a bullet
   line with an indent less than or equal to its own closes the run; every
   strictly deeper line met on the way can extend the level to
   ``1 + level[j]``.  Because the walk is backwards, ``level[j]`` is final
   by the time line ``i`` reads it.

Lines treated as indent 0 are transparent: they neither start a scan nor
close one.  Non-bullet lines are always transparent.  Bullet lines sitting
at column 0 are transparent too unless ``include_root_bullets`` is set, in
which case they take part like any other bullet.

The result is a depth measure over forward runs of increasingly indented
lines rather than over a strict tree, so ragged outlines still get stable
levels.  The forward scan is quadratic for a strictly increasing indent
ladder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def compute_levels(
    indents: Sequence[int | None],
    *,
    include_root_bullets: bool = False,
) -> list[int]:
    """Return a level per line.

    Args:
        indents: Normalised indent per line, ``None`` for non-bullet lines.
        include_root_bullets: Let bullet lines at indent 0 take part in the
            scan instead of being transparent.

    Returns:
        ``0`` for non-bullet lines, ``>= 1`` for bullet lines.
    """
    n = len(indents)
    levels = [0 if indent is None else 1 for indent in indents]

    for i in range(n - 1, -1, -1):
        current = indents[i]
        if current is None or (current == 0 and not include_root_bullets):
            continue

        for j in range(i + 1, n):
            following = indents[j]
            if following is None or (following == 0 and not include_root_bullets):
                continue
            if following > current:
                levels[i] = max(levels[i], 1 + levels[j])
            else:
                break

    logger.debug(
        "Computed levels for %d lines (max level %d)", n, max(levels, default=0)
    )
    return levels


def depth_of(level: int) -> int | None:
    """Map a level to a decoration depth (0 = leaf); ``None`` when undecorated."""
    if level < 1:
        return None
    return level - 1
