"""Flatten overlapping style ranges into non-overlapping regions.

The rules can produce ranges that overlap: the structural range covers the
whole text of a non-leaf line, and a year can sit inside a quotation.  A
range-indexed renderer needs sorted, disjoint ranges, so this module splits
the input at every boundary (event sweep) and gives each region the merged
style of every range active over it.

Merge policy: declarations are applied in emission order, so for any CSS
property the range emitted last (the later rule) wins.  Properties that do
not conflict accumulate, e.g. a year inside a quote is both italic and
underlined.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from betterbullets.models import StyleRange
from betterbullets.rules.styles import merge_styles

if TYPE_CHECKING:
    from collections.abc import Sequence

_START = 0
_END = 1


def flatten_ranges(ranges: Sequence[StyleRange]) -> list[StyleRange]:
    """Compute sorted, non-overlapping regions from possibly overlapping ranges.

    Builds an event list of ``(position, kind, range_index)`` tuples, sorts
    by position, then sweeps through creating a region wherever the active
    set is constant and non-empty.  Adjacent regions that end up with the
    same style are coalesced.  Empty ranges are ignored.

    Returns an empty list when *ranges* is empty.
    """
    events: list[tuple[int, int, int]] = []
    for idx, rng in enumerate(ranges):
        if rng.start >= rng.end:
            continue
        events.append((rng.start, _START, idx))
        events.append((rng.end, _END, idx))

    if not events:
        return []

    # Starts sort before ends at the same position so that a range starting
    # exactly where another ends does not leave a gap.
    events.sort()

    active: set[int] = set()
    regions: list[StyleRange] = []
    prev_pos: int | None = None

    for pos, kind, idx in events:
        if prev_pos is not None and pos > prev_pos and active:
            _append_region(regions, ranges, prev_pos, pos, active)
        if kind == _START:
            active.add(idx)
        else:
            active.discard(idx)
        prev_pos = pos

    return regions


def _append_region(
    regions: list[StyleRange],
    ranges: Sequence[StyleRange],
    start: int,
    end: int,
    active: set[int],
) -> None:
    order = sorted(active)
    style = merge_styles(ranges[i].style for i in order)
    if not style:
        return
    rule = ranges[order[-1]].rule

    if regions and regions[-1].end == start and regions[-1].style == style:
        last = regions[-1]
        regions[-1] = StyleRange(last.start, end, style, last.rule)
        return

    regions.append(StyleRange(start, end, style, rule))
