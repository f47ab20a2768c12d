"""Keep one editor's decorations current across host events.

The host reports what happened since the last update as a set of
``RefreshTrigger`` values.  Any trigger causes a full recompute from the
current lines; an update with no triggers keeps the previous decorations.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from betterbullets.decorations.assembler import build_decorations

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from betterbullets.config import Settings
    from betterbullets.models import Decoration

logger = logging.getLogger(__name__)


class RefreshTrigger(StrEnum):
    """Host events that invalidate the current decorations."""

    DOC_CHANGED = "doc_changed"
    VIEWPORT_CHANGED = "viewport_changed"
    SELECTION_SET = "selection_set"
    FORCE_REFRESH = "force_refresh"


class BulletDecorator:
    """Decorations for one editor view.

    Attributes:
        settings: The settings used by the latest recompute.
        decorations: The latest decoration sequence.
    """

    def __init__(
        self,
        settings: Settings,
        lines: Sequence[str],
        *,
        tab_width: int | None = None,
    ) -> None:
        self.settings = settings
        self.tab_width = tab_width
        self._lines: list[str] = list(lines)
        self.decorations: list[Decoration] = self._recompute()

    def _recompute(self) -> list[Decoration]:
        return build_decorations(self._lines, self.settings, tab_width=self.tab_width)

    def update(
        self,
        lines: Sequence[str],
        triggers: Iterable[RefreshTrigger],
    ) -> bool:
        """Recompute if any trigger fired.

        Returns:
            ``True`` when the decorations were recomputed.
        """
        fired = set(triggers)
        if not fired:
            return False

        logger.debug("Recomputing decorations (%s)", ", ".join(sorted(fired)))
        self._lines = list(lines)
        self.decorations = self._recompute()
        return True

    def apply_settings(self, settings: Settings) -> None:
        """Switch to new settings and force a refresh."""
        self.settings = settings
        self.update(self._lines, (RefreshTrigger.FORCE_REFRESH,))
