"""Decoration assembly: overlap flattening, document-wide output, refreshes."""

from betterbullets.decorations.assembler import (
    build_decorations,
    decorate_text,
    find_overlap,
)
from betterbullets.decorations.regions import flatten_ranges
from betterbullets.decorations.session import BulletDecorator, RefreshTrigger

__all__ = [
    "BulletDecorator",
    "RefreshTrigger",
    "build_decorations",
    "decorate_text",
    "find_overlap",
    "flatten_ranges",
]
