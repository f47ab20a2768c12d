"""Value types shared by the parser, rule engine and assembler.

All of these are recreated on every recompute and discarded afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class RuleKind(StrEnum):
    """The rule that produced a style range, in evaluation order."""

    STRUCTURE = "structure"
    NOTE = "note"
    DEFINITION = "definition"
    IMPORTANT = "important"
    QUOTE = "quote"
    PARENTHETICAL = "parenthetical"
    YEAR = "year"


class DecorationKind(StrEnum):
    """What the renderer should do with a decorated range."""

    SYMBOL = "symbol"
    STYLE = "style"


@dataclass(frozen=True, slots=True)
class BulletLineInfo:
    """The components of one bullet line.

    Attributes:
        indent_string: Raw leading whitespace.
        normalized_indent: Indent width in columns with tabs expanded.
        bullet_char: One of ``-``, ``*``, ``+``.
        separator_space: The single whitespace character after the bullet.
        raw_text: Everything after the separator.
        text: ``raw_text`` with surrounding whitespace stripped.
        trim_offset: Index of ``text``'s first character within ``raw_text``.
    """

    indent_string: str
    normalized_indent: int
    bullet_char: str
    separator_space: str
    raw_text: str
    text: str
    trim_offset: int

    @property
    def bullet_column(self) -> int:
        """Line-local column of the bullet character."""
        return len(self.indent_string)

    @property
    def text_column(self) -> int:
        """Line-local column of the first character of ``text``."""
        return (
            self.bullet_column
            + len(self.bullet_char)
            + len(self.separator_space)
            + self.trim_offset
        )


@dataclass(frozen=True, slots=True)
class BulletType:
    """Glyph shown in place of the bullet character, plus its optional style."""

    symbol: str
    style: str | None = None


@dataclass(frozen=True, slots=True)
class StyleRange:
    """An inline style over line-local columns ``[start, end)``."""

    start: int
    end: int
    style: str
    rule: RuleKind


@dataclass(frozen=True, slots=True)
class Decoration:
    """A half-open ``[start, end)`` range over document offsets.

    ``SYMBOL`` decorations replace their range with ``symbol`` (styled by
    ``style`` when set); ``STYLE`` decorations apply ``style`` inline.
    """

    start: int
    end: int
    kind: DecorationKind
    style: str | None = None
    symbol: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "from": self.start,
            "to": self.end,
            "kind": self.kind.value,
        }
        if self.symbol is not None:
            data["symbol"] = self.symbol
        if self.style is not None:
            data["style"] = self.style
        return data
