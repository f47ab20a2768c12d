"""Tests for bullet-line classification and indent normalisation."""

from __future__ import annotations

import pytest

from betterbullets.parsing import normalize_indent, parse_bullet_line, parse_document


class TestNormalizeIndent:
    """Tabs expand to the configured width; other whitespace counts once."""

    def test_empty_indent_is_zero(self) -> None:
        assert normalize_indent("", 4) == 0

    def test_spaces_count_one_column_each(self) -> None:
        assert normalize_indent("   ", 4) == 3

    def test_single_tab_uses_tab_width(self) -> None:
        """One tab with tab-width 4 is indent 4."""
        assert normalize_indent("\t", 4) == 4

    def test_tabs_and_spaces_mix(self) -> None:
        assert normalize_indent("\t  \t", 2) == 6


class TestParseBulletLine:
    """parse_bullet_line() splits bullet lines and rejects everything else."""

    def test_simple_bullet(self) -> None:
        info = parse_bullet_line("- item", 4)
        assert info is not None
        assert info.indent_string == ""
        assert info.normalized_indent == 0
        assert info.bullet_char == "-"
        assert info.separator_space == " "
        assert info.raw_text == "item"
        assert info.text == "item"
        assert info.trim_offset == 0
        assert info.bullet_column == 0
        assert info.text_column == 2

    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_all_markers_accepted(self, marker: str) -> None:
        info = parse_bullet_line(f"  {marker} x", 4)
        assert info is not None
        assert info.bullet_char == marker

    def test_surrounding_whitespace_is_trimmed(self) -> None:
        """trim_offset maps the trimmed text back to its column in the line."""
        line = "  *   spaced  "
        info = parse_bullet_line(line, 4)
        assert info is not None
        assert info.raw_text == "  spaced  "
        assert info.text == "spaced"
        assert info.trim_offset == 2
        assert line[info.text_column : info.text_column + len(info.text)] == "spaced"

    def test_tab_indent_is_expanded(self) -> None:
        info = parse_bullet_line("\t+ x", 4)
        assert info is not None
        assert info.indent_string == "\t"
        assert info.normalized_indent == 4
        assert info.bullet_column == 1

    def test_tab_separator(self) -> None:
        info = parse_bullet_line("-\tx", 4)
        assert info is not None
        assert info.separator_space == "\t"
        assert info.text == "x"

    def test_empty_remainder_is_still_a_bullet(self) -> None:
        info = parse_bullet_line("   -    ", 4)
        assert info is not None
        assert info.text == ""
        assert info.trim_offset == 0

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "plain text",
            "-item",
            "-",
            "1. numbered",
            "# heading",
            "x - not at start",
        ],
    )
    def test_non_bullet_lines(self, line: str) -> None:
        assert parse_bullet_line(line, 4) is None


class TestParseDocument:
    """parse_document() keeps one entry per line."""

    def test_entries_align_with_lines(self) -> None:
        result = parse_document(["- a", "text", "", "  * b"], 4)
        assert len(result) == 4
        assert result[1] is None
        assert result[2] is None
        assert result[0] is not None
        assert result[3] is not None
        assert result[3].normalized_indent == 2

    def test_empty_document(self) -> None:
        assert parse_document([], 4) == []
