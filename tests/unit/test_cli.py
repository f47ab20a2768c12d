"""Tests for the betterbullets command line."""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING

import pytest

import betterbullets
from betterbullets import __version__
from betterbullets.cli import main

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _restore_root_handlers() -> Iterator[None]:
    """main() installs logging handlers; remove them after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def outline(tmp_path: Path) -> Path:
    path = tmp_path / "outline.md"
    path.write_text("  - Parent\n    - Child\n", encoding="utf-8")
    return path


class TestDump:
    """``dump`` prints decorations as JSON."""

    def test_json_output(
        self, outline: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["dump", str(outline)])
        data = json.loads(capsys.readouterr().out)
        assert data == [
            {
                "from": 2,
                "to": 3,
                "kind": "symbol",
                "symbol": "→",
                "style": "font-size: 1.2em; font-weight: bold",
            },
            {
                "from": 4,
                "to": 10,
                "kind": "style",
                "style": "font-size: 1.2em; font-weight: bold",
            },
            {"from": 15, "to": 16, "kind": "symbol", "symbol": "-"},
        ]

    def test_tab_width_option(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "tabs.md"
        path.write_text("\t- a\n      - b", encoding="utf-8")

        main(["dump", str(path)])
        assert json.loads(capsys.readouterr().out)[0]["symbol"] == "→"

        main(["dump", "--tab-width", "8", str(path)])
        assert json.loads(capsys.readouterr().out)[0]["symbol"] == "-"

    def test_reads_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("- Urgent!"))
        main(["dump", "-"])
        data = json.loads(capsys.readouterr().out)
        assert [d["symbol"] for d in data if d["kind"] == "symbol"] == ["!"]

    def test_non_utf8_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "latin1.md"
        path.write_bytes(b"- caf\xe9\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["dump", str(path)])
        assert exc_info.value.code == 1
        assert "Cannot read" in capsys.readouterr().out


class TestRender:
    """``render`` prints the outline with glyphs swapped in."""

    def test_glyphs_replace_bullets(
        self, outline: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["render", str(outline)])
        out = capsys.readouterr().out
        assert "→ Parent" in out
        assert "- Child" in out

    def test_utf16_setting_does_not_break_render(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("EDITOR__OFFSET_UNIT", "utf16")
        path = tmp_path / "emoji.md"
        path.write_text('  - 😀 "hi"\n    - x', encoding="utf-8")

        main(["render", str(path)])
        assert '→ 😀 "hi"' in capsys.readouterr().out


class TestConfig:
    """``config`` shows the effective settings."""

    def test_lists_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["config"])
        out = capsys.readouterr().out
        assert "hierarchy_levels" in out
        assert "editor.tab_width" in out

    def test_env_override_is_shown(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("SYMBOLS__NOTE", "✎")
        main(["config"])
        assert "✎" in capsys.readouterr().out


class TestErrors:
    """Failures exit with status 1 and a readable message."""

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(tmp_path / "missing.md")])
        assert exc_info.value.code == 1
        assert "Cannot read" in capsys.readouterr().out

    def test_invalid_configuration(
        self,
        outline: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("FORMATTING__HIERARCHY_LEVELS", "42")
        with pytest.raises(SystemExit) as exc_info:
            main(["dump", str(outline)])
        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    @pytest.mark.parametrize("value", ["0", "wide"])
    def test_bad_tab_width(self, outline: Path, value: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["dump", "--tab-width", value, str(outline)])
        assert exc_info.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestEntryPoint:
    """The package-level ``main`` runs the CLI with ``sys.argv``."""

    def test_package_main_delegates(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.argv", ["betterbullets", "config"])
        betterbullets.main()
        assert "hierarchy_levels" in capsys.readouterr().out
