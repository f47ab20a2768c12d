"""Command-line interface for previewing and inspecting bullet decorations.

Subcommands:
    render PATH   print the document with glyphs and styles applied
    dump PATH     print the decoration sequence as JSON
    config        print the effective settings

PATH may be ``-`` to read standard input.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from betterbullets import __version__, _setup_logging
from betterbullets.config import OffsetUnit, Settings, get_settings
from betterbullets.decorations import build_decorations
from betterbullets.render import render_lines

if TYPE_CHECKING:
    from collections.abc import Sequence

console = Console()


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        msg = f"not an integer: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number < 1:
        msg = f"must be at least 1: {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for the betterbullets subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--tab-width",
        type=_positive_int,
        default=None,
        help="Columns per tab (default: EDITOR__TAB_WIDTH or 4)",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    parser = argparse.ArgumentParser(
        prog="betterbullets",
        description="Depth-aware glyphs and inline styles for bullet outlines.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", parents=[common], help="Print a decorated file")
    render.add_argument("path", help="Markdown file, or - for stdin")

    dump = sub.add_parser("dump", parents=[common], help="Print decorations as JSON")
    dump.add_argument("path", help="Markdown file, or - for stdin")

    sub.add_parser("config", parents=[common], help="Show effective settings")
    return parser


def _read_lines(path: str) -> list[str]:
    """Read a document as lines without newline characters."""
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    return text.split("\n")


def _cmd_render(args: argparse.Namespace, settings: Settings, con: Console) -> None:
    lines = _read_lines(args.path)
    # The renderer slices Python strings, so it needs code-point offsets.
    if settings.editor.offset_unit is not OffsetUnit.CODEPOINT:
        editor = settings.editor.model_copy(
            update={"offset_unit": OffsetUnit.CODEPOINT}
        )
        settings = settings.model_copy(update={"editor": editor})
    decorations = build_decorations(lines, settings, tab_width=args.tab_width)
    con.print(render_lines(lines, decorations), highlight=False)


def _cmd_dump(args: argparse.Namespace, settings: Settings, con: Console) -> None:
    lines = _read_lines(args.path)
    decorations = build_decorations(lines, settings, tab_width=args.tab_width)
    con.print_json(data=[d.to_dict() for d in decorations])


def _cmd_config(args: argparse.Namespace, settings: Settings, con: Console) -> None:
    table = Table(title="BetterBullets settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    formatting = settings.formatting
    table.add_row("formatting.bold_non_leaf_text", str(formatting.bold_non_leaf_text))
    table.add_row(
        "formatting.use_definition_symbol", str(formatting.use_definition_symbol)
    )
    table.add_row(
        "formatting.exclamation_text_color", formatting.exclamation_text_color
    )
    table.add_row("formatting.hierarchy_levels", str(formatting.hierarchy_levels))
    table.add_row(
        "formatting.root_bullets_in_hierarchy",
        str(formatting.root_bullets_in_hierarchy),
    )
    for depth, preset in enumerate(formatting.levels):
        table.add_row(
            f"formatting.levels[{depth}]",
            f"{preset.symbol}  size={preset.size:g}  style={preset.style}",
        )
    table.add_row("symbols.note", settings.symbols.note)
    table.add_row("symbols.definition", settings.symbols.definition)
    table.add_row("symbols.important", settings.symbols.important)
    tab_width = args.tab_width or settings.editor.tab_width
    table.add_row("editor.tab_width", str(tab_width))
    table.add_row("editor.offset_unit", settings.editor.offset_unit.value)
    table.add_row("app.log_dir", str(settings.app.log_dir or "-"))
    con.print(table)


_COMMANDS = {
    "render": _cmd_render,
    "dump": _cmd_dump,
    "config": _cmd_config,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the betterbullets command."""
    args = _build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/]\n{escape(str(exc))}")
        sys.exit(1)

    _setup_logging(verbose=args.verbose, log_dir=settings.app.log_dir)

    try:
        _COMMANDS[args.command](args, settings, console)
    except (OSError, UnicodeDecodeError) as exc:
        reason = escape(str(getattr(exc, "strerror", None) or exc))
        console.print(f"[red]Cannot read {escape(args.path)}:[/] {reason}")
        sys.exit(1)
