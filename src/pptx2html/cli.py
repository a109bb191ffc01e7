#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/cli.py
"""Command-line interface for pptx2html.

Convert a presentation to HTML::

    $ pptx2html convert deck.pptx -o deck.html

Clean up the styling of generated chart parts in an extracted package::

    $ pptx2html fix-charts extracted/ppt --gap-width 150

Options of :class:`~pptx2html.options.RenderOptions` and
:class:`~pptx2html.options.ChartFixOptions` are exposed as flags generated
from the dataclass field metadata.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any

from pptx2html.chart_fixer import ChartFixResult, fix_chart_styling
from pptx2html.exceptions import FileError, Pptx2HtmlError, ValidationError
from pptx2html.logging_utils import configure_logging
from pptx2html.options import ChartFixOptions, RenderOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

__all__ = ["create_parser", "main"]


def _get_version() -> str:
    try:
        from importlib.metadata import version

        return version("pptx2html")
    except Exception:
        return "unknown"


def _option_flag(name: str) -> str:
    return "--" + name.replace("_", "-")


def add_options_arguments(parser: argparse.ArgumentParser, options_class: type, title: str) -> None:
    """Add one flag per field of an options dataclass.

    Boolean fields that default to True get a ``--no-*`` flag; every other
    field takes a value. Defaults stay ``None`` so only flags the user gave
    override the dataclass defaults.
    """
    group = parser.add_argument_group(title)
    for f in fields(options_class):
        help_text = f.metadata.get("help", "")
        default = f.default if f.default is not MISSING else None
        if isinstance(default, bool):
            if default:
                group.add_argument(
                    "--no-" + f.name.replace("_", "-"),
                    dest=f.name,
                    action="store_const",
                    const=False,
                    default=None,
                    help=f"Disable: {help_text}",
                )
            else:
                group.add_argument(
                    _option_flag(f.name), dest=f.name, action="store_const", const=True, default=None, help=help_text
                )
            continue
        group.add_argument(
            _option_flag(f.name),
            dest=f.name,
            type=f.metadata.get("type", str),
            default=None,
            metavar=f.name.upper(),
            help=f"{help_text} (default: {default})",
        )


def build_options(parsed_args: argparse.Namespace, options_class: type) -> Any:
    """Instantiate an options dataclass from the flags that were given.

    Raises
    ------
    ValidationError
        If a value is rejected by the dataclass validation.

    """
    values = {f.name: getattr(parsed_args, f.name) for f in fields(options_class)}
    values = {name: value for name, value in values.items() if value is not None}
    try:
        return options_class(**values)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the ``convert`` and ``fix-charts`` commands."""
    parser = argparse.ArgumentParser(
        prog="pptx2html",
        description="Convert PowerPoint presentations to positioned HTML and fix generated chart styling.",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {_get_version()}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING)",
    )
    common.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    common.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with very verbose logging",
    )
    common.add_argument(
        "--rich",
        action="store_true",
        help="Print a formatted summary when done",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", parents=[common], help="Convert a PPTX file to HTML")
    convert.add_argument("input", help="Path to the .pptx file")
    convert.add_argument("-o", "--out", dest="out", metavar="PATH", help="Output HTML file (default: stdout)")
    add_options_arguments(convert, RenderOptions, "Rendering options")

    fix = subparsers.add_parser(
        "fix-charts", parents=[common], help="Fix the styling of charts/chartN.xml parts in a directory"
    )
    fix.add_argument("directory", help="Directory containing a charts/ folder (for example an extracted ppt/)")
    add_options_arguments(fix, ChartFixOptions, "Chart fix options")
    return parser


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _print_summary(title: str, rows: list[tuple[str, str]], use_rich: bool) -> None:
    """Print a key/value summary to stderr, as a rich panel when requested."""
    if use_rich:
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table

        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan")
        table.add_column(style="white")
        for key, value in rows:
            table.add_row(key, value)
        Console(stderr=True).print(Panel(table, title=title, expand=False))
        return
    for key, value in rows:
        print(f"{key}: {value}", file=sys.stderr)


def _run_convert(parsed_args: argparse.Namespace) -> int:
    from pptx2html.converter import document_title, html_document, open_presentation, presentation_slides

    options = build_options(parsed_args, RenderOptions)
    prs = open_presentation(parsed_args.input)
    slides = presentation_slides(prs, options)
    html = html_document(slides, document_title(prs, parsed_args.input))

    if parsed_args.out:
        out_path = Path(parsed_args.out)
        try:
            out_path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not write output: {e}", file_path=str(out_path), original_error=e) from e
        destination = str(out_path)
    else:
        sys.stdout.write(html)
        destination = "stdout"

    if parsed_args.rich or parsed_args.out:
        _print_summary(
            "pptx2html convert",
            [("Input", str(parsed_args.input)), ("Slides", str(len(slides))), ("Output", destination)],
            parsed_args.rich,
        )
    return EXIT_SUCCESS


def _run_fix_charts(parsed_args: argparse.Namespace) -> int:
    options = build_options(parsed_args, ChartFixOptions)
    directory = Path(parsed_args.directory)
    if not directory.is_dir():
        raise FileError(f"Directory not found: {directory}", file_path=str(directory))

    result: ChartFixResult = fix_chart_styling(directory, options)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return EXIT_ERROR
    _print_summary(
        "pptx2html fix-charts",
        [
            ("Directory", str(directory)),
            ("Charts found", str(result.total_charts)),
            ("Charts fixed", str(result.charts_fixed)),
        ],
        parsed_args.rich,
    )
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return a process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging(parsed_args)

    handlers = {"convert": _run_convert, "fix-charts": _run_fix_charts}
    try:
        return handlers[parsed_args.command](parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except Pptx2HtmlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
