#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/commands/normalize.py
"""The ``format`` and ``sort`` commands.

``format`` never fails on malformed input, it prints the document as
written. ``sort`` exits with status 1 when the document cannot be parsed.
"""

from __future__ import annotations

import argparse
import sys

from doccompare.api import format_text, sort_text
from doccompare.cli.commands.shared import (
    EXIT_FILE_ERROR,
    EXIT_INVALID,
    EXIT_SUCCESS,
    InputError,
    OutputError,
    add_kind_argument,
    read_input,
    resolve_kind,
    write_output,
)
from doccompare.exceptions import SortError
from doccompare.options import FormatOptions


def _create_normalize_parser(command: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"doccompare {command}", description=description)
    parser.add_argument("input", help="Document to process (use '-' for stdin)")
    add_kind_argument(parser, "--kind")
    parser.add_argument(
        "--normalize-whitespace",
        action="store_true",
        default=None,
        help="Collapse whitespace runs inside XML mixed content",
    )
    parser.add_argument("--output", "-o", help="Write the result to a file (default: stdout)")
    return parser


def _run(command: str, description: str, args: list[str] | None, options: FormatOptions | None) -> int:
    parser = _create_normalize_parser(command, description)
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    try:
        text, _label = read_input(parsed.input)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    kind = resolve_kind(parsed.kind, parsed.input, text)
    format_options = options or FormatOptions()
    if parsed.normalize_whitespace is not None:
        format_options = format_options.create_updated(normalize_whitespace=parsed.normalize_whitespace)

    if command == "sort":
        try:
            result = sort_text(text, kind, format_options)
        except SortError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_INVALID
    else:
        result = format_text(text, kind, format_options)

    try:
        write_output(result, parsed.output)
    except OutputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    return EXIT_SUCCESS


def handle_format_command(args: list[str] | None = None, options: FormatOptions | None = None) -> int:
    """Pretty-print a document. Returns 0, or 2 when the file cannot be read."""
    return _run("format", "Pretty-print an XML or JSON document", args, options)


def handle_sort_command(args: list[str] | None = None, options: FormatOptions | None = None) -> int:
    """Sort a document into canonical order. Returns 1 for unparseable input."""
    return _run("sort", "Sort keys, attributes and elements of an XML or JSON document", args, options)
