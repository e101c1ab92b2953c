#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/commands/diff.py
"""Document comparison command.

Compares two documents line by line and prints the unified listing, the
side-by-side table or a JSON export. The exit status follows ``diff``:
0 when the documents are identical, 1 when they differ, 2 on file errors.
"""

from __future__ import annotations

import argparse
import logging
import sys

from doccompare.api import compare_documents
from doccompare.cli.commands.shared import (
    EXIT_DIFFERENCES,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    InputError,
    OutputError,
    add_kind_argument,
    read_input,
    resolve_kind,
    write_output,
)
from doccompare.constants import DIFF_GRANULARITIES
from doccompare.diff.renderers import JsonDiffRenderer, SplitDiffRenderer, UnifiedDiffRenderer
from doccompare.options import DiffOptions, FormatOptions
from doccompare.validation import validate_pair

logger = logging.getLogger(__name__)


def _create_diff_parser() -> argparse.ArgumentParser:
    """Create argparse parser for the diff command.

    Boolean flags default to None so that unset flags keep the value from
    the configuration file.
    """
    parser = argparse.ArgumentParser(
        prog="doccompare diff",
        description="Compare two XML, JSON or text documents line by line",
    )
    parser.add_argument("left", help="Original document (use '-' for stdin)")
    parser.add_argument("right", help="Updated document (use '-' for stdin)")

    add_kind_argument(parser, "--kind")
    add_kind_argument(parser, "--left-kind", dest="left_kind")
    add_kind_argument(parser, "--right-kind", dest="right_kind")

    parser.add_argument(
        "--granularity",
        choices=DIFF_GRANULARITIES,
        default=None,
        help="Intra-line highlighting in JSON output: lines (default), words or chars",
    )
    parser.add_argument(
        "--ignore-whitespace",
        "-w",
        action="store_true",
        default=None,
        help="Ignore leading and trailing whitespace (like diff -w)",
    )
    parser.add_argument("--ignore-blank-lines", action="store_true", default=None, help="Ignore blank lines")
    parser.add_argument("--ignore-comments", action="store_true", default=None, help="Ignore XML comments")
    parser.add_argument(
        "--semantic",
        action="store_true",
        default=None,
        help="Sort keys, attributes and elements of both documents before comparing",
    )
    parser.add_argument(
        "--normalize-whitespace",
        action="store_true",
        default=None,
        help="With --semantic, collapse whitespace runs inside XML mixed content",
    )

    parser.add_argument(
        "--format",
        "-f",
        choices=["unified", "split", "json"],
        default="unified",
        help="Output format: unified (default), split (side by side) or json",
    )
    parser.add_argument("--line-numbers", "-n", action="store_true", help="Show line numbers in unified output")
    parser.add_argument("--output", "-o", help="Write the diff to a file (default: stdout)")
    return parser


def _merge_options(parsed: argparse.Namespace, base: DiffOptions) -> DiffOptions:
    overrides = {
        name: getattr(parsed, name)
        for name in DiffOptions.field_names()
        if getattr(parsed, name, None) is not None
    }
    return base.create_updated(**overrides) if overrides else base


def handle_diff_command(
    args: list[str] | None = None,
    options: DiffOptions | None = None,
    format_options: FormatOptions | None = None,
) -> int:
    """Handle the diff command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments after ``diff``
    options : DiffOptions, optional
        Defaults from the configuration file; flags override them
    format_options : FormatOptions, optional
        Formatting defaults for the sorted form of semantic comparison

    Returns
    -------
    int
        0 if identical, 1 if different, 2 on file errors

    """
    parser = _create_diff_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    if parsed.left == "-" and parsed.right == "-":
        print("Error: Cannot read both documents from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        left_text, left_label = read_input(parsed.left)
        right_text, right_label = read_input(parsed.right)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    left_kind = resolve_kind(parsed.left_kind or parsed.kind, parsed.left, left_text)
    right_kind = resolve_kind(parsed.right_kind or parsed.kind, parsed.right, right_text)
    diff_options = _merge_options(parsed, options or DiffOptions())
    format_options = format_options or FormatOptions()
    if parsed.normalize_whitespace is not None:
        format_options = format_options.create_updated(normalize_whitespace=parsed.normalize_whitespace)

    for label, error in zip((left_label, right_label), validate_pair(left_text, right_text, left_kind, right_kind)):
        if error is not None:
            print(f"Warning: {label} is not valid: line {error.line}: {error.message}", file=sys.stderr)

    result = compare_documents(
        left_text,
        right_text,
        left_kind=left_kind,
        right_kind=right_kind,
        options=diff_options,
        format_options=format_options,
    )
    logger.debug(f"Comparison statistics: {result.statistics()}")

    if parsed.format == "json":
        output = JsonDiffRenderer().render(result)
    elif parsed.format == "split":
        output = SplitDiffRenderer(left_title=left_label, right_title=right_label).render_to_string(result)
    else:
        output = UnifiedDiffRenderer(show_line_numbers=parsed.line_numbers).render_to_string(result)

    if not result.has_changes:
        print("No differences found.", file=sys.stderr)
    if output or parsed.output:
        try:
            write_output(output, parsed.output)
        except OutputError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR

    return EXIT_DIFFERENCES if result.has_changes else EXIT_SUCCESS
