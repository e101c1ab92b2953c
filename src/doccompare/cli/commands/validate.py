#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/commands/validate.py
"""The ``validate`` command: well-formedness and optional XSD checks."""

from __future__ import annotations

import argparse
import sys

from doccompare.api import validate_text
from doccompare.cli.commands.shared import (
    EXIT_FILE_ERROR,
    EXIT_INVALID,
    EXIT_SUCCESS,
    InputError,
    add_kind_argument,
    read_input,
    resolve_kind,
)


def _create_validate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doccompare validate",
        description="Check that a document is well-formed, optionally against an XSD",
    )
    parser.add_argument("input", help="Document to check (use '-' for stdin)")
    add_kind_argument(parser, "--kind")
    parser.add_argument("--schema", help="XSD file to check XML documents against")
    return parser


def handle_validate_command(args: list[str] | None = None) -> int:
    """Validate a document.

    Each problem is printed as ``<label>:<line>: <message>``.

    Returns
    -------
    int
        0 if valid, 1 if not, 2 on file errors or a schema given for a
        non-XML document

    """
    parser = _create_validate_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    try:
        text, label = read_input(parsed.input)
        schema = read_input(parsed.schema)[0] if parsed.schema else None
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    kind = resolve_kind(parsed.kind, parsed.input, text)
    if schema is not None and kind != "xml":
        print(f"Error: --schema only applies to XML documents, not {kind}", file=sys.stderr)
        return EXIT_FILE_ERROR
    errors = validate_text(text, kind, schema=schema)
    for error in errors:
        print(f"{label}:{error.line}: {error.message}")

    if errors:
        return EXIT_INVALID
    print(f"{label}: valid {kind}", file=sys.stderr)
    return EXIT_SUCCESS
