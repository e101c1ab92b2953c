#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/commands/shared.py
"""Helpers shared by the doccompare CLI commands."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from doccompare.constants import DOCUMENT_KINDS, DocumentKind
from doccompare.detection import detect_document_kind

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_DIFFERENCES = 1
EXIT_INVALID = 1
EXIT_FILE_ERROR = 2

_EXTENSION_KINDS: dict[str, DocumentKind] = {
    ".xml": "xml",
    ".xsd": "xml",
    ".xsl": "xml",
    ".xslt": "xml",
    ".svg": "xml",
    ".json": "json",
    ".txt": "text",
}


class InputError(Exception):
    """Raised when an input file cannot be read."""


class OutputError(Exception):
    """Raised when a result cannot be written to the requested file."""


def add_kind_argument(parser: argparse.ArgumentParser, *flags: str, dest: Optional[str] = None) -> None:
    """Add a document-kind option; the kind is guessed when it is omitted."""
    kwargs = {"dest": dest} if dest else {}
    parser.add_argument(
        *(flags or ("--kind",)),
        choices=DOCUMENT_KINDS,
        default=None,
        help="Document kind (default: from the file extension, then from the content)",
        **kwargs,
    )


def read_input(source: str) -> tuple[str, str]:
    """Read a document from a path, or from stdin for ``-``.

    Returns
    -------
    tuple of (str, str)
        Text and a display label

    Raises
    ------
    InputError
        If the file does not exist or cannot be decoded

    """
    if source == "-":
        return sys.stdin.read(), "stdin"

    path = Path(source)
    if not path.is_file():
        raise InputError(f"Source file not found: {source}")
    try:
        return path.read_text(encoding="utf-8"), str(path)
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read {source}: {e}") from e


def resolve_kind(explicit: Optional[str], source: str, text: str) -> DocumentKind:
    """Pick the document kind from the flag, the file extension or the content."""
    if explicit:
        return explicit  # type: ignore[return-value]
    kind = _EXTENSION_KINDS.get(Path(source).suffix.lower()) if source != "-" else None
    if kind is None:
        kind = detect_document_kind(text)
    logger.debug(f"Treating {source} as {kind}")
    return kind


def write_output(text: str, output: Optional[str]) -> None:
    """Write ``text`` to ``output``, or print it when no path is given.

    Raises
    ------
    OutputError
        If the file cannot be written

    """
    if output:
        if text and not text.endswith("\n"):
            text += "\n"
        try:
            Path(output).write_text(text, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise OutputError(f"Cannot write {output}: {e}") from e
        print(f"Written to: {output}", file=sys.stderr)
    else:
        print(text)
