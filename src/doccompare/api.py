#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/api.py
"""High-level entry points combining the normalization and diff layers."""

from __future__ import annotations

import logging
from typing import Optional

from doccompare.constants import DocumentKind
from doccompare.diff.aligner import align
from doccompare.diff.lines import ComparisonResult
from doccompare.exceptions import SortError
from doccompare.formatter import format_document
from doccompare.options import DiffOptions, FormatOptions
from doccompare.schema import SchemaReport, check_schema
from doccompare.sorter import sort_document
from doccompare.validation import ParseError, validate_document

logger = logging.getLogger(__name__)


def _semantic_form(text: str, kind: DocumentKind, side: str, normalize_whitespace: bool) -> str:
    try:
        return sort_document(text, kind, normalize_whitespace=normalize_whitespace)
    except SortError as e:
        logger.debug(f"Comparing {side} side unsorted: {e.message}")
        return text


def compare_documents(
    left: str,
    right: str,
    *,
    left_kind: DocumentKind = "text",
    right_kind: Optional[DocumentKind] = None,
    options: Optional[DiffOptions] = None,
    format_options: Optional[FormatOptions] = None,
) -> ComparisonResult:
    """Compare two documents line by line.

    Parameters
    ----------
    left : str
        Original document
    right : str
        Updated document
    left_kind : {'xml', 'json', 'text'}, default = 'text'
        Kind of the left document; only used for semantic comparison
    right_kind : {'xml', 'json', 'text'}, optional
        Kind of the right document, defaults to ``left_kind``
    options : DiffOptions, optional
        Comparison options
    format_options : FormatOptions, optional
        Options for the sorted form used by semantic comparison

    Returns
    -------
    ComparisonResult
        Unified and split views at ``options.granularity``

    Notes
    -----
    With ``options.semantic`` each side is sorted by its own kind first. A
    side that cannot be sorted, for instance because it is malformed, is
    compared as written. With ``format_options.normalize_whitespace`` the
    sorted form also collapses whitespace in XML mixed content, so
    ``<p>a  b</p>`` and ``<p>a b</p>`` compare equal.

    Examples
    --------
    >>> result = compare_documents(
    ...     '{"b": 1, "a": 2}', '{"a": 2, "b": 1}', left_kind="json", options=DiffOptions(semantic=True)
    ... )
    >>> result.has_changes
    False

    """
    options = options or DiffOptions()
    format_options = format_options or FormatOptions()
    right_kind = right_kind or left_kind

    if options.semantic:
        normalize = format_options.normalize_whitespace
        left = _semantic_form(left, left_kind, "left", normalize)
        right = _semantic_form(right, right_kind, "right", normalize)

    return align(
        left,
        right,
        mode=options.granularity,
        ignore_whitespace=options.ignore_whitespace,
        ignore_blank_lines=options.ignore_blank_lines,
        ignore_comments=options.ignore_comments,
    )


def format_text(text: str, kind: DocumentKind, options: Optional[FormatOptions] = None) -> str:
    """Pretty-print ``text``; malformed input is returned unchanged."""
    options = options or FormatOptions()
    return format_document(text, kind, normalize_whitespace=options.normalize_whitespace)


def sort_text(text: str, kind: DocumentKind, options: Optional[FormatOptions] = None) -> str:
    """Sort ``text`` into canonical order.

    Raises
    ------
    SortError
        If the document does not parse

    """
    options = options or FormatOptions()
    return sort_document(text, kind, normalize_whitespace=options.normalize_whitespace)


def validate_text(text: str, kind: DocumentKind, schema: Optional[str] = None) -> list[ParseError]:
    """Check ``text`` for well-formedness and, for XML, against an XSD.

    Returns
    -------
    list of ParseError
        Empty when the document is valid. A well-formedness error stops
        the check; schema violations are only looked for in well-formed
        documents. Schemas only apply to XML; a schema given with another
        kind is ignored with a warning.

    """
    if schema is not None and kind != "xml":
        logger.warning(f"Ignoring schema: only XML documents can be checked against an XSD, not {kind}")

    error = validate_document(text, kind)
    if error is not None:
        return [error]
    if schema is not None and kind == "xml":
        report: SchemaReport = check_schema(text, schema)
        return list(report.errors)
    return []
