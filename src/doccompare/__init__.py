#  Copyright (c) 2025 Tom Villani, Ph.D.
"""doccompare - Normalize and compare XML, JSON and plain-text documents.

doccompare is the computational core of a side-by-side document comparison
tool. Documents are optionally pretty-printed or sorted into a canonical
order, then aligned line by line into a unified view and a split
(two-column) view, with word- or character-level detail for replaced
lines.

Key Features
------------
- XML and JSON pretty-printing that preserves mixed content and prolog nodes
- Canonical sorting of JSON keys, XML attributes and sibling elements
- Line alignment with phantom padding so both columns stay in step
- Options to ignore whitespace, blank lines and XML comments
- Word and character highlighting for replaced lines
- Per-side well-formedness checks with line numbers
- A small structural XSD check

Requirements
------------
- Python 3.10+
- defusedxml for hardened XML parsing
- rich for the command-line side-by-side view

Examples
--------
Compare two JSON documents ignoring key order:

    >>> from doccompare import DiffOptions, compare_documents
    >>> result = compare_documents(
    ...     '{"b": 1, "a": 2}',
    ...     '{"a": 2, "b": 3}',
    ...     left_kind="json",
    ...     options=DiffOptions(semantic=True),
    ... )
    >>> result.statistics()["total_changes"]
    2

Format a minified XML document:

    >>> from doccompare import format_text
    >>> print(format_text("<a><b>1</b></a>", "xml"))
    <a>
      <b>1</b>
    </a>

"""

from doccompare.api import compare_documents, format_text, sort_text, validate_text
from doccompare.detection import detect_document_kind, is_minified
from doccompare.diff import ComparisonResult, Line, LineKind, Segment, align, diff_pair, intra_line_pairs
from doccompare.exceptions import (
    ConfigError,
    DocCompareError,
    ParsingError,
    SchemaError,
    SortError,
    ValidationError,
)
from doccompare.formatter import format_document
from doccompare.options import DiffOptions, FormatOptions
from doccompare.registry import DocumentHandler, HandlerRegistry, create_default_registry
from doccompare.schema import SchemaReport, check_schema
from doccompare.sorter import sort_document
from doccompare.validation import ParseError, validate_document, validate_pair

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ComparisonResult",
    "ConfigError",
    "DiffOptions",
    "DocCompareError",
    "DocumentHandler",
    "FormatOptions",
    "HandlerRegistry",
    "Line",
    "LineKind",
    "ParseError",
    "ParsingError",
    "SchemaError",
    "SchemaReport",
    "Segment",
    "SortError",
    "ValidationError",
    "align",
    "check_schema",
    "compare_documents",
    "create_default_registry",
    "detect_document_kind",
    "diff_pair",
    "format_document",
    "format_text",
    "intra_line_pairs",
    "is_minified",
    "sort_document",
    "sort_text",
    "validate_document",
    "validate_pair",
    "validate_text",
]
