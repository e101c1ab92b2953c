#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/detection.py
"""Heuristics for recognizing document kinds."""

from __future__ import annotations

from doccompare.constants import MINIFIED_MIN_LENGTH, DocumentKind
from doccompare.validation import validate_document


def detect_document_kind(text: str) -> DocumentKind:
    """Guess whether ``text`` is XML, JSON or plain text.

    Text starting with ``<`` that is well-formed XML is ``xml``; text that
    parses as JSON is ``json``; anything else, blank input included, is
    ``text``.

    Examples
    --------
    >>> detect_document_kind("<a/>")
    'xml'
    >>> detect_document_kind('{"a": 1}')
    'json'
    >>> detect_document_kind("<a>")
    'text'

    """
    stripped = text.strip()
    if not stripped:
        return "text"
    if stripped.startswith("<") and validate_document(stripped, "xml") is None:
        return "xml"
    if validate_document(stripped, "json") is None:
        return "json"
    return "text"


def is_minified(text: str) -> bool:
    """Return True for long single-line documents that would benefit from formatting."""
    stripped = text.strip()
    return len(stripped) > MINIFIED_MIN_LENGTH and "\n" not in stripped
