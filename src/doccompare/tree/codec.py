#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/tree/codec.py
"""Kind-dispatching entry points for parsing and minimal serialization."""

from __future__ import annotations

from doccompare.constants import DocumentKind
from doccompare.exceptions import ValidationError
from doccompare.tree.json_codec import parse_json, serialize_json_minimal
from doccompare.tree.nodes import Document
from doccompare.tree.xml_codec import parse_xml, serialize_xml_minimal


def parse(text: str, kind: DocumentKind) -> Document:
    """Parse ``text`` as a document of the given kind.

    Parameters
    ----------
    text : str
        Document source
    kind : {'xml', 'json'}
        Syntax to parse

    Returns
    -------
    Document
        Freshly built document tree

    Raises
    ------
    ParsingError
        If the text is malformed
    ValidationError
        If ``kind`` has no tree representation (plain text included)

    """
    if kind == "xml":
        return parse_xml(text)
    if kind == "json":
        return parse_json(text)
    raise ValidationError(f"Documents of kind '{kind}' cannot be parsed into a tree", "kind", kind)


def serialize_minimal(document: Document) -> str:
    """Serialize a document without pretty-printing, in its own syntax."""
    if document.kind == "json":
        return serialize_json_minimal(document)
    return serialize_xml_minimal(document)
