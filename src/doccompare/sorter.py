#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/sorter.py
"""Canonical ordering of XML and JSON documents.

Sorting produces a form in which documents that differ only in the order
of keys, attributes or interchangeable sibling elements become identical,
which is what the semantic diff mode relies on. Unlike formatting, sorting
is strict: an unparseable document raises :class:`SortError` instead of
being returned as-is, because the caller expects canonical output.

The passes build new trees; parsed nodes are never reordered in place.
"""

from __future__ import annotations

import logging

from doccompare.constants import DocumentKind
from doccompare.exceptions import ParsingError, SortError
from doccompare.formatter import format_document
from doccompare.tree.codec import parse, serialize_minimal
from doccompare.tree.json_codec import ARRAY_TAG, KEY_ATTRIBUTE, MEMBER_TAG, OBJECT_TAG
from doccompare.tree.nodes import Document, Element, Node

logger = logging.getLogger(__name__)


def sort_xml_element(element: Element) -> Element:
    """Return a sorted copy of an XML element and its subtree.

    Attributes are ordered by name. Unless the element has mixed content,
    its child elements are stably ordered by tag name and placed after the
    element's other children, which keep their relative order. Every child
    element is sorted recursively either way.
    """
    attributes = tuple(sorted(element.attributes, key=lambda attr: attr[0]))
    children = tuple(sort_xml_element(child) if isinstance(child, Element) else child for child in element.children)

    if not element.has_mixed_content:
        others = tuple(child for child in children if not isinstance(child, Element))
        elements = sorted((child for child in children if isinstance(child, Element)), key=lambda el: el.name)
        children = others + tuple(elements)

    return Element(element.name, attributes=attributes, children=children)


def _member_key(member: Node) -> str:
    if isinstance(member, Element):
        return member.get(KEY_ATTRIBUTE) or ""
    return ""


def sort_json_node(node: Node) -> Node:
    """Return a copy of a JSON tree node with object keys sorted at every level.

    Array order is preserved; array items are sorted recursively.
    """
    if not isinstance(node, Element):
        return node
    if node.name == OBJECT_TAG:
        members = [sort_json_node(member) for member in node.children]
        members.sort(key=_member_key)
        return Element(OBJECT_TAG, children=tuple(members))
    if node.name in (ARRAY_TAG, MEMBER_TAG):
        return Element(
            node.name,
            attributes=node.attributes,
            children=tuple(sort_json_node(child) for child in node.children),
        )
    return node


def sort_tree(document: Document) -> Document:
    """Return a new document whose root has been sorted for its kind."""
    if document.kind == "json":
        return document.with_root(sort_json_node(document.root))
    root = document.root
    if not isinstance(root, Element):
        return document
    return document.with_root(sort_xml_element(root))


def sort_lines(text: str) -> str:
    """Sort plain-text lines by code point. Blank input sorts to ``""``."""
    if not text.strip():
        return ""
    return "\n".join(sorted(text.split("\n")))


def sort_document(text: str, kind: DocumentKind, normalize_whitespace: bool = False) -> str:
    """Sort a document into canonical order and format the result.

    Parameters
    ----------
    text : str
        Document source
    kind : {'xml', 'json', 'text'}
        Document kind; plain text is sorted line by line
    normalize_whitespace : bool, default = False
        Passed to the formatter for XML mixed content

    Returns
    -------
    str
        Sorted and formatted document, ``""`` for blank input

    Raises
    ------
    SortError
        If the document does not parse

    Examples
    --------
    >>> print(sort_document('{"b": 1, "a": {"d": 2, "c": 3}}', "json"))
    {
      "a": {
        "c": 3,
        "d": 2
      },
      "b": 1
    }

    """
    if kind == "text":
        return sort_lines(text)
    if not text.strip():
        return ""

    try:
        document = parse(text, kind)
    except ParsingError as e:
        logger.debug(f"Cannot sort {kind} document: {e.message} (line {e.line})")
        raise SortError(
            f"Failed to sort {kind.upper()}. Ensure it is valid first: {e.message}",
            document_kind=kind,
            original_error=e,
        ) from e

    minimal = serialize_minimal(sort_tree(document))
    return format_document(minimal, kind, normalize_whitespace=normalize_whitespace)
