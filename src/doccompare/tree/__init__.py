#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/tree/__init__.py
"""Document trees shared by the formatter, the sorter and the schema checker.

Examples
--------
Parse and re-serialize an XML document:
    >>> from doccompare.tree import parse, serialize_minimal
    >>> doc = parse('<a x="1"> <b/> </a>', "xml")
    >>> serialize_minimal(doc)
    '<a x="1"> <b/> </a>'

"""

from doccompare.tree.codec import parse, serialize_minimal
from doccompare.tree.nodes import (
    CData,
    Comment,
    Document,
    DocumentType,
    Element,
    Node,
    ProcessingInstruction,
    Text,
)

__all__ = [
    "CData",
    "Comment",
    "Document",
    "DocumentType",
    "Element",
    "Node",
    "ProcessingInstruction",
    "Text",
    "parse",
    "serialize_minimal",
]
