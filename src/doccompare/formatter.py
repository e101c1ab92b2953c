#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/formatter.py
"""Pretty-printing of XML and JSON documents.

Formatting is fail-soft: when a document does not parse, the input is
returned unchanged so an in-progress edit is never destroyed. Callers
that need to surface the problem run :func:`doccompare.validation.validate_document`
separately.

XML Layout Rules
----------------
- An element without children is written self-closing.
- An element whose only child is a text node is written on one line.
- An element with mixed content (a direct child holding non-whitespace
  character data) is written inline with no added whitespace anywhere
  inside it. With ``normalize_whitespace`` runs of whitespace collapse to
  one space and the edges of the element's own content are trimmed.
- Any other element is written block-style: one child per line, indented
  two spaces deeper, with whitespace-only text dropped.
- Comments, CDATA sections, processing instructions and the doctype are
  reproduced verbatim and a captured ``<?xml ...?>`` declaration is put back
  in front of the output.
"""

from __future__ import annotations

import logging
import re

from doccompare.constants import DEFAULT_INDENT, DEFAULT_JSON_INDENT, DocumentKind
from doccompare.exceptions import ParsingError
from doccompare.tree.json_codec import parse_json, serialize_json_pretty
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
from doccompare.tree.xml_codec import (
    capture_declaration,
    escape_text,
    parse_xml,
    serialize_doctype,
    serialize_processing_instruction,
    serialize_start_tag,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RUN_RE = re.compile(r"\s+")


class XmlPrettyPrinter:
    """Serialize an XML :class:`Document` in indented, human-readable form.

    Parameters
    ----------
    normalize_whitespace : bool, default = False
        Collapse whitespace runs inside mixed content and trim its edges
    indent : str, default = two spaces
        Indentation added per nesting level for block-style elements

    """

    def __init__(self, normalize_whitespace: bool = False, indent: str = DEFAULT_INDENT) -> None:
        """Store layout settings."""
        self.normalize_whitespace = normalize_whitespace
        self.indent = indent

    def render(self, document: Document) -> str:
        """Render the whole document, declaration included."""
        parts = [self._block(child, "") for child in document.children]
        serialized = "\n".join(part for part in parts if part)
        if document.declaration and capture_declaration(serialized.lstrip()) is None:
            serialized = f"{document.declaration}\n{serialized}"
        return serialized

    def _collapse(self, text: str, first: bool, last: bool) -> str:
        if not self.normalize_whitespace:
            return text
        text = _WHITESPACE_RUN_RE.sub(" ", text)
        if first:
            text = text.lstrip()
        if last:
            text = text.rstrip()
        return text

    def _block(self, node: Node, indent: str) -> str:
        """Serialize a node that starts on its own line."""
        if isinstance(node, Element):
            return self._block_element(node, indent)
        if isinstance(node, Text):
            stripped = node.content.strip()
            return f"{indent}{escape_text(stripped)}" if stripped else ""
        if isinstance(node, CData):
            return f"{indent}<![CDATA[{node.content}]]>"
        if isinstance(node, Comment):
            return f"{indent}<!--{node.content}-->"
        if isinstance(node, ProcessingInstruction):
            return f"{indent}{serialize_processing_instruction(node)}"
        if isinstance(node, DocumentType):
            return serialize_doctype(node)
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    def _block_element(self, node: Element, indent: str) -> str:
        if not node.children:
            return f"{indent}{serialize_start_tag(node, self_closing=True)}"

        if (len(node.children) == 1 and isinstance(node.children[0], Text)) or node.has_mixed_content:
            inner = self._inline_children(node, trim_edges=True)
            if not inner:
                return f"{indent}{serialize_start_tag(node, self_closing=True)}"
            return f"{indent}{serialize_start_tag(node)}{inner}</{node.name}>"

        lines = [f"{indent}{serialize_start_tag(node)}"]
        child_indent = indent + self.indent
        for child in node.children:
            serialized = self._block(child, child_indent)
            if serialized:
                lines.append(serialized)
        lines.append(f"{indent}</{node.name}>")
        return "\n".join(lines)

    def _inline_children(self, node: Element, trim_edges: bool) -> str:
        last_index = len(node.children) - 1
        parts = []
        for index, child in enumerate(node.children):
            if isinstance(child, Text):
                text = self._collapse(
                    child.content,
                    first=trim_edges and index == 0,
                    last=trim_edges and index == last_index,
                )
                parts.append(escape_text(text))
            else:
                parts.append(self._inline(child))
        return "".join(parts)

    def _inline(self, node: Node) -> str:
        """Serialize a node inside mixed content, adding no whitespace."""
        if isinstance(node, Element):
            if not node.children:
                return serialize_start_tag(node, self_closing=True)
            return f"{serialize_start_tag(node)}{self._inline_children(node, trim_edges=False)}</{node.name}>"
        if isinstance(node, Text):
            return escape_text(self._collapse(node.content, first=False, last=False))
        if isinstance(node, CData):
            return f"<![CDATA[{node.content}]]>"
        if isinstance(node, Comment):
            return f"<!--{node.content}-->"
        if isinstance(node, ProcessingInstruction):
            return serialize_processing_instruction(node)
        if isinstance(node, DocumentType):
            return serialize_doctype(node)
        raise TypeError(f"Unsupported node type: {type(node).__name__}")


def format_xml(text: str, normalize_whitespace: bool = False) -> str:
    """Pretty-print XML text, returning it unchanged if it does not parse.

    Parameters
    ----------
    text : str
        XML source
    normalize_whitespace : bool, default = False
        Collapse whitespace inside mixed content

    Returns
    -------
    str
        Indented XML, the empty string for blank input, or the original
        text when it is not well-formed

    """
    if not text.strip():
        return ""
    try:
        document = parse_xml(text)
    except ParsingError as e:
        logger.debug(f"Leaving XML unformatted, parse failed at line {e.line}: {e.message}")
        return text
    return XmlPrettyPrinter(normalize_whitespace=normalize_whitespace).render(document)


def format_json(text: str, indent: int = DEFAULT_JSON_INDENT) -> str:
    """Pretty-print JSON text with key order preserved.

    Invalid JSON is returned unchanged and blank input becomes ``""``.
    """
    if not text.strip():
        return ""
    try:
        document = parse_json(text)
    except ParsingError as e:
        logger.debug(f"Leaving JSON unformatted, parse failed at line {e.line}: {e.message}")
        return text
    return serialize_json_pretty(document, indent=indent)


def format_document(text: str, kind: DocumentKind, normalize_whitespace: bool = False) -> str:
    """Format a document of any kind.

    Parameters
    ----------
    text : str
        Document source
    kind : {'xml', 'json', 'text'}
        Document kind; plain text is returned as-is
    normalize_whitespace : bool, default = False
        Only affects XML mixed content

    Returns
    -------
    str
        Formatted document; never raises for malformed input

    """
    if kind == "xml":
        return format_xml(text, normalize_whitespace=normalize_whitespace)
    if kind == "json":
        return format_json(text)
    return text
