#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/tree/xml_codec.py
"""XML parsing into immutable trees and minimal serialization.

Parsing goes through :mod:`defusedxml.minidom`, which forbids entity
declarations and external references, and then copies the DOM into the
frozen nodes of :mod:`doccompare.tree.nodes`. Comments, CDATA sections,
processing instructions and the doctype survive the trip. The XML
declaration is not part of the DOM, so it is captured from the raw text.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from xml.dom import Node as DomNode
from xml.parsers.expat import ExpatError

import defusedxml
import defusedxml.minidom

from doccompare.constants import MAX_NESTING_DEPTH
from doccompare.exceptions import ParsingError
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

logger = logging.getLogger(__name__)

XML_DECLARATION_RE = re.compile(r"^<\?xml\s+[^?]+\?>", re.IGNORECASE)

_MAX_MESSAGE_LENGTH = 100


def escape_text(text: str) -> str:
    """Escape character data for use between tags.

    A carriage return is written as a character reference because a parser
    turns a literal one into a newline.
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace("\r", "&#13;")


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes.

    Newlines and tabs become character references since attribute-value
    normalization would turn literal ones into spaces.
    """
    return escape_text(value).replace('"', "&quot;").replace("\n", "&#10;").replace("\t", "&#9;")


def capture_declaration(text: str) -> Optional[str]:
    """Return the leading ``<?xml ...?>`` declaration of ``text``, if any."""
    match = XML_DECLARATION_RE.match(text)
    return match.group(0) if match else None


def _error_message(error: Exception) -> str:
    message = str(error) or error.__class__.__name__
    return message.split("\n")[0][:_MAX_MESSAGE_LENGTH]


def _convert(dom_node: DomNode, depth: int = 1) -> Optional[Node]:
    """Copy a DOM node (and its subtree) into tree nodes."""
    node_type = dom_node.nodeType
    if node_type == DomNode.ELEMENT_NODE:
        if depth > MAX_NESTING_DEPTH:
            raise ParsingError(
                f"Elements are nested more than {MAX_NESTING_DEPTH} levels deep", line=1, document_kind="xml"
            )
        children = []
        for child in dom_node.childNodes:
            converted = _convert(child, depth + 1)
            if converted is not None:
                children.append(converted)
        return Element(
            name=dom_node.tagName,
            attributes=tuple(dom_node.attributes.items()),
            children=tuple(children),
        )
    if node_type == DomNode.TEXT_NODE:
        return Text(dom_node.data)
    if node_type == DomNode.CDATA_SECTION_NODE:
        return CData(dom_node.data)
    if node_type == DomNode.COMMENT_NODE:
        return Comment(dom_node.data)
    if node_type == DomNode.PROCESSING_INSTRUCTION_NODE:
        return ProcessingInstruction(dom_node.target, dom_node.data or "")
    if node_type == DomNode.DOCUMENT_TYPE_NODE:
        return DocumentType(
            name=dom_node.name,
            public_id=dom_node.publicId or None,
            system_id=dom_node.systemId or None,
            internal_subset=dom_node.internalSubset or None,
        )
    logger.debug(f"Skipping unsupported DOM node type {node_type}")
    return None


def parse_xml(text: str) -> Document:
    """Parse XML text into a :class:`Document`.

    Parameters
    ----------
    text : str
        XML source

    Returns
    -------
    Document
        Freshly built, immutable document tree

    Raises
    ------
    ParsingError
        If the text is not well-formed XML, uses forbidden DTD features,
        cannot be encoded (lone surrogates) or nests elements more than
        ``MAX_NESTING_DEPTH`` levels deep

    """
    try:
        dom = defusedxml.minidom.parseString(text)
    except ExpatError as e:
        raise ParsingError(_error_message(e), line=e.lineno or 1, document_kind="xml", original_error=e) from e
    except (defusedxml.DefusedXmlException, UnicodeError, RecursionError) as e:
        raise ParsingError(_error_message(e), line=1, document_kind="xml", original_error=e) from e

    children = []
    for child in dom.childNodes:
        converted = _convert(child)
        if converted is not None:
            children.append(converted)
    dom.unlink()

    return Document(tuple(children), kind="xml", declaration=capture_declaration(text))


def serialize_doctype(node: DocumentType) -> str:
    """Render a doctype declaration."""
    parts = [f"<!DOCTYPE {node.name}"]
    if node.public_id:
        parts.append(f' PUBLIC "{node.public_id}"')
    if node.system_id:
        parts.append(f' "{node.system_id}"' if node.public_id else f' SYSTEM "{node.system_id}"')
    if node.internal_subset:
        parts.append(f" [{node.internal_subset}]")
    parts.append(">")
    return "".join(parts)


def serialize_processing_instruction(node: ProcessingInstruction) -> str:
    """Render a processing instruction."""
    if node.data:
        return f"<?{node.target} {node.data}?>"
    return f"<?{node.target}?>"


def serialize_start_tag(node: Element, self_closing: bool = False) -> str:
    """Render an element's start tag with escaped attributes."""
    attrs = "".join(f' {name}="{escape_attribute(value)}"' for name, value in node.attributes)
    return f"<{node.name}{attrs}{'/' if self_closing else ''}>"


def serialize_node_minimal(node: Node) -> str:
    """Serialize a node exactly, without adding any whitespace."""
    if isinstance(node, Element):
        if not node.children:
            return serialize_start_tag(node, self_closing=True)
        inner = "".join(serialize_node_minimal(child) for child in node.children)
        return f"{serialize_start_tag(node)}{inner}</{node.name}>"
    if isinstance(node, Text):
        return escape_text(node.content)
    if isinstance(node, CData):
        return f"<![CDATA[{node.content}]]>"
    if isinstance(node, Comment):
        return f"<!--{node.content}-->"
    if isinstance(node, ProcessingInstruction):
        return serialize_processing_instruction(node)
    if isinstance(node, DocumentType):
        return serialize_doctype(node)
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def serialize_xml_minimal(document: Document) -> str:
    """Serialize a document without pretty-printing.

    Text content is reproduced exactly; top-level nodes are separated by a
    single newline and the captured declaration, if any, leads the output.
    """
    body = "\n".join(serialize_node_minimal(child) for child in document.children)
    if document.declaration:
        return f"{document.declaration}\n{body}"
    return body
