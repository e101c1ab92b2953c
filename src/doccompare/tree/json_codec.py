#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/tree/json_codec.py
"""JSON documents as element trees.

JSON values are mapped onto the same node set as XML so the normalization
passes can treat both syntaxes uniformly:

- an object becomes ``Element("object")`` whose children are
  ``Element("member", attributes=(("key", name),))``, each wrapping one value
- an array becomes ``Element("array")`` with one child per item
- a string, number, boolean or null becomes ``Text`` holding its JSON literal

Key insertion order is preserved. When a key repeats, the last value wins
at the position of the first occurrence, as with ``dict``.
"""

from __future__ import annotations

import json
import math
from typing import Any, NoReturn

from doccompare.constants import MAX_NESTING_DEPTH
from doccompare.exceptions import ParsingError
from doccompare.tree.nodes import Document, Element, Node, Text

OBJECT_TAG = "object"
ARRAY_TAG = "array"
MEMBER_TAG = "member"
KEY_ATTRIBUTE = "key"


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Invalid JSON literal: {name}")


def _error_message(error: Exception) -> str:
    return str(error) or error.__class__.__name__


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def _nesting_depth(value: Any) -> int:
    """Return how deeply arrays and objects nest in ``value``, scalars being 0."""
    deepest = 0
    pending = [(value, 1)]
    while pending:
        item, level = pending.pop()
        if isinstance(item, dict):
            items = list(item.values())
        elif isinstance(item, list):
            items = item
        else:
            continue
        deepest = max(deepest, level)
        pending.extend((child, level + 1) for child in items)
    return deepest


def line_for_offset(text: str, offset: int) -> int:
    """Return the 1-based line containing character ``offset`` of ``text``."""
    return text.count("\n", 0, max(offset, 0)) + 1


def value_to_node(value: Any) -> Node:
    """Convert a decoded JSON value into a tree node."""
    if isinstance(value, dict):
        members = tuple(
            Element(MEMBER_TAG, attributes=((KEY_ATTRIBUTE, key),), children=(value_to_node(item),))
            for key, item in value.items()
        )
        return Element(OBJECT_TAG, children=members)
    if isinstance(value, list):
        return Element(ARRAY_TAG, children=tuple(value_to_node(item) for item in value))
    return Text(json.dumps(value, ensure_ascii=False))


def node_to_value(node: Node) -> Any:
    """Convert a tree node built by :func:`value_to_node` back into a JSON value.

    Raises
    ------
    TypeError
        If the node does not follow the JSON tree layout

    """
    if isinstance(node, Text):
        return json.loads(node.content)
    if isinstance(node, Element):
        if node.name == ARRAY_TAG:
            return [node_to_value(child) for child in node.children]
        if node.name == OBJECT_TAG:
            result: dict[str, Any] = {}
            for member in node.children:
                if not isinstance(member, Element) or member.name != MEMBER_TAG or len(member.children) != 1:
                    raise TypeError(f"Malformed JSON object member: {member!r}")
                key = member.get(KEY_ATTRIBUTE)
                if key is None:
                    raise TypeError("JSON object member without a key")
                result[key] = node_to_value(member.children[0])
            return result
    raise TypeError(f"Node is not part of a JSON tree: {node!r}")


def parse_json(text: str) -> Document:
    """Parse JSON text into a :class:`Document`.

    Parameters
    ----------
    text : str
        JSON source

    Returns
    -------
    Document
        Document whose single child is the root value

    Raises
    ------
    ParsingError
        If the text is not valid JSON; ``line`` is derived from the offset
        the decoder reported. Arrays and objects nested more than
        ``MAX_NESTING_DEPTH`` levels deep are rejected as well

    """
    try:
        value = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except json.JSONDecodeError as e:
        raise ParsingError(str(e), line=line_for_offset(text, e.pos), document_kind="json", original_error=e) from e
    except (ValueError, RecursionError) as e:
        raise ParsingError(_error_message(e), line=1, document_kind="json", original_error=e) from e
    if _nesting_depth(value) > MAX_NESTING_DEPTH:
        raise ParsingError(
            f"Arrays and objects are nested more than {MAX_NESTING_DEPTH} levels deep", line=1, document_kind="json"
        )
    return Document((value_to_node(value),), kind="json")


def serialize_json_minimal(document: Document) -> str:
    """Serialize a JSON document compactly."""
    return json.dumps(node_to_value(document.root), ensure_ascii=False, separators=(",", ":"))


def serialize_json_pretty(document: Document, indent: int = 2) -> str:
    """Serialize a JSON document with ``indent`` spaces per level."""
    return json.dumps(node_to_value(document.root), ensure_ascii=False, indent=indent)
