#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/tree/nodes.py
"""Immutable tree nodes for parsed XML and JSON documents.

Every parse produces a fresh tree; nodes are frozen dataclasses holding
tuples, so a tree is never mutated after construction and no node is
shared between two trees. Normalization passes (sorting) build new trees
instead of reordering nodes in place.

Node Kinds
----------
The node set is closed. ``Node`` is the union of the six kinds below and
code that walks a tree handles each of them explicitly:

    - Element: name, ordered attributes, ordered children
    - Text: character data
    - Comment: ``<!-- ... -->``
    - CData: ``<![CDATA[ ... ]]>``
    - ProcessingInstruction: ``<?target data?>``
    - DocumentType: ``<!DOCTYPE ...>``

A ``Document`` wraps the top-level nodes and guarantees exactly one root
``Element``. JSON documents use the same nodes: objects and arrays become
elements with synthetic names and scalars become ``Text`` leaves.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

Attribute = tuple[str, str]


@dataclass(frozen=True)
class Text:
    """Character data.

    Parameters
    ----------
    content : str
        The unescaped text

    """

    content: str

    @property
    def is_whitespace(self) -> bool:
        """Return True when the text holds nothing but whitespace."""
        return not self.content.strip()


@dataclass(frozen=True)
class Comment:
    """XML comment. ``content`` excludes the ``<!--``/``-->`` delimiters."""

    content: str


@dataclass(frozen=True)
class CData:
    """XML CDATA section. ``content`` is kept verbatim."""

    content: str


@dataclass(frozen=True)
class ProcessingInstruction:
    """XML processing instruction such as ``<?xml-stylesheet href="a.xsl"?>``."""

    target: str
    data: str = ""


@dataclass(frozen=True)
class DocumentType:
    """Document type declaration.

    Parameters
    ----------
    name : str
        Root element name declared by the doctype
    public_id : str or None, default = None
        Public identifier
    system_id : str or None, default = None
        System identifier
    internal_subset : str or None, default = None
        Raw internal subset text, without the surrounding brackets

    """

    name: str
    public_id: Optional[str] = None
    system_id: Optional[str] = None
    internal_subset: Optional[str] = None


@dataclass(frozen=True)
class Element:
    """Element node with ordered attributes and children.

    Parameters
    ----------
    name : str
        Qualified tag name, including any namespace prefix
    attributes : tuple of (str, str), default = ()
        Attributes in document order; names must be unique
    children : tuple of Node, default = ()
        Child nodes in document order

    Raises
    ------
    ValueError
        If two attributes share a name

    """

    name: str
    attributes: tuple[Attribute, ...] = ()
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Reject duplicate attribute names."""
        seen: set[str] = set()
        for attr_name, _ in self.attributes:
            if attr_name in seen:
                raise ValueError(f"Duplicate attribute '{attr_name}' on <{self.name}>")
            seen.add(attr_name)

    def get(self, attr_name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value by name."""
        for key, value in self.attributes:
            if key == attr_name:
                return value
        return default

    @property
    def local_name(self) -> str:
        """Tag name without its namespace prefix."""
        return self.name.rsplit(":", 1)[-1]

    @property
    def child_elements(self) -> tuple[Element, ...]:
        """Direct children that are elements."""
        return tuple(child for child in self.children if isinstance(child, Element))

    @property
    def has_mixed_content(self) -> bool:
        """Return True when a direct child carries significant character data.

        Text with non-whitespace content counts, and so does a non-empty CDATA
        section. Whitespace inside such an element is part of the content and
        must survive formatting untouched.
        """
        for child in self.children:
            if isinstance(child, Text) and not child.is_whitespace:
                return True
            if isinstance(child, CData) and child.content:
                return True
        return False

    def iter(self) -> Iterator[Element]:
        """Yield this element and all descendant elements in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()


Node = Union[Element, Text, Comment, CData, ProcessingInstruction, DocumentType]


@dataclass(frozen=True)
class Document:
    """A parsed document: top-level nodes around exactly one root element.

    Parameters
    ----------
    children : tuple of Node
        Top-level nodes in order (doctype, comments, processing
        instructions and the root element). JSON documents hold only the
        root value.
    kind : {'xml', 'json'}, default = 'xml'
        Syntax the document was parsed from
    declaration : str or None, default = None
        Verbatim ``<?xml ...?>`` declaration captured from the source

    Raises
    ------
    ValueError
        If ``children`` does not contain exactly one root element

    """

    children: tuple[Node, ...]
    kind: str = "xml"
    declaration: Optional[str] = None
    _root_index: int = field(default=-1, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Locate the root element and check there is only one."""
        indexes = [i for i, child in enumerate(self.children) if isinstance(child, Element)]
        if self.kind == "json":
            if len(self.children) != 1:
                raise ValueError("A JSON document holds exactly one root value")
            object.__setattr__(self, "_root_index", 0)
            return
        if len(indexes) != 1:
            raise ValueError(f"A document must have exactly one root element, found {len(indexes)}")
        object.__setattr__(self, "_root_index", indexes[0])

    @property
    def root(self) -> Node:
        """The root element (or, for JSON, the root value)."""
        return self.children[self._root_index]

    def with_root(self, root: Node) -> Document:
        """Return a copy of this document with a different root."""
        children = list(self.children)
        children[self._root_index] = root
        return Document(tuple(children), kind=self.kind, declaration=self.declaration)


__all__ = [
    "Attribute",
    "CData",
    "Comment",
    "Document",
    "DocumentType",
    "Element",
    "Node",
    "ProcessingInstruction",
    "Text",
]
