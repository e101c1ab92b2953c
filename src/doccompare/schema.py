#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/schema.py
"""Minimal structural checking of XML documents against an XSD.

This is not an XSD validator. Only a small subset of a schema is read:

- top-level ``element`` declarations (name and type, or an anonymous
  ``complexType``)
- named ``complexType`` definitions: nested ``element`` declarations with
  ``minOccurs``/``maxOccurs`` and ``attribute`` declarations with
  ``use="required"``

and a document is checked for an undeclared root element, missing required
attributes and child elements outside their declared cardinality.
Namespace prefixes are ignored on both sides.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterator, Optional

from doccompare.constants import MAX_SCHEMA_DEPTH
from doccompare.exceptions import ParsingError, SchemaError
from doccompare.tree.nodes import Element
from doccompare.tree.xml_codec import parse_xml
from doccompare.validation import ParseError

logger = logging.getLogger(__name__)


def _local(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def _parse_occurs(value: Optional[str], default: int = 1) -> Optional[int]:
    """Parse ``minOccurs``/``maxOccurs``; ``unbounded`` becomes None."""
    if value is None:
        return default
    if value == "unbounded":
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug(f"Ignoring unparseable occurrence bound {value!r}")
        return default


@dataclass(frozen=True)
class ChildRule:
    """Cardinality of a child element within a complex type."""

    name: str
    min_occurs: int = 1
    max_occurs: Optional[int] = 1


@dataclass(frozen=True)
class ComplexTypeRule:
    """Child and attribute rules of one complex type."""

    children: tuple[ChildRule, ...] = ()
    required_attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SchemaReport:
    """Outcome of a schema check."""

    valid: bool
    errors: tuple[ParseError, ...] = field(default_factory=tuple)


def _complex_type_rule(complex_type: Element) -> ComplexTypeRule:
    children = []
    attributes = []
    for node in complex_type.iter():
        if node is complex_type:
            continue
        if node.local_name == "element":
            name = node.get("name") or node.get("ref")
            if not name:
                continue
            min_occurs = _parse_occurs(node.get("minOccurs"))
            children.append(
                ChildRule(
                    name=_local(name),
                    min_occurs=min_occurs if min_occurs is not None else 0,
                    max_occurs=_parse_occurs(node.get("maxOccurs")),
                )
            )
        elif node.local_name == "attribute" and node.get("name") and node.get("use") == "required":
            attributes.append(node.get("name") or "")
    return ComplexTypeRule(children=tuple(children), required_attributes=tuple(attributes))


class _StartTagLocator:
    """Map the n-th start tag of a given name to its line in the source."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._offsets: dict[str, list[int]] = {}

    def line_of(self, name: str, ordinal: int) -> int:
        if name not in self._offsets:
            pattern = re.compile(r"<" + re.escape(name) + r"(?=[\s/>])")
            self._offsets[name] = [match.start() for match in pattern.finditer(self.text)]
        offsets = self._offsets[name]
        if ordinal >= len(offsets):
            return 1
        return self.text.count("\n", 0, offsets[ordinal]) + 1


class SchemaChecker:
    """Check documents against the rules read from one XSD.

    Parameters
    ----------
    element_types : dict of str to ComplexTypeRule or None
        Top-level element name to the rule of its type (None when the
        type is unknown or simple)

    Examples
    --------
    >>> xsd = (
    ...     '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
    ...     '<xs:element name="person" type="PersonType"/>'
    ...     '<xs:complexType name="PersonType"><xs:attribute name="id" use="required"/></xs:complexType>'
    ...     "</xs:schema>"
    ... )
    >>> checker = SchemaChecker.from_xsd(xsd)
    >>> report = checker.check("<person/>")
    >>> [error.message for error in report.errors]
    ['Missing required attribute "id" on <person>']

    """

    def __init__(self, element_types: dict[str, Optional[ComplexTypeRule]]) -> None:
        """Store the element rules."""
        self.element_types = element_types

    @classmethod
    def from_xsd(cls, xsd_text: str) -> SchemaChecker:
        """Read the supported subset of an XSD.

        Raises
        ------
        SchemaError
            If the XSD is not well-formed

        """
        try:
            schema = parse_xml(xsd_text)
        except ParsingError as e:
            raise SchemaError("Invalid XSD schema format", original_error=e) from e

        root = schema.root
        if not isinstance(root, Element):
            raise SchemaError("Invalid XSD schema format")

        named_types = {
            node.get("name") or "": _complex_type_rule(node)
            for node in root.iter()
            if node.local_name == "complexType" and node.get("name")
        }

        element_types: dict[str, Optional[ComplexTypeRule]] = {}
        for declaration in root.child_elements:
            name = declaration.get("name")
            if declaration.local_name != "element" or not name:
                continue
            type_name = declaration.get("type")
            rule = named_types.get(_local(type_name)) if type_name else None
            if rule is None:
                inline = [child for child in declaration.child_elements if child.local_name == "complexType"]
                if inline:
                    rule = _complex_type_rule(inline[0])
            element_types[name] = rule

        logger.debug(f"Loaded schema with {len(element_types)} element(s) and {len(named_types)} complex type(s)")
        return cls(element_types)

    def check(self, xml_text: str) -> SchemaReport:
        """Check a document against the schema rules.

        Parameters
        ----------
        xml_text : str
            XML source

        Returns
        -------
        SchemaReport
            Violations found, each with the line of the offending start tag

        """
        try:
            document = parse_xml(xml_text)
        except ParsingError:
            return SchemaReport(valid=False, errors=(ParseError(line=1, message="XML is not well-formed"),))

        root = document.root
        if not isinstance(root, Element):
            return SchemaReport(valid=True)

        errors: list[ParseError] = []
        if self.element_types and root.local_name not in self.element_types:
            expected = ", ".join(self.element_types)
            errors.append(
                ParseError(
                    line=1,
                    message=f"Root element <{root.local_name}> is not defined in schema. Expected: {expected}",
                )
            )

        locator = _StartTagLocator(xml_text)
        ordinals: dict[str, int] = {}
        for element, depth in _walk(root):
            ordinal = ordinals.get(element.name, 0)
            ordinals[element.name] = ordinal + 1
            if depth > MAX_SCHEMA_DEPTH:
                continue
            rule = self.element_types.get(element.local_name)
            if rule is None:
                continue
            errors.extend(self._check_element(element, rule, partial(locator.line_of, element.name, ordinal)))

        return SchemaReport(valid=not errors, errors=tuple(errors))

    def _check_element(
        self, element: Element, rule: ComplexTypeRule, line_of: Callable[[], int]
    ) -> list[ParseError]:
        errors: list[ParseError] = []
        name = element.local_name
        present = {_local(attr_name) for attr_name, _ in element.attributes}
        for attr_name in rule.required_attributes:
            if attr_name not in present:
                errors.append(ParseError(line_of(), f'Missing required attribute "{attr_name}" on <{name}>'))

        counts: dict[str, int] = {}
        for child in element.child_elements:
            counts[child.local_name] = counts.get(child.local_name, 0) + 1

        for child_rule in rule.children:
            count = counts.get(child_rule.name, 0)
            if count < child_rule.min_occurs:
                errors.append(
                    ParseError(
                        line_of(),
                        f"Element <{name}> requires at least {child_rule.min_occurs} <{child_rule.name}> "
                        "child element(s)",
                    )
                )
            elif child_rule.max_occurs is not None and count > child_rule.max_occurs:
                errors.append(
                    ParseError(
                        line_of(),
                        f"Element <{name}> allows at most {child_rule.max_occurs} <{child_rule.name}> "
                        "child element(s)",
                    )
                )
        return errors


def _walk(element: Element, depth: int = 0) -> Iterator[tuple[Element, int]]:
    yield element, depth
    for child in element.child_elements:
        yield from _walk(child, depth + 1)


def check_schema(xml_text: str, xsd_text: str) -> SchemaReport:
    """Check ``xml_text`` against ``xsd_text``, reporting problems instead of raising.

    Empty XML or an empty schema is always valid; an unreadable schema is
    reported as a single error.
    """
    if not xml_text.strip() or not xsd_text.strip():
        return SchemaReport(valid=True)
    try:
        checker = SchemaChecker.from_xsd(xsd_text)
    except SchemaError as e:
        return SchemaReport(valid=False, errors=(ParseError(line=1, message=e.message),))
    return checker.check(xml_text)
