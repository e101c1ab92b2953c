"""Unit tests for the structural XSD check."""

import pytest

from doccompare.exceptions import SchemaError
from doccompare.schema import ChildRule, SchemaChecker, check_schema

LIBRARY_XSD = """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="library" type="LibraryType"/>
  <xs:element name="book" type="BookType"/>
  <xs:complexType name="LibraryType">
    <xs:sequence>
      <xs:element name="book" type="BookType" minOccurs="1" maxOccurs="2"/>
    </xs:sequence>
    <xs:attribute name="name" use="required"/>
  </xs:complexType>
  <xs:complexType name="BookType">
    <xs:sequence>
      <xs:element name="title"/>
    </xs:sequence>
    <xs:attribute name="id" use="required"/>
    <xs:attribute name="lang"/>
  </xs:complexType>
</xs:schema>"""


def _messages(report):
    return [(error.line, error.message) for error in report.errors]


@pytest.mark.unit
class TestCheckSchema:
    """Tests for check_schema."""

    def test_valid_document(self):
        """Test a document satisfying every rule."""
        xml = '<library name="x">\n  <book id="1"><title>A</title></book>\n</library>'
        report = check_schema(xml, LIBRARY_XSD)
        assert report.valid
        assert report.errors == ()

    def test_missing_required_attribute_line(self):
        """Test the error and the line of the offending start tag."""
        xml = '<library name="x">\n  <book id="1"><title>A</title></book>\n  <book><title>B</title></book>\n</library>'
        report = check_schema(xml, LIBRARY_XSD)
        assert not report.valid
        assert _messages(report) == [(3, 'Missing required attribute "id" on <book>')]

    def test_min_occurs(self):
        """Test a missing required child."""
        report = check_schema('<library name="x"></library>', LIBRARY_XSD)
        assert _messages(report) == [(1, "Element <library> requires at least 1 <book> child element(s)")]

    def test_max_occurs(self):
        """Test too many children."""
        books = "".join(f'<book id="{i}"><title>t</title></book>' for i in range(3))
        report = check_schema(f'<library name="x">{books}</library>', LIBRARY_XSD)
        assert _messages(report) == [(1, "Element <library> allows at most 2 <book> child element(s)")]

    def test_undeclared_root(self):
        """Test the root element check."""
        report = check_schema("<shelf/>", LIBRARY_XSD)
        assert _messages(report) == [(1, "Root element <shelf> is not defined in schema. Expected: library, book")]

    def test_namespace_prefixes_ignored(self):
        """Test that prefixed document elements match unprefixed declarations."""
        xml = '<l:library xmlns:l="urn:lib" name="x"><l:book id="1"><l:title/></l:book></l:library>'
        assert check_schema(xml, LIBRARY_XSD).valid

    def test_invalid_xsd(self):
        """Test that an unreadable schema is reported."""
        assert _messages(check_schema("<a/>", "<xs:schema")) == [(1, "Invalid XSD schema format")]

    def test_invalid_xml(self):
        """Test that malformed XML is reported."""
        assert _messages(check_schema("<library", LIBRARY_XSD)) == [(1, "XML is not well-formed")]

    def test_empty_inputs_are_valid(self):
        """Test that an empty document or schema is valid."""
        assert check_schema("", LIBRARY_XSD).valid
        assert check_schema("<a/>", "  ").valid


@pytest.mark.unit
class TestSchemaChecker:
    """Tests for SchemaChecker."""

    def test_rules_read_from_xsd(self):
        """Test the parsed child rules."""
        checker = SchemaChecker.from_xsd(LIBRARY_XSD)
        library = checker.element_types["library"]
        assert library.children == (ChildRule("book", 1, 2),)
        assert library.required_attributes == ("name",)
        assert checker.element_types["book"].required_attributes == ("id",)

    def test_unbounded_and_optional(self):
        """Test maxOccurs=unbounded and minOccurs=0."""
        xsd = (
            '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
            '<xs:element name="list"><xs:complexType><xs:sequence>'
            '<xs:element name="item" minOccurs="0" maxOccurs="unbounded"/>'
            "</xs:sequence></xs:complexType></xs:element>"
            "</xs:schema>"
        )
        checker = SchemaChecker.from_xsd(xsd)
        assert checker.element_types["list"].children == (ChildRule("item", 0, None),)
        assert checker.check("<list/>").valid
        assert checker.check("<list>" + "<item/>" * 50 + "</list>").valid

    def test_from_xsd_rejects_malformed_schema(self):
        """Test that from_xsd raises SchemaError."""
        with pytest.raises(SchemaError, match="Invalid XSD schema format"):
            SchemaChecker.from_xsd("<xs:schema>")
