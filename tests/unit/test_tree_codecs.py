"""Unit tests for the XML and JSON tree codecs and the node types."""

import pytest

from doccompare.constants import MAX_NESTING_DEPTH
from doccompare.exceptions import ParsingError, ValidationError
from doccompare.tree import (
    CData,
    Comment,
    Document,
    DocumentType,
    Element,
    ProcessingInstruction,
    Text,
    parse,
    serialize_minimal,
)
from doccompare.tree.json_codec import line_for_offset, node_to_value, value_to_node
from doccompare.tree.xml_codec import capture_declaration, escape_attribute, escape_text


@pytest.mark.unit
class TestNodes:
    """Tests for the node dataclasses."""

    def test_duplicate_attributes_rejected(self):
        """Test that an element cannot carry the same attribute twice."""
        with pytest.raises(ValueError, match="Duplicate attribute"):
            Element("a", attributes=(("x", "1"), ("x", "2")))

    def test_get_and_local_name(self):
        """Test attribute lookup and prefix stripping."""
        element = Element("ns:item", attributes=(("id", "7"),))
        assert element.get("id") == "7"
        assert element.get("missing", "d") == "d"
        assert element.local_name == "item"

    def test_mixed_content_detection(self):
        """Test which children make content mixed."""
        assert Element("p", children=(Text("hi"), Element("b"))).has_mixed_content
        assert Element("p", children=(CData("x"),)).has_mixed_content
        assert not Element("p", children=(Text("\n  "), Element("b"), Comment(" c "))).has_mixed_content
        assert not Element("p", children=(CData(""),)).has_mixed_content

    def test_iter_is_document_order(self):
        """Test that iter walks elements depth first."""
        root = Element("a", children=(Element("b", children=(Element("c"),)), Text("t"), Element("d")))
        assert [element.name for element in root.iter()] == ["a", "b", "c", "d"]

    def test_document_requires_single_root(self):
        """Test the one-root invariant."""
        with pytest.raises(ValueError, match="exactly one root"):
            Document((Element("a"), Element("b")))
        with pytest.raises(ValueError):
            Document((Comment("only"),))

    def test_with_root_keeps_prolog(self):
        """Test that replacing the root keeps the surrounding nodes."""
        document = Document((Comment("c"), Element("a")), declaration='<?xml version="1.0"?>')
        replaced = document.with_root(Element("b"))
        assert replaced.children == (Comment("c"), Element("b"))
        assert replaced.declaration == '<?xml version="1.0"?>'
        assert document.root == Element("a")


@pytest.mark.unit
class TestXmlCodec:
    """Tests for XML parsing and minimal serialization."""

    def test_parse_keeps_all_node_kinds(self):
        """Test that comments, PIs, CDATA and the doctype become nodes."""
        document = parse('<!DOCTYPE r><!-- top --><r a="1"><?pi go?><![CDATA[<x>]]>t</r>', "xml")
        assert document.children[0] == DocumentType("r")
        assert document.children[1] == Comment(" top ")
        root = document.root
        assert root.attributes == (("a", "1"),)
        assert root.children == (ProcessingInstruction("pi", "go"), CData("<x>"), Text("t"))

    def test_declaration_is_captured(self):
        """Test that the XML declaration is kept verbatim."""
        document = parse('<?xml version="1.0" encoding="UTF-8"?>\n<a/>', "xml")
        assert document.declaration == '<?xml version="1.0" encoding="UTF-8"?>'

    def test_stylesheet_pi_is_not_a_declaration(self):
        """Test that ``<?xml-stylesheet?>`` is not mistaken for a declaration."""
        assert capture_declaration('<?xml-stylesheet href="a.xsl"?><a/>') is None

    def test_parse_error_line(self):
        """Test that the parser's line number is reported."""
        with pytest.raises(ParsingError) as exc_info:
            parse("<a>\n<b>\n</a>", "xml")
        assert exc_info.value.line == 3
        assert exc_info.value.document_kind == "xml"
        assert "\n" not in exc_info.value.message
        assert len(exc_info.value.message) <= 100

    def test_entity_declarations_are_forbidden(self):
        """Test that entity declarations are rejected at line 1."""
        with pytest.raises(ParsingError) as exc_info:
            parse('<!DOCTYPE x [<!ENTITY e "boom">]>\n<x>&e;</x>', "xml")
        assert exc_info.value.line == 1

    def test_minimal_round_trip_keeps_whitespace(self):
        """Test that minimal serialization adds and removes nothing."""
        text = '<a x="1">\n  <b>t &amp; u</b>\n  <!--c-->\n</a>'
        assert serialize_minimal(parse(text, "xml")) == text

    def test_minimal_serialization_of_prolog(self):
        """Test that top-level nodes are separated by newlines."""
        document = parse('<?xml version="1.0"?><!--c--><a/>', "xml")
        assert serialize_minimal(document) == '<?xml version="1.0"?>\n<!--c-->\n<a/>'

    def test_escaping(self):
        """Test text and attribute escaping."""
        assert escape_text('a < b & c > "d"') == 'a &lt; b &amp; c &gt; "d"'
        assert escape_attribute('say "hi" & <go>') == "say &quot;hi&quot; &amp; &lt;go&gt;"

    def test_escaping_of_line_breaks_and_tabs(self):
        """Test that characters a parser would normalize are written as references."""
        assert escape_text("a\rb\nc\td") == "a&#13;b\nc\td"
        assert escape_attribute("x\ny\tz\r") == "x&#10;y&#9;z&#13;"

    def test_character_references_survive_a_round_trip(self):
        """Test that escaped newlines, tabs and carriage returns are kept."""
        text = '<a t="x&#10;y&#9;z">p&#13;q</a>'
        document = parse(text, "xml")
        assert document.root.attributes == (("t", "x\ny\tz"),)
        assert serialize_minimal(document) == text

    def test_nesting_limit(self):
        """Test that elements nested beyond the limit are a parse error."""
        allowed = "<a>" * MAX_NESTING_DEPTH + "</a>" * MAX_NESTING_DEPTH
        assert parse(allowed, "xml").root.name == "a"
        with pytest.raises(ParsingError, match="nested"):
            parse("<a>" * 1200 + "</a>" * 1200, "xml")

    def test_lone_surrogate_is_a_parse_error(self):
        """Test that text that cannot be encoded is reported, not raised raw."""
        with pytest.raises(ParsingError) as exc_info:
            parse("<a>\ud800</a>", "xml")
        assert exc_info.value.line == 1

    def test_text_kind_cannot_be_parsed(self):
        """Test that plain text has no tree."""
        with pytest.raises(ValidationError):
            parse("hello", "text")


@pytest.mark.unit
class TestJsonCodec:
    """Tests for JSON parsing and minimal serialization."""

    def test_tree_layout(self):
        """Test the object/member/array mapping."""
        document = parse('{"a": [1, "x"], "b": null}', "json")
        root = document.root
        assert root.name == "object"
        member_a, member_b = root.children
        assert member_a.get("key") == "a"
        assert member_a.children[0] == Element("array", children=(Text("1"), Text('"x"')))
        assert member_b.children[0] == Text("null")

    def test_scalar_root(self):
        """Test a document whose root is a scalar."""
        assert parse("42", "json").root == Text("42")

    def test_value_round_trip(self):
        """Test node_to_value inverts value_to_node."""
        value = {"k": [True, None, 1.5, {"n": "é"}], "z": {}}
        assert node_to_value(value_to_node(value)) == value

    def test_duplicate_keys_last_wins(self):
        """Test that a repeated key keeps its first position and last value."""
        document = parse('{"a": 1, "b": 2, "a": 3}', "json")
        assert serialize_minimal(document) == '{"a":3,"b":2}'

    def test_minimal_serialization(self):
        """Test compact output with non-ASCII kept."""
        assert serialize_minimal(parse('{ "a" : [ 1 , 2 ], "é": "ü" }', "json")) == '{"a":[1,2],"é":"ü"}'

    def test_error_line_from_offset(self):
        """Test that the line is reconstructed from the error offset."""
        with pytest.raises(ParsingError) as exc_info:
            parse('{\n  "a": 1,\n}', "json")
        assert exc_info.value.line == 3
        assert exc_info.value.document_kind == "json"

    def test_nan_rejected(self):
        """Test that non-standard constants are not accepted."""
        with pytest.raises(ParsingError):
            parse('{"a": NaN}', "json")

    def test_overflowing_number_rejected(self):
        """Test that a number literal too large for a float is an error."""
        with pytest.raises(ParsingError, match="out of range"):
            parse("[1e999]", "json")

    def test_nesting_limit(self):
        """Test that deeply nested arrays are a parse error."""
        allowed = "[" * MAX_NESTING_DEPTH + "]" * MAX_NESTING_DEPTH
        assert parse(allowed, "json").root.name == "array"
        with pytest.raises(ParsingError, match="nested"):
            parse("[" * (MAX_NESTING_DEPTH + 1) + "]" * (MAX_NESTING_DEPTH + 1), "json")

    def test_decoder_recursion_is_a_parse_error(self):
        """Test that nesting too deep for the decoder itself is reported."""
        with pytest.raises(ParsingError):
            parse("[" * 100000 + "]" * 100000, "json")

    def test_line_for_offset(self):
        """Test offset-to-line conversion."""
        assert line_for_offset("ab\ncd\nef", 0) == 1
        assert line_for_offset("ab\ncd\nef", 3) == 2
        assert line_for_offset("ab\ncd\nef", 8) == 3
