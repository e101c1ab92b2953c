"""Unit tests for XML and JSON pretty-printing."""

import logging

import pytest

from doccompare.formatter import XmlPrettyPrinter, format_document, format_json, format_xml
from doccompare.tree import parse


@pytest.mark.unit
class TestFormatXmlLayout:
    """Tests for the block/inline layout rules."""

    def test_block_and_inline_elements(self):
        """Test indentation of element-only content and inline text children."""
        assert format_xml("<root><a>1</a><b><c/></b></root>") == (
            "<root>\n  <a>1</a>\n  <b>\n    <c/>\n  </b>\n</root>"
        )

    def test_empty_element_self_closes(self):
        """Test that childless elements are written self-closing."""
        assert format_xml('<a x="1"></a>') == '<a x="1"/>'

    def test_whitespace_between_elements_is_dropped(self):
        """Test that indentation from the input does not survive."""
        assert format_xml("<a>\n      <b/>\n\n   <c/>\n</a>") == "<a>\n  <b/>\n  <c/>\n</a>"

    def test_whitespace_only_single_text_is_kept(self):
        """Test that a lone whitespace text child is content."""
        assert format_xml("<a>   </a>") == "<a>   </a>"

    def test_attributes_keep_order_and_escaping(self):
        """Test that formatting does not reorder or unescape attributes."""
        text = '<a z="1" b="x &amp; &quot;y&quot;">1 &lt; 2</a>'
        assert format_xml(text) == text


@pytest.mark.unit
class TestFormatXmlMixedContent:
    """Tests for mixed-content preservation."""

    def test_exact_spacing_is_preserved(self):
        """Test that mixed content is reproduced exactly."""
        assert format_xml("<p>Hello <b>world</b>!</p>") == "<p>Hello <b>world</b>!</p>"

    def test_irregular_spacing_preserved_without_normalization(self):
        """Test that whitespace inside mixed content is significant."""
        text = "<doc><p>  Hello   <b>big  world</b>\n !  </p></doc>"
        assert format_xml(text) == "<doc>\n  <p>  Hello   <b>big  world</b>\n !  </p>\n</doc>"

    def test_normalize_whitespace_collapses_and_trims(self):
        """Test that runs collapse to one space and the edges are trimmed."""
        text = "<doc><p>  Hello   <b>big  world</b>\n !  </p></doc>"
        assert format_xml(text, normalize_whitespace=True) == "<doc>\n  <p>Hello <b>big world</b> !</p>\n</doc>"

    def test_nested_blocks_inside_mixed_content_stay_inline(self):
        """Test that no newlines are added anywhere inside mixed content."""
        text = "<p>See <list><item>a</item><item>b</item></list> here</p>"
        assert format_xml(text) == text

    def test_cdata_counts_as_content(self):
        """Test that an element holding CDATA is written inline."""
        assert format_xml("<a><![CDATA[x < y]]></a>") == "<a><![CDATA[x < y]]></a>"

    def test_normalized_empty_text_self_closes(self):
        """Test that an element whose text normalizes away is self-closing."""
        assert format_xml("<a>   </a>", normalize_whitespace=True) == "<a/>"


@pytest.mark.unit
class TestFormatXmlProlog:
    """Tests for declarations, doctypes, comments and PIs."""

    def test_declaration_is_prepended(self):
        """Test that the captured declaration leads the output."""
        assert format_xml('<?xml version="1.0"?><a><b/></a>') == '<?xml version="1.0"?>\n<a>\n  <b/>\n</a>'

    def test_declaration_not_duplicated(self):
        """Test that formatting twice keeps one declaration."""
        once = format_xml('<?xml version="1.0" encoding="UTF-8"?>\n<a/>')
        assert format_xml(once) == once
        assert once.count("<?xml ") == 1

    def test_top_level_nodes(self):
        """Test doctype, comments and processing instructions."""
        text = "<!DOCTYPE note><!-- c --><?app mode?><note><?pi data?><!--inner--><x/></note>"
        assert format_xml(text) == (
            "<!DOCTYPE note>\n<!-- c -->\n<?app mode?>\n<note>\n  <?pi data?>\n  <!--inner-->\n  <x/>\n</note>"
        )

    def test_processing_instruction_without_data(self):
        """Test that a bare PI has no trailing space."""
        assert format_xml("<a><?go?></a>") == "<a>\n  <?go?>\n</a>"

    def test_character_references_are_kept(self):
        """Test that escaped newlines and carriage returns survive formatting."""
        assert format_xml('<a t="x&#10;y"/>') == '<a t="x&#10;y"/>'
        assert format_xml("<a>x&#13;y</a>") == "<a>x&#13;y</a>"
        assert format_xml(format_xml('<r><a t="1&#9;2"/></r>')) == '<r>\n  <a t="1&#9;2"/>\n</r>'


@pytest.mark.unit
class TestFailSoft:
    """Tests for the fail-soft contract."""

    def test_invalid_xml_returned_unchanged(self):
        """Test that malformed XML is returned as-is."""
        assert format_document("not valid xml <<<", "xml") == "not valid xml <<<"

    def test_invalid_json_returned_unchanged(self):
        """Test that malformed JSON is returned as-is."""
        assert format_document('{"a": ', "json") == '{"a": '

    def test_failure_is_logged_at_debug(self, caplog):
        """Test that a parse failure is only logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="doccompare.formatter"):
            format_xml("<a>")
        assert any(record.levelno == logging.DEBUG for record in caplog.records)

    def test_blank_input(self):
        """Test that blank input formats to the empty string."""
        assert format_document("  \n ", "xml") == ""
        assert format_document("", "json") == ""

    def test_text_is_unchanged(self):
        """Test that plain text passes through."""
        assert format_document("  b\na  ", "text") == "  b\na  "

    def test_deeply_nested_input_returned_unchanged(self):
        """Test that nesting past the limit leaves the input as-is."""
        deep_xml = "<a>" * 1200 + "</a>" * 1200
        deep_json = "[" * 100000 + "]" * 100000
        assert format_document(deep_xml, "xml") == deep_xml
        assert format_document(deep_json, "json") == deep_json

    def test_unencodable_text_returned_unchanged(self):
        """Test that a lone surrogate leaves the input as-is."""
        assert format_document("<a>\ud800</a>", "xml") == "<a>\ud800</a>"


@pytest.mark.unit
class TestFormatJson:
    """Tests for JSON formatting."""

    def test_two_space_indent_and_key_order(self):
        """Test indentation with insertion order preserved."""
        assert format_json('{"b":1,"a":[1,2]}') == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_non_ascii_kept(self):
        """Test that non-ASCII characters are not escaped."""
        assert format_json('{"k":"é"}') == '{\n  "k": "é"\n}'

    def test_empty_containers(self):
        """Test empty objects and arrays."""
        assert format_json('{"a":{},"b":[]}') == '{\n  "a": {},\n  "b": []\n}'


@pytest.mark.unit
class TestXmlPrettyPrinter:
    """Tests for the printer class."""

    def test_custom_indent(self):
        """Test a four-space indent."""
        document = parse("<a><b/></a>", "xml")
        assert XmlPrettyPrinter(indent="    ").render(document) == "<a>\n    <b/>\n</a>"
