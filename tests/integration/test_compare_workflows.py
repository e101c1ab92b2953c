#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_compare_workflows.py
"""Integration tests for complete comparison workflows.

These tests drive the command-line entry point and the public API through
realistic sequences: configuration discovery feeding the diff command,
semantic comparison of reordered documents, and format/sort/validate
pipelines that write their results to disk.
"""

import json
import logging

import pytest

from doccompare import DiffOptions, compare_documents, format_text, sort_text, validate_text
from doccompare.cli import main

ORDER_XML = """<?xml version="1.0"?>
<order id="7" status="open">
  <line sku="B-2" qty="1"/>
  <line sku="A-1" qty="3"/>
  <!-- shipping -->
  <address city="Oslo" country="NO"/>
</order>
"""

REORDERED_XML = (
    '<?xml version="1.0"?><order status="open" id="7"><!-- shipping -->'
    '<address country="NO" city="Oslo"/><line qty="1" sku="B-2"/><line qty="3" sku="A-1"/></order>'
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Run every workflow from an empty directory with no user configuration."""
    monkeypatch.delenv("DOCCOMPARE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("doccompare.config.Path.home", lambda: tmp_path)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.integration
class TestSemanticComparison:
    """Semantic comparison through the API and the CLI."""

    def test_reordered_xml_is_equal_when_semantic(self):
        """Test that attribute and element order is ignored in semantic mode."""
        literal = compare_documents(ORDER_XML, REORDERED_XML, left_kind="xml")
        semantic = compare_documents(ORDER_XML, REORDERED_XML, left_kind="xml", options=DiffOptions(semantic=True))

        assert literal.has_changes
        assert not semantic.has_changes

    def test_semantic_diff_reports_real_changes(self):
        """Test that semantic mode still reports a changed value."""
        changed = REORDERED_XML.replace('qty="3"', 'qty="4"')
        result = compare_documents(ORDER_XML, changed, left_kind="xml", options=DiffOptions(semantic=True))

        removed = [line.text.strip() for line in result.unified if line.kind.value == "removed"]
        added = [line.text.strip() for line in result.unified if line.kind.value == "added"]
        assert removed == ['<line qty="3" sku="A-1"/>']
        assert added == ['<line qty="4" sku="A-1"/>']

    def test_cli_semantic_flag(self, tmp_path, capsys):
        """Test the diff command on reordered files with --semantic."""
        (tmp_path / "a.xml").write_text(ORDER_XML, encoding="utf-8")
        (tmp_path / "b.xml").write_text(REORDERED_XML, encoding="utf-8")

        assert main(["diff", "a.xml", "b.xml"]) == 1
        capsys.readouterr()
        assert main(["diff", "a.xml", "b.xml", "--semantic"]) == 0
        assert "No differences found." in capsys.readouterr().err

    def test_discovered_config_enables_semantic_mode(self, tmp_path):
        """Test that a .doccompare.toml in the working directory supplies defaults."""
        (tmp_path / "a.json").write_text('{"b": 1, "a": [1, 2]}', encoding="utf-8")
        (tmp_path / "b.json").write_text('{"a": [1, 2], "b": 1}', encoding="utf-8")
        assert main(["diff", "a.json", "b.json"]) == 1

        (tmp_path / ".doccompare.toml").write_text("[diff]\nsemantic = true\n", encoding="utf-8")
        assert main(["diff", "a.json", "b.json"]) == 0

    def test_explicit_config_takes_priority(self, tmp_path, monkeypatch):
        """Test that --config wins over the environment variable."""
        (tmp_path / "a.txt").write_text("x\n\ny\n", encoding="utf-8")
        (tmp_path / "b.txt").write_text("x\ny\n", encoding="utf-8")
        (tmp_path / "env.yaml").write_text("diff:\n  ignore_blank_lines: false\n", encoding="utf-8")
        (tmp_path / "cli.json").write_text('{"diff": {"ignore_blank_lines": true}}', encoding="utf-8")
        monkeypatch.setenv("DOCCOMPARE_CONFIG", str(tmp_path / "env.yaml"))

        assert main(["diff", "a.txt", "b.txt"]) == 1
        assert main(["--config", str(tmp_path / "cli.json"), "diff", "a.txt", "b.txt"]) == 0


@pytest.mark.integration
class TestNormalizationPipelines:
    """Format, sort and validate chained together."""

    def test_format_then_validate(self, tmp_path, capsys):
        """Test that formatted output written to disk validates."""
        (tmp_path / "in.xml").write_text(REORDERED_XML, encoding="utf-8")

        assert main(["format", "in.xml", "-o", "out.xml"]) == 0
        written = (tmp_path / "out.xml").read_text(encoding="utf-8")
        assert written.startswith('<?xml version="1.0"?>\n<order status="open" id="7">\n')
        assert main(["validate", "out.xml"]) == 0
        assert "valid xml" in capsys.readouterr().err

    def test_sorted_json_export(self, tmp_path):
        """Test a JSON diff written to a file after sorting both sides."""
        left = sort_text('{"name": "x", "tags": ["b", "a"]}', "json")
        right = sort_text('{"tags": ["b", "c"], "name": "x"}', "json")
        (tmp_path / "left.json").write_text(left, encoding="utf-8")
        (tmp_path / "right.json").write_text(right, encoding="utf-8")

        code = main(["diff", "left.json", "right.json", "--format", "json", "--granularity", "chars", "-o", "d.json"])

        payload = json.loads((tmp_path / "d.json").read_text(encoding="utf-8"))
        assert code == 1
        assert payload["mode"] == "chars"
        assert payload["statistics"]["lines_removed"] == 1
        assert payload["statistics"]["lines_added"] == 1
        assert len(payload["split"]) == len(payload["unified"]) - 1

    def test_formatting_is_stable_across_the_api(self):
        """Test that the formatted form of a document passes validation and reformatting."""
        formatted = format_text(ORDER_XML, "xml")
        assert format_text(formatted, "xml") == formatted
        assert validate_text(formatted, "xml") == []

    def test_malformed_side_is_compared_as_text(self, tmp_path, capsys):
        """Test that an invalid document still produces a diff and a warning."""
        (tmp_path / "a.json").write_text('{"a": 1}', encoding="utf-8")
        (tmp_path / "b.json").write_text('{"a": 1,', encoding="utf-8")

        assert main(["diff", "a.json", "b.json", "--semantic"]) == 1
        err = capsys.readouterr().err
        assert "Warning: b.json is not valid" in err
