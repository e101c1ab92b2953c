"""Pytest configuration and shared fixtures for the doccompare test suite.

This module provides shared fixtures, test configuration, and sample
documents used across the unit and integration tests.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def sample_xml() -> str:
    """A small XML document with a declaration, a comment and mixed content."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<!-- catalog -->\n"
        '<catalog version="2" lang="en">'
        '<book id="b2"><title>Zebra</title></book>'
        '<book id="b1"><title>Apple</title><note>A <em>fine</em> read</note></book>'
        "</catalog>"
    )


@pytest.fixture
def sample_json() -> str:
    """A small JSON document with nested objects and arrays."""
    return '{"name": "doc", "tags": ["b", "a"], "meta": {"z": 1, "a": [{"y": true, "x": null}]}}'


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes text to a file under ``tmp_path``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
