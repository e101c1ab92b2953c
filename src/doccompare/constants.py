#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the doccompare library.

Constants are organized by category:
1. Type Definitions - Literal types shared across modules
2. Normalization Defaults - Formatter and sorter settings
3. Diff Defaults - Line alignment settings
4. Detection and Validation - Heuristics and limits
5. Configuration Discovery - Config file names
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DocumentKind = Literal["xml", "json", "text"]
DiffGranularity = Literal["lines", "words", "chars"]
LineKindName = Literal["added", "removed", "unchanged", "phantom"]

DOCUMENT_KINDS: tuple[str, ...] = ("xml", "json", "text")
DIFF_GRANULARITIES: tuple[str, ...] = ("lines", "words", "chars")

# =============================================================================
# Normalization Defaults
# =============================================================================

DEFAULT_INDENT = "  "
DEFAULT_JSON_INDENT = 2
DEFAULT_NORMALIZE_WHITESPACE = False

# =============================================================================
# Diff Defaults
# =============================================================================

DEFAULT_GRANULARITY: DiffGranularity = "lines"
DEFAULT_IGNORE_WHITESPACE = False
DEFAULT_IGNORE_BLANK_LINES = False
DEFAULT_IGNORE_COMMENTS = False
DEFAULT_SEMANTIC_DIFF = False

XML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")

# =============================================================================
# Detection and Validation
# =============================================================================

MINIFIED_MIN_LENGTH = 50
MAX_SCHEMA_DEPTH = 100
# Deeper documents are rejected by the parsers (XML elements, JSON arrays/objects)
MAX_NESTING_DEPTH = 100

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_DIRECTORY_FILENAMES = [".doccompare.toml", ".doccompare.yaml", ".doccompare.yml", ".doccompare.json"]
PYPROJECT_TOOL_SECTION = "doccompare"
