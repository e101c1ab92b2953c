#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/renderers/__init__.py
"""Plain data exports of comparison results.

Available Renderers
-------------------
- JsonDiffRenderer: structured JSON with both presentations and statistics
- UnifiedDiffRenderer: ``+``/``-``/`` `` prefixed text listing
- SplitDiffRenderer: unstyled side-by-side table

Examples
--------
    >>> from doccompare.diff import align
    >>> from doccompare.diff.renderers import UnifiedDiffRenderer
    >>> for line in UnifiedDiffRenderer().render(align("a", "b")):
    ...     print(line)
    -a
    +b

"""

from doccompare.diff.renderers.json import JsonDiffRenderer
from doccompare.diff.renderers.split import SplitDiffRenderer
from doccompare.diff.renderers.unified import UnifiedDiffRenderer

__all__ = [
    "JsonDiffRenderer",
    "SplitDiffRenderer",
    "UnifiedDiffRenderer",
]
