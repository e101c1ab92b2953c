#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/__init__.py
"""Line alignment and intra-line comparison.

Key Features
------------
- Minimal (longest common subsequence) line matching, optionally ignoring leading/trailing
  whitespace, blank lines and XML comments
- Unified view with running old/new line numbers
- Split view with replacement blocks paired row by row and phantom padding
- Word or character segments for replaced rows

Examples
--------
Align two texts and walk the side-by-side rows:
    >>> from doccompare.diff import align
    >>> result = align("a\\nb", "a\\nb\\nc")
    >>> [(left.kind.value, right.text) for left, right in result.rows]
    [('unchanged', 'a'), ('unchanged', 'b'), ('phantom', 'c')]

"""

from doccompare.diff.aligner import align, compute_changes, derive_split, derive_unified, preprocess, split_lines
from doccompare.diff.intraline import Segment, added_side, diff_pair, intra_line_pairs, removed_side
from doccompare.diff.lines import Change, ComparisonResult, Line, LineKind

__all__ = [
    "Change",
    "ComparisonResult",
    "Line",
    "LineKind",
    "Segment",
    "added_side",
    "align",
    "compute_changes",
    "derive_split",
    "derive_unified",
    "diff_pair",
    "intra_line_pairs",
    "preprocess",
    "removed_side",
    "split_lines",
]
