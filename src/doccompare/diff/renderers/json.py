#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/renderers/json.py
"""JSON export of a comparison result.

The output carries both presentations and the statistics so another
process can draw the comparison without re-running the alignment.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from doccompare.diff.intraline import intra_line_pairs
from doccompare.diff.lines import ComparisonResult


class JsonDiffRenderer:
    """Render a :class:`ComparisonResult` as structured JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)
    include_intra_line : bool, default = True
        Attach word/character segments for replaced rows when the result's
        mode is not ``lines``

    Examples
    --------
    Render a comparison as JSON:
        >>> from doccompare.diff import align
        >>> from doccompare.diff.renderers import JsonDiffRenderer
        >>> result = align("a\\nb", "a\\nc")
        >>> payload = JsonDiffRenderer().render(result)

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
        include_intra_line: bool = True,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent
        self.include_intra_line = include_intra_line

    def to_data(self, result: ComparisonResult) -> Dict[str, Any]:
        """Build the JSON-compatible structure for a result."""
        data: Dict[str, Any] = {
            "type": "comparison",
            "mode": result.mode,
            "unified": [line.to_dict() for line in result.unified],
            "split": [{"left": left.to_dict(), "right": right.to_dict()} for left, right in result.rows],
            "statistics": result.statistics(),
        }
        if self.include_intra_line:
            data["intra_line"] = [
                {
                    "row": row,
                    "segments": [
                        {"text": segment.text, "added": segment.added, "removed": segment.removed}
                        for segment in segments
                    ],
                }
                for row, segments in intra_line_pairs(result)
            ]
        return data

    def render(self, result: ComparisonResult) -> str:
        """Render a comparison result to a JSON string."""
        data = self.to_data(result)
        indent: Optional[int] = self.indent if self.pretty_print else None
        return json.dumps(data, indent=indent, ensure_ascii=False)
