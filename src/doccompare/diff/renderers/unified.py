#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/renderers/unified.py
"""Plain-text listing of the unified view.

Each line is prefixed with ``+`` (added), ``-`` (removed) or a space
(unchanged), optionally preceded by the old and new line numbers.
"""

from __future__ import annotations

from typing import Iterator

from doccompare.diff.lines import ComparisonResult, Line, LineKind

_PREFIXES = {
    LineKind.ADDED: "+",
    LineKind.REMOVED: "-",
    LineKind.UNCHANGED: " ",
}


class UnifiedDiffRenderer:
    """Render the unified view of a comparison as text lines.

    Parameters
    ----------
    show_line_numbers : bool, default = False
        If True, prefix each line with its old and new line numbers
    show_unchanged : bool, default = True
        If False, only added and removed lines are emitted

    Examples
    --------
        >>> from doccompare.diff import align
        >>> list(UnifiedDiffRenderer().render(align("a\\nb", "a\\nc")))
        [' a', '-b', '+c']

    """

    def __init__(
        self,
        show_line_numbers: bool = False,
        show_unchanged: bool = True,
    ):
        """Initialize the unified diff renderer."""
        self.show_line_numbers = show_line_numbers
        self.show_unchanged = show_unchanged

    def _number_column(self, line: Line, width: int) -> str:
        left = "" if line.left_line_number is None else str(line.left_line_number)
        right = "" if line.right_line_number is None else str(line.right_line_number)
        return f"{left:>{width}} {right:>{width}} "

    def render(self, result: ComparisonResult) -> Iterator[str]:
        """Yield one text line per unified record.

        Parameters
        ----------
        result : ComparisonResult
            Alignment to render

        Yields
        ------
        str
            Prefixed lines, without trailing newlines

        """
        width = len(str(len(result.unified))) if self.show_line_numbers else 0
        for line in result.unified:
            if line.kind is LineKind.UNCHANGED and not self.show_unchanged:
                continue
            prefix = _PREFIXES.get(line.kind, " ")
            if self.show_line_numbers:
                yield f"{self._number_column(line, width)}{prefix}{line.text}"
            else:
                yield f"{prefix}{line.text}"

    def render_to_string(self, result: ComparisonResult) -> str:
        """Render the whole listing as one string."""
        return "\n".join(self.render(result))
