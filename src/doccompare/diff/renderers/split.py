#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/renderers/split.py
"""Side-by-side table of the split view, drawn with :mod:`rich`.

The table is unstyled: each row shows the left line number, a marker, the
left text, then the same for the right side. Phantom cells are left blank.
"""

from __future__ import annotations

import io
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from doccompare.diff.lines import ComparisonResult, Line, LineKind

_MARKERS = {
    LineKind.ADDED: "+",
    LineKind.REMOVED: "-",
    LineKind.UNCHANGED: " ",
    LineKind.PHANTOM: " ",
}


class SplitDiffRenderer:
    """Render the split view of a comparison as a two-column table.

    Parameters
    ----------
    left_title : str, default = "left"
        Header of the left column
    right_title : str, default = "right"
        Header of the right column
    width : int, optional
        Console width used by :meth:`render_to_string`; rich's default
        when omitted

    """

    def __init__(self, left_title: str = "left", right_title: str = "right", width: Optional[int] = None):
        """Initialize the split diff renderer."""
        self.left_title = left_title
        self.right_title = right_title
        self.width = width

    @staticmethod
    def _cells(line: Line, number: Optional[int]) -> tuple[Text, Text, Text]:
        if line.is_phantom:
            return Text(""), Text(""), Text("")
        return Text("" if number is None else str(number)), Text(_MARKERS[line.kind]), Text(line.text)

    def render(self, result: ComparisonResult) -> Table:
        """Build the table for ``result``."""
        table = Table(show_header=True, box=None, pad_edge=False, expand=False)
        table.add_column("", justify="right", no_wrap=True)
        table.add_column("", no_wrap=True)
        table.add_column(self.left_title, overflow="fold")
        table.add_column("", justify="right", no_wrap=True)
        table.add_column("", no_wrap=True)
        table.add_column(self.right_title, overflow="fold")

        for left, right in result.rows:
            table.add_row(*self._cells(left, left.left_line_number), *self._cells(right, right.right_line_number))
        return table

    def render_to_string(self, result: ComparisonResult) -> str:
        """Render the table as plain text without any terminal styling."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, color_system=None, no_color=True, highlight=False)
        console.print(self.render(result))
        return buffer.getvalue().rstrip("\n")
