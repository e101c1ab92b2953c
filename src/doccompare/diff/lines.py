#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/lines.py
"""Line records produced by the alignment engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from doccompare.constants import DiffGranularity


class LineKind(str, Enum):
    """Role of a line in a comparison."""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    PHANTOM = "phantom"


@dataclass(frozen=True)
class Change:
    """A run of lines as found by the line matcher, before numbering.

    Parameters
    ----------
    kind : LineKind
        ``ADDED``, ``REMOVED`` or ``UNCHANGED``; never ``PHANTOM``
    lines : tuple of str
        Lines of the run. For unchanged runs these are the new side's lines.
    old_lines : tuple of str or None, default = None
        For unchanged runs, the old side's lines. They differ from ``lines``
        only when whitespace was ignored while matching.

    """

    kind: LineKind
    lines: tuple[str, ...]
    old_lines: Optional[tuple[str, ...]] = None

    @property
    def left_lines(self) -> tuple[str, ...]:
        """Lines as they appear in the old text."""
        return self.old_lines if self.old_lines is not None else self.lines

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Line:
    """One displayed line.

    Parameters
    ----------
    kind : LineKind
        Role of the line
    text : str
        Line content without its newline; empty for phantom lines
    left_line_number : int or None, default = None
        1-based line number in the old text
    right_line_number : int or None, default = None
        1-based line number in the new text

    Notes
    -----
    In the split presentation each side only fills its own line number.
    In the unified presentation unchanged lines carry both.

    """

    kind: LineKind
    text: str
    left_line_number: Optional[int] = None
    right_line_number: Optional[int] = None

    @classmethod
    def phantom(cls) -> Line:
        """Create a padding line with no text and no line number."""
        return cls(LineKind.PHANTOM, "")

    @property
    def is_phantom(self) -> bool:
        return self.kind is LineKind.PHANTOM

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible representation."""
        data: dict[str, object] = {"kind": self.kind.value, "text": self.text}
        if self.left_line_number is not None:
            data["left_line_number"] = self.left_line_number
        if self.right_line_number is not None:
            data["right_line_number"] = self.right_line_number
        return data


@dataclass(frozen=True)
class ComparisonResult:
    """Result of aligning two texts.

    Parameters
    ----------
    split_left : tuple of Line
        Left column of the side-by-side view
    split_right : tuple of Line
        Right column of the side-by-side view; row ``i`` mates with
        ``split_left[i]``
    unified : tuple of Line
        Single-column view; each unchanged line appears once
    mode : {'lines', 'words', 'chars'}
        Granularity requested for intra-line highlighting

    Raises
    ------
    ValueError
        If the split columns differ in length

    """

    split_left: tuple[Line, ...]
    split_right: tuple[Line, ...]
    unified: tuple[Line, ...]
    mode: DiffGranularity = "lines"

    def __post_init__(self) -> None:
        """Check the split columns line up."""
        if len(self.split_left) != len(self.split_right):
            raise ValueError(
                f"Split columns must have equal length, got {len(self.split_left)} and {len(self.split_right)}"
            )

    @property
    def rows(self) -> list[tuple[Line, Line]]:
        """Mated (left, right) pairs of the split view."""
        return list(zip(self.split_left, self.split_right))

    @property
    def has_changes(self) -> bool:
        """True if any line was added or removed."""
        return any(line.kind is not LineKind.UNCHANGED for line in self.unified)

    def statistics(self) -> dict[str, int]:
        """Count added, removed and unchanged lines."""
        counts = {"lines_added": 0, "lines_removed": 0, "lines_unchanged": 0}
        for line in self.unified:
            if line.kind is LineKind.ADDED:
                counts["lines_added"] += 1
            elif line.kind is LineKind.REMOVED:
                counts["lines_removed"] += 1
            else:
                counts["lines_unchanged"] += 1
        counts["total_changes"] = counts["lines_added"] + counts["lines_removed"]
        return counts
