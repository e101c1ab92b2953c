#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/aligner.py
"""Line alignment of two texts.

The texts are split into lines and matched with a shortest edit script
(:mod:`doccompare.diff.lcs`), which keeps a longest common subsequence of
lines. The opcodes become a sequence of :class:`Change` runs (unchanged,
removed or added; a replacement is a removed run directly followed by an
added run), and two presentations are derived from those runs:

- the unified view, one column with running old/new line numbers
- the split view, two equal-length columns where a replacement block is
  zipped row by row and the shorter side is padded with phantom lines

Everything here is a pure function of its arguments. Any two strings can
be aligned, including malformed XML or JSON.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from doccompare.constants import (
    DEFAULT_GRANULARITY,
    DIFF_GRANULARITIES,
    XML_COMMENT_RE,
    DiffGranularity,
)
from doccompare.diff.lcs import get_opcodes
from doccompare.diff.lines import Change, ComparisonResult, Line, LineKind
from doccompare.exceptions import ValidationError


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n``; a trailing newline does not open another line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def strip_comments(text: str) -> str:
    """Remove every ``<!-- ... -->`` comment, including multi-line ones."""
    return XML_COMMENT_RE.sub("", text)


def drop_blank_lines(text: str) -> str:
    """Remove lines that are empty or whitespace-only."""
    return "\n".join(line for line in text.split("\n") if line.strip())


def preprocess(text: str, ignore_blank_lines: bool = False, ignore_comments: bool = False) -> str:
    """Apply the comment and blank-line filters, comments first.

    Line numbers reported by :func:`align` refer to the filtered text.
    """
    if ignore_comments:
        text = strip_comments(text)
    if ignore_blank_lines:
        text = drop_blank_lines(text)
    return text


def compute_changes(old_text: str, new_text: str, ignore_whitespace: bool = False) -> list[Change]:
    """Compute the line-level change runs between two texts.

    Parameters
    ----------
    old_text : str
        Original text
    new_text : str
        Updated text
    ignore_whitespace : bool, default = False
        Compare lines with leading and trailing whitespace stripped. The
        emitted lines keep their original text.

    Returns
    -------
    list of Change
        Runs in order. No run mixes additions and removals.

    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    if ignore_whitespace:
        old_keys = [line.strip() for line in old_lines]
        new_keys = [line.strip() for line in new_lines]
    else:
        old_keys, new_keys = old_lines, new_lines

    changes: list[Change] = []
    for tag, i1, i2, j1, j2 in get_opcodes(old_keys, new_keys):
        if tag == "equal":
            left = tuple(old_lines[i1:i2])
            right = tuple(new_lines[j1:j2])
            changes.append(Change(LineKind.UNCHANGED, right, left if left != right else None))
            continue
        if tag in ("replace", "delete"):
            changes.append(Change(LineKind.REMOVED, tuple(old_lines[i1:i2])))
        if tag in ("replace", "insert"):
            changes.append(Change(LineKind.ADDED, tuple(new_lines[j1:j2])))
    return changes


def derive_unified(changes: Iterable[Change]) -> list[Line]:
    """Number every line of the change runs for the single-column view.

    Removed lines take the next old line number, added lines the next new
    line number and unchanged lines both. Counters start at 1.
    """
    old_number = 1
    new_number = 1
    lines: list[Line] = []
    for change in changes:
        if change.kind is LineKind.REMOVED:
            for text in change.lines:
                lines.append(Line(LineKind.REMOVED, text, left_line_number=old_number))
                old_number += 1
        elif change.kind is LineKind.ADDED:
            for text in change.lines:
                lines.append(Line(LineKind.ADDED, text, right_line_number=new_number))
                new_number += 1
        else:
            for text in change.lines:
                lines.append(Line(LineKind.UNCHANGED, text, left_line_number=old_number, right_line_number=new_number))
                old_number += 1
                new_number += 1
    return lines


def derive_split(changes: Sequence[Change]) -> tuple[list[Line], list[Line]]:
    """Lay the change runs out as two mated columns.

    A removed run immediately followed by an added run is a replacement
    block: its lines are zipped index by index and the shorter side is
    padded with phantom lines. A lone removed or added run is mated with
    phantom lines on the other side.

    Returns
    -------
    tuple of (list of Line, list of Line)
        Left and right columns, always of equal length

    """
    left: list[Line] = []
    right: list[Line] = []
    left_number = 1
    right_number = 1

    index = 0
    while index < len(changes):
        change = changes[index]

        if (
            change.kind is LineKind.REMOVED
            and index + 1 < len(changes)
            and changes[index + 1].kind is LineKind.ADDED
        ):
            removed = change.lines
            added = changes[index + 1].lines
            for row in range(max(len(removed), len(added))):
                if row < len(removed):
                    left.append(Line(LineKind.REMOVED, removed[row], left_line_number=left_number))
                    left_number += 1
                else:
                    left.append(Line.phantom())
                if row < len(added):
                    right.append(Line(LineKind.ADDED, added[row], right_line_number=right_number))
                    right_number += 1
                else:
                    right.append(Line.phantom())
            index += 2
            continue

        if change.kind is LineKind.REMOVED:
            for text in change.lines:
                left.append(Line(LineKind.REMOVED, text, left_line_number=left_number))
                right.append(Line.phantom())
                left_number += 1
        elif change.kind is LineKind.ADDED:
            for text in change.lines:
                left.append(Line.phantom())
                right.append(Line(LineKind.ADDED, text, right_line_number=right_number))
                right_number += 1
        else:
            for old_text, new_text in zip(change.left_lines, change.lines):
                left.append(Line(LineKind.UNCHANGED, old_text, left_line_number=left_number))
                right.append(Line(LineKind.UNCHANGED, new_text, right_line_number=right_number))
                left_number += 1
                right_number += 1
        index += 1

    return left, right


def align(
    old_text: str,
    new_text: str,
    mode: DiffGranularity = DEFAULT_GRANULARITY,
    ignore_whitespace: bool = False,
    ignore_blank_lines: bool = False,
    ignore_comments: bool = False,
) -> ComparisonResult:
    """Align two texts line by line.

    Parameters
    ----------
    old_text : str
        Left/original text
    new_text : str
        Right/updated text
    mode : {'lines', 'words', 'chars'}, default = 'lines'
        Granularity recorded on the result for intra-line highlighting
    ignore_whitespace : bool, default = False
        Match lines with leading/trailing whitespace stripped
    ignore_blank_lines : bool, default = False
        Drop whitespace-only lines before matching
    ignore_comments : bool, default = False
        Remove XML comments before matching

    Returns
    -------
    ComparisonResult
        Unified and split presentations of the same alignment

    Raises
    ------
    ValidationError
        If ``mode`` is not a known granularity

    Examples
    --------
    >>> result = align("a\\nb\\nc", "a\\nx\\ny\\nc")
    >>> [(l.kind.value, r.kind.value) for l, r in result.rows]
    [('unchanged', 'unchanged'), ('removed', 'added'), ('phantom', 'added'), ('unchanged', 'unchanged')]

    """
    if mode not in DIFF_GRANULARITIES:
        raise ValidationError(
            f"Invalid diff granularity: {mode}. Must be one of: {', '.join(DIFF_GRANULARITIES)}", "mode", mode
        )

    old_text = preprocess(old_text, ignore_blank_lines=ignore_blank_lines, ignore_comments=ignore_comments)
    new_text = preprocess(new_text, ignore_blank_lines=ignore_blank_lines, ignore_comments=ignore_comments)

    changes = compute_changes(old_text, new_text, ignore_whitespace=ignore_whitespace)
    split_left, split_right = derive_split(changes)
    return ComparisonResult(
        split_left=tuple(split_left),
        split_right=tuple(split_right),
        unified=tuple(derive_unified(changes)),
        mode=mode,
    )
