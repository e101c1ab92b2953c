#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/intraline.py
"""Word- and character-level differences inside a replaced line.

Only rows of the split view whose left line was removed and whose right
line was added are compared; unchanged and phantom mates never are.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from doccompare.constants import DiffGranularity
from doccompare.diff.lcs import get_opcodes
from doccompare.diff.lines import ComparisonResult, LineKind

_WORD_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


@dataclass(frozen=True)
class Segment:
    """A run of tokens with its role in the pair.

    A segment with neither flag set is common to both lines.
    """

    text: str
    added: bool = False
    removed: bool = False

    @property
    def is_common(self) -> bool:
        return not (self.added or self.removed)


def tokenize(line: str, granularity: DiffGranularity) -> list[str]:
    """Split a line into diff tokens.

    ``words`` yields runs of word characters, runs of whitespace and single
    punctuation characters; ``chars`` yields individual code points.
    """
    if granularity == "words":
        return _WORD_TOKEN_RE.findall(line)
    if granularity == "chars":
        return list(line)
    raise ValueError(f"Unsupported granularity: {granularity}")


def _append(segments: list[Segment], text: str, added: bool = False, removed: bool = False) -> None:
    if not text:
        return
    if segments and segments[-1].added == added and segments[-1].removed == removed:
        segments[-1] = Segment(segments[-1].text + text, added=added, removed=removed)
    else:
        segments.append(Segment(text, added=added, removed=removed))


def diff_pair(removed_line: str, added_line: str, granularity: DiffGranularity) -> Optional[list[Segment]]:
    """Compare a removed line with the added line it was replaced by.

    Parameters
    ----------
    removed_line : str
        Text of the removed (left) line
    added_line : str
        Text of the added (right) line
    granularity : {'lines', 'words', 'chars'}
        Token size; ``lines`` means no intra-line diff

    Returns
    -------
    list of Segment or None
        Segments in order, adjacent segments of the same role merged;
        None for ``lines`` granularity

    Examples
    --------
    >>> [(s.text, s.removed, s.added) for s in diff_pair("red car", "blue car", "words")]
    [('red', True, False), ('blue', False, True), (' car', False, False)]

    """
    if granularity == "lines":
        return None

    old_tokens = tokenize(removed_line, granularity)
    new_tokens = tokenize(added_line, granularity)

    segments: list[Segment] = []
    for tag, i1, i2, j1, j2 in get_opcodes(old_tokens, new_tokens):
        if tag == "equal":
            _append(segments, "".join(old_tokens[i1:i2]))
            continue
        if tag in ("replace", "delete"):
            _append(segments, "".join(old_tokens[i1:i2]), removed=True)
        if tag in ("replace", "insert"):
            _append(segments, "".join(new_tokens[j1:j2]), added=True)
    return segments


def removed_side(segments: list[Segment]) -> list[Segment]:
    """Segments to show on the removed side: common and removed-only."""
    return [segment for segment in segments if not segment.added]


def added_side(segments: list[Segment]) -> list[Segment]:
    """Segments to show on the added side: common and added-only."""
    return [segment for segment in segments if not segment.removed]


def intra_line_pairs(
    result: ComparisonResult,
    granularity: Optional[DiffGranularity] = None,
) -> Iterator[tuple[int, list[Segment]]]:
    """Yield ``(row, segments)`` for every replaced row of the split view.

    Parameters
    ----------
    result : ComparisonResult
        Alignment to inspect
    granularity : {'lines', 'words', 'chars'}, optional
        Overrides ``result.mode``; nothing is yielded for ``lines``

    """
    mode = granularity or result.mode
    if mode == "lines":
        return
    for row, (left, right) in enumerate(result.rows):
        if left.kind is LineKind.REMOVED and right.kind is LineKind.ADDED:
            segments = diff_pair(left.text, right.text, mode)
            if segments is not None:
                yield row, segments
