#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/options.py
"""Option dataclasses for formatting, sorting and comparing documents.

Options are frozen; use :meth:`CloneFrozenMixin.create_updated` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from doccompare.constants import (
    DEFAULT_GRANULARITY,
    DEFAULT_IGNORE_BLANK_LINES,
    DEFAULT_IGNORE_COMMENTS,
    DEFAULT_IGNORE_WHITESPACE,
    DEFAULT_NORMALIZE_WHITESPACE,
    DEFAULT_SEMANTIC_DIFF,
    DIFF_GRANULARITIES,
    DiffGranularity,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the fields accepted by this options class."""
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class FormatOptions(CloneFrozenMixin):
    """Options for the formatter and sorter.

    Parameters
    ----------
    normalize_whitespace : bool, default=False
        Collapse whitespace runs inside XML mixed content to one space

    """

    normalize_whitespace: bool = field(
        default=DEFAULT_NORMALIZE_WHITESPACE,
        metadata={"help": "Collapse whitespace runs in XML mixed content"},
    )


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Options for comparing two documents.

    Parameters
    ----------
    granularity : {'lines', 'words', 'chars'}, default='lines'
        Token size for intra-line highlighting of replaced lines
    ignore_whitespace : bool, default=False
        Match lines with leading and trailing whitespace stripped
    ignore_blank_lines : bool, default=False
        Drop whitespace-only lines before matching
    ignore_comments : bool, default=False
        Remove XML comments before matching
    semantic : bool, default=False
        Sort both documents into canonical order before matching

    """

    granularity: DiffGranularity = field(
        default=DEFAULT_GRANULARITY,
        metadata={"help": "Intra-line highlighting: lines, words or chars"},
    )
    ignore_whitespace: bool = field(
        default=DEFAULT_IGNORE_WHITESPACE,
        metadata={"help": "Ignore leading/trailing whitespace when matching lines"},
    )
    ignore_blank_lines: bool = field(
        default=DEFAULT_IGNORE_BLANK_LINES,
        metadata={"help": "Ignore blank lines"},
    )
    ignore_comments: bool = field(
        default=DEFAULT_IGNORE_COMMENTS,
        metadata={"help": "Ignore XML comments"},
    )
    semantic: bool = field(
        default=DEFAULT_SEMANTIC_DIFF,
        metadata={"help": "Sort keys, attributes and elements before comparing"},
    )

    def __post_init__(self) -> None:
        """Validate the granularity.

        Raises
        ------
        ValueError
            If ``granularity`` is not one of lines, words or chars.

        """
        if self.granularity not in DIFF_GRANULARITIES:
            raise ValueError(
                f"granularity must be one of {', '.join(DIFF_GRANULARITIES)}, got {self.granularity!r}"
            )
