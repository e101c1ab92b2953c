#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/validation.py
"""Well-formedness checks that report instead of raising.

Each side of a comparison is validated on its own; an invalid document on
one side never prevents the other side from being formatted or diffed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from doccompare.constants import DocumentKind
from doccompare.exceptions import ParsingError
from doccompare.tree.codec import parse


@dataclass(frozen=True)
class ParseError:
    """Location and description of a parse failure.

    Parameters
    ----------
    line : int
        1-based line number
    message : str
        Parser message, first line only

    """

    line: int
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"line": self.line, "message": self.message}


def validate_document(text: str, kind: DocumentKind) -> Optional[ParseError]:
    """Check that ``text`` parses as ``kind``.

    Blank input and plain text are always valid.

    Returns
    -------
    ParseError or None
        The failure, or None when the document is well-formed

    """
    if kind == "text" or not text.strip():
        return None
    try:
        parse(text, kind)
    except ParsingError as e:
        return e.to_parse_error()
    return None


def validate_pair(
    left: str,
    right: str,
    left_kind: DocumentKind,
    right_kind: Optional[DocumentKind] = None,
) -> tuple[Optional[ParseError], Optional[ParseError]]:
    """Validate both sides independently.

    ``right_kind`` defaults to ``left_kind``.
    """
    return validate_document(left, left_kind), validate_document(right, right_kind or left_kind)
