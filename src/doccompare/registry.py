#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/registry.py
"""Registry of per-kind document handlers.

A :class:`HandlerRegistry` maps a document kind to the functions that
validate, format and sort documents of that kind. Registries are ordinary
objects: build one with :func:`create_default_registry` and pass it to
whatever needs it. Nothing is registered at import time.

Examples
--------
    >>> registry = create_default_registry()
    >>> registry.get("json").format('{"a":1}')
    '{\\n  "a": 1\\n}'
    >>> registry.kinds()
    ['json', 'text', 'xml']

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from doccompare.exceptions import ValidationError
from doccompare.formatter import format_document
from doccompare.sorter import sort_document
from doccompare.validation import ParseError, validate_document

logger = logging.getLogger(__name__)

Validator = Callable[[str], Optional[ParseError]]
Transform = Callable[[str], str]


@dataclass(frozen=True)
class DocumentHandler:
    """Functions handling one document kind.

    Parameters
    ----------
    kind : str
        Kind name, e.g. ``"xml"``
    validate : callable
        ``validate(text)`` returns a ParseError or None; never raises
    format : callable
        ``format(text)`` returns the formatted text; fail-soft
    sort : callable
        ``sort(text)`` returns the sorted text; raises SortError on bad input

    """

    kind: str
    validate: Validator
    format: Transform
    sort: Transform


class HandlerRegistry:
    """Mapping of document kinds to their handlers."""

    def __init__(self) -> None:
        """Create an empty registry."""
        self._handlers: dict[str, DocumentHandler] = {}

    def register(self, handler: DocumentHandler) -> None:
        """Register ``handler`` under its kind, replacing any previous one."""
        if handler.kind in self._handlers:
            logger.warning(f"Handler for '{handler.kind}' already registered, overwriting")
        self._handlers[handler.kind] = handler
        logger.debug(f"Registered handler: {handler.kind}")

    def unregister(self, kind: str) -> bool:
        """Remove the handler for ``kind``. Returns False if there was none."""
        return self._handlers.pop(kind, None) is not None

    def get(self, kind: str) -> DocumentHandler:
        """Return the handler for ``kind``.

        Raises
        ------
        ValidationError
            If no handler is registered for ``kind``

        """
        try:
            return self._handlers[kind]
        except KeyError:
            available = ", ".join(self.kinds()) or "none"
            raise ValidationError(
                f"Unknown document kind: {kind}. Available: {available}", "kind", kind
            ) from None

    def kinds(self) -> list[str]:
        """Registered kinds, sorted."""
        return sorted(self._handlers)

    def __contains__(self, kind: object) -> bool:
        return kind in self._handlers


def _handler_for(kind: str, normalize_whitespace: bool) -> DocumentHandler:
    return DocumentHandler(
        kind=kind,
        validate=partial(validate_document, kind=kind),
        format=partial(format_document, kind=kind, normalize_whitespace=normalize_whitespace),
        sort=partial(sort_document, kind=kind, normalize_whitespace=normalize_whitespace),
    )


def create_default_registry(normalize_whitespace: bool = False) -> HandlerRegistry:
    """Create a registry with the built-in ``xml``, ``json`` and ``text`` handlers.

    Parameters
    ----------
    normalize_whitespace : bool, default = False
        Passed to the XML formatter and sorter

    """
    registry = HandlerRegistry()
    for kind in ("xml", "json", "text"):
        registry.register(_handler_for(kind, normalize_whitespace))
    return registry
