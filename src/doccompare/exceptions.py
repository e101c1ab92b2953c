#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the doccompare library.

This module defines specialized exception classes for the error conditions
that can occur while parsing, normalizing and checking documents. The diff
engine itself never raises: any two strings can be line-diffed.

Exception Hierarchy
-------------------
- DocCompareError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigError (configuration file problems)

  - ParsingError (malformed XML/JSON input)

  - SortError (sorting an unparseable document)

  - SchemaError (unusable schema description)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from doccompare.validation import ParseError


class DocCompareError(Exception):
    """Base exception class for all doccompare-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocCompareError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigError(ValidationError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying read or decode error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class ParsingError(DocCompareError):
    """Exception raised when an XML or JSON document is malformed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    line : int, default = 1
        1-based line number where the parser gave up
    document_kind : str, optional
        Kind of document that was being parsed ("xml" or "json")
    original_error : Exception, optional
        The underlying parser exception

    Attributes
    ----------
    line : int
        Line number of the failure
    document_kind : str or None
        Kind of document being parsed

    """

    def __init__(
        self,
        message: str,
        line: int = 1,
        document_kind: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.line = line
        self.document_kind = document_kind

    def to_parse_error(self) -> ParseError:
        """Return the plain ``ParseError`` record for this failure."""
        from doccompare.validation import ParseError

        return ParseError(line=self.line, message=self.message)


class SortError(DocCompareError):
    """Exception raised when a document cannot be sorted.

    Sorting never falls back to the original text: callers that rely on a
    canonical form must see the failure.

    Parameters
    ----------
    message : str
        Description of the failure
    document_kind : str, optional
        Kind of the document that failed to sort
    original_error : Exception, optional
        The parsing error that prevented sorting

    """

    def __init__(self, message: str, document_kind: str | None = None, original_error: Exception | None = None):
        """Initialize the sort error."""
        super().__init__(message, original_error)
        self.document_kind = document_kind


class SchemaError(DocCompareError):
    """Exception raised when a schema description itself cannot be used."""
