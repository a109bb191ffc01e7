#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/exceptions.py
"""Custom exceptions for the pptx2html library.

The rendering core degrades gracefully on bad data (missing nodes, unparseable
numbers, unknown geometries) and never raises for those. The exceptions below
are reserved for the boundaries: invalid options, unreadable files, malformed
XML and failures of whole operations such as the chart styling fixer.

Exception Hierarchy
-------------------
- Pptx2HtmlError (base exception)

  - ValidationError (parameter/option validation)

  - FileError (file access and I/O)
    - MalformedFileError (corrupted/invalid file structure or XML)

  - ParsingError (presentation package could not be read)

  - RenderingError (HTML generation failures)

  - ChartFixError (chart XML styling fixer failures)

"""

from __future__ import annotations

from typing import Any


class Pptx2HtmlError(Exception):
    """Base exception class for all pptx2html-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(Pptx2HtmlError):
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


class FileError(Pptx2HtmlError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class MalformedFileError(FileError):
    """Exception raised when a file or XML part is corrupted or malformed."""


class ParsingError(Pptx2HtmlError):
    """Exception raised when a presentation package cannot be read.

    Parameters
    ----------
    message : str
        Description of the parsing error
    part_name : str, optional
        Name of the package part being read when the error occurred
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, part_name: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with part details."""
        super().__init__(message, original_error=original_error)
        self.part_name = part_name


class RenderingError(Pptx2HtmlError):
    """Exception raised when HTML output cannot be produced or written."""


class ChartFixError(Pptx2HtmlError):
    """Exception raised when the chart styling fixer cannot run.

    Parameters
    ----------
    message : str
        Description of the failure
    chart_path : str, optional
        Path of the chart file involved
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, chart_path: str | None = None, original_error: Exception | None = None):
        """Initialize the fixer error with the chart path."""
        super().__init__(message, original_error=original_error)
        self.chart_path = chart_path
