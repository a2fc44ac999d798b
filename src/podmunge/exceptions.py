#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the podmunge library.

This module defines specialized exception classes for the error conditions
that can occur while tokenizing, extracting and reassembling a Perl document.

Exception Hierarchy
-------------------
- PodMungeError (base exception)

  - ValidationError (option validation)

  - ParsingError (tokenizer rejects the input)

  - InsertionError (a replacement token could not be placed)

  - EncodingError (text cannot be encoded or decoded)

  - TransformContractError (transform returned a malformed result)

Errors raised by a caller-supplied transform are never wrapped; they
propagate to the caller unchanged.

"""

from typing import Any


class PodMungeError(Exception):
    """Base exception class for all podmunge-specific errors.

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


class ValidationError(PodMungeError):
    """Exception raised for invalid options or parameters.

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


class ParsingError(PodMungeError):
    """Exception raised when the Perl tokenizer rejects its input.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    line : int, optional
        Line number where the problem was detected
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, line: int | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with the offending line."""
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message, original_error=original_error)
        self.line = line


class InsertionError(PodMungeError):
    """Exception raised when a replacement token cannot be attached to the tree.

    This always indicates a broken internal invariant, such as a replacement
    strategy returning something other than a token.

    """


class EncodingError(PodMungeError):
    """Exception raised when text cannot round-trip through the byte encoding.

    Parameters
    ----------
    message : str
        Description of the failure
    encoding : str, optional
        The encoding that was in use
    original_error : Exception, optional
        The underlying ``UnicodeError``

    """

    def __init__(self, message: str, encoding: str | None = None, original_error: Exception | None = None):
        """Initialize the encoding error."""
        super().__init__(message, original_error=original_error)
        self.encoding = encoding


class TransformContractError(PodMungeError):
    """Exception raised when a transform returns something that is not a munge document.

    Parameters
    ----------
    message : str
        Description of the violation
    transform_name : str, optional
        Name of the munger whose transform misbehaved

    """

    def __init__(self, message: str, transform_name: str | None = None):
        """Initialize the contract error."""
        super().__init__(message)
        self.transform_name = transform_name
