#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdast library.

This module defines the exception classes raised while parsing Markdown into
an AST, validating configuration, and compiling an AST back into Markdown.
Each exception carries a human-readable message that names the offending
option, value, or node type.

Exception Hierarchy
-------------------
- MdastError (base exception)

  - InputError (wrong top-level argument shape)

  - ValidationError (parameter/option validation)

  - UnknownTypeError (node type outside the closed node set)

Exceptions raised by caller-supplied transforms are never wrapped; they reach
the caller of ``parse`` unchanged.

"""

from typing import Any


class MdastError(Exception):
    """Base exception class for all mdast-specific errors.

    Catching this will catch every library-specific error, but not errors
    raised by caller-supplied transforms.

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


class InputError(MdastError):
    """Exception raised when a top-level argument has the wrong shape.

    This covers:
    - ``parse`` receiving something other than a string
    - ``stringify`` receiving something other than a node or node mapping
    - malformed node mappings (missing or unexpected fields)
    - non-callable transforms passed to ``use``

    Parameters
    ----------
    message : str
        Description of the input error
    parameter_name : str, optional
        Name of the offending argument
    parameter_value : any, optional
        The value that was provided
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
        """Initialize the input error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ValidationError(MdastError):
    """Exception raised for invalid configuration options.

    This exception covers validation errors such as:
    - Option values of the wrong type
    - Option values outside their enumerated or numeric domain
    - Violated cross-option constraints (``tables`` without ``gfm``)
    - Configuration containers that are not mappings

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid option (e.g. ``"options.bullet"``)
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic option
    parameter_value : any
        The value that caused the error

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


class UnknownTypeError(MdastError):
    """Exception raised when a node carries a type outside the closed node set.

    Parameters
    ----------
    node_type : str
        The offending node type
    message : str, optional
        Custom error message. If not provided, one naming the type is generated.

    Attributes
    ----------
    node_type : str
        The offending node type

    """

    def __init__(self, node_type: Any, message: str | None = None):
        """Initialize the error with the offending node type."""
        if message is None:
            message = f"Cannot compile unknown node type `{node_type}`"
        super().__init__(message)
        self.node_type = node_type
