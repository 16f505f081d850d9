#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/renderers/base.py
"""Base classes for AST compilers.

This module defines the abstract base class for compilers that turn an AST
back into Markdown text, and the resolution of a caller-supplied
``implementation`` into a compiler instance. A compiler receives validated
``StringifyOptions`` at construction and produces text through
``visit(node)``.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from mdast.exceptions import InputError
from mdast.options.markdown import StringifyOptions

logger = logging.getLogger(__name__)


class BaseCompiler(ABC):
    """Abstract base class for all compilers.

    Parameters
    ----------
    options : StringifyOptions or None, default = None
        Stringify options. If None, default options are used.

    Examples
    --------
    Creating a custom compiler:

        >>> from mdast.renderers.base import BaseCompiler
        >>>
        >>> class NullCompiler(BaseCompiler):
        ...     def visit(self, node):
        ...         return ""

    """

    def __init__(self, options: StringifyOptions | None = None):
        """Initialize the compiler with optional configuration."""
        self.options: StringifyOptions = options or StringifyOptions()

    @abstractmethod
    def visit(self, node: Any) -> str:
        """Compile a node (or node mapping) into Markdown text.

        Parameters
        ----------
        node : Node or Mapping
            Tree to compile

        Returns
        -------
        str
            Markdown text

        """
        raise NotImplementedError


def resolve_compiler(implementation: Any, options: StringifyOptions) -> Any:
    """Turn a caller-supplied compiler implementation into an instance.

    Parameters
    ----------
    implementation : class, callable, object with ``visit``, or None
        A class or factory is called with the validated options; an object
        already providing ``visit`` is used as-is. None selects the default
        ``MarkdownCompiler``.
    options : StringifyOptions
        Validated stringify options

    Returns
    -------
    Any
        Object with a ``visit(node)`` method

    Raises
    ------
    InputError
        If the implementation provides no ``visit`` method

    """
    if implementation is None:
        from mdast.renderers.markdown import MarkdownCompiler

        implementation = MarkdownCompiler

    if isinstance(implementation, type) or not hasattr(implementation, "visit"):
        if not callable(implementation):
            raise InputError(
                f"Expected a compiler class, factory or instance, not `{implementation!r}`",
                parameter_name="implementation",
                parameter_value=implementation,
            )
        compiler = implementation(options)
    else:
        compiler = implementation

    if not callable(getattr(compiler, "visit", None)):
        raise InputError(
            f"Compiler `{compiler!r}` has no `visit` method",
            parameter_name="implementation",
            parameter_value=implementation,
        )

    logger.debug("Using compiler %s", type(compiler).__name__)
    return compiler
