#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/parsers/base.py
"""Base classes for Markdown tokenizers.

This module defines the abstract base class every tokenizer inherits from and
the resolution of a caller-supplied ``implementation`` into a tokenizer
instance. A tokenizer receives validated ``ParseOptions`` at construction and
turns source text into a ``Root`` node through ``parse(text)``.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from mdast.ast.nodes import Root
from mdast.exceptions import InputError
from mdast.options.markdown import ParseOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all Markdown tokenizers.

    Parameters
    ----------
    options : ParseOptions or None, default = None
        Parsing options. If None, default options are used.

    Examples
    --------
    Creating a custom tokenizer:

        >>> from mdast.ast import Root
        >>> from mdast.parsers.base import BaseParser
        >>>
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, text):
        ...         return Root(children=[])

    """

    def __init__(self, options: ParseOptions | None = None):
        """Initialize the tokenizer with optional configuration."""
        self.options: ParseOptions = options or ParseOptions()

    @abstractmethod
    def parse(self, text: str) -> Root:
        """Parse Markdown text into a root node.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        Root
            The document tree

        """
        raise NotImplementedError


def resolve_parser(implementation: Any, options: ParseOptions) -> Any:
    """Turn a caller-supplied tokenizer implementation into an instance.

    Parameters
    ----------
    implementation : class, callable, object with ``parse``, or None
        A class or factory is called with the validated options; an object
        already providing ``parse`` is used as-is. None selects the default
        ``MarkdownParser``.
    options : ParseOptions
        Validated parse options

    Returns
    -------
    Any
        Object with a ``parse(text)`` method

    Raises
    ------
    InputError
        If the implementation provides no ``parse`` method

    """
    if implementation is None:
        from mdast.parsers.markdown import MarkdownParser

        implementation = MarkdownParser

    if isinstance(implementation, type) or not hasattr(implementation, "parse"):
        if not callable(implementation):
            raise InputError(
                f"Expected a tokenizer class, factory or instance, not `{implementation!r}`",
                parameter_name="implementation",
                parameter_value=implementation,
            )
        parser = implementation(options)
    else:
        parser = implementation

    if not callable(getattr(parser, "parse", None)):
        raise InputError(
            f"Tokenizer `{parser!r}` has no `parse` method",
            parameter_name="implementation",
            parameter_value=implementation,
        )

    logger.debug("Using tokenizer %s", type(parser).__name__)
    return parser
