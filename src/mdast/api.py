"""The exported API functions for parsing and stringifying Markdown."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdast/api.py
import logging
from typing import Any

from mdast.ast.nodes import Root
from mdast.transforms.pipeline import DEFAULT_PROCESSOR, Processor, Transform

logger = logging.getLogger(__name__)


def parse(text: str, options: Any = None, implementation: Any = None) -> Root:
    """Parse Markdown text into an AST.

    Parameters
    ----------
    text : str
        Markdown source
    options : ParseOptions, Mapping or None, default = None
        Parse options: ``gfm``, ``tables``, ``footnotes``, ``breaks``,
        ``pedantic``
    implementation : class, callable or object, optional
        Alternate tokenizer. A class or factory is called with the validated
        ``ParseOptions``; an object providing ``parse(text)`` is used as-is.

    Returns
    -------
    Root
        The document tree

    Raises
    ------
    InputError
        If ``text`` is not a string
    ValidationError
        If the options are invalid

    Examples
    --------
    >>> root = parse("# Hello *world*")
    >>> root.children[0].depth
    1

    """
    return DEFAULT_PROCESSOR.parse(text, options, implementation)


def stringify(ast: Any, options: Any = None, implementation: Any = None) -> str:
    """Compile an AST into Markdown text.

    Parameters
    ----------
    ast : Node or Mapping
        Tree to compile; mappings use the mdast object shape
    options : StringifyOptions, Mapping or None, default = None
        Stringify options such as ``bullet``, ``setext`` or ``fences``
    implementation : class, callable or object, optional
        Alternate compiler. A class or factory is called with the validated
        ``StringifyOptions``; an object providing ``visit(node)`` is used
        as-is.

    Returns
    -------
    str
        Markdown text ending in a single newline

    Raises
    ------
    InputError
        If ``ast`` is neither a node nor a mapping
    ValidationError
        If the options are invalid
    UnknownTypeError
        If the tree contains an unknown node type

    Examples
    --------
    >>> stringify({"type": "root", "children": [{"type": "horizontalRule"}]})
    '* * *\\n'

    """
    return DEFAULT_PROCESSOR.stringify(ast, options, implementation)


def use(transform: Transform) -> Processor:
    """Create a processor with ``transform`` attached.

    Parameters
    ----------
    transform : callable
        Called as ``transform(root, options)`` after every ``parse``

    Returns
    -------
    Processor
        New processor; chain further transforms with ``Processor.use``

    """
    return DEFAULT_PROCESSOR.use(transform)
