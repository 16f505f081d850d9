#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/transforms/pipeline.py
"""Pipeline orchestration for parsing, transforming and stringifying.

This module provides ``Processor``, an immutable value holding an ordered
tuple of transforms. Each transform is a callable invoked as
``transform(root, options)`` on the freshly parsed tree, in attachment order,
with the exact options object the caller passed to ``parse``. Transforms
mutate the tree in place; their return values are ignored and their
exceptions propagate unchanged.

Examples
--------
Attach a transform:

    >>> from mdast import use
    >>> def shout(root, options):
    ...     for node in walk(root):
    ...         if isinstance(node, Text):
    ...             node.value = node.value.upper()
    >>> processor = use(shout)
    >>> processor.stringify(processor.parse("hello"))
    'HELLO\\n'

Independent chains never observe each other:

    >>> base = use(shout)
    >>> first = base.use(other)
    >>> len(base.transforms), len(first.transforms)
    (1, 2)

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from mdast.ast.nodes import Node, Root
from mdast.exceptions import InputError
from mdast.options.base import CloneFrozenMixin
from mdast.options.markdown import ParseOptions, StringifyOptions
from mdast.parsers.base import resolve_parser
from mdast.renderers.base import resolve_compiler

logger = logging.getLogger(__name__)

Transform = Callable[[Root, Any], Any]


@dataclass(frozen=True)
class Processor(CloneFrozenMixin):
    """Immutable parse/stringify pipeline with attached transforms.

    Parameters
    ----------
    transforms : tuple of callable, default = ()
        Transforms run after parsing, in order

    """

    transforms: tuple[Transform, ...] = ()

    def use(self, transform: Transform) -> Processor:
        """Return a new processor with ``transform`` appended.

        The receiver is left unchanged.

        Parameters
        ----------
        transform : callable
            Called as ``transform(root, options)`` after every parse

        Returns
        -------
        Processor
            New processor

        Raises
        ------
        InputError
            If ``transform`` is not callable

        """
        if not callable(transform):
            raise InputError(
                f"Expected a callable transform, not `{transform!r}`",
                parameter_name="transform",
                parameter_value=transform,
            )
        return self.create_updated(transforms=self.transforms + (transform,))

    def parse(self, text: Any, options: Any = None, implementation: Any = None) -> Root:
        """Parse Markdown text and run the attached transforms.

        Parameters
        ----------
        text : str
            Markdown source
        options : ParseOptions, Mapping or None, default = None
            Parse options. This exact object is also passed to each transform.
        implementation : class, callable or object, optional
            Alternate tokenizer (see ``resolve_parser``)

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

        """
        if not isinstance(text, str):
            raise InputError(
                f"Expected a string as input, not `{text!r}`",
                parameter_name="text",
                parameter_value=text,
            )
        settings = ParseOptions.from_value(options)
        parser = resolve_parser(implementation, settings)
        root = parser.parse(text)

        return run_transforms(root, self.transforms, options)

    def stringify(self, ast: Any, options: Any = None, implementation: Any = None) -> str:
        """Compile a tree into Markdown text.

        Transforms are not applied.

        Parameters
        ----------
        ast : Node or Mapping
            Tree to compile
        options : StringifyOptions, Mapping or None, default = None
            Stringify options
        implementation : class, callable or object, optional
            Alternate compiler (see ``resolve_compiler``)

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        InputError
            If ``ast`` is neither a node nor a mapping
        ValidationError
            If the options are invalid
        UnknownTypeError
            If the tree contains an unknown node type

        """
        if not isinstance(ast, (Node, Mapping)):
            raise InputError(
                f"Expected a node as input, not `{ast!r}`",
                parameter_name="ast",
                parameter_value=ast,
            )
        settings = StringifyOptions.from_value(options)
        compiler = resolve_compiler(implementation, settings)
        return compiler.visit(ast)


DEFAULT_PROCESSOR = Processor()
"""Processor without transforms, backing the module-level API."""


def run_transforms(root: Root, transforms: tuple[Transform, ...], options: Optional[Any] = None) -> Root:
    """Apply ``transforms`` to an already parsed tree.

    Parameters
    ----------
    root : Root
        Tree to transform in place
    transforms : tuple of callable
        Transforms to run in order
    options : Any, optional
        Object passed as the second argument of each transform

    Returns
    -------
    Root
        The same tree

    """
    for transform in transforms:
        logger.debug("Applying transform %s", getattr(transform, "__name__", transform))
        transform(root, options)
    return root
