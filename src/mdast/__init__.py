"""mdast - bidirectional Markdown to AST conversion.

mdast parses Markdown text into a strict, typed syntax tree and compiles such
trees back into Markdown, under one shared contract for both directions.

Key Features
------------
- Block and inline tokenizer with GFM, footnote, breaks and pedantic modes
- Deterministic, configurable Markdown compiler
- Plain ``type``-tagged mapping / JSON interchange form
- Swappable tokenizer and compiler implementations
- Immutable processors with ordered post-parse transforms

Examples
--------
Round trip:

    >>> import mdast
    >>> root = mdast.parse("Some *emphasis*")
    >>> mdast.stringify(root)
    'Some _emphasis_\\n'

Transforms:

    >>> processor = mdast.use(lambda root, options: root.children.clear())
    >>> processor.stringify(processor.parse("gone"))
    '\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from mdast.api import parse, stringify, use
from mdast.exceptions import InputError, MdastError, UnknownTypeError, ValidationError
from mdast.options import ParseOptions, StringifyOptions
from mdast.parsers import MarkdownParser
from mdast.renderers import MarkdownCompiler
from mdast.transforms import Processor

__all__ = [
    "InputError",
    "MarkdownCompiler",
    "MarkdownParser",
    "MdastError",
    "ParseOptions",
    "Processor",
    "StringifyOptions",
    "UnknownTypeError",
    "ValidationError",
    "__version__",
    "parse",
    "stringify",
    "use",
]
