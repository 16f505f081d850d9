#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parsing and stringifying.

Options are frozen dataclasses. ``from_value`` accepts ``None``, an existing
options object, or a plain mapping keyed by option name, and raises
``ValidationError`` for anything invalid.
"""

from __future__ import annotations

from mdast.options.base import UNSET, BaseOptions, CloneFrozenMixin
from mdast.options.markdown import ParseOptions, StringifyOptions

__all__ = [
    "UNSET",
    "BaseOptions",
    "CloneFrozenMixin",
    "ParseOptions",
    "StringifyOptions",
]
