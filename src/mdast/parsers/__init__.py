#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown tokenizers."""

from mdast.parsers.base import BaseParser, resolve_parser
from mdast.parsers.inline import InlineTokenizer
from mdast.parsers.markdown import MarkdownParser

__all__ = ["BaseParser", "InlineTokenizer", "MarkdownParser", "resolve_parser"]
