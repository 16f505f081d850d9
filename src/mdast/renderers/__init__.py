#  Copyright (c) 2025 Tom Villani, Ph.D.
"""AST to Markdown compilers."""

from mdast.renderers.base import BaseCompiler, resolve_compiler
from mdast.renderers.markdown import MarkdownCompiler

__all__ = ["BaseCompiler", "MarkdownCompiler", "resolve_compiler"]
