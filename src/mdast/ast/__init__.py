#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Markdown documents.

The module consists of three components:

- nodes: the closed set of node classes
- visitors: visitor base class and tree walking
- serialization: conversion to and from the plain mdast object shape

Examples
--------
    >>> from mdast.ast import Root, Heading, Text
    >>> from mdast import stringify
    >>> stringify(Root(children=[Heading(depth=1, children=[Text("Title")])]))
    '# Title\\n'

"""

from __future__ import annotations

from mdast.ast.nodes import (
    HTML,
    NODE_TYPES,
    Blockquote,
    Break,
    Code,
    Delete,
    Emphasis,
    Escape,
    Footnote,
    FootnoteDefinition,
    Heading,
    HorizontalRule,
    Image,
    InlineCode,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    get_node_children,
)
from mdast.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from mdast.ast.visitors import NodeVisitor, walk

__all__ = [
    "NODE_TYPES",
    "HTML",
    "Blockquote",
    "Break",
    "Code",
    "Delete",
    "Emphasis",
    "Escape",
    "Footnote",
    "FootnoteDefinition",
    "Heading",
    "HorizontalRule",
    "Image",
    "InlineCode",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Root",
    "Strong",
    "Table",
    "TableCell",
    "TableHeader",
    "TableRow",
    "Text",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "get_node_children",
    "json_to_ast",
    "walk",
]
