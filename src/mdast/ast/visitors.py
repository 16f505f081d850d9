#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used to process mdast nodes.
The stringifier is a visitor; custom compilers may subclass it or implement
the same methods from scratch.

Because the node set is closed, every visit method is abstract: a concrete
visitor must handle every node type, and forgetting one is an error at
instantiation time rather than a silent gap at render time.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

from mdast.ast.nodes import (
    HTML,
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


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node type. Nodes dispatch
    to these methods through ``Node.accept``.

    Examples
    --------
    Visitor that collects plain text:

        >>> class TextCollector(NodeVisitor):
        ...     def visit_text(self, node):
        ...         return node.value
        ...     # remaining visit_* methods omitted

    """

    @abstractmethod
    def visit_root(self, node: Root) -> Any:
        """Visit a Root node.

        Parameters
        ----------
        node : Root
            The root node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node.

        Parameters
        ----------
        node : Heading
            The heading node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code block node."""
        pass

    @abstractmethod
    def visit_blockquote(self, node: Blockquote) -> Any:
        """Visit a Blockquote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node.

        Parameters
        ----------
        node : List
            The list node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_header(self, node: TableHeader) -> Any:
        """Visit a TableHeader node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""
        pass

    @abstractmethod
    def visit_html(self, node: HTML) -> Any:
        """Visit an HTML node (block or inline)."""
        pass

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_escape(self, node: Escape) -> Any:
        """Visit an Escape node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_delete(self, node: Delete) -> Any:
        """Visit a Delete node."""
        pass

    @abstractmethod
    def visit_inline_code(self, node: InlineCode) -> Any:
        """Visit an InlineCode node."""
        pass

    @abstractmethod
    def visit_break(self, node: Break) -> Any:
        """Visit a Break node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node.

        Parameters
        ----------
        node : Link
            The link node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_footnote(self, node: Footnote) -> Any:
        """Visit a Footnote reference node."""
        pass


def walk(node: Node) -> Iterator[Node]:
    """Iterate over a node and all of its descendants in document order.

    Footnote definitions held in ``Root.footnotes`` are yielded after the
    root's children.

    Parameters
    ----------
    node : Node
        Node to start from

    Yields
    ------
    Node
        Each node in the subtree, depth first

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        pending = get_node_children(current)
        if isinstance(current, Root) and current.footnotes:
            pending.extend(current.footnotes.values())
        stack.extend(reversed(pending))
