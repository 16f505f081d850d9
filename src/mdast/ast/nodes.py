#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/ast/nodes.py
"""AST node classes for Markdown document representation.

This module defines the closed set of node types produced by the tokenizer and
consumed by the stringifier. Every node carries a ``type`` tag (the mdast type
name) and exactly the fields allowed for that type, no more and no fewer.

Node Hierarchy
--------------
All nodes inherit from the abstract Node class and support the visitor pattern.

Block-level nodes:
    - Root, Paragraph, Heading, Code, Blockquote
    - List, ListItem, Table, TableHeader, TableRow, TableCell
    - HorizontalRule, HTML, FootnoteDefinition

Inline nodes:
    - Text, Escape, Emphasis, Strong, Delete, InlineCode
    - Link, Image, Break, Footnote, HTML

Node Shapes
-----------
=================== =========================================
type                fields beyond ``type``
=================== =========================================
root                children, footnotes (optional)
paragraph, ...      children
listItem            children, loose
list                children, ordered
heading             children, depth
footnote            id
footnoteDefinition  children, id
inlineCode, text    value
code                value, lang
horizontalRule      (none)
link                children, href, title
image               src, alt, title
table               children, align
html                value
=================== =========================================

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from mdast.constants import MAX_HEADING_DEPTH, MIN_HEADING_DEPTH, TABLE_ALIGNMENTS, Alignment


class Node(ABC):
    """Base class for all AST nodes.

    Subclasses are dataclasses whose fields form the node's closed shape. The
    ``type`` class attribute is the discriminant used by serialization and by
    the stringifier's type check.

    """

    type: ClassVar[str]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Root(Node):
    """Root node containing the top-level blocks of a document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    footnotes : dict or None, default = None
        Footnote definitions keyed by id. ``None`` when footnote parsing
        was not enabled; definitions collected here are removed from
        ``children``.

    """

    type: ClassVar[str] = "root"

    children: list[Node] = field(default_factory=list)
    footnotes: Optional[dict[str, FootnoteDefinition]] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_root``."""
        return visitor.visit_root(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    type: ClassVar[str] = "paragraph"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading node (depth 1-6).

    Parameters
    ----------
    depth : int
        Heading depth (1-6, where 1 is most important)
    children : list of Node, default = empty list
        Inline nodes representing heading text

    """

    type: ClassVar[str] = "heading"

    depth: int
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading depth is an integer between 1 and 6."""
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise ValueError(f"Heading depth must be an integer, got {self.depth!r}")
        if not MIN_HEADING_DEPTH <= self.depth <= MAX_HEADING_DEPTH:
            raise ValueError(f"Heading depth must be 1-6, got {self.depth}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class Code(Node):
    """Code block node with optional language.

    Parameters
    ----------
    value : str
        Code content (not parsed as markdown)
    lang : str or None, default = None
        Info string language of a fenced block; None for indented blocks

    """

    type: ClassVar[str] = "code"

    value: str
    lang: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code``."""
        return visitor.visit_code(self)


@dataclass
class Blockquote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote

    """

    type: ClassVar[str] = "blockquote"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_blockquote``."""
        return visitor.visit_blockquote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool, default = False
        True for numbered lists, False for bulleted lists
    children : list of ListItem, default = empty list
        List items

    """

    type: ClassVar[str] = "list"

    ordered: bool = False
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the ordered flag is a real boolean."""
        if not isinstance(self.ordered, bool):
            raise ValueError(f"List ordered flag must be a bool, got {self.ordered!r}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    loose : bool, default = False
        Whether the item is separated from its content or neighbours by
        blank lines

    """

    type: ClassVar[str] = "listItem"

    children: list[Node] = field(default_factory=list)
    loose: bool = False

    def __post_init__(self) -> None:
        """Validate the loose flag is a real boolean."""
        if not isinstance(self.loose, bool):
            raise ValueError(f"List item loose flag must be a bool, got {self.loose!r}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node (GFM extension).

    The first child is a TableHeader, the rest are TableRow nodes.

    Parameters
    ----------
    align : list, default = empty list
        Per-column alignment: "left", "right", "center" or None
    children : list of Node, default = empty list
        Header and body rows

    """

    type: ClassVar[str] = "table"

    align: list[Optional[Alignment]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate every alignment value."""
        for value in self.align:
            if value not in TABLE_ALIGNMENTS:
                raise ValueError(f"Table alignment must be left, right, center or None, got {value!r}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class TableHeader(Node):
    """Header row of a table."""

    type: ClassVar[str] = "tableHeader"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_header``."""
        return visitor.visit_table_header(self)


@dataclass
class TableRow(Node):
    """Body row of a table."""

    type: ClassVar[str] = "tableRow"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell containing inline content."""

    type: ClassVar[str] = "tableCell"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass
class HorizontalRule(Node):
    """Thematic break."""

    type: ClassVar[str] = "horizontalRule"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_horizontal_rule``."""
        return visitor.visit_horizontal_rule(self)


@dataclass
class HTML(Node):
    """Raw HTML, either a block or an inline tag.

    Parameters
    ----------
    value : str
        HTML source, passed through unchanged

    """

    type: ClassVar[str] = "html"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_html``."""
        return visitor.visit_html(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition.

    Parameters
    ----------
    id : str
        Footnote identifier referenced by Footnote nodes
    children : list of Node, default = empty list
        Block content of the footnote

    """

    type: ClassVar[str] = "footnoteDefinition"

    id: str
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote_definition``."""
        return visitor.visit_footnote_definition(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text.

    Parameters
    ----------
    value : str
        Text content

    """

    type: ClassVar[str] = "text"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Escape(Node):
    """Backslash-escaped character.

    Parameters
    ----------
    value : str
        The escaped character, without the backslash

    """

    type: ClassVar[str] = "escape"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_escape``."""
        return visitor.visit_escape(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) span."""

    type: ClassVar[str] = "emphasis"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_emphasis``."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) span."""

    type: ClassVar[str] = "strong"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_strong``."""
        return visitor.visit_strong(self)


@dataclass
class Delete(Node):
    """Strikethrough span (GFM extension)."""

    type: ClassVar[str] = "delete"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_delete``."""
        return visitor.visit_delete(self)


@dataclass
class InlineCode(Node):
    """Inline code span.

    Parameters
    ----------
    value : str
        Code content

    """

    type: ClassVar[str] = "inlineCode"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_inline_code``."""
        return visitor.visit_inline_code(self)


@dataclass
class Break(Node):
    """Hard line break."""

    type: ClassVar[str] = "break"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_break``."""
        return visitor.visit_break(self)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    href : str
        Link target
    children : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Link title

    """

    type: ClassVar[str] = "link"

    href: str
    children: list[Node] = field(default_factory=list)
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image.

    Parameters
    ----------
    src : str
        Image source
    alt : str or None, default = None
        Alternative text
    title : str or None, default = None
        Image title

    """

    type: ClassVar[str] = "image"

    src: str
    alt: Optional[str] = None
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image``."""
        return visitor.visit_image(self)


@dataclass
class Footnote(Node):
    """Footnote reference.

    The id is resolved against ``Root.footnotes`` by consumers; the tree
    itself holds no pointer to the definition.

    Parameters
    ----------
    id : str
        Identifier of the referenced footnote definition

    """

    type: ClassVar[str] = "footnote"

    id: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote``."""
        return visitor.visit_footnote(self)


NODE_TYPES: dict[str, type[Node]] = {
    cls.type: cls
    for cls in (
        Root,
        Paragraph,
        Heading,
        Code,
        Blockquote,
        List,
        ListItem,
        Table,
        TableHeader,
        TableRow,
        TableCell,
        HorizontalRule,
        HTML,
        FootnoteDefinition,
        Text,
        Escape,
        Emphasis,
        Strong,
        Delete,
        InlineCode,
        Break,
        Link,
        Image,
        Footnote,
    )
}
"""Closed mapping of mdast type names to node classes."""


def get_node_children(node: Node) -> list[Node]:
    """Get the child nodes of a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        The node's children (empty list for leaf nodes). Footnote definitions
        held by ``Root.footnotes`` are not included.

    """
    return list(getattr(node, "children", []))
