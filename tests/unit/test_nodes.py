#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and defaults
- Validation of node constraints
- Visitor pattern acceptance
- Tree traversal with ``walk``

"""

import pytest

from mdast.ast import (
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
    NodeVisitor,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    walk,
)


@pytest.mark.unit
class TestNodeCreation:
    """Tests for node construction and defaults."""

    def test_root_defaults(self) -> None:
        """Test that a root starts empty and without footnotes."""
        root = Root()
        assert root.children == []
        assert root.footnotes is None

    def test_code_defaults(self) -> None:
        """Test that code has no language by default."""
        code = Code("print(1)")
        assert code.value == "print(1)"
        assert code.lang is None

    def test_list_defaults(self) -> None:
        """Test list and list item flags default to False."""
        assert List().ordered is False
        assert ListItem().loose is False

    def test_link_and_image_defaults(self) -> None:
        """Test optional link and image fields default to None."""
        link = Link(href="http://example.com")
        image = Image(src="a.png")
        assert link.title is None
        assert link.children == []
        assert image.alt is None
        assert image.title is None

    def test_children_are_not_shared(self) -> None:
        """Test that default children lists are independent."""
        first = Paragraph()
        second = Paragraph()
        first.children.append(Text("a"))
        assert second.children == []

    def test_type_names(self) -> None:
        """Test the discriminant of every node class."""
        expected = {
            Root: "root",
            Paragraph: "paragraph",
            Heading: "heading",
            Code: "code",
            Blockquote: "blockquote",
            List: "list",
            ListItem: "listItem",
            Table: "table",
            TableHeader: "tableHeader",
            TableRow: "tableRow",
            TableCell: "tableCell",
            HorizontalRule: "horizontalRule",
            HTML: "html",
            FootnoteDefinition: "footnoteDefinition",
            Text: "text",
            Escape: "escape",
            Emphasis: "emphasis",
            Strong: "strong",
            Delete: "delete",
            InlineCode: "inlineCode",
            Break: "break",
            Link: "link",
            Image: "image",
            Footnote: "footnote",
        }
        for node_class, type_name in expected.items():
            assert node_class.type == type_name
            assert NODE_TYPES[type_name] is node_class
        assert len(NODE_TYPES) == len(expected)

    def test_equality(self) -> None:
        """Test that nodes compare by value."""
        assert Heading(depth=2, children=[Text("a")]) == Heading(depth=2, children=[Text("a")])
        assert Text("a") != Escape("a")


@pytest.mark.unit
class TestNodeValidation:
    """Tests for node invariants."""

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5, 6])
    def test_heading_valid_depth(self, depth: int) -> None:
        """Test that depths 1 through 6 are accepted."""
        assert Heading(depth=depth).depth == depth

    @pytest.mark.parametrize("depth", [0, 7, -1])
    def test_heading_depth_out_of_range(self, depth: int) -> None:
        """Test that depths outside 1-6 are rejected."""
        with pytest.raises(ValueError, match="1-6"):
            Heading(depth=depth)

    @pytest.mark.parametrize("depth", [True, 1.0, "1"])
    def test_heading_depth_not_integer(self, depth: object) -> None:
        """Test that non-integer depths are rejected."""
        with pytest.raises(ValueError, match="integer"):
            Heading(depth=depth)  # type: ignore[arg-type]

    def test_list_ordered_must_be_bool(self) -> None:
        """Test that the ordered flag must be a bool."""
        with pytest.raises(ValueError):
            List(ordered=1)  # type: ignore[arg-type]

    def test_list_item_loose_must_be_bool(self) -> None:
        """Test that the loose flag must be a bool."""
        with pytest.raises(ValueError):
            ListItem(loose="yes")  # type: ignore[arg-type]

    def test_table_alignment_values(self) -> None:
        """Test that table alignments are restricted."""
        table = Table(align=["left", "right", "center", None])
        assert table.align == ["left", "right", "center", None]
        with pytest.raises(ValueError, match="alignment"):
            Table(align=["middle"])  # type: ignore[list-item]


class _TypeRecorder(NodeVisitor):
    """Visitor recording the type of every visited node."""

    def __init__(self) -> None:
        self.seen: list[str] = []

    def _record(self, node) -> None:
        self.seen.append(node.type)
        for child in getattr(node, "children", []):
            child.accept(self)

    visit_root = visit_paragraph = visit_heading = visit_code = _record
    visit_blockquote = visit_list = visit_list_item = visit_table = _record
    visit_table_header = visit_table_row = visit_table_cell = visit_horizontal_rule = _record
    visit_html = visit_footnote_definition = visit_text = visit_escape = _record
    visit_emphasis = visit_strong = visit_delete = visit_inline_code = _record
    visit_break = visit_link = visit_image = visit_footnote = _record


@pytest.mark.unit
class TestVisitorPattern:
    """Tests for ``accept`` dispatch and ``walk``."""

    def test_accept_dispatches_by_type(self) -> None:
        """Test that each node calls its own visit method."""
        tree = Root(
            children=[
                Heading(depth=1, children=[Text("Title")]),
                List(children=[ListItem(children=[Paragraph(children=[InlineCode("x")])])]),
            ]
        )
        recorder = _TypeRecorder()
        tree.accept(recorder)
        assert recorder.seen == ["root", "heading", "text", "list", "listItem", "paragraph", "inlineCode"]

    def test_visitor_is_abstract(self) -> None:
        """Test that a visitor missing methods cannot be instantiated."""

        class Partial(NodeVisitor):
            def visit_text(self, node):
                return node.value

        with pytest.raises(TypeError):
            Partial()  # type: ignore[abstract]

    def test_walk_document_order(self) -> None:
        """Test that walk yields nodes depth first, in order."""
        tree = Root(
            children=[
                Paragraph(children=[Text("a"), Strong(children=[Text("b")])]),
                HorizontalRule(),
            ]
        )
        assert [node.type for node in walk(tree)] == ["root", "paragraph", "text", "strong", "text", "horizontalRule"]

    def test_walk_includes_footnote_definitions(self) -> None:
        """Test that walk visits definitions held by the root."""
        definition = FootnoteDefinition(id="1", children=[Paragraph(children=[Text("note")])])
        tree = Root(children=[Paragraph(children=[Footnote("1")])], footnotes={"1": definition})
        types = [node.type for node in walk(tree)]
        assert types == ["root", "paragraph", "footnote", "footnoteDefinition", "paragraph", "text"]
