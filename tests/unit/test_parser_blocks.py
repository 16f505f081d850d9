#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_parser_blocks.py
"""Unit tests for block-level tokenizing in MarkdownParser.

Tests cover:
- Headings (ATX, setext, closing hashes, pedantic form)
- Code blocks (indented, fenced, unclosed)
- Blockquotes, lists, rules, HTML blocks
- Reference and footnote definitions
- GFM tables

"""

import pytest

from mdast.ast import (
    HTML,
    Blockquote,
    Code,
    FootnoteDefinition,
    Heading,
    HorizontalRule,
    Link,
    List,
    ListItem,
    Paragraph,
    Root,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
)
from mdast.options import ParseOptions
from mdast.parsers import MarkdownParser
from mdast.parsers.markdown import preprocess, split_table_row, starts_block


def _parse(text: str, **options) -> Root:
    return MarkdownParser(ParseOptions(**options)).parse(text)


def _para(text: str) -> Paragraph:
    return Paragraph(children=[Text(text)])


@pytest.mark.unit
class TestPreprocess:
    """Tests for source normalization."""

    def test_line_endings(self) -> None:
        """Test CRLF and CR become LF."""
        assert preprocess("a\r\nb\rc") == ["a", "b", "c"]

    def test_tabs_and_nbsp(self) -> None:
        """Test tabs expand to four spaces and nbsp becomes a space."""
        assert preprocess("\tcode\u00a0x") == ["    code x"]

    def test_blank_lines_emptied(self) -> None:
        """Test whitespace-only lines become empty."""
        assert preprocess("a\n   \nb") == ["a", "", "b"]


@pytest.mark.unit
class TestHeadings:
    """Tests for heading tokenizing."""

    def test_atx(self) -> None:
        """Test ATX headings of each depth."""
        for depth in range(1, 7):
            root = _parse("#" * depth + " Title")
            assert root.children == [Heading(depth=depth, children=[Text("Title")])]

    def test_seven_hashes_is_paragraph(self) -> None:
        """Test that seven hashes do not open a heading."""
        assert _parse("####### Title").children == [_para("####### Title")]

    def test_atx_requires_space(self) -> None:
        """Test that a space is required after the hashes."""
        assert _parse("#Title").children == [_para("#Title")]

    def test_pedantic_atx_without_space(self) -> None:
        """Test the pedantic form accepts headings without a space."""
        assert _parse("#Title", pedantic=True).children == [Heading(depth=1, children=[Text("Title")])]

    def test_closing_hashes_removed(self) -> None:
        """Test closing hashes are stripped."""
        assert _parse("## Title ##").children == [Heading(depth=2, children=[Text("Title")])]

    def test_empty_heading(self) -> None:
        """Test a heading with no content."""
        assert _parse("#").children == [Heading(depth=1, children=[])]

    def test_setext(self) -> None:
        """Test setext headings."""
        root = _parse("Title\n=====\n\nSub\n---")
        assert root.children == [
            Heading(depth=1, children=[Text("Title")]),
            Heading(depth=2, children=[Text("Sub")]),
        ]

    def test_setext_ends_paragraph(self) -> None:
        """Test a setext heading directly after a paragraph line."""
        root = _parse("para\nTitle\n===")
        assert root.children == [_para("para"), Heading(depth=1, children=[Text("Title")])]


@pytest.mark.unit
class TestCodeBlocks:
    """Tests for code block tokenizing."""

    def test_indented(self) -> None:
        """Test an indented code block keeps inner blank lines."""
        root = _parse("    line one\n\n    line two\n\nafter")
        assert root.children == [Code("line one\n\nline two"), _para("after")]

    def test_fenced_with_language(self) -> None:
        """Test a fenced block records its language."""
        root = _parse("```python\nprint('hi')\n```")
        assert root.children == [Code("print('hi')", lang="python")]

    def test_tilde_fence(self) -> None:
        """Test tilde fences and longer closing fences."""
        root = _parse("~~~\na\n~~~~~")
        assert root.children == [Code("a")]

    def test_fence_content_is_literal(self) -> None:
        """Test that Markdown inside a fence is not tokenized."""
        root = _parse("```\n# not a heading\n\n*x*\n```")
        assert root.children == [Code("# not a heading\n\n*x*")]

    def test_unclosed_fence(self) -> None:
        """Test that an unclosed fence runs to the end of input."""
        assert _parse("```\nabc\ndef").children == [Code("abc\ndef")]

    def test_shorter_fence_does_not_close(self) -> None:
        """Test that a closing fence must be at least as long as the opening one."""
        assert _parse("````\n```\n````").children == [Code("```")]

    def test_only_first_info_word_is_language(self) -> None:
        """Test that extra info string words are ignored."""
        assert _parse("``` js title=x\n1\n```").children == [Code("1", lang="js")]


@pytest.mark.unit
class TestBlockquotes:
    """Tests for blockquote tokenizing."""

    def test_simple(self) -> None:
        """Test a two-line quote forms one paragraph."""
        assert _parse("> a\n> b").children == [Blockquote(children=[_para("a\nb")])]

    def test_lazy_continuation(self) -> None:
        """Test that unmarked lines continue the quoted paragraph."""
        assert _parse("> a\nb").children == [Blockquote(children=[_para("a\nb")])]

    def test_nested(self) -> None:
        """Test nested quotes."""
        root = _parse("> > deep")
        assert root.children == [Blockquote(children=[Blockquote(children=[_para("deep")])])]

    def test_multiple_paragraphs(self) -> None:
        """Test quoted blank lines separate paragraphs."""
        root = _parse("> a\n>\n> b")
        assert root.children == [Blockquote(children=[_para("a"), _para("b")])]


@pytest.mark.unit
class TestLists:
    """Tests for list tokenizing."""

    def test_tight_bullet_list(self) -> None:
        """Test a tight unordered list."""
        root = _parse("- a\n- b")
        assert root.children == [
            List(ordered=False, children=[ListItem(children=[_para("a")]), ListItem(children=[_para("b")])])
        ]

    def test_ordered_list(self) -> None:
        """Test an ordered list."""
        root = _parse("1. one\n2. two")
        assert root.children[0] == List(
            ordered=True, children=[ListItem(children=[_para("one")]), ListItem(children=[_para("two")])]
        )

    def test_loose_list(self) -> None:
        """Test items separated by a blank line are loose."""
        root = _parse("- a\n\n- b")
        assert root.children == [
            List(children=[ListItem(children=[_para("a")], loose=True), ListItem(children=[_para("b")], loose=True)])
        ]

    def test_item_with_two_paragraphs_is_loose(self) -> None:
        """Test an item holding blank-separated blocks is loose."""
        root = _parse("- a\n\n  b\n- c")
        items = root.children[0].children
        assert items[0] == ListItem(children=[_para("a"), _para("b")], loose=True)
        assert items[1].loose is False

    def test_nested_list(self) -> None:
        """Test an indented list nests inside the item."""
        root = _parse("- a\n  - b")
        assert root.children == [
            List(children=[ListItem(children=[_para("a"), List(children=[ListItem(children=[_para("b")])])])])
        ]

    def test_kind_change_ends_list(self) -> None:
        """Test that switching between bullet and ordered starts a new list."""
        root = _parse("- a\n1. b")
        assert [node.ordered for node in root.children] == [False, True]

    def test_rule_ends_list(self) -> None:
        """Test that a horizontal rule is not taken as an item."""
        root = _parse("- a\n* * *")
        assert root.children == [List(children=[ListItem(children=[_para("a")])]), HorizontalRule()]

    def test_lazy_continuation(self) -> None:
        """Test unindented paragraph continuation lines stay in the item."""
        root = _parse("- a\nb")
        assert root.children == [List(children=[ListItem(children=[_para("a\nb")])])]

    def test_paragraph_after_list(self) -> None:
        """Test that an unindented line after a blank line ends the list."""
        root = _parse("- a\n\nafter")
        assert root.children == [List(children=[ListItem(children=[_para("a")])]), _para("after")]

    def test_empty_item(self) -> None:
        """Test an item with no content."""
        root = _parse("-\n- b")
        assert root.children[0].children[0] == ListItem(children=[])

    def test_code_in_item(self) -> None:
        """Test a fenced code block inside an item."""
        root = _parse("- ```\n  x\n  ```")
        assert root.children == [List(children=[ListItem(children=[Code("x")])])]

    def test_list_interrupts_paragraph(self) -> None:
        """Test a list directly after a paragraph line."""
        root = _parse("para\n- a")
        assert root.children == [_para("para"), List(children=[ListItem(children=[_para("a")])])]


@pytest.mark.unit
class TestOtherBlocks:
    """Tests for rules, HTML, definitions and paragraphs."""

    @pytest.mark.parametrize("line", ["***", "---", "___", "* * *", "- - -", "_____"])
    def test_horizontal_rule(self, line: str) -> None:
        """Test the accepted horizontal rule forms."""
        assert _parse(line).children == [HorizontalRule()]

    def test_mixed_rule_markers(self) -> None:
        """Test that mixed markers do not form a rule."""
        assert not isinstance(_parse("*-*").children[0], HorizontalRule)

    def test_html_block(self) -> None:
        """Test a block-level HTML element runs to the blank line."""
        root = _parse("<div>\n*hi*\n</div>\n\npara")
        assert root.children == [HTML("<div>\n*hi*\n</div>"), _para("para")]

    def test_html_comment(self) -> None:
        """Test a multi-line comment."""
        root = _parse("<!-- a\n\nb -->\ntext")
        assert root.children == [HTML("<!-- a\n\nb -->"), _para("text")]

    def test_paragraph_lines_joined(self) -> None:
        """Test paragraph lines are joined with newlines and stripped."""
        assert _parse("  a\n  b  ").children == [_para("a\nb")]

    def test_reference_definition(self) -> None:
        """Test definitions produce no node and resolve references."""
        root = _parse('[x]\n\n[X]: http://example.com "Title"')
        assert root.children == [
            Paragraph(children=[Link(href="http://example.com", children=[Text("x")], title="Title")])
        ]

    def test_first_definition_wins(self) -> None:
        """Test duplicate definitions keep the first destination."""
        root = _parse("[a][ref]\n\n[ref]: /first\n[ref]: /second")
        assert root.children[0].children[0].href == "/first"

    def test_definition_angle_destination(self) -> None:
        """Test angle-bracketed definition destinations."""
        root = _parse("[a]\n\n[a]: <my url>")
        assert root.children[0].children[0].href == "my url"

    def test_definition_title_with_quotes(self) -> None:
        """Test escaped quotes in definition titles."""
        root = _parse('[a]\n\n[a]: /u "say \\"hi\\""')
        assert root.children[0].children[0].title == 'say "hi"'

    def test_paragraph_is_the_fallback(self) -> None:
        """Test lines no block matcher claims become paragraphs."""

        class ParagraphsOnly(MarkdownParser):
            def _block_matchers(self):
                return []

        root = ParagraphsOnly().parse("# a\n\n- b")
        assert root.children == [_para("# a"), _para("- b")]

    @pytest.mark.parametrize(
        ("line", "expected"),
        [("# a", True), ("1. a", True), ("> a", True), ("---", True), ("<div>", True), ("a", False), ("#a", False)],
    )
    def test_starts_block(self, line: str, expected: bool) -> None:
        """Test lines that interrupt a paragraph."""
        assert starts_block(line) is expected

    def test_starts_block_options(self) -> None:
        """Test the pedantic heading form and footnote definitions."""
        assert starts_block("#a", pedantic=True)
        assert not starts_block("[^1]: a")
        assert starts_block("[^1]: a", footnotes=True)

    def test_empty_input(self) -> None:
        """Test empty and blank input give an empty root."""
        assert _parse("") == Root(children=[])
        assert _parse("\n\n  \n") == Root(children=[])


@pytest.mark.unit
class TestFootnoteDefinitions:
    """Tests for footnote definitions."""

    def test_definition_collected(self) -> None:
        """Test footnote definitions are collected on the root."""
        root = _parse("Text[^1]\n\n[^1]: The note.", footnotes=True)
        assert root.footnotes == {"1": FootnoteDefinition(id="1", children=[_para("The note.")])}
        assert len(root.children) == 1

    def test_multi_paragraph_definition(self) -> None:
        """Test indented continuation paragraphs."""
        root = _parse("[^a]: one\n\n    two", footnotes=True)
        assert root.footnotes["a"].children == [_para("one"), _para("two")]

    def test_disabled(self) -> None:
        """Test footnotes are plain text when disabled."""
        root = _parse("Text[^1]")
        assert root.footnotes is None
        assert root.children == [_para("Text[^1]")]

    def test_empty_map_when_enabled(self) -> None:
        """Test the map exists even without definitions."""
        assert _parse("plain", footnotes=True).footnotes == {}


@pytest.mark.unit
class TestTables:
    """Tests for GFM pipe tables."""

    def test_table_with_alignment(self) -> None:
        """Test header, alignment and body rows."""
        root = _parse("| a | b | c | d |\n| :-- | --: | :-: | --- |\n| 1 | 2 | 3 | 4 |")
        cells = [TableCell(children=[Text(value)]) for value in "abcd"]
        body = [TableCell(children=[Text(value)]) for value in "1234"]
        assert root.children == [
            Table(
                align=["left", "right", "center", None],
                children=[TableHeader(children=cells), TableRow(children=body)],
            )
        ]

    def test_table_ends_at_blank_line(self) -> None:
        """Test a blank line ends the table."""
        root = _parse("| a |\n| --- |\n| 1 |\n\nafter")
        assert isinstance(root.children[0], Table)
        assert len(root.children[0].children) == 2
        assert root.children[1] == _para("after")

    def test_empty_cell(self) -> None:
        """Test empty cells have no children."""
        root = _parse("| a | |\n| --- | --- |")
        assert root.children[0].children[0].children[1] == TableCell(children=[])

    def test_tables_disabled(self) -> None:
        """Test table syntax stays a paragraph without tables."""
        root = _parse("| a |\n| --- |", tables=False)
        assert isinstance(root.children[0], Paragraph)

    def test_no_tables_without_gfm(self) -> None:
        """Test tables are off in the non-GFM dialect."""
        root = _parse("| a |\n| --- |", gfm=False)
        assert not isinstance(root.children[0], Table)

    def test_split_row_escaped_pipe(self) -> None:
        """Test that escaped pipes do not split cells."""
        assert split_table_row("| a \\| b | c |") == ["a \\| b", "c"]
