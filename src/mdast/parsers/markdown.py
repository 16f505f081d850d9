#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/parsers/markdown.py
"""Markdown to AST tokenizer.

The tokenizer works in two passes. The block pass walks the preprocessed
lines and, at each offset, tries the block matchers in a fixed priority
order:

1. footnote definition (``footnotes`` only)
2. indented code, fenced code
3. ATX heading, setext heading
4. horizontal rule
5. blockquote
6. list
7. raw HTML block
8. link reference definition
9. table (``gfm`` and ``tables`` only)
10. paragraph, for any line the matchers above decline

Leaf blocks record their raw inline source. The inline pass then tokenizes
every recorded leaf with ``InlineTokenizer``, once all reference definitions
in the document are known.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from mdast.ast.nodes import (
    HTML,
    Blockquote,
    Code,
    FootnoteDefinition,
    Heading,
    HorizontalRule,
    List,
    ListItem,
    Node,
    Paragraph,
    Root,
    Table,
    TableCell,
    TableHeader,
    TableRow,
)
from mdast.constants import BLOCK_HTML_TAGS, INDENT_WIDTH
from mdast.options.markdown import ParseOptions
from mdast.parsers.base import BaseParser
from mdast.parsers.inline import Definitions, InlineTokenizer, normalize_label, unescape, unescape_title

logger = logging.getLogger(__name__)

BlockResult = Optional[tuple[Optional[Node], int]]

# =============================================================================
# Block patterns
# =============================================================================

# Indented code line
INDENTED_CODE_PATTERN = re.compile(r"^ {4}")

# Opening code fence: indentation, fence run, info string
FENCE_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")

# ATX heading; the pedantic form does not require a space after the hashes
ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?=[ ]|$)(.*)$")
PEDANTIC_ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(.*)$")
ATX_CLOSING_PATTERN = re.compile(r"(?:^|[ ]+)#+[ ]*$")

# Setext underline
SETEXT_UNDERLINE_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ ]*$")

# Horizontal rule: three or more of the same marker, optionally spaced
HORIZONTAL_RULE_PATTERN = re.compile(r"^ {0,3}([*\-_])(?:[ ]*\1){2,}[ ]*$")

# Blockquote line
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}>[ ]?(.*)$")

# List item: indentation, marker, following spaces
LIST_ITEM_PATTERN = re.compile(r"^( *)([*+-]|\d+\.)(?:[ ]+|$)")

# Raw HTML blocks
HTML_COMMENT_START_PATTERN = re.compile(r"^ {0,3}<!--")
HTML_BLOCK_START_PATTERN = re.compile(
    r"^ {0,3}</?(?:" + "|".join(BLOCK_HTML_TAGS) + r")(?=[\s/>]|$)",
    re.IGNORECASE,
)

# Link reference definition
DEFINITION_PATTERN = re.compile(
    r"^ {0,3}\[((?:\\.|[^\[\]\\])+)\]:[ ]*"
    r"(?:<([^<>\n]*)>|(\S+))"
    r"(?:[ ]+(?:\"((?:\\.|[^\"\\])*)\"|'((?:\\.|[^'\\])*)'|\(((?:\\.|[^()\\])*)\)))?[ ]*$"
)

# Footnote definition
FOOTNOTE_DEFINITION_PATTERN = re.compile(r"^ {0,3}\[\^([^\]\s]+)\]:[ ]?(.*)$")

# Table alignment cell
TABLE_ALIGNMENT_CELL_PATTERN = re.compile(r"^(:?)-+(:?)$")


def preprocess(text: str) -> list[str]:
    """Normalize Markdown source and split it into lines.

    Line endings become ``\\n``, tabs become four spaces, non-breaking spaces
    become spaces, and whitespace-only lines become empty.

    Parameters
    ----------
    text : str
        Raw Markdown source

    Returns
    -------
    list of str
        Normalized lines

    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " " * INDENT_WIDTH).replace("\u00a0", " ")
    return ["" if not line.strip() else line for line in text.split("\n")]


def _indentation(line: str) -> int:
    """Return the number of leading spaces of ``line``."""
    return len(line) - len(line.lstrip(" "))


def _strip_indent(line: str, width: int) -> str:
    """Remove up to ``width`` leading spaces from ``line``."""
    return line[min(width, _indentation(line)) :]


def starts_block(line: str, pedantic: bool = False, footnotes: bool = False) -> bool:
    """Check whether ``line`` opens a construct that interrupts a paragraph.

    Parameters
    ----------
    line : str
        A single preprocessed line
    pedantic : bool, default False
        Accept ATX headings without a space after the hashes
    footnotes : bool, default False
        Treat footnote definitions as block starts

    Returns
    -------
    bool
        True when the line would not continue a paragraph

    """
    atx_pattern = PEDANTIC_ATX_HEADING_PATTERN if pedantic else ATX_HEADING_PATTERN
    if (
        atx_pattern.match(line)
        or FENCE_PATTERN.match(line)
        or HORIZONTAL_RULE_PATTERN.match(line)
        or BLOCKQUOTE_PATTERN.match(line)
        or LIST_ITEM_PATTERN.match(line)
        or HTML_COMMENT_START_PATTERN.match(line)
        or HTML_BLOCK_START_PATTERN.match(line)
    ):
        return True
    return footnotes and bool(FOOTNOTE_DEFINITION_PATTERN.match(line))


def split_table_row(line: str) -> list[str]:
    """Split a pipe table row into stripped raw cell contents.

    Escaped pipes (``\\|``) do not separate cells and stay in the cell text.
    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]

    cells: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(row):
        char = row[i]
        if char == "\\" and i + 1 < len(row):
            current.append(row[i : i + 2])
            i += 2
            continue
        if char == "|":
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current).strip())
    return cells


class MarkdownParser(BaseParser):
    r"""Convert Markdown text to an AST.

    Parameters
    ----------
    options : ParseOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> root = parser.parse("# Heading\n\nThis is **bold**.")

    With options:

        >>> parser = MarkdownParser(ParseOptions(footnotes=True))
        >>> root = parser.parse("Text[^1]\n\n[^1]: Note")

    Notes
    -----
    Subclasses may override individual ``_try_parse_*`` matchers, or
    ``_block_matchers`` to change their order, and reuse the rest.

    """

    def __init__(self, options: ParseOptions | None = None):
        """Initialize the tokenizer with options."""
        super().__init__(options)
        self._definitions: Definitions = {}
        self._footnotes: dict[str, FootnoteDefinition] = {}
        self._pending: list[tuple[Node, str]] = []
        self._atx_pattern = PEDANTIC_ATX_HEADING_PATTERN if self.options.pedantic else ATX_HEADING_PATTERN

    def parse(self, text: str) -> Root:
        """Parse Markdown text into a root node.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        Root
            The document tree. ``footnotes`` is a dict when footnote parsing
            is enabled and None otherwise.

        """
        # Reset parser state to prevent leakage across parse calls
        self._definitions = {}
        self._footnotes = {}
        self._pending = []

        children = self._parse_blocks(preprocess(text))
        logger.debug("Tokenized %d top-level blocks", len(children))

        inline = InlineTokenizer(self.options, self._definitions, self._footnotes)
        for node, raw in self._pending:
            node.children = inline.tokenize(raw)  # type: ignore[attr-defined]
        self._pending = []

        return Root(children=children, footnotes=self._footnotes if self.options.footnotes else None)

    # =========================================================================
    # Block pass
    # =========================================================================

    def _block_matchers(self) -> list[Callable[[list[str], int], BlockResult]]:
        """Return the enabled block matchers in priority order.

        The paragraph matcher is not part of the list; ``_tokenize_blocks``
        falls back to it for any line the other matchers decline.
        """
        matchers: list[Callable[[list[str], int], BlockResult]] = []
        if self.options.footnotes:
            matchers.append(self._try_parse_footnote_definition)
        matchers.extend(
            [
                self._try_parse_indented_code,
                self._try_parse_fenced_code,
                self._try_parse_atx_heading,
                self._try_parse_setext_heading,
                self._try_parse_horizontal_rule,
                self._try_parse_blockquote,
                self._try_parse_list,
                self._try_parse_html,
                self._try_parse_definition,
            ]
        )
        if self.options.gfm and self.options.tables:
            matchers.append(self._try_parse_table)
        return matchers

    def _parse_blocks(self, lines: list[str]) -> list[Node]:
        """Tokenize lines into block nodes."""
        return self._tokenize_blocks(lines)[0]

    def _tokenize_blocks(self, lines: list[str]) -> tuple[list[Node], bool]:
        """Tokenize lines into block nodes.

        Returns
        -------
        tuple
            The blocks, and whether any two of them are separated by a blank
            line

        """
        matchers = self._block_matchers()
        blocks: list[Node] = []
        separated = False
        blank_since_block = False
        i = 0
        while i < len(lines):
            if not lines[i]:
                blank_since_block = bool(blocks)
                i += 1
                continue

            for matcher in matchers:
                result = matcher(lines, i)
                if result is not None:
                    node, i = result
                    break
            else:
                # Lines no matcher claims start a paragraph
                node, i = self._try_parse_paragraph(lines, i)

            if node is not None:
                separated = separated or blank_since_block
                blank_since_block = False
                blocks.append(node)
        return blocks, separated

    def _starts_block(self, line: str) -> bool:
        return starts_block(line, self.options.pedantic, self.options.footnotes)

    def _is_setext(self, lines: list[str], i: int) -> bool:
        """Check whether line ``i`` and its successor form a setext heading."""
        return (
            i + 1 < len(lines)
            and bool(lines[i])
            and bool(SETEXT_UNDERLINE_PATTERN.match(lines[i + 1]))
            and not self._starts_block(lines[i])
        )

    def _defer_inline(self, node: Node, raw: str) -> Node:
        """Record a leaf whose inline content is tokenized after the block pass."""
        self._pending.append((node, raw))
        return node

    def _try_parse_footnote_definition(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a footnote definition.

        The definition is stored in the footnote map (first one wins) and
        produces no node in the block flow.
        """
        match = FOOTNOTE_DEFINITION_PATTERN.match(lines[i])
        if not match:
            return None

        footnote_id = match.group(1)
        content = [match.group(2)]
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line:
                j = i
                while j < len(lines) and not lines[j]:
                    j += 1
                if j < len(lines) and _indentation(lines[j]) >= INDENT_WIDTH:
                    content.extend([""] * (j - i))
                    i = j
                    continue
                break
            if _indentation(line) >= INDENT_WIDTH:
                content.append(line[INDENT_WIDTH:])
            elif content[-1] and not self._starts_block(line) and not FOOTNOTE_DEFINITION_PATTERN.match(line):
                content.append(line)
            else:
                break
            i += 1

        definition = FootnoteDefinition(id=footnote_id, children=self._parse_blocks(content))
        if footnote_id not in self._footnotes:
            self._footnotes[footnote_id] = definition
        return None, i

    def _try_parse_indented_code(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse an indented code block."""
        if not INDENTED_CODE_PATTERN.match(lines[i]):
            return None

        content: list[str] = []
        while i < len(lines):
            line = lines[i]
            if line and not INDENTED_CODE_PATTERN.match(line):
                break
            content.append(line[INDENT_WIDTH:])
            i += 1

        # Trailing blank lines belong to the flow, not to the code
        while content and not content[-1]:
            content.pop()
            i -= 1
        return Code(value="\n".join(content), lang=None), i

    def _try_parse_fenced_code(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a fenced code block.

        An unclosed fence runs to the end of the input.
        """
        match = FENCE_PATTERN.match(lines[i])
        if not match:
            return None
        indent, fence, info = len(match.group(1)), match.group(2), match.group(3).strip()
        if fence[0] == "`" and "`" in info:
            return None

        closing = re.compile(r"^ {0,3}" + re.escape(fence[0]) + "{" + str(len(fence)) + r",}[ ]*$")
        content: list[str] = []
        i += 1
        while i < len(lines):
            if closing.match(lines[i]):
                i += 1
                break
            content.append(_strip_indent(lines[i], indent))
            i += 1

        lang = unescape(info.split()[0], self.options.gfm) if info else None
        return Code(value="\n".join(content), lang=lang), i

    def _try_parse_atx_heading(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse an ATX heading."""
        match = self._atx_pattern.match(lines[i])
        if not match:
            return None
        content = ATX_CLOSING_PATTERN.sub("", match.group(2).strip()).strip()
        heading = Heading(depth=len(match.group(1)))
        return self._defer_inline(heading, content), i + 1

    def _try_parse_setext_heading(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a setext heading (text line plus ``=`` or ``-`` underline)."""
        if not self._is_setext(lines, i):
            return None
        underline = SETEXT_UNDERLINE_PATTERN.match(lines[i + 1])
        depth = 1 if underline.group(1)[0] == "=" else 2  # type: ignore[union-attr]
        heading = Heading(depth=depth)
        return self._defer_inline(heading, lines[i].strip()), i + 2

    def _try_parse_horizontal_rule(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a horizontal rule."""
        if HORIZONTAL_RULE_PATTERN.match(lines[i]):
            return HorizontalRule(), i + 1
        return None

    def _try_parse_blockquote(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a blockquote.

        The quote continues through ``>`` lines, lazy continuation lines, and
        blank lines followed by more ``>`` lines.
        """
        if not BLOCKQUOTE_PATTERN.match(lines[i]):
            return None

        content: list[str] = []
        while i < len(lines):
            line = lines[i]
            match = BLOCKQUOTE_PATTERN.match(line)
            if match:
                content.append(match.group(1))
            elif not line:
                j = i
                while j < len(lines) and not lines[j]:
                    j += 1
                if j < len(lines) and BLOCKQUOTE_PATTERN.match(lines[j]):
                    content.extend([""] * (j - i))
                    i = j
                    continue
                break
            elif content[-1] and not self._starts_block(line):
                content.append(line)
            else:
                break
            i += 1

        return Blockquote(children=self._parse_blocks(content)), i

    def _try_parse_list(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse an ordered or bullet list.

        The list ends when the item kind changes, at a horizontal rule, or at
        a non-item line that does not continue the last item.
        """
        first = LIST_ITEM_PATTERN.match(lines[i])
        if not first:
            return None
        ordered = first.group(2).endswith(".")

        # (content lines, blank line before the item)
        items: list[tuple[list[str], bool]] = []
        blank_before = False
        while i < len(lines):
            line = lines[i]
            match = LIST_ITEM_PATTERN.match(line)
            if not match or HORIZONTAL_RULE_PATTERN.match(line) or match.group(2).endswith(".") != ordered:
                break

            content, i = self._collect_list_item(lines, i, match)
            items.append((content, blank_before))

            j = i
            while j < len(lines) and not lines[j]:
                j += 1
            following = LIST_ITEM_PATTERN.match(lines[j]) if j < len(lines) else None
            if (
                following is None
                or HORIZONTAL_RULE_PATTERN.match(lines[j])
                or following.group(2).endswith(".") != ordered
            ):
                break
            blank_before = j > i
            i = j

        list_items: list[Node] = []
        for index, (content, blank) in enumerate(items):
            children, separated = self._tokenize_blocks(content)
            blank_after = index + 1 < len(items) and items[index + 1][1]
            loose = separated or blank or blank_after
            list_items.append(ListItem(children=children, loose=loose))
        return List(ordered=ordered, children=list_items), i

    def _collect_list_item(self, lines: list[str], i: int, match: re.Match) -> tuple[list[str], int]:
        """Collect the de-indented content lines of one list item.

        Parameters
        ----------
        lines : list of str
            All lines
        i : int
            Index of the item's marker line
        match : re.Match
            List item match on that line

        Returns
        -------
        tuple
            The item's content lines and the index after the item

        """
        line = lines[i]
        marker_end = len(match.group(1)) + len(match.group(2))
        rest = line[match.end() :]
        if not rest or match.end() - marker_end > INDENT_WIDTH:
            # Empty item, or content starting with indented code
            offset = marker_end + 1
            rest = line[offset:]
        else:
            offset = match.end()

        content = [rest]
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line:
                j = i
                while j < len(lines) and not lines[j]:
                    j += 1
                if j < len(lines) and self._continues_item(lines[j], offset):
                    content.extend([""] * (j - i))
                    i = j
                    continue
                break
            if self._continues_item(line, offset):
                width = INDENT_WIDTH if self.options.pedantic else offset
                content.append(_strip_indent(line, width))
            elif LIST_ITEM_PATTERN.match(line) or HORIZONTAL_RULE_PATTERN.match(line):
                break
            elif content[-1] and not self._starts_block(line):
                content.append(line)
            else:
                break
            i += 1
        return content, i

    def _continues_item(self, line: str, offset: int) -> bool:
        """Check whether an indented line belongs to the current list item."""
        if self.options.pedantic:
            return _indentation(line) >= 1
        return _indentation(line) >= offset

    def _try_parse_html(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a raw HTML block.

        A comment runs through the line containing ``-->``; a block tag runs
        through the next blank line.
        """
        line = lines[i]
        start = i
        if HTML_COMMENT_START_PATTERN.match(line):
            while i < len(lines) and "-->" not in lines[i]:
                i += 1
            i = min(i + 1, len(lines))
        elif HTML_BLOCK_START_PATTERN.match(line):
            while i < len(lines) and lines[i]:
                i += 1
        else:
            return None
        return HTML(value="\n".join(lines[start:i])), i

    def _try_parse_definition(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a link reference definition.

        Definitions are collected (first one wins) and produce no node.
        """
        match = DEFINITION_PATTERN.match(lines[i])
        if not match:
            return None
        key = normalize_label(match.group(1))
        if not key:
            return None

        gfm = self.options.gfm
        href = match.group(2) if match.group(2) is not None else match.group(3)
        title = next((group for group in match.groups()[3:] if group is not None), None)
        if key not in self._definitions:
            self._definitions[key] = (unescape(href, gfm), None if title is None else unescape_title(title, gfm))
        return None, i + 1

    def _try_parse_table(self, lines: list[str], i: int) -> BlockResult:
        """Try to parse a pipe table (header row, alignment row, body rows)."""
        if i + 1 >= len(lines) or "|" not in lines[i] or "|" not in lines[i + 1]:
            return None
        alignment_cells = split_table_row(lines[i + 1])

        align = []
        for cell in alignment_cells:
            match = TABLE_ALIGNMENT_CELL_PATTERN.match(cell)
            if not match:
                return None
            left, right = bool(match.group(1)), bool(match.group(2))
            if left and right:
                align.append("center")
            elif left:
                align.append("left")
            elif right:
                align.append("right")
            else:
                align.append(None)

        rows: list[Node] = [TableHeader(children=self._table_cells(lines[i]))]
        i += 2
        while i < len(lines) and lines[i] and "|" in lines[i]:
            rows.append(TableRow(children=self._table_cells(lines[i])))
            i += 1
        return Table(align=align, children=rows), i

    def _table_cells(self, line: str) -> list[Node]:
        """Create deferred table cells for one row."""
        return [self._defer_inline(TableCell(), raw) for raw in split_table_row(line)]

    def _try_parse_paragraph(self, lines: list[str], i: int) -> tuple[Node, int]:
        """Parse a paragraph starting at line ``i``; never declines.

        The paragraph ends at a blank line, at a line opening another block,
        or before a line that starts a setext heading.
        """
        content = [lines[i].lstrip(" ")]
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line or self._starts_block(line) or self._is_setext(lines, i):
                break
            content.append(line.lstrip(" "))
            i += 1
        return self._defer_inline(Paragraph(), "\n".join(content).rstrip()), i
