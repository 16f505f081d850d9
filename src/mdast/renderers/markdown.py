#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/renderers/markdown.py
"""Markdown compiler for AST documents.

This module provides the MarkdownCompiler class, which walks an AST with the
visitor pattern and writes Markdown text. Output is deterministic for a given
tree and set of ``StringifyOptions``: blocks are separated by one blank line
and a document always ends with exactly one newline.

Nodes may be given as node objects or as ``type``-tagged mappings anywhere in
the tree; mappings are converted on the fly.

"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterator, Mapping
from typing import Any, Optional

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
)
from mdast.ast.serialization import dict_to_ast
from mdast.ast.visitors import NodeVisitor
from mdast.constants import CODE_FENCE_MIN, INDENT_WIDTH
from mdast.exceptions import InputError, UnknownTypeError
from mdast.options.markdown import StringifyOptions
from mdast.parsers.inline import AUTOLINK_PATTERN, normalize_label
from mdast.parsers.markdown import starts_block
from mdast.renderers.base import BaseCompiler

logger = logging.getLogger(__name__)

_WORD_CHARACTER = re.compile(r"\w")
_BALANCED_PARENS = re.compile(r"^(?:[^()]|\((?:[^()])*\))*$")
_BRACKETED_TEXT = re.compile(r"\[([^\[\]]*)\]")


def _longest_run(value: str, char: str) -> int:
    """Return the length of the longest run of ``char`` in ``value``."""
    runs = re.findall(re.escape(char) + "+", value)
    return max((len(run) for run in runs), default=0)


def _indent_lines(text: str, first_prefix: str, indent: str) -> str:
    """Prefix the first line of ``text`` and indent the rest; empty lines stay empty."""
    lines = text.split("\n")
    result = [first_prefix + lines[0]]
    result.extend(indent + line if line else "" for line in lines[1:])
    return "\n".join(result)


def _marker_fits(marker: str, content: str, before: str, after: str) -> bool:
    """Check that ``marker + content + marker`` tokenizes back to one span.

    The marker character may not sit at the edges of the content or, for
    emphasis, anywhere inside it. It may not touch the same character next
    to the span either. ``_`` also needs non-word characters on both sides.
    """
    char = marker[0]
    if not content or content[0] == char or content[-1] == char or marker in content:
        return False
    if char == "_":
        return not (_WORD_CHARACTER.match(before) or _WORD_CHARACTER.match(after))
    # "* " at the start of a line opens a list item
    if len(marker) == 1 and content[0].isspace():
        return False
    return before != "*" and after != "*"


class MarkdownCompiler(NodeVisitor, BaseCompiler):
    """Render AST nodes to Markdown text.

    Parameters
    ----------
    options : StringifyOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> from mdast.ast import Root, Heading, Text
        >>> compiler = MarkdownCompiler(StringifyOptions(setext=True))
        >>> print(compiler.visit(Root(children=[Heading(depth=1, children=[Text("Title")])])))
        Title
        =====

    """

    def __init__(self, options: StringifyOptions | None = None):
        """Initialize the Markdown compiler with options."""
        super().__init__(options)
        self._output: list[str] = []
        self._link_references: dict[tuple[str, Optional[str]], int] = {}  # (href, title) -> ref_id
        self._footnotes: dict[str, Any] = {}
        self._inline_footnotes: set[str] = set()
        self._reserved_labels: set[str] = set()

    def visit(self, node: Any) -> str:
        """Compile a tree into Markdown text.

        Parameters
        ----------
        node : Node or Mapping
            Tree to compile, usually a root

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        UnknownTypeError
            If any node has a type outside the closed node set
        InputError
            If a node mapping is malformed

        """
        self._output = []
        self._link_references = {}
        self._footnotes = {}
        self._inline_footnotes = set()
        self._reserved_labels = set()

        result = self._render(node)

        # Clear state so the compiler holds no reference to the tree
        self._output = []
        self._link_references.clear()
        self._footnotes = {}
        self._inline_footnotes.clear()
        self._reserved_labels.clear()

        logger.debug("Rendered %d characters of Markdown", len(result))
        return result

    # =========================================================================
    # Dispatch helpers
    # =========================================================================

    def _coerce(self, value: Any) -> Node:
        """Convert a node mapping to a node and check the node type.

        Raises
        ------
        UnknownTypeError
            If the node type is not part of the closed node set

        """
        if isinstance(value, Mapping):
            value = dict_to_ast(value)
        if not isinstance(value, Node):
            raise InputError(f"Expected node, not `{value!r}`", parameter_name="node", parameter_value=value)
        node_type = getattr(value, "type", None)
        if NODE_TYPES.get(node_type) is not type(value):  # type: ignore[arg-type]
            raise UnknownTypeError(node_type if node_type is not None else type(value).__name__)
        return value

    def _children(self, node: Node) -> list[Node]:
        """Return the coerced children of ``node``."""
        return [self._coerce(child) for child in getattr(node, "children", [])]

    def _render(self, node: Any) -> str:
        """Render a single node to a string using a fresh output buffer."""
        node = self._coerce(node)
        saved_output = self._output
        self._output = []
        node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def _render_blocks(self, children: list[Node], separator: str = "\n\n") -> str:
        """Render block children joined by ``separator``."""
        return separator.join(self._render(child) for child in children)

    def _render_inline(self, children: list[Any]) -> str:
        """Render inline children.

        Emphasis and strong markers are chosen per span once the neighbouring
        text is known, so that each span reads back as the same node.
        """
        nodes = [self._coerce(child) for child in children]
        parts: list[str] = []
        spans: dict[int, tuple[str, str]] = {}  # index -> (preferred marker, content)
        for index, child in enumerate(nodes):
            if isinstance(child, (Emphasis, Strong)):
                preferred = self.options.emphasis if isinstance(child, Emphasis) else self.options.strong * 2
                content = self._render_inline(child.children)
                spans[index] = (preferred, content)
                parts.append(f"{preferred}{content}{preferred}")
            else:
                parts.append(self._render(child))

        # Left to right, so each span sees the final marker of the span before it
        for index, (preferred, content) in spans.items():
            before = parts[index - 1][-1:] if index > 0 else ""
            after = parts[index + 1][:1] if index + 1 < len(parts) else ""
            marker = self._span_marker(preferred, content, before, after)
            parts[index] = f"{marker}{content}{marker}"
        return "".join(parts)

    @staticmethod
    def _span_marker(preferred: str, content: str, before: str, after: str) -> str:
        """Choose the emphasis or strong marker for one span.

        Parameters
        ----------
        preferred : str
            Marker from the options: ``_`` or ``*`` for emphasis, doubled for
            strong
        content : str
            Rendered span content
        before, after : str
            Character rendered directly before and after the span, or ``""``

        Returns
        -------
        str
            The preferred marker when it fits, else the other marker
            character when that fits, else the preferred marker

        """
        other = ("*" if preferred[0] == "_" else "_") * len(preferred)
        for marker in (preferred, other):
            if _marker_fits(marker, content, before, after):
                return marker
        return preferred

    # =========================================================================
    # Block nodes
    # =========================================================================

    def visit_root(self, node: Root) -> None:
        """Render a Root node.

        Footnote definitions are appended after the body, followed by link
        reference definitions when ``reference_links`` is enabled.
        """
        self._footnotes = {key: self._coerce(value) for key, value in (node.footnotes or {}).items()}
        if self.options.reference_links:
            self._reserved_labels = self._bracketed_labels(node)
        if not self.options.reference_footnotes:
            self._inline_footnotes = self._plan_inline_footnotes(node)

        blocks = [self._render(child) for child in self._children(node)]

        for footnote_id, definition in self._footnotes.items():
            if footnote_id not in self._inline_footnotes:
                blocks.append(self._render(definition))

        if self._link_references:
            blocks.append("\n".join(self._render_definition(key, ref_id) for key, ref_id in self._link_references.items()))

        self._output.append("\n\n".join(blocks) + "\n")

    def _render_definition(self, key: tuple[str, Optional[str]], ref_id: int) -> str:
        """Render a link reference definition line."""
        href, title = key
        return f"[{ref_id}]: {self._destination(href, definition=True)}{self._title(title)}"

    # =========================================================================
    # Reference planning
    # =========================================================================

    def _iter_nodes(self, node: Node) -> Iterator[Node]:
        """Yield ``node`` and its descendants in document order."""
        yield node
        for child in self._children(node):
            yield from self._iter_nodes(child)

    def _bracketed_labels(self, root: Root) -> set[str]:
        """Collect normalized ``[label]`` texts that reference numbers must avoid."""
        labels: set[str] = set()
        for tree in [root, *self._footnotes.values()]:
            for node in self._iter_nodes(tree):
                if isinstance(node, Text):
                    labels.update(normalize_label(label) for label in _BRACKETED_TEXT.findall(node.value))
        return labels

    def _plan_inline_footnotes(self, root: Root) -> set[str]:
        """Choose the footnotes written inline as ``^[text]``.

        A definition qualifies when it is one paragraph that is referenced
        exactly once and contains no literal brackets. It is only inlined when
        the id the tokenizer will generate for the inline note at that spot
        equals its own id, so a candidate that would be renumbered keeps the
        reference form. Rejecting one candidate can shift the ids of later
        ones, so the check repeats until the set is stable.

        Parameters
        ----------
        root : Root
            Document being rendered; ``self._footnotes`` must be populated

        Returns
        -------
        set of str
            Ids of the footnotes to inline

        """
        counts = Counter(self._footnote_references(root, set()))
        inline = {
            footnote_id
            for footnote_id, definition in self._footnotes.items()
            if counts[footnote_id] == 1 and self._inlinable(definition)
        }
        while True:
            rejected = self._misplaced_inline_notes(root, inline)
            if not rejected:
                return inline
            inline -= rejected

    def _inlinable(self, definition: Node) -> bool:
        children = self._children(definition)
        if len(children) != 1 or not isinstance(children[0], Paragraph):
            return False
        return not any(
            isinstance(node, Text) and ("[" in node.value or "]" in node.value)
            for node in self._iter_nodes(children[0])
        )

    def _misplaced_inline_notes(self, root: Root, inline: set[str]) -> set[str]:
        """Return inline candidates whose generated id would differ from their own.

        Generated ids count up from 1, skipping the ids of definitions written
        after the body. Candidates never reached from the body are returned
        as well.
        """
        written = set(self._footnotes) - inline
        counter = 0
        reached: set[str] = set()
        for footnote_id in self._footnote_references(root, inline):
            if footnote_id not in inline:
                continue
            counter += 1
            while str(counter) in written:
                counter += 1
            if str(counter) != footnote_id:
                return {footnote_id}
            reached.add(footnote_id)
        return inline - reached

    def _footnote_references(self, root: Root, inline: set[str]) -> Iterator[str]:
        """Yield footnote reference ids in the order the output presents them.

        Inline notes contribute their content at the reference; every other
        definition follows the body in map order.
        """
        yield from self._references_in(root, inline)
        for footnote_id, definition in self._footnotes.items():
            if footnote_id not in inline:
                yield from self._references_in(definition, inline)

    def _references_in(self, node: Node, inline: set[str]) -> Iterator[str]:
        for child in self._children(node):
            if isinstance(child, Footnote):
                yield child.id
                if child.id in inline:
                    yield from self._references_in(self._footnotes[child.id], inline)
            else:
                yield from self._references_in(child, inline)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        Parameters
        ----------
        node : Heading
            Heading to render

        """
        content = self._render_inline(node.children)

        # Setext text that reads as another block start stays ATX
        setext = (
            self.options.setext
            and node.depth <= 2
            and bool(content)
            and "\n" not in content
            and not starts_block(content, pedantic=True, footnotes=True)
        )
        if setext:
            underline_char = "=" if node.depth == 1 else "-"
            self._output.append(f"{content}\n{underline_char * max(3, len(content))}")
            return

        prefix = "#" * node.depth
        if not content:
            self._output.append(prefix)
        elif self.options.close_atx:
            self._output.append(f"{prefix} {content} {prefix}")
        else:
            self._output.append(f"{prefix} {content}")

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        Values that cannot be expressed as an indented block (empty, or with
        leading or trailing blank lines) are always fenced.
        """
        value = node.value
        fenced = (
            self.options.fences
            or bool(node.lang)
            or not value.strip()
            or value.startswith("\n")
            or value.endswith("\n")
        )

        if not fenced:
            self._output.append("\n".join(" " * INDENT_WIDTH + line if line else "" for line in value.split("\n")))
            return

        # Fence longer than any run of the fence character inside the value
        fence_char = self.options.fence
        fence = fence_char * max(CODE_FENCE_MIN, _longest_run(value, fence_char) + 1)
        self._output.append(f"{fence}{node.lang or ''}\n{value}\n{fence}")

    def visit_blockquote(self, node: Blockquote) -> None:
        """Render a Blockquote node, prefixing every line with ``>``."""
        quoted = self._render_blocks(self._children(node))
        self._output.append("\n".join("> " + line if line else ">" for line in quoted.split("\n")))

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Items are separated by a blank line when both neighbours are loose.

        Parameters
        ----------
        node : List
            List to render

        """
        items = self._children(node)
        for index, item in enumerate(items):
            marker = f"{index + 1}." if node.ordered else self.options.bullet
            if index > 0:
                previous = items[index - 1]
                both_loose = getattr(previous, "loose", False) and getattr(item, "loose", False)
                self._output.append("\n\n" if both_loose else "\n")
            self._output.append(self._render_list_item(item, marker))

    def _render_list_item(self, item: Node, marker: str) -> str:
        """Render one list item with its marker.

        Continuation lines are indented by the marker width plus one.
        """
        if not isinstance(item, ListItem):
            return _indent_lines(self._render(item), marker + " ", " " * (len(marker) + 1))

        separator = "\n\n" if item.loose else "\n"
        content = self._render_blocks(self._children(item), separator)
        if not content:
            return marker
        return _indent_lines(content, marker + " ", " " * (len(marker) + 1))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem outside of a list, with the configured bullet."""
        self._output.append(self._render_list_item(node, self.options.bullet))

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Render a HorizontalRule node."""
        separator = " " if self.options.rule_spaces else ""
        self._output.append(separator.join([self.options.rule] * self.options.rule_repetition))

    def visit_html(self, node: HTML) -> None:
        """Render an HTML node verbatim."""
        self._output.append(node.value)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node.

        Continuation lines are indented four spaces.
        """
        content = self._render_blocks(self._children(node))
        if not content:
            self._output.append(f"[^{node.id}]:")
            return
        self._output.append(_indent_lines(content, f"[^{node.id}]: ", " " * INDENT_WIDTH))

    # =========================================================================
    # Tables
    # =========================================================================

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a pipe table.

        Parameters
        ----------
        node : Table
            Table to render

        """
        rows = self._children(node)
        if not rows:
            return

        lines = [self._render(rows[0])]
        num_cols = len(node.align) or len(getattr(rows[0], "children", [])) or 1
        lines.append(self._generate_alignment_row(node, num_cols))
        lines.extend(self._render(row) for row in rows[1:])
        self._output.append("\n".join(lines))

    def _generate_alignment_row(self, node: Table, num_cols: int) -> str:
        """Generate the alignment separator row."""
        align = list(node.align) + [None] * (num_cols - len(node.align))
        markers = []
        for alignment in align:
            if alignment == "center":
                markers.append(":---:")
            elif alignment == "right":
                markers.append("---:")
            elif alignment == "left":
                markers.append(":---")
            else:
                markers.append("---")
        return "| " + " | ".join(markers) + " |"

    def _render_row(self, node: Node) -> str:
        cells = [self._render(cell) for cell in self._children(node)]
        return "| " + " | ".join(cells) + " |"

    def visit_table_header(self, node: TableHeader) -> None:
        """Render a TableHeader row."""
        self._output.append(self._render_row(node))

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow."""
        self._output.append(self._render_row(node))

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell."""
        self._output.append(self._render_inline(node.children))

    # =========================================================================
    # Inline nodes
    # =========================================================================

    def visit_text(self, node: Text) -> None:
        """Render a Text node verbatim."""
        self._output.append(node.value)

    def visit_escape(self, node: Escape) -> None:
        """Render an Escape node."""
        self._output.append("\\" + node.value)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(self._render_inline([node]))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(self._render_inline([node]))

    def visit_delete(self, node: Delete) -> None:
        """Render a Delete node."""
        self._output.append(f"~~{self._render_inline(node.children)}~~")

    def visit_inline_code(self, node: InlineCode) -> None:
        """Render an InlineCode node.

        The backtick fence is longer than any backtick run in the value.
        """
        value = node.value
        fence = "`" * (_longest_run(value, "`") + 1)
        if not value or value.startswith("`") or value.endswith("`"):
            value = f" {value} "
        self._output.append(f"{fence}{value}{fence}")

    def visit_break(self, node: Break) -> None:
        """Render a Break node."""
        self._output.append("  \n")

    def _destination(self, href: str, definition: bool = False) -> str:
        """Format a link destination, using ``<...>`` when required."""
        escaped = href.replace("\\", "\\\\")
        if not href or re.search(r"\s", href) or (not definition and not _BALANCED_PARENS.match(href)):
            return f"<{escaped}>"
        return escaped

    @staticmethod
    def _title(title: Optional[str]) -> str:
        """Format an optional link title, prefixed by a space."""
        if title is None:
            return ""
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        return f' "{escaped}"'

    def _reference_id(self, href: str, title: Optional[str]) -> int:
        """Get or assign the reference number for a destination.

        Numbers already written as ``[n]`` in the document's text are skipped,
        since a definition would turn that text into a link.
        """
        key = (href, title)
        if key not in self._link_references:
            ref_id = max(self._link_references.values(), default=0) + 1
            while str(ref_id) in self._reserved_labels:
                ref_id += 1
            self._link_references[key] = ref_id
        return self._link_references[key]

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Parameters
        ----------
        node : Link
            Link to render

        """
        children = self._children(node)
        if node.title is None and len(children) == 1 and isinstance(children[0], Text):
            text = children[0].value
            if (text == node.href or "mailto:" + text == node.href) and AUTOLINK_PATTERN.fullmatch(f"<{node.href}>"):
                self._output.append(f"<{node.href}>")
                return

        content = self._render_inline(children)
        if self.options.reference_links:
            self._output.append(f"[{content}][{self._reference_id(node.href, node.title)}]")
        else:
            self._output.append(f"[{content}]({self._destination(node.href)}{self._title(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt = (node.alt or "").replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
        if self.options.reference_links:
            self._output.append(f"![{alt}][{self._reference_id(node.src, node.title)}]")
        else:
            self._output.append(f"![{alt}]({self._destination(node.src)}{self._title(node.title)})")

    def visit_footnote(self, node: Footnote) -> None:
        """Render a Footnote reference.

        Without reference footnotes, definitions chosen by
        ``_plan_inline_footnotes`` are written inline as ``^[text]``.
        """
        if node.id in self._inline_footnotes:
            paragraph = self._children(self._footnotes[node.id])[0]
            self._output.append(f"^[{self._render_inline(paragraph.children)}]")  # type: ignore[attr-defined]
            return
        self._output.append(f"[^{node.id}]")
