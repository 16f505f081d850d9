#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/parsers/inline.py
"""Inline (span-level) tokenizer for Markdown.

The inline tokenizer runs over the raw text of paragraphs, headings and table
cells once the whole block pass is finished, so link reference definitions and
footnote definitions anywhere in the document are known.

At each offset the matchers are tried in a fixed priority order and the first
match wins; unclaimed characters fall through to the text matcher, and
adjacent text runs are merged into a single ``text`` node.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Union

from mdast.ast.nodes import (
    HTML,
    Break,
    Delete,
    Emphasis,
    Escape,
    Footnote,
    FootnoteDefinition,
    Image,
    InlineCode,
    Link,
    Node,
    Paragraph,
    Strong,
    Text,
)
from mdast.constants import ESCAPABLE_CHARACTERS, GFM_ESCAPABLE_CHARACTERS, TITLE_QUOTES
from mdast.options.markdown import ParseOptions

logger = logging.getLogger(__name__)

# Definitions collected by the block pass: normalized label -> (href, title)
Definitions = dict[str, tuple[str, Optional[str]]]

MatchResult = Optional[tuple[Union[Node, None], int]]

# =============================================================================
# Patterns
# =============================================================================

AUTOLINK_PATTERN = re.compile(r"<([^ <>]+(@|:/)[^ <>]+)>")
URL_PATTERN = re.compile(r"https?://[^\s<]+[^<.,:;\"')\]\s]")
INLINE_HTML_PATTERN = re.compile(
    r"<!--[\s\S]*?-->"
    r"|</[A-Za-z][A-Za-z0-9-]*\s*>"
    r"|<[A-Za-z][A-Za-z0-9-]*(?:\s+[A-Za-z_:][\w.:-]*(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))?)*\s*/?>"
)
FOOTNOTE_PATTERN = re.compile(r"\[\^([^\]\s]+)\]")
STRONG_PATTERN = re.compile(r"__([\s\S]+?)__(?!_)|\*\*([\s\S]+?)\*\*(?!\*)")
EMPHASIS_PATTERN = re.compile(r"\b_((?:__|[^_])+?)_\b|\*((?:\*\*|[\s\S])+?)\*(?!\*)")
PEDANTIC_EMPHASIS_PATTERN = re.compile(r"_(?=\S)([\s\S]*?\S)_(?!_)|\*(?=\S)([\s\S]*?\S)\*(?!\*)")
DELETE_PATTERN = re.compile(r"~~(?=\S)([\s\S]*?\S)~~")
CODE_PATTERN = re.compile(r"(`+)([\s\S]*?[^`])\1(?!`)")
BREAK_PATTERN = re.compile(r" {2,}\n(?!\s*\Z)")
NEWLINE_BREAK_PATTERN = re.compile(r" *\n(?!\s*\Z)")
TEXT_PATTERN = re.compile(r"[\s\S]+?(?=[\\<!\[_*`~^]|https?://| {2,}\n|\Z)")
BREAKS_TEXT_PATTERN = re.compile(r"[\s\S]+?(?=[\\<!\[_*`~^]|https?://| *\n|\Z)")

# Inline link destination and optional title, starting at the opening paren
INLINE_DESTINATION_PATTERN = re.compile(
    r"\(\s*"
    r"(?:<([^<>\n]*)>|((?:\\.|[^\s()\\]|\((?:\\.|[^\s()\\])*\))*))"
    r"(?:\s+(?:\"((?:\\.|[^\"\\])*)\"|'((?:\\.|[^'\\])*)'|\(((?:\\.|[^()\\])*)\)))?"
    r"\s*\)"
)
REFERENCE_LABEL_PATTERN = re.compile(r"\[((?:\\.|[^\[\]\\])*)\]")


def normalize_label(label: str) -> str:
    """Normalize a reference label for lookup.

    Labels compare case-insensitively with runs of whitespace collapsed.
    """
    return " ".join(label.lower().split())


def unescape(value: str, gfm: bool = True) -> str:
    """Remove backslashes from escaped punctuation in ``value``."""
    characters = GFM_ESCAPABLE_CHARACTERS if gfm else ESCAPABLE_CHARACTERS
    return re.sub(r"\\([" + re.escape(characters) + r"])", r"\1", value)


def unescape_title(value: str, gfm: bool = True) -> str:
    """Remove backslashes from escaped punctuation and quotes in a link title."""
    characters = (GFM_ESCAPABLE_CHARACTERS if gfm else ESCAPABLE_CHARACTERS) + TITLE_QUOTES
    return re.sub(r"\\([" + re.escape(characters) + r"])", r"\1", value)


def find_bracket_end(text: str, start: int) -> int:
    """Find the index of the ``]`` closing the ``[`` at ``start``.

    Backslash-escaped brackets and brackets inside code spans are skipped.

    Parameters
    ----------
    text : str
        Text to search
    start : int
        Index of the opening bracket

    Returns
    -------
    int
        Index of the closing bracket, or -1 when unbalanced

    """
    depth = 0
    i = start
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == "`":
            code = CODE_PATTERN.match(text, i)
            if code:
                i = code.end()
                continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


class InlineTokenizer:
    """Tokenize span-level Markdown into inline nodes.

    Parameters
    ----------
    options : ParseOptions
        Parsing options
    definitions : dict
        Link reference definitions keyed by normalized label
    footnotes : dict
        Footnote definitions keyed by id. Inline notes add their generated
        definitions here.

    """

    def __init__(
        self,
        options: ParseOptions,
        definitions: Definitions | None = None,
        footnotes: dict[str, FootnoteDefinition] | None = None,
    ):
        self.options = options
        self.definitions: Definitions = definitions if definitions is not None else {}
        self.footnotes: dict[str, FootnoteDefinition] = footnotes if footnotes is not None else {}
        self._note_counter = 0
        self._escapable = GFM_ESCAPABLE_CHARACTERS if options.gfm else ESCAPABLE_CHARACTERS
        self._emphasis_pattern = PEDANTIC_EMPHASIS_PATTERN if options.pedantic else EMPHASIS_PATTERN
        self._break_pattern = NEWLINE_BREAK_PATTERN if options.breaks else BREAK_PATTERN
        self._text_pattern = BREAKS_TEXT_PATTERN if options.breaks else TEXT_PATTERN
        self._matchers = self._build_matchers()

    def _build_matchers(self) -> list[Callable[[str, int, bool], MatchResult]]:
        """Return the enabled matchers in priority order."""
        matchers: list[Callable[[str, int, bool], MatchResult]] = [
            self._match_escape,
            self._match_autolink,
            self._match_html,
        ]
        if self.options.gfm:
            matchers.append(self._match_url)
        if self.options.footnotes:
            matchers.extend([self._match_footnote, self._match_inline_note])
        matchers.extend([self._match_image, self._match_link, self._match_strong, self._match_emphasis])
        if self.options.gfm:
            matchers.append(self._match_delete)
        matchers.extend([self._match_code, self._match_break, self._match_text])
        return matchers

    def tokenize(self, text: str, in_link: bool = False) -> list[Node]:
        """Tokenize ``text`` into a list of inline nodes.

        Parameters
        ----------
        text : str
            Raw inline source
        in_link : bool, default False
            Whether the text is the content of a link, where nested links
            and autolinks are not recognized

        Returns
        -------
        list of Node
            Inline nodes with adjacent text merged

        """
        nodes: list[Node] = []
        pos = 0
        while pos < len(text):
            for matcher in self._matchers:
                result = matcher(text, pos, in_link)
                if result is not None:
                    node, pos = result
                    break
            else:
                # _match_text always consumes at least one character
                node, pos = Text(text[pos]), pos + 1

            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(nodes[-1].value + node.value)
            else:
                nodes.append(node)
        return nodes

    # =========================================================================
    # Matchers
    # =========================================================================

    def _match_escape(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if text[pos] == "\\" and pos + 1 < len(text) and text[pos + 1] in self._escapable:
            return Escape(text[pos + 1]), pos + 2
        return None

    def _match_autolink(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if in_link:
            return None
        match = AUTOLINK_PATTERN.match(text, pos)
        if not match:
            return None
        address = match.group(1)
        if match.group(2) == "@":
            href = address if address.lower().startswith("mailto:") else "mailto:" + address
            label = href[len("mailto:") :]
        else:
            href = label = address
        return Link(href=href, children=[Text(label)]), match.end()

    def _match_html(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = INLINE_HTML_PATTERN.match(text, pos)
        if match:
            return HTML(match.group(0)), match.end()
        return None

    def _match_url(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if in_link:
            return None
        match = URL_PATTERN.match(text, pos)
        if match:
            url = match.group(0)
            return Link(href=url, children=[Text(url)]), match.end()
        return None

    def _match_footnote(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = FOOTNOTE_PATTERN.match(text, pos)
        if match:
            return Footnote(match.group(1)), match.end()
        return None

    def _match_inline_note(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if not text.startswith("^[", pos):
            return None
        end = find_bracket_end(text, pos + 1)
        if end == -1:
            return None
        note_id = self._next_note_id()
        content = self.tokenize(text[pos + 2 : end])
        self.footnotes[note_id] = FootnoteDefinition(id=note_id, children=[Paragraph(children=content)])
        return Footnote(note_id), end + 1

    def _next_note_id(self) -> str:
        """Generate a footnote id not used by any definition."""
        while True:
            self._note_counter += 1
            note_id = str(self._note_counter)
            if note_id not in self.footnotes:
                return note_id

    def _match_image(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if not text.startswith("![", pos):
            return None
        end = find_bracket_end(text, pos + 1)
        if end == -1:
            return None
        raw_alt = text[pos + 2 : end]
        resolved = self._resolve_target(text, end + 1, raw_alt)
        if resolved is None:
            return None
        src, title, next_pos = resolved
        alt = unescape(raw_alt, self.options.gfm) or None
        return Image(src=src, alt=alt, title=title), next_pos

    def _match_link(self, text: str, pos: int, in_link: bool) -> MatchResult:
        if in_link or text[pos] != "[":
            return None
        end = find_bracket_end(text, pos)
        if end == -1:
            return None
        raw_label = text[pos + 1 : end]
        resolved = self._resolve_target(text, end + 1, raw_label)
        if resolved is None:
            return None
        href, title, next_pos = resolved
        return Link(href=href, children=self.tokenize(raw_label, in_link=True), title=title), next_pos

    def _resolve_target(self, text: str, pos: int, label: str) -> Optional[tuple[str, Optional[str], int]]:
        """Resolve the destination following a bracketed label.

        Tries an inline ``(href "title")`` destination, then full and
        collapsed references, then a shortcut reference.

        Returns
        -------
        tuple or None
            ``(href, title, end)`` or None when nothing resolves

        """
        gfm = self.options.gfm
        destination = INLINE_DESTINATION_PATTERN.match(text, pos)
        if destination:
            href = destination.group(1) if destination.group(1) is not None else destination.group(2)
            title = next((group for group in destination.groups()[2:] if group is not None), None)
            return unescape(href, gfm), None if title is None else unescape_title(title, gfm), destination.end()

        reference = REFERENCE_LABEL_PATTERN.match(text, pos)
        if reference:
            key = normalize_label(reference.group(1) or label)
            if key in self.definitions:
                href, title = self.definitions[key]
                return href, title, reference.end()
            return None

        key = normalize_label(label)
        if key and key in self.definitions:
            href, title = self.definitions[key]
            return href, title, pos
        return None

    def _match_strong(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = STRONG_PATTERN.match(text, pos)
        if match:
            inner = match.group(1) if match.group(1) is not None else match.group(2)
            return Strong(children=self.tokenize(inner, in_link)), match.end()
        return None

    def _match_emphasis(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = self._emphasis_pattern.match(text, pos)
        if match:
            inner = match.group(1) if match.group(1) is not None else match.group(2)
            return Emphasis(children=self.tokenize(inner, in_link)), match.end()
        return None

    def _match_delete(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = DELETE_PATTERN.match(text, pos)
        if match:
            return Delete(children=self.tokenize(match.group(1), in_link)), match.end()
        return None

    def _match_code(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = CODE_PATTERN.match(text, pos)
        if match:
            return InlineCode(match.group(2).strip()), match.end()
        return None

    def _match_break(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = self._break_pattern.match(text, pos)
        if match:
            return Break(), match.end()
        return None

    def _match_text(self, text: str, pos: int, in_link: bool) -> MatchResult:
        match = self._text_pattern.match(text, pos)
        if match:
            return Text(match.group(0)), match.end()
        return None
