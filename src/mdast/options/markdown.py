#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and stringifying.

This module defines the two validated option sets: ``ParseOptions`` for the
tokenizer and ``StringifyOptions`` for the compiler.
"""
# src/mdast/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mdast.constants import (
    BULLET_MARKERS,
    DEFAULT_BREAKS,
    DEFAULT_BULLET,
    DEFAULT_CLOSE_ATX,
    DEFAULT_EMPHASIS,
    DEFAULT_FENCE,
    DEFAULT_FENCES,
    DEFAULT_FOOTNOTES,
    DEFAULT_GFM,
    DEFAULT_PEDANTIC,
    DEFAULT_REFERENCE_FOOTNOTES,
    DEFAULT_REFERENCE_LINKS,
    DEFAULT_RULE,
    DEFAULT_RULE_REPETITION,
    DEFAULT_RULE_SPACES,
    DEFAULT_SETEXT,
    DEFAULT_STRONG,
    EMPHASIS_MARKERS,
    FENCE_MARKERS,
    MIN_RULE_REPETITION,
    RULE_MARKERS,
    BulletMarker,
    EmphasisMarker,
    FenceMarker,
    RuleMarker,
)
from mdast.exceptions import ValidationError
from mdast.options.base import UNSET, BaseOptions, validate_bool


@dataclass(frozen=True)
class ParseOptions(BaseOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    gfm : bool, default True
        Enable the GitHub Flavored Markdown dialect: strikethrough, bare URL
        autolinks, and the ``~`` and ``|`` escapes.
    tables : bool, default same as ``gfm``
        Parse pipe tables. Requires ``gfm``.
    footnotes : bool, default False
        Parse footnote definitions, references and inline notes. When enabled,
        ``Root.footnotes`` holds the collected definitions.
    breaks : bool, default False
        Treat every newline inside a paragraph as a hard break.
    pedantic : bool, default False
        Follow the original Markdown.pl quirks: intraword underscore emphasis,
        ATX headings without a space, and relaxed list item indentation.

    Examples
    --------
    >>> ParseOptions.from_value({"gfm": False})
    ParseOptions(gfm=False, tables=False, footnotes=False, breaks=False, pedantic=False)

    """

    gfm: bool = field(
        default=DEFAULT_GFM,
        metadata={"help": "Enable the GitHub Flavored Markdown dialect", "option": "gfm", "type": bool},
    )
    tables: Any = field(
        default=UNSET,
        metadata={"help": "Parse pipe tables (requires gfm; defaults to the gfm value)", "option": "tables", "type": bool},
    )
    footnotes: bool = field(
        default=DEFAULT_FOOTNOTES,
        metadata={"help": "Parse footnotes and inline notes", "option": "footnotes", "type": bool},
    )
    breaks: bool = field(
        default=DEFAULT_BREAKS,
        metadata={"help": "Treat newlines in paragraphs as hard breaks", "option": "breaks", "type": bool},
    )
    pedantic: bool = field(
        default=DEFAULT_PEDANTIC,
        metadata={"help": "Follow Markdown.pl quirks", "option": "pedantic", "type": bool},
    )

    def __post_init__(self) -> None:
        """Resolve the ``tables`` default and validate all options.

        Raises
        ------
        ValidationError
            If an option is not a boolean, or ``tables`` is enabled while
            ``gfm`` is disabled.

        """
        validate_bool(self.gfm, "gfm")
        if self.tables is UNSET:
            object.__setattr__(self, "tables", self.gfm)

        super().__post_init__()

        if self.tables and not self.gfm:
            raise ValidationError(
                "Invalid value `true` for setting `options.tables`, tables require `options.gfm`",
                parameter_name="options.tables",
                parameter_value=self.tables,
            )


@dataclass(frozen=True)
class StringifyOptions(BaseOptions):
    r"""Configuration options for AST-to-Markdown stringifying.

    Parameters
    ----------
    bullet : {"-", "\*", "+"}, default "-"
        Marker for unordered list items.
    rule : {"\*", "-", "\_"}, default "\*"
        Marker for horizontal rules.
    rule_spaces : bool, default True
        Separate horizontal rule markers with spaces.
    rule_repetition : int, default 3
        Number of markers in a horizontal rule (at least 3).
    emphasis : {"\_", "\*"}, default "\_"
        Marker for emphasis.
    strong : {"\*", "\_"}, default "\*"
        Marker for strong emphasis (doubled).
    setext : bool, default False
        Use underlined headings for depth 1 and 2 when possible.
    reference_links : bool, default False
        Render links and images as references with definitions at the end of
        the document.
    reference_footnotes : bool, default True
        Render footnote definitions after the body. When False, footnotes whose
        definition is a single paragraph are written inline as ``^[text]``.
    fences : bool, default False
        Always use fenced code blocks.
    fence : {"\`", "~"}, default "\`"
        Character for code fences.
    close_atx : bool, default False
        Add closing hashes to ATX headings.

    """

    bullet: BulletMarker = field(
        default=DEFAULT_BULLET,
        metadata={"help": "Marker for unordered list items", "option": "bullet", "choices": BULLET_MARKERS},
    )
    rule: RuleMarker = field(
        default=DEFAULT_RULE,
        metadata={"help": "Marker for horizontal rules", "option": "rule", "choices": RULE_MARKERS},
    )
    rule_spaces: bool = field(
        default=DEFAULT_RULE_SPACES,
        metadata={"help": "Separate horizontal rule markers with spaces", "option": "ruleSpaces", "type": bool},
    )
    rule_repetition: int = field(
        default=DEFAULT_RULE_REPETITION,
        metadata={
            "help": "Number of markers in a horizontal rule",
            "option": "ruleRepetition",
            "minimum": MIN_RULE_REPETITION,
        },
    )
    emphasis: EmphasisMarker = field(
        default=DEFAULT_EMPHASIS,
        metadata={"help": "Marker for emphasis", "option": "emphasis", "choices": EMPHASIS_MARKERS},
    )
    strong: EmphasisMarker = field(
        default=DEFAULT_STRONG,
        metadata={"help": "Marker for strong emphasis", "option": "strong", "choices": EMPHASIS_MARKERS},
    )
    setext: bool = field(
        default=DEFAULT_SETEXT,
        metadata={"help": "Use setext headings where possible", "option": "setext", "type": bool},
    )
    reference_links: bool = field(
        default=DEFAULT_REFERENCE_LINKS,
        metadata={"help": "Render reference-style links and images", "option": "referenceLinks", "type": bool},
    )
    reference_footnotes: bool = field(
        default=DEFAULT_REFERENCE_FOOTNOTES,
        metadata={
            "help": "Render footnote definitions after the body instead of inline notes",
            "option": "referenceFootnotes",
            "type": bool,
        },
    )
    fences: bool = field(
        default=DEFAULT_FENCES,
        metadata={"help": "Always use fenced code blocks", "option": "fences", "type": bool},
    )
    fence: FenceMarker = field(
        default=DEFAULT_FENCE,
        metadata={"help": "Character for code fences", "option": "fence", "choices": FENCE_MARKERS},
    )
    close_atx: bool = field(
        default=DEFAULT_CLOSE_ATX,
        metadata={"help": "Add closing hashes to ATX headings", "option": "closeAtx", "type": bool},
    )
