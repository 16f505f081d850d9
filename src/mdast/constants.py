#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdast.

This module centralizes the default option values, the enumerated marker sets
accepted by the stringifier, and the closed set of node type names.
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Parse option defaults
# =============================================================================

DEFAULT_GFM = True
DEFAULT_FOOTNOTES = False
DEFAULT_BREAKS = False
DEFAULT_PEDANTIC = False

# =============================================================================
# Stringify option defaults and domains
# =============================================================================

BulletMarker = Literal["-", "*", "+"]
RuleMarker = Literal["*", "-", "_"]
EmphasisMarker = Literal["_", "*"]
FenceMarker = Literal["`", "~"]

BULLET_MARKERS: tuple[str, ...] = ("-", "*", "+")
RULE_MARKERS: tuple[str, ...] = ("*", "-", "_")
EMPHASIS_MARKERS: tuple[str, ...] = ("_", "*")
FENCE_MARKERS: tuple[str, ...] = ("`", "~")

DEFAULT_BULLET: BulletMarker = "-"
DEFAULT_RULE: RuleMarker = "*"
DEFAULT_RULE_SPACES = True
DEFAULT_RULE_REPETITION = 3
MIN_RULE_REPETITION = 3
DEFAULT_EMPHASIS: EmphasisMarker = "_"
DEFAULT_STRONG: EmphasisMarker = "*"
DEFAULT_SETEXT = False
DEFAULT_REFERENCE_LINKS = False
DEFAULT_REFERENCE_FOOTNOTES = True
DEFAULT_FENCES = False
DEFAULT_FENCE: FenceMarker = "`"
DEFAULT_CLOSE_ATX = False

# Minimum run length of a code fence
CODE_FENCE_MIN = 3

# Indentation used for indented code and footnote definition continuations
INDENT_WIDTH = 4

# =============================================================================
# Node model
# =============================================================================

Alignment = Literal["left", "right", "center"]
TABLE_ALIGNMENTS: tuple[str | None, ...] = ("left", "right", "center", None)

MIN_HEADING_DEPTH = 1
MAX_HEADING_DEPTH = 6

# =============================================================================
# Grammar
# =============================================================================

# Characters that may follow a backslash to form an escape
ESCAPABLE_CHARACTERS = "\\`*{}[]()#+-.!_>"
GFM_ESCAPABLE_CHARACTERS = ESCAPABLE_CHARACTERS + "~|"

# Quotes that may also be escaped inside link titles
TITLE_QUOTES = "\"'"

# Tag names that open a raw HTML block
BLOCK_HTML_TAGS: tuple[str, ...] = (
    "address",
    "article",
    "aside",
    "blockquote",
    "body",
    "canvas",
    "center",
    "dd",
    "details",
    "dialog",
    "div",
    "dl",
    "dt",
    "fieldset",
    "figcaption",
    "figure",
    "footer",
    "form",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "head",
    "header",
    "hr",
    "html",
    "iframe",
    "li",
    "main",
    "menu",
    "nav",
    "noscript",
    "ol",
    "p",
    "pre",
    "script",
    "section",
    "style",
    "summary",
    "table",
    "tbody",
    "td",
    "tfoot",
    "th",
    "thead",
    "tr",
    "ul",
    "video",
)
