#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_round_trip.py
"""Integration tests for Markdown -> AST -> Markdown round trips.

Canonical documents in ``tests/fixtures/documents`` are written in the form
the compiler produces, so they must survive a round trip byte for byte.
Other inputs must at least keep the same tree.
"""

from pathlib import Path

import pytest

import mdast
from mdast.ast import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast

# document -> (parse options, stringify options)
CANONICAL_DOCUMENTS = {
    "basic.md": (None, None),
    "gfm.md": (None, None),
    "footnotes.md": ({"footnotes": True}, None),
    "references.md": (None, {"referenceLinks": True}),
    "setext.md": (None, {"setext": True}),
    "nesting.md": (None, None),
}

NON_CANONICAL_SOURCES = [
    ("Some *emphasis* here", None),
    ("Setext\n===", None),
    ("+ a\n+ b", None),
    ("***", None),
    ("~~~\ncode\n~~~", None),
    ("see http://example.com now", None),
    ("[a]\n\n[a]: /url", None),
    ("a_b_c", None),
    ("*a*b", None),
    ("1. x\n\n   y", None),
    ("## Closed ##", None),
    ("Text^[inline note]", {"footnotes": True}),
    ("line\nnext", {"breaks": True}),
    ("| a | b |\n|---|:-:|\n| 1 | 2 |", None),
]

# source, parse options, stringify options
FORMATTED_SOURCES = [
    ("[x](y 'say \"hi\"')", None, None),
    ("[x](y 'say \"hi\"')", None, {"referenceLinks": True}),
    ("*_a_*", None, {"emphasis": "*"}),
    ("*a _b_ c*", None, {"emphasis": "*"}),
    ("**a *b* c**", None, {"strong": "_", "emphasis": "*"}),
    ("_ _ *b", None, None),
    ("# 1. x", None, {"setext": True}),
    ("# - x", None, {"setext": True}),
    ("# > x", None, {"setext": True}),
    ("see [1] now [a](/u)", None, {"referenceLinks": True}),
    ("Text[^a]\n\n[^a]: Note", {"footnotes": True}, {"referenceFootnotes": False}),
    ("Text[^1]\n\n[^1]: Note", {"footnotes": True}, {"referenceFootnotes": False}),
]


def _read(documents_dir: Path, name: str) -> str:
    return (documents_dir / name).read_text(encoding="utf-8")


@pytest.mark.integration
class TestCanonicalDocuments:
    """Byte-exact round trips of canonical documents."""

    @pytest.mark.parametrize("name", sorted(CANONICAL_DOCUMENTS))
    def test_byte_exact(self, documents_dir: Path, name: str) -> None:
        """Test stringify(parse(doc)) reproduces the document."""
        parse_options, stringify_options = CANONICAL_DOCUMENTS[name]
        source = _read(documents_dir, name)
        assert mdast.stringify(mdast.parse(source, parse_options), stringify_options) == source

    @pytest.mark.parametrize("name", sorted(CANONICAL_DOCUMENTS))
    def test_json_interchange(self, documents_dir: Path, name: str) -> None:
        """Test parsed trees survive the mapping and JSON forms."""
        parse_options, _ = CANONICAL_DOCUMENTS[name]
        root = mdast.parse(_read(documents_dir, name), parse_options)
        assert dict_to_ast(ast_to_dict(root)) == root
        assert json_to_ast(ast_to_json(root)) == root

    @pytest.mark.parametrize("name", sorted(CANONICAL_DOCUMENTS))
    def test_stringify_mapping_form(self, documents_dir: Path, name: str) -> None:
        """Test compiling the mapping form gives the same text as the nodes."""
        parse_options, stringify_options = CANONICAL_DOCUMENTS[name]
        root = mdast.parse(_read(documents_dir, name), parse_options)
        assert mdast.stringify(ast_to_dict(root), stringify_options) == mdast.stringify(root, stringify_options)


@pytest.mark.integration
class TestStructuralRoundTrip:
    """Round trips that normalize syntax but keep the tree."""

    @pytest.mark.parametrize(("source", "options"), NON_CANONICAL_SOURCES)
    def test_tree_preserved(self, source: str, options) -> None:
        """Test parse(stringify(parse(x))) equals parse(x)."""
        root = mdast.parse(source, options)
        assert mdast.parse(mdast.stringify(root), options) == root

    @pytest.mark.parametrize(("source", "options"), NON_CANONICAL_SOURCES)
    def test_output_is_stable(self, source: str, options) -> None:
        """Test a second round trip does not change the output."""
        once = mdast.stringify(mdast.parse(source, options))
        assert mdast.stringify(mdast.parse(once, options)) == once

    @pytest.mark.parametrize(("source", "parse_options", "stringify_options"), FORMATTED_SOURCES)
    def test_tree_preserved_with_formatting(self, source: str, parse_options, stringify_options) -> None:
        """Test non-default formatting still reads back as the same tree."""
        root = mdast.parse(source, parse_options)
        assert mdast.parse(mdast.stringify(root, stringify_options), parse_options) == root

    def test_all_stringify_options(self, documents_dir: Path) -> None:
        """Test a document keeps its tree under non-default formatting."""
        source = _read(documents_dir, "basic.md")
        options = {
            "bullet": "*",
            "rule": "_",
            "ruleSpaces": False,
            "ruleRepetition": 4,
            "emphasis": "*",
            "strong": "_",
            "setext": True,
            "referenceLinks": True,
            "fences": True,
            "fence": "~",
            "closeAtx": True,
        }
        root = mdast.parse(source)
        assert mdast.parse(mdast.stringify(root, options)) == root
