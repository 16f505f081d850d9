#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_parse_fuzzing.py
"""Property-based fuzzing tests for the tokenizer and compiler.

This test module uses Hypothesis to generate random Markdown and validate that
tokenizing never fails, always yields a well-formed tree, and that documents
built from plain words survive a byte-exact round trip.

Test Coverage:
- Arbitrary text under every combination of parse options
- Property: parsed trees survive the mapping form unchanged
- Property: parsed trees can always be compiled
- Property: canonical documents round trip byte for byte
- Property: generated documents keep their tree under any formatting options
- Property: footnotes keep their ids whether written inline or after the body
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

import mdast
from mdast.ast import Root, ast_to_dict, dict_to_ast, walk
from mdast.ast.nodes import NODE_TYPES

MARKDOWN_ALPHABET = st.sampled_from(list("ab \n*_`#>-+1.[]()!<>|~^:\\\t"))

parse_options = st.fixed_dictionaries(
    {
        "gfm": st.booleans(),
        "footnotes": st.booleans(),
        "breaks": st.booleans(),
        "pedantic": st.booleans(),
    }
)

words = st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=6), min_size=1, max_size=4).map(" ".join)

blocks = st.one_of(
    words,
    st.builds(lambda depth, text: "#" * depth + " " + text, st.integers(min_value=1, max_value=6), words),
    st.lists(words, min_size=1, max_size=3).map(lambda items: "\n".join("- " + item for item in items)),
    st.just("* * *"),
)

INLINE_FRAGMENTS = [
    "plain",
    "*em*",
    "_em_",
    "**strong**",
    "__strong__",
    "*_nested_*",
    "_*nested*_",
    "*a _b_ c*",
    "**a *b* c**",
    "***both***",
    "[1]",
    "[text](/url)",
    "[x](y 'say \"hi\"')",
    '![alt](/i.png "T")',
    "`code`",
]

HEADING_TEXTS = ["plain title", "*em* title", "1. x", "- x", "+ x", "> x"]

paragraphs = st.lists(st.sampled_from(INLINE_FRAGMENTS), min_size=1, max_size=5).map(
    lambda fragments: "Text " + " ".join(fragments)
)

headings = st.builds(
    lambda depth, text: "#" * depth + " " + text,
    st.integers(min_value=1, max_value=6),
    st.sampled_from(HEADING_TEXTS),
)

stringify_options = st.fixed_dictionaries(
    {
        "emphasis": st.sampled_from(["_", "*"]),
        "strong": st.sampled_from(["_", "*"]),
        "setext": st.booleans(),
        "referenceLinks": st.booleans(),
        "closeAtx": st.booleans(),
    }
)

NOTE_IDS = ["a", "1", "2", "3"]

note_paragraphs = st.lists(
    st.one_of(st.sampled_from(NOTE_IDS).map(lambda note_id: f"Ref[^{note_id}]"), st.just("Inline^[inline note]")),
    min_size=1,
    max_size=5,
)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParseFuzzing:
    """Property-based tests for tokenizing arbitrary input."""

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=120), parse_options)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_parse_yields_valid_tree(self, source: str, options: dict) -> None:
        """Property: parsing never fails and every node is well formed."""
        root = mdast.parse(source, options)

        assert isinstance(root, Root)
        assert (root.footnotes is not None) == options["footnotes"]
        for node in walk(root):
            assert NODE_TYPES[node.type] is type(node)
        assert dict_to_ast(ast_to_dict(root)) == root

    @given(st.text(max_size=80))
    def test_arbitrary_unicode(self, source: str) -> None:
        """Property: any string parses and compiles."""
        output = mdast.stringify(mdast.parse(source))
        assert isinstance(output, str)
        assert output.endswith("\n")

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=120), parse_options)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_parsed_tree_compiles(self, source: str, options: dict) -> None:
        """Property: every parsed tree can be compiled."""
        output = mdast.stringify(mdast.parse(source, options))
        assert output.endswith("\n")
        assert mdast.stringify(ast_to_dict(mdast.parse(source, options))) == output


@pytest.mark.unit
@pytest.mark.fuzzing
class TestRoundTripFuzzing:
    """Property-based round trips of canonical documents."""

    @given(st.lists(blocks, min_size=1, max_size=6))
    def test_canonical_round_trip(self, parts: list) -> None:
        """Property: canonical documents come back byte for byte."""
        source = "\n\n".join(parts) + "\n"
        assert mdast.stringify(mdast.parse(source)) == source

    @given(st.lists(st.one_of(paragraphs, headings), min_size=1, max_size=5), parse_options, stringify_options)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_formatting_keeps_tree(self, blocks: list, options: dict, formatting: dict) -> None:
        """Property: any formatting options read back as the same tree."""
        root = mdast.parse("\n\n".join(blocks) + "\n", options)
        assert mdast.parse(mdast.stringify(root, formatting), options) == root

    @given(note_paragraphs, st.sets(st.sampled_from(NOTE_IDS)), st.booleans())
    def test_footnotes_keep_ids(self, body: list, defined: set, reference_footnotes: bool) -> None:
        """Property: footnote ids survive inline and reference rendering."""
        definitions = [f"[^{note_id}]: Note {note_id}" for note_id in sorted(defined)]
        options = {"footnotes": True}
        root = mdast.parse("\n\n".join(body + definitions) + "\n", options)
        output = mdast.stringify(root, {"referenceFootnotes": reference_footnotes})
        assert mdast.parse(output, options) == root
