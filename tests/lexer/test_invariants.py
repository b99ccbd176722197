"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from msgmark.lexer import Lexer
from msgmark.tokens import TokenType

# Inputs dense in marker characters exercise toggling and link heuristics
_markup_text = st.text(alphabet="ab *_~|`[]()\n:@.", max_size=300)


class TestCoverageInvariants:
    """Tokens cover the source with no gaps or overlaps."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_values_reproduce_source(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        assert "".join(t.value for t in tokens) == source

    @given(_markup_text)
    @settings(max_examples=300)
    def test_offsets_are_contiguous(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        offset = 0
        for token in tokens:
            assert token.location.offset == offset
            assert token.location.end_offset > offset
            offset = token.location.end_offset
        assert offset == len(source)

    @given(_markup_text)
    @settings(max_examples=200)
    def test_no_adjacent_text_tokens(self, source: str) -> None:
        """Text runs are flushed once, so two TEXT tokens never touch."""
        kinds = [t.type for t in Lexer(source).tokenize()]
        for left, right in zip(kinds, kinds[1:]):
            assert not (left is TokenType.TEXT and right is TokenType.TEXT)


class TestToggleInvariants:
    """Symmetric markers alternate START/END per kind."""

    @given(_markup_text)
    @settings(max_examples=300)
    def test_starts_and_ends_alternate(self, source: str) -> None:
        pairs = {
            TokenType.BOLD_START: TokenType.BOLD_END,
            TokenType.ITALIC_START: TokenType.ITALIC_END,
            TokenType.STRIKE_START: TokenType.STRIKE_END,
            TokenType.SPOILER_START: TokenType.SPOILER_END,
            TokenType.CODE_START: TokenType.CODE_END,
            TokenType.PRE_START: TokenType.PRE_END,
        }
        open_kinds: set[TokenType] = set()
        for token in Lexer(source).tokenize():
            if token.type in pairs:
                assert token.type not in open_kinds
                open_kinds.add(token.type)
            for start, end in pairs.items():
                if token.type is end:
                    assert start in open_kinds
                    open_kinds.discard(start)

    @given(_markup_text)
    @settings(max_examples=200)
    def test_terminator_only_after_separator(self, source: str) -> None:
        seen_separator = False
        for token in Lexer(source).tokenize():
            if token.type is TokenType.LINK_TEXT_END:
                seen_separator = True
            if token.type is TokenType.LINK_URL_END:
                assert seen_separator
