"""Tests for the tree builder: node construction and graceful degradation."""

import pytest

from msgmark import parse
from msgmark.nodes import (
    Bold,
    Code,
    CustomEmoji,
    Italic,
    Link,
    Pre,
    Spoiler,
    Strike,
    Text,
)
from msgmark.parser import Parser


class TestFormattedSpans:
    """One node per matched START/END pair."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("**hi**", Bold("hi")),
            ("__hi__", Italic("hi")),
            ("~~hi~~", Strike("hi")),
            ("||hi||", Spoiler("hi")),
            ("`hi`", Code("hi")),
        ],
    )
    def test_single_construct(self, source: str, expected: object) -> None:
        assert parse(source) == [expected]

    def test_text_around_construct(self) -> None:
        assert parse("say **hi** now") == [Text("say "), Bold("hi"), Text(" now")]

    def test_inner_markers_are_flattened(self) -> None:
        """Nested markers are consumed; only their text survives."""
        assert parse("**a __b__ c**") == [Bold("a b c")]

    def test_three_markers(self) -> None:
        """First pair closes over 'a'; the trailing marker opens an empty bold."""
        assert parse("**a**b**") == [Bold("a"), Text("b"), Bold("")]

    def test_unterminated_marker_runs_to_end(self) -> None:
        assert parse("**bold without end") == [Bold("bold without end")]

    def test_unterminated_after_text(self) -> None:
        assert parse("x ~~y") == [Text("x "), Strike("y")]


class TestFencedCode:
    def test_fence_with_language(self) -> None:
        nodes = parse("```js\nconsole.log(1)\n```")
        assert nodes == [Pre("console.log(1)\n", language="js")]
        assert nodes[0].metadata == {"language": "js"}

    def test_fence_without_language(self) -> None:
        assert parse("```\ncode```") == [Pre("code", language="")]

    def test_unterminated_fence(self) -> None:
        assert parse("```py\nprint") == [Pre("print", language="py")]

    def test_fence_line_only(self) -> None:
        assert parse("```py") == [Pre("", language="py")]

    def test_inline_code_inside_fence_is_flattened(self) -> None:
        assert parse("```\na`b`c```") == [Pre("abc", language="")]

    def test_text_after_fence(self) -> None:
        assert parse("```\nx```tail") == [Pre("x", language=""), Text("tail")]


class TestLinks:
    def test_link(self) -> None:
        nodes = parse("[go](example.com)")
        assert nodes == [Link("go", url="example.com")]
        assert nodes[0].metadata == {"url": "example.com"}

    def test_url_kept_verbatim(self) -> None:
        """Scheme normalization is left to the renderer."""
        assert parse("[mail](a@b.com)") == [Link("mail", url="a@b.com")]

    def test_custom_emoji(self) -> None:
        nodes = parse("[😀](customEmoji:123)")
        assert nodes == [CustomEmoji("😀", document_id="123")]
        assert nodes[0].metadata == {"document-id": "123"}

    def test_custom_emoji_prefix_is_case_sensitive(self) -> None:
        assert parse("[x](customemoji:1)") == [Link("x", url="customemoji:1")]

    def test_markers_in_display_text_are_flattened(self) -> None:
        assert parse("[**x**](y)") == [Link("x", url="y")]

    def test_nested_open_bracket_is_absorbed(self) -> None:
        assert parse("[a [b](c)") == [Link("a b", url="c")]

    def test_link_without_separator(self) -> None:
        assert parse("[abc") == [Link("abc", url="")]

    def test_link_without_terminator(self) -> None:
        assert parse("[a](b") == [Link("a", url="b")]

    def test_text_between_links(self) -> None:
        assert parse("[a](b) and [c](d)") == [
            Link("a", url="b"),
            Text(" and "),
            Link("c", url="d"),
        ]


class TestDroppedTokens:
    """Closing tokens with nothing open are dropped, not turned into text."""

    def test_stray_separator(self) -> None:
        assert parse("a](b") == [Text("a"), Text("b")]

    def test_stray_terminator_after_link(self) -> None:
        assert parse("[a](b) (c)") == [Link("a", url="b"), Text(" (c")]

    def test_paren_without_prior_separator_is_text(self) -> None:
        assert parse("f(x)") == [Text("f(x)")]

    def test_end_marker_whose_start_was_absorbed(self) -> None:
        """The bold START is swallowed by the code span, leaving its END stray."""
        assert parse("`a**`b**") == [Code("a"), Text("b")]


class TestWarnings:
    def test_clean_parse_has_no_warnings(self) -> None:
        parser = Parser("**a** [b](c)")
        parser.parse()
        assert parser.warnings == ()

    def test_dropped_token_is_recorded(self) -> None:
        parser = Parser("a](b")
        parser.parse()
        assert len(parser.warnings) == 1
        assert str(parser.warnings[0]) == "1:2 dropped unmatched link_text_end marker ']('"

    def test_unterminated_construct_is_recorded(self) -> None:
        parser = Parser("ok\n__open")
        parser.parse()
        (warning,) = parser.warnings
        assert warning.message == "unterminated italic_start marker '__'"
        assert warning.location.lineno == 2

    def test_unterminated_fence_message_omits_newline(self) -> None:
        parser = Parser("```py\nx")
        parser.parse()
        assert parser.warnings[0].message == "unterminated pre_start marker '```py'"

    def test_warnings_reset_between_parses(self) -> None:
        parser = Parser("**x")
        parser.parse()
        parser.parse()
        assert len(parser.warnings) == 1


class TestLocations:
    def test_span_covers_markers(self) -> None:
        (node,) = parse("**hi**")
        assert node.location is not None
        assert (node.location.offset, node.location.end_offset) == (0, 6)

    def test_span_end_position(self) -> None:
        (node,) = parse("**hi**")
        assert (node.location.end_lineno, node.location.end_col_offset) == (1, 7)

    def test_span_ends_on_last_line_of_multiline_text(self) -> None:
        (node,) = parse("```js\nx\ny")
        loc = node.location
        assert (loc.lineno, loc.col_offset) == (1, 1)
        assert (loc.end_lineno, loc.end_col_offset, loc.end_offset) == (3, 2, 9)

    def test_text_node_location(self) -> None:
        nodes = parse("ab **c**")
        assert nodes[1].location.offset == 3
        assert nodes[1].location.col_offset == 4

    def test_link_location(self) -> None:
        (node,) = parse("[a](b)")
        assert (node.location.offset, node.location.end_offset) == (0, 6)

    def test_source_file(self) -> None:
        (node,) = parse("x", source_file="chat.txt")
        assert node.location.source_file == "chat.txt"


class TestEmptyInput:
    def test_empty_string(self) -> None:
        assert parse("") == []
