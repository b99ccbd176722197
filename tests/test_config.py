"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, and how the lexer
and parser pick the config up.
"""

from threading import Thread

import pytest

from msgmark import (
    Bold,
    ParseConfig,
    ParseError,
    Parser,
    Text,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.strict is False
        assert config.text_transformer is None

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"strict": True, "unknown_key": "ignored"})
        assert config.strict is True
        assert config.text_transformer is None


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def test_default(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(strict=True))
        try:
            assert get_parse_config().strict is True
        finally:
            reset_parse_config()
        assert get_parse_config().strict is False

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(strict=True)):
                raise RuntimeError("boom")
        assert get_parse_config().strict is False

    def test_nested_contexts(self) -> None:
        outer = ParseConfig(strict=True)
        inner = ParseConfig(text_transformer=str.upper)
        with parse_config_context(outer):
            with parse_config_context(inner):
                assert get_parse_config() is inner
            assert get_parse_config() is outer


class TestConfigEffects:
    def test_text_transformer_applies_to_text_only(self) -> None:
        with parse_config_context(ParseConfig(text_transformer=str.upper)):
            nodes = parse("a **b**")
        assert nodes == [Text("A "), Bold("B")]

    def test_parser_reads_config_at_parse_time(self) -> None:
        parser = Parser("**x")
        with parse_config_context(ParseConfig(strict=True)):
            with pytest.raises(ParseError):
                parser.parse()
        assert parser.parse() == [Bold("x")]


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, list[object]] = {}

        def worker(thread_id: int, config: ParseConfig) -> None:
            set_parse_config(config)
            results[thread_id] = Parser("a **b**").parse()

        configs = [
            ParseConfig(text_transformer=str.upper),
            ParseConfig(),
            ParseConfig(text_transformer=lambda s: s.replace("a", "z")),
        ]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results[0] == [Text("A "), Bold("B")]
        assert results[1] == [Text("a "), Bold("b")]
        assert results[2] == [Text("z "), Bold("b")]
        assert get_parse_config() == ParseConfig()
