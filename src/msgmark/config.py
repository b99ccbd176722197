"""ContextVar-based parse configuration for msgmark.

Configuration is set once per Markup instance (or per ``parse()`` call) and
read by the lexer and parser through a ContextVar, so concurrent parses in
different threads never see each other's settings.

Usage:
    from msgmark.config import ParseConfig, parse_config_context
    from msgmark.parser import Parser

    with parse_config_context(ParseConfig(strict=True)):
        nodes = Parser("**bold**").parse()

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        strict: Raise ParseError on stray closing markers and on constructs
            left open at end of input, instead of degrading silently
        text_transformer: Optional callback applied to every plain-text run
            before it becomes a token

    """

    strict: bool = False
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Unknown keys are ignored.

        Example:
            >>> ParseConfig.from_dict({"strict": True, "theme": "dark"}).strict
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "msgmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (context-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(strict=True)):
        ...     get_parse_config().strict
        True
        >>> get_parse_config().strict
        False

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
