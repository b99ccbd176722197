"""
msgmark — Message markup parser and HTML renderer

Parses chat-message markup (bold, italic, strike, spoiler, inline code,
fenced code, links and custom-emoji links) into a flat list of typed nodes,
and renders those nodes to the HTML the message composer consumes.
Zero runtime dependencies.

Quick Start:
    >>> from msgmark import parse, render
    >>> nodes = parse("**Hello**, ||world||")
    >>> render(nodes)
    '<b>Hello</b>, <span data-entity-type="MessageEntitySpoiler">world</span>'

    >>> # Or use the high-level Markup class
    >>> from msgmark import Markup
    >>> md = Markup()
    >>> md("[docs](example.com)")
    '<a href="https://example.com">docs</a>'

Syntax:
    **bold**  __italic__  ~~strike~~  ||spoiler||  `code`
    ```lang
    fenced code
    ```
    [text](target)  [😀](customEmoji:<document id>)

Parsing never fails: unmatched markers degrade instead of raising, unless
strict mode is requested through ParseConfig.
"""

from collections.abc import Iterable

from msgmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from msgmark.errors import MsgmarkError, ParseError, RenderError
from msgmark.lexer import Lexer
from msgmark.location import SourceLocation
from msgmark.nodes import (
    Bold,
    Code,
    CustomEmoji,
    Italic,
    Link,
    Node,
    NodeType,
    Pre,
    Spoiler,
    Strike,
    Text,
)
from msgmark.parser import CUSTOM_EMOJI_SCHEME, Parser, ParseWarning
from msgmark.renderers.html import SPOILER_ENTITY_TYPE, HtmlRenderer
from msgmark.renderers.protocol import ASTRenderer
from msgmark.serialization import from_dict, from_json, to_dict, to_json
from msgmark.tokens import Token, TokenType

__version__ = "0.1.0"

_DEFAULT_RENDERER = HtmlRenderer()


def parse(source: str, *, source_file: str | None = None) -> list[Node]:
    """Parse message markup into top-level nodes.

    Uses the active ParseConfig (see ``parse_config_context``).

    Args:
        source: Message text
        source_file: Optional source name recorded in node locations

    Returns:
        Nodes in source order; empty for empty input

    Example:
        >>> parse("**hi**")
        [Bold(content='hi')]
    """
    return Parser(source, source_file=source_file).parse()


def render(nodes: Iterable[Node]) -> str:
    """Render nodes to HTML.

    Example:
        >>> render([Bold("hi")])
        '<b>hi</b>'
    """
    return _DEFAULT_RENDERER.render(nodes)


def to_html(source: str) -> str:
    """Parse and render in one call."""
    return render(parse(source))


class Markup:
    """High-level processor combining parser and renderer.

    Usage:
        >>> md = Markup()
        >>> md("~~old~~ new")
        '<s>old</s> new'

        >>> md = Markup(strict=True)
        >>> md.parse("**open")
        Traceback (most recent call last):
        ...
        msgmark.errors.ParseError: 1:1 unterminated bold_start marker '**'

    Thread Safety:
        Config is applied via ContextVar for the duration of each call.
        Safe to use one instance from multiple threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        strict: bool = False,
        spoiler_entity_type: str = SPOILER_ENTITY_TYPE,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            strict: Raise ParseError on unmatched markers
            spoiler_entity_type: Attribute value written on spoiler spans
            config: Full ParseConfig; overrides ``strict`` when given
        """
        self._config = config or ParseConfig(strict=strict)
        self._renderer = HtmlRenderer(spoiler_entity_type=spoiler_entity_type)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> list[Node]:
        """Parse source into nodes under this instance's config."""
        with parse_config_context(self._config):
            return Parser(source, source_file=source_file).parse()

    def parse_many(self, sources: Iterable[str]) -> list[list[Node]]:
        """Parse several messages, setting the config once for the batch."""
        with parse_config_context(self._config):
            return [Parser(source).parse() for source in sources]

    def render(self, nodes: Iterable[Node]) -> str:
        """Render nodes to HTML."""
        return self._renderer.render(nodes)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "to_html",
    # High-level
    "Markup",
    # Nodes
    "Node",
    "NodeType",
    "Text",
    "Bold",
    "Italic",
    "Strike",
    "Code",
    "Pre",
    "Link",
    "Spoiler",
    "CustomEmoji",
    # Parser components
    "Lexer",
    "Parser",
    "ParseWarning",
    "CUSTOM_EMOJI_SCHEME",
    "Token",
    "TokenType",
    # Renderer
    "ASTRenderer",
    "HtmlRenderer",
    "SPOILER_ENTITY_TYPE",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "MsgmarkError",
    "ParseError",
    "RenderError",
    # Location
    "SourceLocation",
]
