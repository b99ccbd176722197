"""Tree builder turning the lexer's token stream into a flat node list.

Every START token opens exactly one node and swallows everything up to its
matching END token. Only the text of TEXT tokens becomes node content;
markers found in between are consumed without output. Malformed input never
fails under the default configuration:

- A construct still open at end of input becomes a node over the rest of
  the text.
- A closing token with nothing open (stray ``**`` END, ``](``, ``)``) is
  dropped. Text around it stays as separate Text nodes.

Both cases are logged at DEBUG level and recorded on ``Parser.warnings``.
With ``ParseConfig(strict=True)`` they raise ParseError instead.

Thread Safety:
Parser instances are single-use. Configuration is read from a ContextVar.
The resulting nodes are immutable and safe to share.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from msgmark.config import get_parse_config
from msgmark.errors import ParseError
from msgmark.lexer import Lexer
from msgmark.location import SourceLocation
from msgmark.nodes import (
    Bold,
    Code,
    CustomEmoji,
    Italic,
    Link,
    Node,
    Pre,
    Spoiler,
    Strike,
    Text,
)
from msgmark.tokens import START_TO_END, Token, TokenType
from msgmark.utils.logger import get_logger

logger = get_logger(__name__)

# Link targets starting with this become CustomEmoji nodes
CUSTOM_EMOJI_SCHEME = "customEmoji:"

_SPAN_NODES: dict[TokenType, type[Node]] = {
    TokenType.BOLD_START: Bold,
    TokenType.ITALIC_START: Italic,
    TokenType.STRIKE_START: Strike,
    TokenType.CODE_START: Code,
    TokenType.PRE_START: Pre,
    TokenType.SPOILER_START: Spoiler,
}


@dataclass(frozen=True, slots=True)
class ParseWarning:
    """A recoverable problem found while building the tree."""

    message: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.location} {self.message}"


@dataclass(slots=True)
class _Segment:
    """Text collected between an opening token and its closing token."""

    content: str
    metadata: dict[str, str]
    closing: Token | None
    last: Token


class Parser:
    """Build nodes from the token stream.

    Usage:
        >>> Parser("**hi** [go](example.com)").parse()
        [Bold(content='hi'), Text(content=' '), Link(content='go', url='example.com')]

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_strict",
        "_warnings",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from the ContextVar when ``parse()`` runs.

        Args:
            source: Message text
            source_file: Optional source name for locations and errors

        """
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._current: Token | None = None
        self._strict = False
        self._warnings: list[ParseWarning] = []

    @property
    def warnings(self) -> tuple[ParseWarning, ...]:
        """Problems recovered from during the last ``parse()``."""
        return tuple(self._warnings)

    def parse(self) -> list[Node]:
        """Parse the source into top-level nodes in source order.

        Raises:
            ParseError: Only in strict mode, on the first stray or unclosed marker.

        """
        config = get_parse_config()
        self._strict = config.strict
        self._warnings = []

        lexer = Lexer(
            self._source,
            source_file=self._source_file,
            text_transformer=config.text_transformer,
        )
        self._tokens = list(lexer.tokenize())
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        nodes: list[Node] = []
        while self._current is not None:
            token = self._current
            match token.type:
                case TokenType.TEXT:
                    nodes.append(Text(token.value, location=token.location))
                    self._advance()
                case TokenType.LINK_START:
                    nodes.append(self._parse_link(token))
                case kind if kind in START_TO_END:
                    nodes.append(self._parse_span(token))
                case _:
                    self._report(f"dropped unmatched {_describe(token)}", token)
                    self._advance()

        logger.debug(
            "Parsed %d tokens into %d nodes (%d warnings)",
            self._tokens_len,
            len(nodes),
            len(self._warnings),
        )
        return nodes

    # =========================================================================
    # Constructs
    # =========================================================================

    def _parse_span(self, start: Token) -> Node:
        """Build one symmetric-marker node (bold, italic, strike, code, pre, spoiler)."""
        end_type = START_TO_END[start.type]
        self._advance()
        segment = self._collect(end_type, start, start.metadata)
        if segment.closing is None:
            self._report(f"unterminated {_describe(start)}", start)

        location = start.location.span_to(segment.last.location)
        node_cls = _SPAN_NODES[start.type]
        if node_cls is Pre:
            return Pre(
                segment.content,
                language=segment.metadata.get("language"),
                location=location,
            )
        return node_cls(segment.content, location=location)

    def _parse_link(self, start: Token) -> Node:
        """Build a Link or CustomEmoji from ``[display](target)``."""
        self._advance()
        display = self._collect(TokenType.LINK_TEXT_END, start)
        target = self._collect(TokenType.LINK_URL_END, display.last)
        if target.closing is None:
            self._report(f"unterminated {_describe(start)}", start)

        location = start.location.span_to(target.last.location)
        url = target.content
        if url.startswith(CUSTOM_EMOJI_SCHEME):
            return CustomEmoji(
                display.content,
                document_id=url[len(CUSTOM_EMOJI_SCHEME) :],
                location=location,
            )
        return Link(display.content, url=url, location=location)

    def _collect(
        self,
        end_type: TokenType,
        last: Token,
        seed: Mapping[str, str] | None = None,
    ) -> _Segment:
        """Concatenate TEXT values up to and including the ``end_type`` token.

        Metadata from ``seed`` and from every token passed is merged, later
        tokens winning. Stops at end of stream if ``end_type`` never appears;
        ``last`` is reported as the final token when nothing is consumed.
        """
        parts: list[str] = []
        metadata: dict[str, str] = dict(seed or {})

        while self._current is not None:
            token = self._current
            last = token
            self._advance()
            if token.type is end_type:
                return _Segment("".join(parts), metadata, token, last)
            if token.type is TokenType.TEXT:
                parts.append(token.value)
            if token.metadata:
                metadata.update(token.metadata)

        return _Segment("".join(parts), metadata, None, last)

    # =========================================================================
    # Navigation and diagnostics
    # =========================================================================

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _report(self, message: str, token: Token) -> None:
        """Record a recoverable problem, or raise it in strict mode."""
        loc = token.location
        if self._strict:
            raise ParseError(
                message,
                lineno=loc.lineno,
                col_offset=loc.col_offset,
                source_file=loc.source_file,
            )
        logger.debug("%s: %s", loc, message)
        self._warnings.append(ParseWarning(message, loc))


def _describe(token: Token) -> str:
    marker = token.value.rstrip("\n")
    return f"{token.type.value} marker {marker!r}"
