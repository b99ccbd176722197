"""Single-pass lexer for message markup.

Scans the source left to right with one cursor. Characters that start no
marker extend the pending text run; every marker first flushes that run as
a TEXT token, so the emitted tokens cover the source with no gaps.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from msgmark.lexer.delimiters import (
    CODE_MARK,
    FENCE,
    LINK_CLOSE,
    LINK_OPEN,
    LINK_SEPARATOR,
    MARKER_CHARS,
    PAIR_MARKERS,
    DelimiterState,
)
from msgmark.tokens import Token, TokenType


class Lexer:
    """Turn message text into a flat token stream.

    Usage:
            >>> for token in Lexer("**hi** there").tokenize():
            ...     print(token)
        Token(BOLD_START, '**', 1:1)
        Token(TEXT, 'hi', 1:3)
        Token(BOLD_END, '**', 1:5)
        Token(TEXT, ' there', 1:7)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
        "_text_transformer",
        "_state",
        # Start of the pending text run
        "_text_start",
        "_text_lineno",
        "_text_col",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Message text
            source_file: Optional source name for locations
            text_transformer: Optional callback applied to each text run
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file
        self._text_transformer = text_transformer
        self._state = DelimiterState()

        self._text_start = 0
        self._text_lineno = 1
        self._text_col = 1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects in source order, ending with any trailing text run
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._scan()
        yield from self._flush_text()

    def _scan(self) -> Iterator[Token]:
        """Consume one marker, or one character of plain text."""
        source = self._source
        pos = self._pos
        char = source[pos]

        if char not in MARKER_CHARS:
            self._advance(1)
            return

        pair = source[pos : pos + 2]
        start = PAIR_MARKERS.get(pair)
        if start is not None:
            yield from self._flush_text()
            yield self._emit(self._state.toggle(start), 2)
        elif char == CODE_MARK:
            yield from self._flush_text()
            if source.startswith(FENCE, pos):
                yield self._scan_fence()
            else:
                yield self._emit(self._state.toggle(TokenType.CODE_START), 1)
        elif char == LINK_OPEN:
            yield from self._flush_text()
            yield self._emit(TokenType.LINK_START, 1)
        elif pair == LINK_SEPARATOR:
            yield from self._flush_text()
            self._state.link_separator_seen = True
            yield self._emit(TokenType.LINK_TEXT_END, 2)
        elif char == LINK_CLOSE and self._state.link_separator_seen:
            yield from self._flush_text()
            yield self._emit(TokenType.LINK_URL_END, 1)
        else:
            self._advance(1)

    def _scan_fence(self) -> Token:
        """Emit PRE_START (with the rest of the line as language) or PRE_END."""
        kind = self._state.toggle(TokenType.PRE_START)
        if kind is TokenType.PRE_END:
            return self._emit(kind, len(FENCE))

        info_start = self._pos + len(FENCE)
        line_end = self._source.find("\n", info_start)
        if line_end == -1:
            language = self._source[info_start:]
            length = self._source_len - self._pos
        else:
            language = self._source[info_start:line_end]
            length = line_end + 1 - self._pos
        return self._emit(kind, length, {"language": language})

    # =========================================================================
    # Cursor and token helpers
    # =========================================================================

    def _advance(self, count: int) -> None:
        """Move the cursor forward, keeping line and column current."""
        end = self._pos + count
        newlines = self._source.count("\n", self._pos, end)
        if newlines:
            self._lineno += newlines
            self._col = end - self._source.rfind("\n", self._pos, end)
        else:
            self._col += count
        self._pos = end

    def _emit(
        self,
        kind: TokenType,
        length: int,
        metadata: dict[str, str] | None = None,
    ) -> Token:
        """Build a marker token at the cursor and consume it."""
        start = self._pos
        lineno, col = self._lineno, self._col
        self._advance(length)
        token = Token(
            type=kind,
            value=self._source[start : self._pos],
            metadata=metadata or {},
            _lineno=lineno,
            _col=col,
            _start_offset=start,
            _end_offset=self._pos,
            _end_lineno=self._lineno,
            _end_col=self._col,
            _source_file=self._source_file,
        )
        self._mark_text_start()
        return token

    def _mark_text_start(self) -> None:
        self._text_start = self._pos
        self._text_lineno = self._lineno
        self._text_col = self._col

    def _flush_text(self) -> Iterator[Token]:
        """Emit the pending text run, if any."""
        if self._pos == self._text_start:
            return
        value = self._source[self._text_start : self._pos]
        if self._text_transformer is not None:
            value = self._text_transformer(value)
        yield Token(
            type=TokenType.TEXT,
            value=value,
            _lineno=self._text_lineno,
            _col=self._text_col,
            _start_offset=self._text_start,
            _end_offset=self._pos,
            _end_lineno=self._lineno,
            _end_col=self._col,
            _source_file=self._source_file,
        )
        self._mark_text_start()
