"""Token and TokenType definitions for the msgmark lexer.

The lexer produces a flat list of Token objects that the parser consumes.
Each Token has a type, the literal source text it was built from, optional
metadata, and a source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msgmark.location import SourceLocation


class TokenType(Enum):
    """Token kinds produced by the lexer.

    Symmetric markers come in START/END pairs. Links use three tokens:
    ``[`` opens, ``](`` separates display text from target, ``)`` closes.

    """

    TEXT = "text"

    BOLD_START = "bold_start"  # **
    BOLD_END = "bold_end"
    ITALIC_START = "italic_start"  # __
    ITALIC_END = "italic_end"
    STRIKE_START = "strike_start"  # ~~
    STRIKE_END = "strike_end"
    CODE_START = "code_start"  # `
    CODE_END = "code_end"
    PRE_START = "pre_start"  # ```lang\n
    PRE_END = "pre_end"  # ```
    SPOILER_START = "spoiler_start"  # ||
    SPOILER_END = "spoiler_end"

    LINK_START = "link_start"  # [
    LINK_TEXT_END = "link_text_end"  # ](
    LINK_URL_END = "link_url_end"  # )

    @property
    def is_start(self) -> bool:
        """True for tokens that open a construct."""
        return self in START_TO_END or self is TokenType.LINK_START

    @property
    def is_end(self) -> bool:
        """True for tokens that close (part of) a construct."""
        return self in _END_TYPES


# Opening token kind -> the kind that closes it
START_TO_END: dict[TokenType, TokenType] = {
    TokenType.BOLD_START: TokenType.BOLD_END,
    TokenType.ITALIC_START: TokenType.ITALIC_END,
    TokenType.STRIKE_START: TokenType.STRIKE_END,
    TokenType.CODE_START: TokenType.CODE_END,
    TokenType.PRE_START: TokenType.PRE_END,
    TokenType.SPOILER_START: TokenType.SPOILER_END,
}

_END_TYPES = frozenset(START_TO_END.values()) | {
    TokenType.LINK_TEXT_END,
    TokenType.LINK_URL_END,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token kind
        value: Literal source text of the token (for markers, the marker itself)
        metadata: String map; only PRE_START carries ``language``
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source (exclusive)
        _end_lineno: Line of the position just past the token
        _end_col: Column of the position just past the token
        _source_file: Optional source name

    Performance:
        SourceLocation is created lazily on first access to ``.location``.

    """

    type: TokenType
    value: str
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)
    _lineno: int = 1
    _col: int = 1
    _start_offset: int = 0
    _end_offset: int = 0
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from msgmark.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def content(self) -> str:
        """Text carried into node content: the run itself for TEXT, empty for markers."""
        return self.value if self.type is TokenType.TEXT else ""

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def col(self) -> int:
        return self._col
