"""Marker tables and the toggle state used by the lexer.

The tables are the only place the recognized syntax is spelled out. The
matching policies below are compatibility behavior: changing any of them
changes which node sequence a message produces.

Policies:
- Symmetric markers toggle. A marker opens its kind when that kind is
  closed and closes it when it is open. There is no nesting stack, so a
  kind is either open or closed at any scan position.
- ``FENCE`` is checked before ``CODE_MARK``. Testing the single backtick
  first would split every fence into three inline-code toggles.
- ``LINK_SEPARATOR`` is recognized anywhere, even with no link open.
- ``LINK_CLOSE`` is recognized only after some ``LINK_SEPARATOR`` has been
  emitted earlier in the stream. The flag is never reset, so a later ``)``
  in plain text still closes a link that was never opened.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from msgmark.tokens import START_TO_END, TokenType

# Two-character symmetric markers -> the START kind they toggle
PAIR_MARKERS: dict[str, TokenType] = {
    "**": TokenType.BOLD_START,
    "__": TokenType.ITALIC_START,
    "~~": TokenType.STRIKE_START,
    "||": TokenType.SPOILER_START,
}

CODE_MARK = "`"
FENCE = "```"

LINK_OPEN = "["
LINK_SEPARATOR = "]("
LINK_CLOSE = ")"

# Characters that can begin a marker; anything else is plain text
MARKER_CHARS = frozenset("*_~|`[])")


@dataclass(slots=True)
class DelimiterState:
    """Open/closed flags for one tokenize pass.

    Attributes:
        open_kinds: START kinds currently open
        link_separator_seen: Whether any ``](`` has been emitted so far

    """

    open_kinds: set[TokenType] = field(default_factory=set)
    link_separator_seen: bool = False

    def toggle(self, start: TokenType) -> TokenType:
        """Resolve a symmetric marker to its START or END kind and flip the flag."""
        if start in self.open_kinds:
            self.open_kinds.discard(start)
            return START_TO_END[start]
        self.open_kinds.add(start)
        return start

    def is_open(self, start: TokenType) -> bool:
        return start in self.open_kinds
