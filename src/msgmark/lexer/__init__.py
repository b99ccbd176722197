"""Lexer for msgmark message markup.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, DelimiterState
├── core.py              # Lexer class (cursor, text runs, marker dispatch)
└── delimiters.py        # Marker tables, matching policies, toggle state

Usage:
    >>> from msgmark.lexer import Lexer
    >>> [t.type.name for t in Lexer("~~old~~").tokenize()]
    ['STRIKE_START', 'TEXT', 'STRIKE_END']

"""

from msgmark.lexer.core import Lexer
from msgmark.lexer.delimiters import DelimiterState

__all__ = ["DelimiterState", "Lexer"]
