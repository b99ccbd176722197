"""StringBuilder for O(n) output accumulation.

Appends fragments to a list and joins once at the end, instead of growing
one string per rendered node.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<b>").append("hi").append("</b>").build()
            '<b>hi</b>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped) and return self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)
