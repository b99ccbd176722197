"""Exception classes for msgmark.

The parse/render pipeline is total under the default configuration; these
exceptions surface only when strict parsing is requested or when the
serialization helpers are handed data they cannot interpret.
"""

from __future__ import annotations


class MsgmarkError(Exception):
    """Base exception for all msgmark errors."""

    pass


class ParseError(MsgmarkError):
    """Malformed markup found while parsing in strict mode.

    Raised for a closing marker with nothing to close, or a construct left
    open at the end of the input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column where error occurred (1-indexed)
            source_file: Source name (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(MsgmarkError):
    """Error converting nodes to or from an output format.

    Raised by the serialization helpers for unknown node types or
    malformed payloads.
    """

    pass
