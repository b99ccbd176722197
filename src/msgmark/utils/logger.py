"""Minimal logging utilities for msgmark.

Example:
    >>> from msgmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Dropped stray link separator")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a standard library logger namespaced under ``msgmark.``.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("lexer").name
        'msgmark.lexer'
    """
    if not (name == "msgmark" or name.startswith("msgmark.")):
        name = f"msgmark.{name}"
    return logging.getLogger(name)
