"""Utility modules for msgmark.

Provides:
- text: escape_html, normalize_url for rendering
- logger: get_logger for logging
"""

from msgmark.utils.logger import get_logger
from msgmark.utils.text import escape_html, normalize_url

__all__ = [
    "escape_html",
    "get_logger",
    "normalize_url",
]
