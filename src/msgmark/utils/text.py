"""Text helpers shared by the renderer.

Example:
    >>> from msgmark.utils.text import escape_html, normalize_url
    >>> escape_html('say "hi"')
    'say &quot;hi&quot;'
    >>> normalize_url("example.com")
    'https://example.com'
"""

from __future__ import annotations

import html as html_module

SCHEME_SEPARATOR = "://"
MAILTO_PREFIX = "mailto:"
DEFAULT_URL_PREFIX = "https://"


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters for use in attribute values.

    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#039;

    Only attribute values go through this; node content is emitted verbatim.

    Examples:
        >>> escape_html("<a href='x'>")
        '&lt;a href=&#039;x&#039;&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("&#x27;", "&#039;")


def normalize_url(url: str) -> str:
    """Give a link target a scheme.

    Targets that already contain ``://`` pass through untouched; targets
    containing ``@`` become ``mailto:`` links; anything else gets
    ``https://``.

    Examples:
        >>> normalize_url("https://x.com")
        'https://x.com'
        >>> normalize_url("a@b.com")
        'mailto:a@b.com'
        >>> normalize_url("example.com")
        'https://example.com'
    """
    if SCHEME_SEPARATOR in url:
        return url
    if "@" in url:
        return f"{MAILTO_PREFIX}{url}"
    return f"{DEFAULT_URL_PREFIX}{url}"
