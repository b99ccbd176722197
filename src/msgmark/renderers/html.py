"""HTML renderer using StringBuilder pattern.

Each top-level node becomes one fragment; fragments are concatenated in
order with no separators.

Escaping:
Only attribute values (link href, pre language, custom emoji alt and
document id) go through ``escape_html``. Node content is written verbatim,
so markup typed by the user inside a node reaches the output unchanged.
Callers embedding the output in a page must sanitize it themselves.

Thread Safety:
HtmlRenderer holds only immutable options. Each render() call uses its own
StringBuilder, so one instance can serve many threads.

"""

from collections.abc import Iterable

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
from msgmark.stringbuilder import StringBuilder
from msgmark.utils.logger import get_logger
from msgmark.utils.text import escape_html, normalize_url

logger = get_logger(__name__)

# Entity type the message composer uses to recognize spoiler spans
SPOILER_ENTITY_TYPE = "MessageEntitySpoiler"


class HtmlRenderer:
    """Render a node list to HTML.

    Usage:
        >>> from msgmark import parse
        >>> HtmlRenderer().render(parse("**hi** [go](example.com)"))
        '<b>hi</b> <a href="https://example.com">go</a>'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.

    """

    __slots__ = ("_spoiler_entity_type",)

    def __init__(self, *, spoiler_entity_type: str = SPOILER_ENTITY_TYPE) -> None:
        """Initialize renderer.

        Args:
            spoiler_entity_type: Value of the ``data-entity-type`` attribute
                written on spoiler spans
        """
        self._spoiler_entity_type = escape_html(spoiler_entity_type)

    def render(self, nodes: Iterable[Node]) -> str:
        """Render nodes to an HTML string."""
        sb = StringBuilder()
        for node in nodes:
            self._render_node(node, sb)
        return sb.build()

    def _render_node(self, node: Node, sb: StringBuilder) -> None:
        content = getattr(node, "content", "")
        match node:
            case Text():
                sb.append(content)
            case Bold():
                sb.append("<b>").append(content).append("</b>")
            case Italic():
                sb.append("<i>").append(content).append("</i>")
            case Strike():
                sb.append("<s>").append(content).append("</s>")
            case Code():
                sb.append("<code>").append(content).append("</code>")
            case Pre():
                self._render_pre(node, sb)
            case Link():
                self._render_link(node, sb)
            case Spoiler():
                sb.append(f'<span data-entity-type="{self._spoiler_entity_type}">')
                sb.append(content).append("</span>")
            case CustomEmoji():
                self._render_custom_emoji(node, sb)
            case _:
                logger.debug(
                    "No rendering rule for %s; writing raw content", type(node).__name__
                )
                sb.append(content)

    def _render_pre(self, pre: Pre, sb: StringBuilder) -> None:
        if pre.language:
            sb.append(f'<pre data-language="{escape_html(pre.language)}">')
        else:
            sb.append("<pre>")
        sb.append(pre.content).append("</pre>")

    def _render_link(self, link: Link, sb: StringBuilder) -> None:
        """Render an anchor, or plain content when there is no target."""
        if not link.url:
            sb.append(link.content)
            return
        href = escape_html(normalize_url(link.url))
        sb.append(f'<a href="{href}">').append(link.content).append("</a>")

    def _render_custom_emoji(self, emoji: CustomEmoji, sb: StringBuilder) -> None:
        """Render an emoji image, or plain content when there is no document id."""
        if not emoji.document_id:
            sb.append(emoji.content)
            return
        sb.append(
            f'<img alt="{escape_html(emoji.content)}"'
            f' data-document-id="{escape_html(emoji.document_id)}">'
        )
