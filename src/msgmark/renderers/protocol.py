"""ASTRenderer protocol — stable interface for node renderers.

Any renderer that implements ``render(nodes) -> str`` conforms to this
protocol. ``HtmlRenderer`` is the built-in implementation.

Example:
    from msgmark.renderers.protocol import ASTRenderer

    def render_message(renderer: ASTRenderer, nodes: list[Node]) -> str:
        return renderer.render(nodes)

"""

from collections.abc import Iterable
from typing import Protocol

from msgmark.nodes import Node


class ASTRenderer(Protocol):
    """Protocol for node renderers."""

    def render(self, nodes: Iterable[Node]) -> str:
        """Render top-level nodes, in order, to a string."""
        ...
