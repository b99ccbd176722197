"""msgmark renderers.

Renderers convert parsed node lists into output markup.

Available Renderers:
- HtmlRenderer: Tags with metadata attributes, as consumed by the message
  composer

Thread Safety:
Renderers keep no per-render state on the instance.
Safe for concurrent use from multiple threads.

"""

from msgmark.renderers.html import SPOILER_ENTITY_TYPE, HtmlRenderer
from msgmark.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "SPOILER_ENTITY_TYPE"]
