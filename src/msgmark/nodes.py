"""Typed AST nodes for msgmark.

The tree is flat: a parse yields a list of top-level nodes, each carrying
its text in ``content``. The nine node classes form a closed set; the
renderer matches on them exhaustively.

Node Hierarchy:
Node (base)
├── Text
├── Bold
├── Italic
├── Strike
├── Code
├── Pre          (language)
├── Link         (url)
├── Spoiler
└── CustomEmoji  (document_id)

All nodes are frozen dataclasses with slots. ``location`` is keyword-only
and excluded from equality, so hand-built nodes compare equal to parsed ones:

    >>> from msgmark import parse
    >>> parse("**hi**") == [Bold("hi")]
    True

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from msgmark.location import SourceLocation


class NodeType(Enum):
    """Kind tag for each node class."""

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKE = "strike"
    CODE = "code"
    PRE = "pre"
    LINK = "link"
    SPOILER = "spoiler"
    CUSTOM_EMOJI = "custom-emoji"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    Attributes:
        content: Literal text carried by the node. For links and custom
            emoji this is the display text, not the target.
        location: Source span the node was built from

    """

    type: ClassVar[NodeType]

    content: str
    location: SourceLocation | None = field(
        default=None, kw_only=True, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if type(self) is Node:
            msg = "Node is abstract; instantiate one of the concrete node classes"
            raise TypeError(msg)

    @property
    def children(self) -> "tuple[Node, ...]":
        """Child nodes. Always empty: content is kept flat per node."""
        return ()

    @property
    def metadata(self) -> dict[str, str]:
        """Node-specific attributes as a string map."""
        return {}


# =============================================================================
# Plain and wrapped text
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text outside any marker."""

    type: ClassVar[NodeType] = NodeType.TEXT


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """Markup: **text**  HTML: <b>text</b>"""

    type: ClassVar[NodeType] = NodeType.BOLD


@dataclass(frozen=True, slots=True)
class Italic(Node):
    """Markup: __text__  HTML: <i>text</i>"""

    type: ClassVar[NodeType] = NodeType.ITALIC


@dataclass(frozen=True, slots=True)
class Strike(Node):
    """Markup: ~~text~~  HTML: <s>text</s>"""

    type: ClassVar[NodeType] = NodeType.STRIKE


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Markup: `code`  HTML: <code>code</code>"""

    type: ClassVar[NodeType] = NodeType.CODE


@dataclass(frozen=True, slots=True)
class Spoiler(Node):
    """Hidden-until-tapped text.

    Markup: ||text||
    HTML: <span data-entity-type="MessageEntitySpoiler">text</span>

    """

    type: ClassVar[NodeType] = NodeType.SPOILER


# =============================================================================
# Nodes with metadata
# =============================================================================


@dataclass(frozen=True, slots=True)
class Pre(Node):
    """Fenced code block.

    Markup: ```lang\\ncode```
    HTML: <pre data-language="lang">code</pre>

    ``language`` is the raw text after the opening fence, up to the newline.
    It is empty when the fence line carries no tag.

    """

    type: ClassVar[NodeType] = NodeType.PRE

    language: str | None = None

    @property
    def metadata(self) -> dict[str, str]:
        return {} if self.language is None else {"language": self.language}


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markup: [text](target)
    HTML: <a href="https://target">text</a>

    ``url`` is stored exactly as written; scheme normalization happens at
    render time.

    """

    type: ClassVar[NodeType] = NodeType.LINK

    url: str | None = None

    @property
    def metadata(self) -> dict[str, str]:
        return {} if self.url is None else {"url": self.url}


@dataclass(frozen=True, slots=True)
class CustomEmoji(Node):
    """Custom emoji reference written as a link.

    Markup: [😀](customEmoji:5368324170671202286)
    HTML: <img alt="😀" data-document-id="5368324170671202286">

    """

    type: ClassVar[NodeType] = NodeType.CUSTOM_EMOJI

    document_id: str | None = None

    @property
    def metadata(self) -> dict[str, str]:
        return {} if self.document_id is None else {"document-id": self.document_id}


# Every concrete node class, keyed by its kind
NODE_CLASSES: dict[NodeType, type[Node]] = {
    cls.type: cls
    for cls in (Text, Bold, Italic, Strike, Code, Pre, Link, Spoiler, CustomEmoji)
}
