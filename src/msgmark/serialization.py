"""Node serialization — JSON round-trip for parsed messages.

Converts nodes to/from JSON-compatible dicts, e.g. to store drafts or hand
the parsed form to a client that renders on its own.

Output is deterministic (sorted keys).

Example:
    from msgmark import parse
    from msgmark.serialization import to_json, from_json

    nodes = parse("**hi** [go](example.com)")
    assert from_json(to_json(nodes)) == nodes

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from msgmark.errors import RenderError
from msgmark.location import SourceLocation
from msgmark.nodes import NODE_CLASSES, Node

# Registry of node class names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in NODE_CLASSES.values()}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator (the class name) and every field.

    Raises:
        RenderError: If ``node`` is not one of the msgmark node classes.

    """
    type_name = type(node).__name__
    if _NODE_TYPES.get(type_name) is not type(node):
        msg = f"Cannot serialize {type_name!r}: not a msgmark node"
        raise RenderError(msg)

    result: dict[str, Any] = {"_type": type_name}
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, SourceLocation):
            value = _location_to_dict(value)
        result[f.name] = value
    return result


def _location_to_dict(loc: SourceLocation) -> dict[str, Any]:
    return {
        "_type": "SourceLocation",
        "lineno": loc.lineno,
        "col_offset": loc.col_offset,
        "offset": loc.offset,
        "end_offset": loc.end_offset,
        "end_lineno": loc.end_lineno,
        "end_col_offset": loc.end_col_offset,
        "source_file": loc.source_file,
    }


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict produced by ``to_dict``.

    Raises:
        RenderError: If ``_type`` is missing or unknown.

    """
    if not isinstance(data, dict):
        msg = f"Expected a serialized node dict, got {type(data).__name__}"
        raise RenderError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise RenderError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise RenderError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name == "location" and isinstance(raw, dict):
            raw = SourceLocation(
                lineno=raw["lineno"],
                col_offset=raw["col_offset"],
                offset=raw.get("offset", 0),
                end_offset=raw.get("end_offset", 0),
                end_lineno=raw.get("end_lineno"),
                end_col_offset=raw.get("end_col_offset"),
                source_file=raw.get("source_file"),
            )
        kwargs[f.name] = raw

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Malformed {type_name} payload: {e}"
        raise RenderError(msg) from e


def to_json(nodes: Sequence[Node], *, indent: int | None = None) -> str:
    """Serialize a node list to a JSON array string.

    Args:
        nodes: Top-level nodes, as returned by ``parse()``.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps([to_dict(node) for node in nodes], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Node]:
    """Deserialize a node list from a JSON array string.

    Raises:
        RenderError: If the JSON is not an array of serialized nodes.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of nodes, got {type(raw).__name__}"
        raise RenderError(msg)
    return [from_dict(item) for item in raw]
