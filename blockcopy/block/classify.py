"""
Node Classifier - structural role of a JSON-like value.

Content nodes are plain Python values as decoded from JSON. Their role is
decided by shape alone:

- COMPONENT: dict carrying the component tag (``__component``)
- MEDIA: untagged dict exposing media-asset attributes
- ARRAY: list
- PLAIN_OBJECT: any other dict
- SCALAR: everything else (str, int, float, bool, None)

The tag check always runs first, so a component that happens to carry a
``url`` is still a component.
"""

from __future__ import annotations
from enum import Enum
from typing import Any


COMPONENT_TAG = "__component"

# any one of these marks an untagged dict as a media reference
MEDIA_MARKERS = ("mime", "url", "formats", "provider")


class NodeKind(str, Enum):
    SCALAR = "scalar"
    PLAIN_OBJECT = "object"
    MEDIA = "media"
    COMPONENT = "component"
    ARRAY = "array"


def is_component(node: Any) -> bool:
    return isinstance(node, dict) and COMPONENT_TAG in node


def is_media(node: Any) -> bool:
    """
    True if ``node`` is an untagged dict that looks like a media asset.

    A dict qualifies when any media marker key is present, or when it has
    ``id`` and ``hash`` together with ``name`` or ``alternativeText``.
    """
    if not isinstance(node, dict) or COMPONENT_TAG in node:
        return False
    if any(marker in node for marker in MEDIA_MARKERS):
        return True
    return "id" in node and "hash" in node and ("name" in node or "alternativeText" in node)


def classify(node: Any) -> NodeKind:
    if is_component(node):
        return NodeKind.COMPONENT
    if is_media(node):
        return NodeKind.MEDIA
    if isinstance(node, list):
        return NodeKind.ARRAY
    if isinstance(node, dict):
        return NodeKind.PLAIN_OBJECT
    return NodeKind.SCALAR


def json_type(value: Any) -> str:
    """Name of the JSON type of ``value`` (bool is not a number)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def node_depth(node: Any) -> int:
    """
    Nesting depth of containers in ``node``. Scalars have depth 0.

    Iterative, so pathologically deep input cannot exhaust the call stack.
    """
    deepest = 0
    stack: list[tuple[Any, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, dict):
            children = current.values()
        elif isinstance(current, list):
            children = current
        else:
            continue
        depth += 1
        deepest = max(deepest, depth)
        stack.extend((child, depth) for child in children)
    return deepest


def exceeds_depth(node: Any, limit: int) -> bool:
    """True if ``node`` nests containers deeper than ``limit``. Stops early."""
    stack: list[tuple[Any, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, dict):
            children = current.values()
        elif isinstance(current, list):
            children = current
        else:
            continue
        depth += 1
        if depth > limit:
            return True
        stack.extend((child, depth) for child in children)
    return False
