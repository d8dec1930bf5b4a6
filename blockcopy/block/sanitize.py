"""
Sanitizer - portable copies of component trees.

A component read from a record store carries store-owned identity and
audit fields at every level. ``sanitize`` returns a fresh tree without
them, so the result can be written into any record as new content:

    clean = sanitize(section)
    assert "id" not in clean

Media references keep their identity (the asset itself is shared) but are
narrowed to ``MEDIA_WHITELIST``.
"""

from __future__ import annotations
import copy
from typing import Any

from .classify import COMPONENT_TAG, NodeKind, classify


REMOVED_FIELDS: tuple[str, ...] = (
    "id",
    "documentId",
    "createdAt",
    "updatedAt",
    "createdBy",
    "updatedBy",
    "publishedAt",
    "locale",
)

MEDIA_WHITELIST: tuple[str, ...] = (
    "id",
    "name",
    "alternativeText",
    "caption",
    "width",
    "height",
    "formats",
    "hash",
    "ext",
    "mime",
    "size",
    "url",
    "previewUrl",
    "provider",
    "provider_metadata",
)


def narrow_media(media: dict[str, Any]) -> dict[str, Any]:
    """Keep only whitelisted media attributes that are present."""
    return {key: copy.deepcopy(media[key]) for key in MEDIA_WHITELIST if key in media}


def sanitize_node(node: Any) -> Any:
    """
    Sanitize any node.

    Components and plain objects lose the removed fields, media references
    are narrowed, arrays are mapped element-wise and scalars are returned
    as they are. The walk keeps its own stack, so nesting depth is bounded
    by memory rather than the interpreter's recursion limit.
    """
    root: dict[str, Any] = {}
    stack: list[tuple[Any, Any, Any]] = [(node, root, "node")]
    while stack:
        current, parent, slot = stack.pop()
        kind = classify(current)
        if kind is NodeKind.MEDIA:
            parent[slot] = narrow_media(current)
        elif kind is NodeKind.ARRAY:
            items: list[Any] = [None] * len(current)
            parent[slot] = items
            stack.extend((item, items, i) for i, item in enumerate(current))
        elif kind in (NodeKind.COMPONENT, NodeKind.PLAIN_OBJECT):
            cleaned = _empty_object(current)
            parent[slot] = cleaned
            for key, value in current.items():
                if key == COMPONENT_TAG or key in REMOVED_FIELDS:
                    continue
                # placeholder keeps the source key order
                cleaned[key] = None
                stack.append((value, cleaned, key))
        else:
            parent[slot] = current
    return root["node"]


def _empty_object(obj: dict[str, Any]) -> dict[str, Any]:
    if COMPONENT_TAG in obj:
        return {COMPONENT_TAG: obj[COMPONENT_TAG]}
    return {}


def sanitize(component: Any) -> Any:
    """
    Portable copy of a component.

    Non-dict input is returned unchanged. The input is never mutated.
    """
    if not isinstance(component, dict):
        return component
    return sanitize_node(component)


def find_forbidden(node: Any, path: str = "") -> list[str]:
    """
    Paths of removed-set keys and non-whitelisted media keys in ``node``.

    Empty for every output of ``sanitize``.
    """
    found: list[str] = []
    kind = classify(node)
    if kind is NodeKind.MEDIA:
        found.extend(f"{path}.{key}" if path else key for key in node if key not in MEDIA_WHITELIST)
    elif kind is NodeKind.ARRAY:
        for i, item in enumerate(node):
            found.extend(find_forbidden(item, f"{path}[{i}]"))
    elif kind in (NodeKind.COMPONENT, NodeKind.PLAIN_OBJECT):
        for key, value in node.items():
            child = f"{path}.{key}" if path else key
            if key in REMOVED_FIELDS:
                found.append(child)
            else:
                found.extend(find_forbidden(value, child))
    return found
