"""
Component tree engine.

This module provides:
- classify: structural role of a JSON-like node (component, media, ...)
- sanitize: portable copy of a component without store-owned fields
- analyze: per-field report of what a sanitized copy kept and dropped
- FieldPath: dot/bracket field addresses used in reports
- List editing: select_by_indices, splice_insert, move, remove_at
"""

from .classify import COMPONENT_TAG, NodeKind, classify, exceeds_depth, is_component, is_media, json_type, node_depth
from .path import FieldPath
from .sanitize import MEDIA_WHITELIST, REMOVED_FIELDS, find_forbidden, narrow_media, sanitize, sanitize_node
from .diff import (
    ComponentAnalysis,
    CopyManifestEntry,
    FieldReport,
    MediaItem,
    analyze,
    build_manifest_entry,
    format_analysis,
)
from .list_ops import (
    move,
    remove_at,
    resolve_indices,
    select_by_indices,
    splice_insert,
    validate_component_list,
    validate_indices,
)

__all__ = [
    # Classification
    "COMPONENT_TAG",
    "NodeKind",
    "classify",
    "is_component",
    "is_media",
    "json_type",
    "node_depth",
    "exceeds_depth",
    "FieldPath",

    # Sanitizing
    "REMOVED_FIELDS",
    "MEDIA_WHITELIST",
    "sanitize",
    "sanitize_node",
    "narrow_media",
    "find_forbidden",

    # Analysis
    "analyze",
    "build_manifest_entry",
    "format_analysis",
    "ComponentAnalysis",
    "CopyManifestEntry",
    "FieldReport",
    "MediaItem",

    # List editing
    "select_by_indices",
    "resolve_indices",
    "splice_insert",
    "move",
    "remove_at",
    "validate_indices",
    "validate_component_list",
]
