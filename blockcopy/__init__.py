"""
blockcopy - copy content blocks between records.

Sanitizes component trees, explains what was dropped, and splices the
copies into ordered component lists.
"""

from .config import CopyConfig
from .errors import (
    CopyError,
    EmptySourceError,
    RecordNotFoundError,
    SelectionNotFoundError,
    StaleRecordError,
    ValidationError,
)
from .block import (
    ComponentAnalysis,
    CopyManifestEntry,
    FieldPath,
    FieldReport,
    NodeKind,
    analyze,
    classify,
    move,
    sanitize,
    select_by_indices,
    splice_insert,
)
from .copy import ComponentCopyService, CopyOutcome, InMemoryRecordStore, Record, ServiceResult, copy_components

__all__ = [
    "CopyConfig",
    "CopyError",
    "EmptySourceError",
    "SelectionNotFoundError",
    "RecordNotFoundError",
    "ValidationError",
    "StaleRecordError",
    "NodeKind",
    "classify",
    "sanitize",
    "analyze",
    "FieldPath",
    "FieldReport",
    "ComponentAnalysis",
    "CopyManifestEntry",
    "select_by_indices",
    "splice_insert",
    "move",
    "copy_components",
    "CopyOutcome",
    "Record",
    "InMemoryRecordStore",
    "ComponentCopyService",
    "ServiceResult",
]
