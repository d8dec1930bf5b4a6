from .orchestrator import CopyOutcome, copy_components
from .store import InMemoryRecordStore, Record, RecordStore, get_display_title
from .service import (
    ComponentCopyService,
    CopyReport,
    PublishResult,
    RecordSections,
    RecordSummary,
    SectionsUpdate,
    ServiceResult,
)

__all__ = [
    "copy_components",
    "CopyOutcome",
    "Record",
    "RecordStore",
    "InMemoryRecordStore",
    "get_display_title",
    "ComponentCopyService",
    "ServiceResult",
    "RecordSections",
    "RecordSummary",
    "CopyReport",
    "SectionsUpdate",
    "PublishResult",
]
