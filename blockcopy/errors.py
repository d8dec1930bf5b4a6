"""
Error kinds raised by the copy core.

Every error carries a ``kind`` string so that callers which prefer result
values over exceptions (see ``blockcopy.copy.service``) can report the
failure without inspecting the class.
"""


class CopyError(Exception):
    kind: str = "copy_error"


class EmptySourceError(CopyError):
    """The source list has no components to copy."""
    kind = "empty_source"


class SelectionNotFoundError(CopyError):
    """An explicit index selection resolved to no components."""
    kind = "selection_not_found"


class RecordNotFoundError(CopyError):
    """The record store could not resolve a record id."""
    kind = "record_not_found"

    def __init__(self, record_id, message: str | None = None):
        self.record_id = record_id
        super().__init__(message or f"Record not found: {record_id}")


class ValidationError(CopyError):
    """Malformed input to a public operation."""
    kind = "validation_error"


class StaleRecordError(CopyError):
    """The record changed between read and write."""
    kind = "stale_record"

    def __init__(self, record_id, expected_version: int, actual_version: int):
        self.record_id = record_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Record {record_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
