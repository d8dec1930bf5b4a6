"""
Record access.

``RecordStore`` is the boundary to the host CMS: read a record, write its
component list, publish it. ``InMemoryRecordStore`` implements it over a
dict and is what the tests (and hosts without a store) use.

Writes take an optional ``expected_version``; a store must reject the
write with ``StaleRecordError`` when the record moved on since it was read.
"""

from __future__ import annotations
import copy
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Protocol
from uuid import uuid4

from pydantic import BaseModel, Field

from ..config import DEFAULT_CONTENT_TYPE
from ..errors import RecordNotFoundError, StaleRecordError


logger = logging.getLogger(__name__)


DISPLAY_FIELDS = ("title", "name", "heading", "label", "displayName", "slug")


def get_display_title(record_id: Any, fields: dict[str, Any]) -> str:
    """First non-empty display field, else ``ID: <id>``."""
    for name in DISPLAY_FIELDS:
        if fields.get(name):
            return str(fields[name])
    return f"ID: {record_id}"


class Record(BaseModel):
    id: int
    content_type: str = DEFAULT_CONTENT_TYPE
    document_id: str = Field(default_factory=lambda: uuid4().hex)
    fields: dict[str, Any] = Field(default_factory=dict)
    version: int = 0
    published_at: datetime | None = None

    def components(self, list_field: str) -> list[dict[str, Any]]:
        return list(self.fields.get(list_field) or [])

    @property
    def display_title(self) -> str:
        return get_display_title(self.id, self.fields)


class RecordStore(Protocol):

    async def list_records(self, content_type: str) -> list[Record]:
        ...

    async def read_record(self, content_type: str, record_id: int | str) -> Record:
        ...

    async def write_list(
        self,
        content_type: str,
        record_id: int | str,
        list_field: str,
        components: list[dict[str, Any]],
        expected_version: int | None = None,
    ) -> Record:
        ...

    async def publish(self, content_type: str, record_id: int | str) -> Record:
        ...


class InMemoryRecordStore:
    """
    Dict-backed record store.

    Records live per content type. Within a type they are resolved by
    numeric ``id`` (ints or digit strings) first, then by ``document_id``.
    Every read returns a deep copy, so callers never hold references into
    the store.
    """

    def __init__(self, records: Iterable[Record] = ()):
        self._records: dict[str, dict[int, Record]] = {}
        for record in records:
            self.add(record)

    def add(self, record: Record) -> Record:
        self._records.setdefault(record.content_type, {})[record.id] = record.model_copy(deep=True)
        return record

    def create(
        self,
        fields: dict[str, Any] | None = None,
        document_id: str | None = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Record:
        records = self._records.setdefault(content_type, {})
        record_id = max(records, default=0) + 1
        record = Record(id=record_id, content_type=content_type, fields=copy.deepcopy(fields or {}))
        if document_id is not None:
            record.document_id = document_id
        records[record_id] = record
        return record.model_copy(deep=True)

    def _resolve(self, content_type: str, record_id: int | str) -> Record:
        records = self._records.get(content_type, {})
        numeric = None
        if isinstance(record_id, int) and not isinstance(record_id, bool):
            numeric = record_id
        elif isinstance(record_id, str) and record_id.isdigit():
            numeric = int(record_id)
        if numeric is not None and numeric in records:
            return records[numeric]
        for record in records.values():
            if record.document_id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    async def list_records(self, content_type: str) -> list[Record]:
        records = self._records.get(content_type, {})
        return [records[record_id].model_copy(deep=True) for record_id in sorted(records)]

    async def read_record(self, content_type: str, record_id: int | str) -> Record:
        return self._resolve(content_type, record_id).model_copy(deep=True)

    async def write_list(
        self,
        content_type: str,
        record_id: int | str,
        list_field: str,
        components: list[dict[str, Any]],
        expected_version: int | None = None,
    ) -> Record:
        record = self._resolve(content_type, record_id)
        if expected_version is not None and expected_version != record.version:
            raise StaleRecordError(record.id, expected_version, record.version)
        record.fields[list_field] = copy.deepcopy(components)
        record.version += 1
        logger.info(f"Record {content_type}:{record.id} {list_field} updated: {len(components)} item(s), version {record.version}")
        return record.model_copy(deep=True)

    async def publish(self, content_type: str, record_id: int | str) -> Record:
        record = self._resolve(content_type, record_id)
        record.published_at = datetime.now(timezone.utc)
        logger.info(f"Record {content_type}:{record.id} published")
        return record.model_copy(deep=True)
