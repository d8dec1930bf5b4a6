"""
ComponentCopyService - copy, reorder, save and publish component lists.

Every operation reads through a ``RecordStore``, runs the pure core and
writes the result back. Recoverable failures (``CopyError`` subclasses)
come back as ``ServiceResult(error=..., kind=...)``; anything else raised
by the store is logged and propagates unchanged.

Read-modify-write operations on one record are serialized with a
per-record ``asyncio.Lock``, dropped once no operation holds it. Every
write carries the version that was read, so a store shared between
processes can reject stale writes.

Usage:
    service = ComponentCopyService(store, CopyConfig.resolve())

    result = await service.copy_sections(source_id, target_id, indices=[0], insert_index=0)
    if result.error:
        print(result.kind, result.error)
    else:
        for detail in result.data.copied_details:
            print(detail.component_type, detail.total_removed)
"""

from __future__ import annotations
import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Awaitable, Generic, TypeVar

from pydantic import BaseModel, Field

from ..config import CopyConfig
from ..errors import CopyError
from ..block.diff import CopyManifestEntry, ReportModel
from ..block.list_ops import move, validate_component_list, validate_indices
from .orchestrator import copy_components
from .store import Record, RecordStore


logger = logging.getLogger(__name__)


DataT = TypeVar("DataT")


class ServiceResult(BaseModel, Generic[DataT]):
    error: str | None = None
    kind: str | None = None
    data: DataT | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: CopyError) -> "ServiceResult":
        return cls(error=str(exc), kind=exc.kind)


class RecordSections(ReportModel):
    record_id: int
    document_id: str
    title: str
    sections: list[dict[str, Any]] = Field(default_factory=list)


class CopyReport(ReportModel):
    target_id: int
    target_title: str
    copied_count: int
    total_sections: int
    copied_details: list[CopyManifestEntry] = Field(default_factory=list)


class SectionsUpdate(ReportModel):
    record_id: int
    title: str
    sections_count: int


class PublishResult(ReportModel):
    record_id: int
    document_id: str
    title: str
    published_at: datetime | None = None


class RecordSummary(ReportModel):
    record_id: int
    document_id: str
    title: str
    sections_count: int


class ComponentCopyService:

    def __init__(self, store: RecordStore, config: CopyConfig | None = None):
        self.store = store
        self.config = config or CopyConfig.resolve()
        # entries drop once no operation holds the lock
        self._locks: weakref.WeakValueDictionary[tuple[str, int], asyncio.Lock] = weakref.WeakValueDictionary()

    @property
    def content_type(self) -> str:
        return self.config.content_type

    @property
    def list_field(self) -> str:
        return self.config.list_field

    async def _run(self, operation: str, action: Awaitable[DataT]) -> ServiceResult[DataT]:
        try:
            data = await action
        except CopyError as exc:
            logger.error(f"{operation} failed ({exc.kind}): {exc}")
            return ServiceResult.failure(exc)
        except Exception as exc:
            logger.error(f"{operation} failed unexpectedly: {exc!r}")
            raise
        return ServiceResult(data=data)

    @asynccontextmanager
    async def _locked(self, content_type: str, record_id: int | str) -> AsyncIterator[Record]:
        """Hold the record's lock and yield a fresh read taken under it."""
        record = await self.store.read_record(content_type, record_id)
        key = (content_type, record.id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        async with lock:
            yield await self.store.read_record(content_type, record.id)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def list_records(self) -> ServiceResult[list[RecordSummary]]:
        return await self._run("list_records", self._list_records())

    async def _list_records(self) -> list[RecordSummary]:
        records = await self.store.list_records(self.content_type)
        return [
            RecordSummary(
                record_id=record.id,
                document_id=record.document_id,
                title=record.display_title,
                sections_count=len(record.components(self.list_field)),
            )
            for record in records
        ]

    async def get_sections(self, record_id: int | str) -> ServiceResult[RecordSections]:
        return await self._run("get_sections", self._get_sections(record_id))

    async def _get_sections(self, record_id: int | str) -> RecordSections:
        record = await self.store.read_record(self.content_type, record_id)
        return RecordSections(
            record_id=record.id,
            document_id=record.document_id,
            title=record.display_title,
            sections=record.components(self.list_field),
        )

    async def copy_sections(
        self,
        source_id: int | str,
        target_id: int | str,
        indices: list[int] | None = None,
        insert_index: int | None = None,
    ) -> ServiceResult[CopyReport]:
        logger.info(
            f"Copy request: source={source_id}, target={target_id}, "
            f"indices={indices}, insert_index={insert_index}"
        )
        return await self._run("copy_sections", self._copy_sections(source_id, target_id, indices, insert_index))

    async def _copy_sections(self, source_id, target_id, indices, insert_index) -> CopyReport:
        content_type, list_field = self.content_type, self.list_field
        indices = validate_indices(indices)
        source = await self.store.read_record(content_type, source_id)
        async with self._locked(content_type, target_id) as target:
            # self-copy reads the source list from the locked read
            source_list = (target if target.id == source.id else source).components(list_field)
            outcome = copy_components(
                source_list,
                target.components(list_field),
                indices,
                insert_index,
                max_depth=self.config.max_depth,
            )
            updated = await self.store.write_list(
                content_type,
                target.id,
                list_field,
                outcome.copied_list,
                expected_version=target.version,
            )
        logger.info(f"Copied {outcome.copied_count} section(s) from {source.id} to {updated.id}")
        return CopyReport(
            target_id=updated.id,
            target_title=updated.display_title,
            copied_count=outcome.copied_count,
            total_sections=len(outcome.copied_list),
            copied_details=outcome.manifest,
        )

    async def update_sections(self, record_id: int | str, sections: Any) -> ServiceResult[SectionsUpdate]:
        return await self._run("update_sections", self._update_sections(record_id, sections))

    async def _update_sections(self, record_id, sections) -> SectionsUpdate:
        content_type, list_field = self.content_type, self.list_field
        sections = validate_component_list(sections)
        async with self._locked(content_type, record_id) as record:
            updated = await self.store.write_list(
                content_type,
                record.id,
                list_field,
                sections,
                expected_version=record.version,
            )
        return SectionsUpdate(record_id=updated.id, title=updated.display_title, sections_count=len(sections))

    async def move_section(self, record_id: int | str, from_index: int, to_index: int) -> ServiceResult[SectionsUpdate]:
        return await self._run("move_section", self._move_section(record_id, from_index, to_index))

    async def _move_section(self, record_id, from_index, to_index) -> SectionsUpdate:
        content_type, list_field = self.content_type, self.list_field
        async with self._locked(content_type, record_id) as record:
            sections = move(record.components(list_field), from_index, to_index)
            updated = await self.store.write_list(
                content_type,
                record.id,
                list_field,
                sections,
                expected_version=record.version,
            )
        return SectionsUpdate(record_id=updated.id, title=updated.display_title, sections_count=len(sections))

    async def publish(self, record_id: int | str) -> ServiceResult[PublishResult]:
        return await self._run("publish", self._publish(record_id))

    async def _publish(self, record_id) -> PublishResult:
        record = await self.store.publish(self.content_type, record_id)
        return PublishResult(
            record_id=record.id,
            document_id=record.document_id,
            title=record.display_title,
            published_at=record.published_at,
        )

    async def save_and_publish(self, record_id: int | str, sections: Any) -> ServiceResult:
        """Store ``sections`` then publish; stops at the first failure."""
        saved = await self.update_sections(record_id, sections)
        if not saved.ok:
            return saved
        return await self.publish(record_id)

    def configure(self, content_type: str | None, list_field: str | None) -> ServiceResult[CopyConfig]:
        try:
            self.config = self.config.update(content_type, list_field)
        except CopyError as exc:
            return ServiceResult.failure(exc)
        logger.info(f"Config saved: {self.config.content_type} / {self.config.list_field}")
        return ServiceResult(data=self.config)
