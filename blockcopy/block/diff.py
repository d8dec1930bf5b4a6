"""
Diff Analyzer - explain what a sanitized copy kept, shared and dropped.

Walks an (original, sanitized) component pair and sorts every reachable
field of the original into one of three buckets:

- fields: data that was copied as-is (scalars, objects, arrays)
- media_fields: media references, reported whole with item summaries
- removed_fields: fields missing from the copy, with a reason

Usage:
    from blockcopy.block import analyze, sanitize

    clean = sanitize(section)
    analysis = analyze(section, clean)

    for entry in analysis.removed_fields:
        print(f"{entry.path}: {entry.reason}")

This is a reporting tool, not a verifier: it never raises for JSON-like
input, and any shape mismatch between the pair is reported as removed.
"""

from __future__ import annotations
from typing import Any, Iterator, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import DEFAULT_MAX_DEPTH
from .classify import COMPONENT_TAG, NodeKind, classify, exceeds_depth, is_media, json_type
from .path import FieldPath
from .sanitize import REMOVED_FIELDS


SYSTEM_FIELD_REASON = "System field (automatically removed)"
REMOVED_FIELD_REASON = "Field removed during copy"
TOO_DEEP_REASON = "Nested too deeply to analyze"

MAX_VALUE_LENGTH = 50


# =============================================================================
# Report Models
# =============================================================================

class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MediaItem(ReportModel):
    """Summary of one referenced media asset."""
    id: Any = None
    name: Any = "Media"
    mime: Any = None
    url: Any = None


class FieldReport(ReportModel):
    """One reported field, addressed from the component root."""
    path: str
    kind: Literal["scalar", "object", "array", "media"]
    type: str | None = None
    value: Any = None
    count: int | None = None
    sample: Any = None
    items: list[MediaItem] | None = None
    reason: str | None = None

    def __repr__(self) -> str:
        if self.reason:
            return f"FieldReport({self.path!r}, removed: {self.reason})"
        return f"FieldReport({self.path!r}, {self.kind})"


class ComponentAnalysis(ReportModel):
    fields: list[FieldReport] = Field(default_factory=list)
    media_fields: list[FieldReport] = Field(default_factory=list)
    removed_fields: list[FieldReport] = Field(default_factory=list)

    @property
    def total_media(self) -> int:
        """Number of referenced media assets, not media fields."""
        return sum(entry.count or 0 for entry in self.media_fields)

    def iter_all(self) -> Iterator[FieldReport]:
        yield from self.fields
        yield from self.media_fields
        yield from self.removed_fields

    def paths(self) -> list[str]:
        return [entry.path for entry in self.iter_all()]


class CopyManifestEntry(ReportModel):
    """What happened to one copied component."""
    index: int
    component_type: str
    fields: list[FieldReport] = Field(default_factory=list)
    media_fields: list[FieldReport] = Field(default_factory=list)
    removed_fields: list[FieldReport] = Field(default_factory=list)
    total_fields: int = 0
    total_media: int = 0
    total_removed: int = 0


# =============================================================================
# Helpers
# =============================================================================

def _media_item(value: Any) -> MediaItem:
    if not isinstance(value, dict):
        return MediaItem()
    return MediaItem(
        id=value.get("id"),
        name=value.get("name") or value.get("alternativeText") or "Media",
        mime=value.get("mime"),
        url=value.get("url"),
    )


def _report_kind(value: Any) -> str:
    kind = classify(value)
    if kind is NodeKind.ARRAY:
        return "array"
    if kind is NodeKind.MEDIA:
        return "media"
    if kind in (NodeKind.COMPONENT, NodeKind.PLAIN_OBJECT):
        return "object"
    return "scalar"


def summarize_value(value: Any) -> Any:
    if isinstance(value, list):
        return f"Array({len(value)})"
    if isinstance(value, dict):
        return "Object"
    return value


def truncate_value(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
        return value[:MAX_VALUE_LENGTH] + "..."
    return value


def _removed(path: FieldPath, value: Any, reason: str) -> FieldReport:
    return FieldReport(
        path=str(path),
        kind=_report_kind(value),
        type=json_type(value),
        value=summarize_value(value),
        reason=reason,
    )


# =============================================================================
# Analysis
# =============================================================================

class _Analyzer:

    def __init__(self):
        self.result = ComponentAnalysis()

    def system_fields(self, original: dict[str, Any], sanitized: Any) -> set[str]:
        """
        Report removed-set keys dropped from the root. Returns the reported keys.

        Keys whose value is null are not reported, here or anywhere else in
        the analysis: a null carries no data that a copy could lose.
        """
        reported = set()
        cleaned = sanitized if isinstance(sanitized, dict) else {}
        for name in REMOVED_FIELDS:
            if original.get(name) is not None and name not in cleaned:
                self.result.removed_fields.append(_removed(FieldPath([name]), original[name], SYSTEM_FIELD_REASON))
                reported.add(name)
        return reported

    def reportable(self, original: dict[str, Any], skip: set[str] | None = None) -> Iterator[tuple[Any, Any]]:
        for key, value in original.items():
            if key == COMPONENT_TAG or str(key).startswith("_") or (skip and key in skip):
                continue
            if value is None:
                continue
            yield key, value

    def too_deep(self, original: dict[str, Any]):
        for key, value in self.reportable(original):
            self.result.removed_fields.append(_removed(FieldPath([str(key)]), value, TOO_DEEP_REASON))

    def traverse(self, original: dict[str, Any], sanitized: Any, path: FieldPath, skip: set[str] | None = None):
        cleaned = sanitized if isinstance(sanitized, dict) else None
        for key, value in self.reportable(original, skip):
            child = path.key(str(key))
            if cleaned is None or key not in cleaned:
                self.result.removed_fields.append(_removed(child, value, REMOVED_FIELD_REASON))
                continue
            if isinstance(value, list):
                self.array(value, cleaned[key], child)
            elif isinstance(value, dict):
                self.object(value, cleaned[key], child)
            else:
                self.result.fields.append(FieldReport(
                    path=str(child),
                    kind="scalar",
                    type=json_type(value),
                    value=truncate_value(value),
                ))

    def media(self, value: Any, path: FieldPath):
        items = value if isinstance(value, list) else [value]
        self.result.media_fields.append(FieldReport(
            path=str(path),
            kind="media",
            type=json_type(value),
            count=len(items),
            items=[_media_item(item) for item in items],
        ))

    def array(self, value: list, cleaned: Any, path: FieldPath):
        if not value:
            self.result.fields.append(FieldReport(path=str(path), kind="array", type="array", count=0))
            return
        first = value[0]
        if is_media(first):
            self.media(value, path)
            return
        if isinstance(first, dict) and "id" in first:
            self.result.fields.append(FieldReport(path=str(path), kind="array", type="array", count=len(value)))
            cleaned_items = cleaned if isinstance(cleaned, list) else []
            for i, item in enumerate(value):
                if isinstance(item, dict):
                    counterpart = cleaned_items[i] if i < len(cleaned_items) else None
                    self.traverse(item, counterpart, path.index(i))
            return
        self.result.fields.append(FieldReport(
            path=str(path),
            kind="array",
            type="array",
            count=len(value),
            sample=first,
        ))

    def object(self, value: dict[str, Any], cleaned: Any, path: FieldPath):
        if is_media(value):
            self.media(value, path)
            return
        if "id" in value:
            self.result.fields.append(FieldReport(path=str(path), kind="object", type="object", value=value["id"]))
        else:
            self.result.fields.append(FieldReport(path=str(path), kind="object", type="object"))
        self.traverse(value, cleaned, path)


def analyze(original: Any, sanitized: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> ComponentAnalysis:
    """
    Categorize the fields of ``original`` against its sanitized copy.

    Args:
        original: Component as read from the store
        sanitized: Output of ``sanitize(original)``
        max_depth: Deepest tree walked. Deeper pairs are not walked; each
            root field is reported as removed instead.

    Returns:
        ComponentAnalysis with fields, media_fields and removed_fields
    """
    analyzer = _Analyzer()
    if not isinstance(original, dict):
        return analyzer.result
    if exceeds_depth(original, max_depth) or exceeds_depth(sanitized, max_depth):
        analyzer.too_deep(original)
        return analyzer.result
    reported = analyzer.system_fields(original, sanitized)
    analyzer.traverse(original, sanitized, FieldPath(), skip=reported)
    return analyzer.result


def build_manifest_entry(index: int, original: Any, sanitized: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> CopyManifestEntry:
    analysis = analyze(original, sanitized, max_depth=max_depth)
    component_type = sanitized.get(COMPONENT_TAG) if isinstance(sanitized, dict) else None
    return CopyManifestEntry(
        index=index,
        component_type=component_type or "unknown",
        fields=analysis.fields,
        media_fields=analysis.media_fields,
        removed_fields=analysis.removed_fields,
        total_fields=len(analysis.fields),
        total_media=analysis.total_media,
        total_removed=len(analysis.removed_fields),
    )


def format_analysis(analysis: ComponentAnalysis | CopyManifestEntry) -> str:
    """
    Format an analysis as an indented, human-readable listing.

    Kept fields are marked ``=``, media ``@`` and removed fields ``-``.
    """
    lines = []
    for entry in analysis.fields:
        detail = f" ({entry.count} items)" if entry.count is not None else ""
        lines.append(f"  = {entry.path} [{entry.type}]{detail}")
    for entry in analysis.media_fields:
        names = ", ".join(str(item.name) for item in entry.items or [])
        lines.append(f"  @ {entry.path} ({entry.count} media: {names})")
    for entry in analysis.removed_fields:
        lines.append(f"  - {entry.path}: {entry.reason}")
    return "\n".join(lines)
