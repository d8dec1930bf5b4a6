"""
Copy Orchestrator - copy selected components from one list into another.

    outcome = copy_components(source, target, indices=[2, 0], insert_index=1)
    outcome.copied_list    # new target list
    outcome.manifest       # one CopyManifestEntry per copied component

Pure: nothing is read from or written to a record store here.
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..config import DEFAULT_MAX_DEPTH
from ..errors import EmptySourceError, SelectionNotFoundError, ValidationError
from ..block.classify import node_depth
from ..block.diff import CopyManifestEntry, build_manifest_entry
from ..block.list_ops import resolve_indices, splice_insert, validate_indices
from ..block.sanitize import sanitize


logger = logging.getLogger(__name__)


@dataclass
class CopyOutcome:
    copied_list: list[dict[str, Any]]
    copied: list[dict[str, Any]] = field(default_factory=list)
    manifest: list[CopyManifestEntry] = field(default_factory=list)

    @property
    def copied_count(self) -> int:
        return len(self.copied)


def copy_components(
    source: Sequence[dict[str, Any]],
    target: Sequence[dict[str, Any]],
    indices: Sequence[int] | None = None,
    insert_index: int | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CopyOutcome:
    """
    Sanitize the selected source components and splice them into target.

    Args:
        source: Component list to copy from
        target: Component list to copy into (may be ``source`` itself)
        indices: Source positions to copy, in copy order. None or empty
            copies the whole source list.
        insert_index: Target position, see ``splice_insert``
        max_depth: Deepest component tree accepted

    Returns:
        CopyOutcome with the new target list and the manifest

    Raises:
        EmptySourceError: source is empty
        ValidationError: bad indices, or a component deeper than max_depth
        SelectionNotFoundError: indices matched no component
    """
    if not source:
        raise EmptySourceError("No sections found in source page")

    indices = validate_indices(indices)
    if indices:
        selection = resolve_indices(source, indices)
        if not selection:
            raise SelectionNotFoundError("Selected sections not found")
    else:
        selection = list(enumerate(source))

    for index, component in selection:
        depth = node_depth(component)
        if depth > max_depth:
            raise ValidationError(f"Section at index {index} is nested too deeply ({depth} > {max_depth})")

    cloned = copy.deepcopy([component for _, component in selection])
    sanitized = [sanitize(component) for component in cloned]
    manifest = [
        build_manifest_entry(index, original, clean, max_depth=max_depth)
        for (index, original), clean in zip(selection, sanitized)
    ]
    copied_list = splice_insert(target, sanitized, insert_index)

    logger.debug(
        f"Copied {len(sanitized)} component(s) into list of {len(target)} at {insert_index!r}; "
        f"removed {sum(entry.total_removed for entry in manifest)} field(s)"
    )
    return CopyOutcome(copied_list=copied_list, copied=sanitized, manifest=manifest)
