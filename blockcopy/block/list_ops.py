"""
List Editor - pure edits over an ordered component list.

None of these functions mutates its input; each returns a new list. List
order is the render order of the record, so every function preserves the
relative order of the elements it does not explicitly move.
"""

from __future__ import annotations
from typing import Any, Sequence, TypeVar

from ..errors import ValidationError
from .classify import COMPONENT_TAG


T = TypeVar("T")


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_indices(items: Sequence[T], indices: Sequence[int]) -> list[tuple[int, T]]:
    """(index, item) pairs for the in-range ``indices``, in the order given."""
    size = len(items)
    return [(index, items[index]) for index in indices if _is_index(index) and 0 <= index < size]


def select_by_indices(items: Sequence[T], indices: Sequence[int]) -> list[T]:
    """
    Sub-sequence at ``indices``, ordered as ``indices`` is.

    Out-of-range indices are dropped silently:
        select_by_indices(["a", "b", "c"], [2, 0, 9])  ->  ["c", "a"]
    """
    return [item for _, item in resolve_indices(items, indices)]


def splice_insert(items: Sequence[T], new_items: Sequence[T], insert_index: int | None = None) -> list[T]:
    """
    Insert ``new_items`` at ``insert_index``, or append them.

    ``insert_index`` must be an int within ``[0, len(items)]`` to insert;
    anything else (None, out of range, non-int) appends at the end.
    """
    result = list(items)
    if _is_index(insert_index) and 0 <= insert_index <= len(result):
        result[insert_index:insert_index] = new_items
    else:
        result.extend(new_items)
    return result


def move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """
    Move one element.

    The element at ``from_index`` is taken out, then reinserted at
    ``to_index`` of the shortened list.
    """
    size = len(items)
    if not _is_index(from_index) or not 0 <= from_index < size:
        raise ValidationError(f"from_index out of range: {from_index!r} (list has {size} items)")
    if not _is_index(to_index) or not 0 <= to_index < size:
        raise ValidationError(f"to_index out of range: {to_index!r} (list has {size} items)")
    result = list(items)
    if from_index == to_index:
        return result
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def remove_at(items: Sequence[T], index: int) -> list[T]:
    size = len(items)
    if not _is_index(index) or not 0 <= index < size:
        raise ValidationError(f"index out of range: {index!r} (list has {size} items)")
    return [item for i, item in enumerate(items) if i != index]


def validate_indices(indices: Any) -> list[int] | None:
    """None stays None; otherwise a list of non-negative ints is required."""
    if indices is None:
        return None
    if not isinstance(indices, (list, tuple)):
        raise ValidationError(f"indices must be a list, got: {type(indices).__name__}")
    for index in indices:
        if not _is_index(index) or index < 0:
            raise ValidationError(f"indices contains invalid value: {index!r} (type: {type(index).__name__})")
    return list(indices)


def validate_component_list(items: Any) -> list[dict[str, Any]]:
    """Check that ``items`` is a list of tagged components."""
    if not isinstance(items, list):
        raise ValidationError("sections must be a list")
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Section at index {i} must be an object")
        if not item.get(COMPONENT_TAG):
            raise ValidationError(f"Section at index {i} must have a {COMPONENT_TAG} property")
    return items
