"""
FieldPath - address of a field inside a component tree.

Paths are rendered dot/bracket style from the component root:

    FieldPath().key("image").key("items").index(2)   ->  "image.items[2]"
    FieldPath().key("cards").index(0).key("title")   ->  "cards[0].title"

Paths are immutable; every step returns a new path.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldPath:
    """
    Immutable sequence of object keys (str) and array positions (int).

    Attributes:
        segments: Tuple of keys and indices from root to field
    """

    segments: tuple[str | int, ...] = ()

    def __init__(self, segments: list[str | int] | tuple[str | int, ...] = ()):
        # frozen dataclass
        object.__setattr__(self, 'segments', tuple(segments))

    def key(self, name: str) -> FieldPath:
        return FieldPath(self.segments + (name,))

    def index(self, position: int) -> FieldPath:
        return FieldPath(self.segments + (position,))

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"
