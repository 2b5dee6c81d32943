"""Axis-aligned rectangles and points with inclusive bounds."""
from __future__ import annotations

from typing import NamedTuple, Optional


class Coord(NamedTuple):
    x: int
    y: int


class FreeRect(NamedTuple):
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    def contains(self, other: "FreeRect") -> bool:
        return (
            other.left >= self.left
            and other.top >= self.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def contains_point(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def expanded(self, by: int = 1) -> "FreeRect":
        return FreeRect(self.left - by, self.top - by, self.right + by, self.bottom + by)


def intersect(r1: FreeRect, r2: FreeRect) -> Optional[FreeRect]:
    """Return the overlap of two rectangles, or None when they are disjoint."""
    if r2.left > r1.right or r2.top > r1.bottom or r2.right < r1.left or r2.bottom < r1.top:
        return None
    r3 = FreeRect(
        max(r1.left, r2.left),
        max(r1.top, r2.top),
        min(r1.right, r2.right),
        min(r1.bottom, r2.bottom),
    )
    if r3.left > r3.right or r3.top > r3.bottom:
        return None
    return r3


def overlaps(r1: FreeRect, r2: FreeRect) -> bool:
    return intersect(r1, r2) is not None
