"""Free-space pool and rectangle splitting.

The pool holds the rectangles still available for room placement. When a room
is carved out of one of them, ``split_rects`` removes the room's margin
rectangle from every pool member it touches and re-adds the usable leftovers.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from .geometry import FreeRect, intersect

# Extra cells a remainder strip needs beyond its clearance before it is kept.
SPLIT_PAD = 4


class FreeRectPool:
    """Bounded, de-duplicated bag of free rectangles.

    Members are tracked by identity: ``remove`` drops the exact object handed
    out by ``sample``/indexing even when an equal rectangle is also present.
    """

    def __init__(self, bounds: FreeRect, capacity: int):
        self.bounds = bounds
        self.capacity = capacity
        self._rects: List[FreeRect] = [bounds]
        self.peak = 1
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._rects)

    def __bool__(self) -> bool:
        return bool(self._rects)

    def __iter__(self) -> Iterator[FreeRect]:
        return iter(list(self._rects))

    def __getitem__(self, index: int) -> FreeRect:
        return self._rects[index]

    def sample(self, rng) -> Optional[FreeRect]:
        if not self._rects:
            return None
        return self._rects[rng.randrange(len(self._rects))]

    def find_container(self, rect: FreeRect) -> Optional[FreeRect]:
        for member in self._rects:
            if member.contains(rect):
                return member
        return None

    def add(self, rect: FreeRect) -> bool:
        """Insert ``rect`` unless the pool is full or already covers it."""
        if len(self._rects) >= self.capacity:
            self.dropped += 1
            return False
        if self.find_container(rect) is not None:
            return False
        self._rects.append(rect)
        self.peak = max(self.peak, len(self._rects))
        return True

    def remove(self, rect: FreeRect) -> None:
        # swap-with-last keeps indices of the scan in split_rects meaningful
        for i, member in enumerate(self._rects):
            if member is rect:
                last = self._rects.pop()
                if i < len(self._rects):
                    self._rects[i] = last
                return

    def clear(self) -> None:
        self._rects.clear()


class _SplitFrame:
    __slots__ = ("old", "cut", "index")

    def __init__(self, old: FreeRect, cut: FreeRect, index: int):
        self.old = old
        self.cut = cut
        self.index = index


def split_rects(pool: FreeRectPool, r1: FreeRect, r2: FreeRect, xlim: int, ylim: int) -> int:
    """Carve ``r2`` (a room plus its walls) out of ``r1`` and every pool member it touches.

    Works on an explicit stack instead of recursing; each frame scans the pool
    from the last index down, descending into the first member that still
    overlaps its cut, exactly like the recursive formulation would. When a
    frame's scan is done its own remainders are emitted. Returns the number of
    remainder rectangles that made it back into the pool.
    """
    added = 0
    pool.remove(r1)
    stack = [_SplitFrame(r1, r2, len(pool) - 1)]
    while stack:
        frame = stack[-1]
        while frame.index >= 0:
            i = frame.index
            frame.index -= 1
            if i >= len(pool):
                continue
            member = pool[i]
            hit = intersect(member, frame.cut)
            if hit is not None:
                pool.remove(member)
                stack.append(_SplitFrame(member, hit, len(pool) - 1))
                break
        else:
            stack.pop()
            added += _emit_remainders(pool, frame.old, frame.cut, xlim, ylim)
    return added


def _emit_remainders(pool: FreeRectPool, old: FreeRect, cut: FreeRect, xlim: int, ylim: int) -> int:
    max_x = pool.bounds.right
    max_y = pool.bounds.bottom
    added = 0
    # top strip
    if cut.top - old.top - 1 > (2 * ylim if old.bottom < max_y else ylim + 1) + SPLIT_PAD:
        added += pool.add(old._replace(bottom=cut.top - 2))
    # left strip
    if cut.left - old.left - 1 > (2 * xlim if old.right < max_x else xlim + 1) + SPLIT_PAD:
        added += pool.add(old._replace(right=cut.left - 2))
    # bottom strip
    if old.bottom - cut.bottom - 1 > (2 * ylim if old.top > 0 else ylim + 1) + SPLIT_PAD:
        added += pool.add(old._replace(top=cut.bottom + 2))
    # right strip
    if old.right - cut.right - 1 > (2 * xlim if old.left > 0 else xlim + 1) + SPLIT_PAD:
        added += pool.add(old._replace(left=cut.right + 2))
    return added
