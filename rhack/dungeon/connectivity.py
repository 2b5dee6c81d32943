"""Room connectivity: union-find tags and the corridor passes that merge them."""
from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, List, Set, Tuple

from .cells import Grid
from .tiles import PASSABLE_KINDS
from .tunnels import join

if TYPE_CHECKING:
    from .context import GenerationContext

logger = logging.getLogger(__name__)


class UnionFind:
    """Connectivity tag per room; the lowest index in a group is its label."""

    def __init__(self, size: int = 0):
        self.parent: List[int] = list(range(size))

    def __len__(self) -> int:
        return len(self.parent)

    def add(self) -> int:
        label = len(self.parent)
        self.parent.append(label)
        return label

    def reset(self, size: int) -> None:
        self.parent = list(range(size))

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(self, a: int, b: int) -> int:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra
        if rb < ra:
            ra, rb = rb, ra
        self.parent[rb] = ra
        return ra

    def same(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def components(self) -> int:
        return len({self.find(i) for i in range(len(self.parent))})


def connect_rooms(ctx: "GenerationContext") -> int:
    """Join rooms until they form one group; returns the number of groups left.

    Rooms must already be sorted by ``left``. Pass 1 walks neighbours in
    order (with a small chance to stop early after a success), pass 2 links
    every room to the one two places ahead when they are still apart, then
    full scans repeat until nothing is left apart or a scan joins nothing.
    """
    cfg = ctx.config
    tags = ctx.tags
    n = len(ctx.rooms)

    for a in range(n - 1):
        if join(ctx, a, a + 1, False) and ctx.rng.randrange(cfg.early_stop_odds) == 0:
            break

    for a in range(n - 2):
        if not tags.same(a, a + 2):
            join(ctx, a, a + 2, False)

    scans = 0
    while tags.components() > 1:
        scans += 1
        progressed = False
        for a in range(n):
            for b in range(n):
                if not tags.same(a, b) and join(ctx, a, b, False):
                    progressed = True
        if not progressed:
            break

    groups = tags.components() if n else 0
    if ctx.enable_metrics:
        ctx.metrics["convergence_scans"] = scans
        ctx.metrics["components"] = groups
    if groups > 1:
        logger.warning("level seed=%s left %d disconnected room groups", ctx.seed, groups)
    return groups


def link_extra(ctx: "GenerationContext") -> int:
    """Dig a few optional corridors between random room pairs; returns how many succeeded."""
    n = len(ctx.rooms)
    if n <= 2:
        return 0
    rng = ctx.rng
    dug = 0
    for _ in range(rng.randrange(n) + 4):
        a = rng.randrange(n)
        b = rng.randrange(n - 2)
        if b >= a:
            b += 2
        dug += join(ctx, a, b, True)
    return dug


def reachable_cells(grid: Grid, start: Tuple[int, int]) -> Set[Tuple[int, int]]:
    """Flood fill over passable cells (4-neighbourhood) from ``start``."""
    width, height = len(grid), len(grid[0])
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in seen:
                if grid[nx][ny].kind in PASSABLE_KINDS:
                    seen.add((nx, ny))
                    queue.append((nx, ny))
    return seen
