"""Shared mutable state for one generation run.

Every phase receives the same ``GenerationContext``; nothing is module-global,
so several levels (or tests using tiny synthetic grids) can be built side by
side in one process.
"""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from .cells import Grid, make_grid
from .config import LevelConfig
from .connectivity import UnionFind
from .doors import DoorRegistry
from .geometry import Coord, FreeRect
from .metrics import init_metrics
from .rects import FreeRectPool
from .rooms import Room


class GenerationContext:
    def __init__(self, config: Optional[LevelConfig] = None, seed: Optional[int] = None, enable_metrics: bool = True):
        self.config = config or LevelConfig()
        if seed is None:
            seed = self.config.seed
        if seed is None:
            seed = random.randint(1, 1_000_000)
        self.seed = seed
        # One RNG per run; external use of the random module never perturbs a level.
        self.rng = random.Random(seed)
        self.grid: Grid = make_grid(self.config.width, self.config.height)
        self.pool = FreeRectPool(
            FreeRect(0, 0, self.config.width - 1, self.config.height - 1),
            self.config.max_rects,
        )
        self.rooms: List[Room] = []
        self.doors = DoorRegistry(self.config.max_doors)
        self.tags = UnionFind()
        self.vault: Optional[Room] = None
        self.stairs_down: Optional[Coord] = None
        self.stairs_up: Optional[Coord] = None
        self.enable_metrics = enable_metrics
        self.metrics: Dict[str, Any] = init_metrics() if enable_metrics else {}

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def bump(self, key: str, amount: int = 1) -> None:
        if self.enable_metrics:
            self.metrics[key] = self.metrics.get(key, 0) + amount

    def high_water(self, key: str, value: int) -> None:
        if self.enable_metrics and value > self.metrics.get(key, 0):
            self.metrics[key] = value
