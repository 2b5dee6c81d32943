"""Pipeline orchestration for level generation.

``Level`` is the public entry point: constructing one runs the whole
Placing -> Connecting -> ExtraLinking -> Stairs sequence against a fresh
``GenerationContext`` and publishes the finished grid plus the room and door
registries. Generation never raises; a hard level simply comes out smaller.
"""
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .cells import Cell
from .config import LevelConfig
from .connectivity import connect_rooms, link_extra
from .context import GenerationContext
from .features import place_stairs
from .render import render_rows
from .rooms import finish_vault, place_rooms, sort_rooms

logger = logging.getLogger(__name__)

_FALSE_STRINGS = {'0', 'false', 'no', 'off', ''}


class GenerationPhase(Enum):
    PLACING = "placing"
    CONNECTING = "connecting"
    EXTRA_LINKING = "extra_linking"
    STAIRS = "stairs"
    DONE = "done"


def _env_flag(key: str) -> Optional[bool]:
    if key not in os.environ:
        return None
    return os.environ.get(key, '').strip().lower() not in _FALSE_STRINGS


def _env_seed() -> Optional[int]:
    raw = os.environ.get('DUNGEON_SEED', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer DUNGEON_SEED=%r", raw)
        return None


def resolve_options(config: Optional[LevelConfig] = None, enable_metrics: bool = True) -> Tuple[LevelConfig, bool]:
    """Apply environment overrides to a config and metrics flag.

    Tests and the CLI set env vars rather than pass params. The result is what
    a ``Level`` built from the same arguments would actually generate with.
    """
    if config is None:
        config = LevelConfig()
    metrics_flag = _env_flag('DUNGEON_ENABLE_GENERATION_METRICS')
    if metrics_flag is not None:
        enable_metrics = metrics_flag
    vault_flag = _env_flag('DUNGEON_MAKE_VAULT')
    if vault_flag is not None and vault_flag != config.make_vault:
        config = replace(config, make_vault=vault_flag)
    return config, enable_metrics


@dataclass
class Level:
    seed: Optional[int] = None
    config: Optional[LevelConfig] = None
    enable_metrics: bool = True
    # A prepared context (tests shrink grids / pools before generation)
    context: Optional[GenerationContext] = None

    def __post_init__(self):
        if self.context is not None:
            self.config = self.context.config
            self.seed = self.context.seed
            self.enable_metrics = self.context.enable_metrics
        else:
            self.config, self.enable_metrics = resolve_options(self.config, self.enable_metrics)
            # 0 is a valid deterministic seed; only None falls through
            if self.seed is None:
                self.seed = self.config.seed
            if self.seed is None:
                self.seed = _env_seed()
            self.context = GenerationContext(self.config, self.seed, self.enable_metrics)
            self.seed = self.context.seed
        self.phase = GenerationPhase.PLACING
        self._run_pipeline()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _run_pipeline(self):
        """Run the generation phases in order, timing each one when metrics are on."""
        ctx = self.context
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times: Dict[str, float] = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        _phase('place_rooms', place_rooms, ctx)
        # x-sorted order drives neighbour pairing; tags are rebuilt to match
        sort_rooms(ctx)

        self.phase = GenerationPhase.CONNECTING
        _phase('connect_rooms', connect_rooms, ctx)

        self.phase = GenerationPhase.EXTRA_LINKING
        _phase('link_extra', link_extra, ctx)
        _phase('finish_vault', finish_vault, ctx)

        self.phase = GenerationPhase.STAIRS
        _phase('place_stairs', place_stairs, ctx)

        self.grid = ctx.grid
        self.rooms = tuple(ctx.rooms)
        self.doors = tuple(ctx.doors)
        self.vault = ctx.vault
        self.stairs_down = ctx.stairs_down
        self.stairs_up = ctx.stairs_up
        self.metrics: Dict[str, Any] = ctx.metrics
        self.phase = GenerationPhase.DONE

        if self.enable_metrics:
            self.metrics['rooms'] = len(self.rooms)
            self.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
            self.metrics['phase_ms'] = phase_times
        logger.debug(
            "level seed=%s rooms=%d doors=%d vault=%s stairs=%s",
            self.seed, len(self.rooms), len(self.doors), self.vault is not None, self.stairs_down,
        )

    def cell(self, x: int, y: int) -> Cell:
        return self.grid[x][y]

    def render(self) -> List[str]:
        """Rows of display glyphs, top row first."""
        return render_rows(self.grid)

    def to_dict(self) -> Dict[str, Any]:
        stairs = {}
        if self.stairs_down is not None:
            stairs['down'] = list(self.stairs_down)
        if self.stairs_up is not None:
            stairs['up'] = list(self.stairs_up)
        return {
            'seed': self.seed,
            'width': self.width,
            'height': self.height,
            'rows': self.render(),
            'rooms': [r.to_dict() for r in self.rooms],
            'doors': [d.to_dict() for d in self.doors],
            'stairs': stairs,
            'vault': self.vault.to_dict() if self.vault is not None else None,
        }


def generate_level(seed: Optional[int] = None, config: Optional[LevelConfig] = None, enable_metrics: bool = True) -> Level:
    return Level(seed=seed, config=config, enable_metrics=enable_metrics)
