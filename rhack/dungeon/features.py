"""Level features placed after the room graph is final (stairs)."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .geometry import Coord
from .tiles import CellKind

if TYPE_CHECKING:
    from .context import GenerationContext

logger = logging.getLogger(__name__)


def place_stairs(ctx: "GenerationContext") -> Optional[Coord]:
    """Put the down staircase (and optionally an up staircase) on room floor.

    The up staircase always lands in a different room than the down one, so
    it is only placed when at least two rooms exist. Returns the down stairs
    position, or None for a level without rooms.
    """
    rooms = ctx.rooms
    rooms.sort(key=lambda r: r.left)
    n = len(rooms)
    if n == 0:
        logger.debug("no rooms, level has no stairs")
        return None
    rng = ctx.rng
    down_index = rng.randrange(n)
    ctx.stairs_down = rooms[down_index].random_cell(rng)
    ctx.grid[ctx.stairs_down.x][ctx.stairs_down.y].kind = CellKind.STAIRS_DOWN

    if ctx.config.up_stairs and n > 1:
        up_index = rng.randrange(n - 1)
        if up_index >= down_index:
            up_index += 1
        ctx.stairs_up = rooms[up_index].random_cell(rng)
        ctx.grid[ctx.stairs_up.x][ctx.stairs_up.y].kind = CellKind.STAIRS_UP
    return ctx.stairs_down
