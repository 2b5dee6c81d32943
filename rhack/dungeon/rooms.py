"""Room model and room placement.

Placement draws a free rectangle from the pool, rolls a room size, offsets it
inside the rectangle with the required clearance, validates the result against
the grid and finally splits the room's footprint out of the pool before
painting it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .errors import RetryBudgetExhausted
from .geometry import Coord, FreeRect
from .painter import carve
from .rects import split_rects
from .tiles import CellKind

if TYPE_CHECKING:
    from .context import GenerationContext

logger = logging.getLogger(__name__)

# Largest floor area (in dx*dy units) a random room may roll.
MAX_FLOOR_AREA = 50
# Nearest a room's floor may come to the left / top grid edge.
MIN_X = 3
MIN_Y = 2


class RoomKind(Enum):
    ORDINARY = "ordinary"
    VAULT = "vault"


@dataclass
class Room:
    left: int
    top: int
    right: int
    bottom: int
    lit: bool = False
    door_count: int = 0
    first_door: int = 0
    kind: RoomKind = RoomKind.ORDINARY

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def is_valid(self) -> bool:
        return self.kind is RoomKind.ORDINARY and self.right >= self.left and self.bottom >= self.top

    @property
    def floor(self) -> FreeRect:
        return FreeRect(self.left, self.top, self.right, self.bottom)

    @property
    def footprint(self) -> FreeRect:
        """Floor plus the surrounding wall ring."""
        return self.floor.expanded(1)

    def cells(self):
        for ix in range(self.left, self.right + 1):
            for iy in range(self.top, self.bottom + 1):
                yield ix, iy

    def random_cell(self, rng) -> Coord:
        x = self.left + rng.randrange(self.right - self.left + 1)
        y = self.top + rng.randrange(self.bottom - self.top + 1)
        return Coord(x, y)

    def to_dict(self):
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "lit": self.lit,
            "door_count": self.door_count,
            "first_door": self.first_door,
            "kind": self.kind.value,
        }


def roll_lit(rng, depth: int) -> bool:
    # Shallow levels are nearly always lit; the rn(77) roll leaves a few dark rooms.
    return rng.randint(1, 1 + abs(depth)) < 11 and rng.randrange(77) != 0


def _first_obstacle(ctx: "GenerationContext", x_lo: int, x_hi: int, y_lo: int, y_hi: int) -> Optional[Coord]:
    grid = ctx.grid
    for x in range(x_lo, x_hi + 1):
        if x <= 0 or x >= ctx.width:
            continue
        for y in range(max(y_lo, 0), min(y_hi, ctx.height - 1) + 1):
            if grid[x][y].kind is not CellKind.STONE:
                return Coord(x, y)
    return None


def check_room(ctx: "GenerationContext", lowx: int, ddx: int, lowy: int, ddy: int, vault: bool = False):
    """Clamp a candidate floor rectangle to the grid and verify its clearance.

    Returns ``(lowx, ddx, lowy, ddy)`` for the accepted (possibly shrunk)
    rectangle, or None when it collapses or is rejected.
    """
    hix = lowx + ddx
    hiy = lowy + ddy
    xlim = ctx.config.xlim + (1 if vault else 0)
    ylim = ctx.config.ylim + (1 if vault else 0)
    while True:
        lowx = max(lowx, MIN_X)
        lowy = max(lowy, MIN_Y)
        hix = min(hix, ctx.width - 3)
        hiy = min(hiy, ctx.height - 3)
        if hix <= lowx or hiy <= lowy:
            return None
        hit = _first_obstacle(ctx, lowx - xlim, hix + xlim, lowy - ylim, hiy + ylim)
        if hit is None:
            break
        if ctx.rng.randrange(3) == 0:
            return None
        # shrink away from the obstacle and re-check
        if hit.x < lowx:
            lowx = hit.x + xlim + 1
        else:
            hix = hit.x - xlim - 1
        if hit.y < lowy:
            lowy = hit.y + ylim + 1
        else:
            hiy = hit.y - ylim - 1
    return lowx, hix - lowx, lowy, hiy - lowy


def add_room(ctx: "GenerationContext", lowx: int, lowy: int, hix: int, hiy: int, lit: bool) -> Room:
    """Paint an ordinary room and append it to the registry with a fresh tag."""
    room = Room(lowx, lowy, hix, hiy, lit=lit, first_door=len(ctx.doors))
    carve(ctx.grid, room)
    ctx.rooms.append(room)
    ctx.tags.add()
    ctx.bump("rooms")
    return room


def create_room(ctx: "GenerationContext", vault: bool = False) -> Optional[Room]:
    """Place one random room (or reserve a vault footprint).

    Returns None when the pool is empty. Raises RetryBudgetExhausted when no
    candidate survived ``room_attempts`` tries.
    """
    cfg = ctx.config
    rng = ctx.rng
    xlim = cfg.xlim + (1 if vault else 0)
    ylim = cfg.ylim + (1 if vault else 0)
    max_x = cfg.width - 1
    max_y = cfg.height - 1
    lit = True if vault else roll_lit(rng, cfg.depth)

    for _attempt in range(cfg.room_attempts):
        ctx.bump("room_attempts")
        r1 = ctx.pool.sample(rng)
        if r1 is None:
            return None
        lx, ly, hx, hy = r1

        if vault:
            dx = dy = 1
        else:
            dx = 2 + rng.randrange(12 if hx - lx > 28 else 8)
            dy = 2 + rng.randrange(4)
            if dx * dy > MAX_FLOOR_AREA:
                dy = MAX_FLOOR_AREA // dx

        xborder = 2 * xlim if (lx > 0 and hx < max_x) else xlim + 1
        yborder = 2 * ylim if (ly > 0 and hy < max_y) else ylim + 1
        if hx - lx < dx + 3 + xborder or hy - ly < dy + 3 + yborder:
            continue

        xabs = lx + (xlim if lx > 0 else MIN_X) + rng.randrange(hx - (lx if lx > 0 else MIN_X) - dx - xborder + 1)
        yabs = ly + (ylim if ly > 0 else MIN_Y) + rng.randrange(hy - (ly if ly > 0 else MIN_Y) - dy - yborder + 1)

        # Full-height rectangles: pull some early rooms up into the top band.
        nrooms = len(ctx.rooms)
        if (
            ly == 0
            and hy >= max_y
            and (nrooms == 0 or rng.randrange(nrooms) == 0)
            and yabs + dy > cfg.height // 2
        ):
            yabs = rng.randrange(3) + 2
            if nrooms < 4 and dy > 1:
                dy -= 1

        checked = check_room(ctx, xabs, dx, yabs, dy, vault)
        if checked is None:
            continue
        xabs, dx, yabs, dy = checked

        r2 = FreeRect(xabs - 1, yabs - 1, xabs + dx + 1, yabs + dy + 1)
        split_rects(ctx.pool, r1, r2, cfg.xlim, cfg.ylim)
        ctx.high_water("rects_peak", ctx.pool.peak)

        if vault:
            return Room(xabs, yabs, xabs + dx, yabs + dy, lit=True, kind=RoomKind.VAULT)
        return add_room(ctx, xabs, yabs, xabs + dx, yabs + dy, lit)

    raise RetryBudgetExhausted("vault placement" if vault else "room placement", cfg.room_attempts)


def place_rooms(ctx: "GenerationContext") -> int:
    """Fill the level with rooms until the cap is hit or space runs out.

    Once a handful of rooms exist a single vault footprint may be reserved
    (never more than one try per level). Returns the number of rooms placed.
    """
    cfg = ctx.config
    tried_vault = False
    while len(ctx.rooms) < cfg.max_rooms and ctx.pool:
        if (
            cfg.make_vault
            and not tried_vault
            and len(ctx.rooms) >= cfg.max_rooms // 6
            and ctx.rng.randrange(2)
        ):
            tried_vault = True
            try:
                ctx.vault = create_room(ctx, vault=True)
            except RetryBudgetExhausted as exc:
                logger.debug("vault reservation skipped: %s", exc)
            continue
        try:
            room = create_room(ctx)
        except RetryBudgetExhausted as exc:
            ctx.bump("room_failures")
            logger.debug("room placement stopped after %d rooms: %s", len(ctx.rooms), exc)
            break
        if room is None:
            break
    if ctx.enable_metrics:
        ctx.metrics["rects_dropped"] = ctx.pool.dropped
    return len(ctx.rooms)


def sort_rooms(ctx: "GenerationContext") -> None:
    """Order rooms left to right; must run before any corridor exists."""
    ctx.rooms.sort(key=lambda r: r.left)
    # singleton labels follow the new registry order
    ctx.tags.reset(len(ctx.rooms))


def finish_vault(ctx: "GenerationContext") -> Optional[Room]:
    """Paint the reserved vault if its area is still clear after corridors were dug."""
    vault = ctx.vault
    if vault is None:
        return None
    checked = check_room(ctx, vault.left, 1, vault.top, 1, vault=True)
    if checked is None:
        logger.debug("vault at (%d,%d) dropped, area no longer clear", vault.left, vault.top)
        ctx.vault = None
        return None
    lowx, ddx, lowy, ddy = checked
    vault.left, vault.top, vault.right, vault.bottom = lowx, lowy, lowx + ddx, lowy + ddy
    carve(ctx.grid, vault)
    if ctx.enable_metrics:
        ctx.metrics["vault"] = True
    return vault
