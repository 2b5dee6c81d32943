"""Corridor routing between two rooms.

``join`` picks facing walls, anchors a door on each and lets ``dig_corridor``
walk the gap greedily. Any failure while digging abandons the corridor; cells
already dug stay on the grid.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .doors import find_door_pos, ok_door, place_door
from .errors import CorridorAbandoned, GenerationError, InvariantViolation, RetryBudgetExhausted
from .geometry import Coord
from .tiles import CORRIDOR_KINDS, DOOR_KINDS, CellKind

if TYPE_CHECKING:
    from .context import GenerationContext

logger = logging.getLogger(__name__)

DIGGABLE_KINDS = CORRIDOR_KINDS | {CellKind.STONE}


def dig_corridor(ctx: "GenerationContext", org: Coord, dest: Coord, nxcor: bool) -> int:
    """Dig from ``org`` to ``dest``; returns the number of steps taken.

    Raises RetryBudgetExhausted past ``dig_step_limit`` steps,
    CorridorAbandoned on the random early stop of an extra corridor and
    InvariantViolation when the walk leaves the grid interior or meets a
    cell it may not dig through.
    """
    cfg = ctx.config
    rng = ctx.rng
    grid = ctx.grid
    width, height = ctx.width, ctx.height
    xx, yy = org
    tx, ty = dest
    if min(xx, yy, tx, ty) <= 0 or max(xx, tx) > width - 1 or max(yy, ty) > height - 1:
        raise InvariantViolation(f"corridor endpoints out of bounds: {org} -> {dest}")

    dx = dy = 0
    if tx > xx:
        dx = 1
    elif ty > yy:
        dy = 1
    elif tx < xx:
        dx = -1
    else:
        dy = -1
    xx -= dx
    yy -= dy

    steps = 0
    while xx != tx or yy != ty:
        steps += 1
        if steps > cfg.dig_step_limit:
            raise RetryBudgetExhausted("corridor dig", cfg.dig_step_limit)
        if nxcor and rng.randrange(cfg.extra_abandon_odds) == 0:
            raise CorridorAbandoned(f"extra corridor stopped after {steps} steps")
        xx += dx
        yy += dy
        if xx >= width - 1 or xx <= 0 or yy <= 0 or yy >= height - 1:
            raise InvariantViolation(f"corridor left the grid at ({xx},{yy})")

        cell = grid[xx][yy]
        if cell.kind is CellKind.STONE:
            if nxcor and rng.randrange(cfg.secret_corridor_odds) == 0:
                cell.kind = CellKind.SECRET_CORRIDOR
                ctx.bump("secret_corridors")
            else:
                cell.kind = CellKind.CORRIDOR
        elif cell.kind not in CORRIDOR_KINDS:
            raise InvariantViolation(f"corridor blocked by {cell.kind.value} at ({xx},{yy})")

        # jitter: occasionally treat the minor axis as already closed
        dix = abs(xx - tx)
        diy = abs(yy - ty)
        if dix > diy and diy and rng.randrange(dix - diy + 1) == 0:
            dix = 0
        elif diy > dix and dix and rng.randrange(diy - dix + 1) == 0:
            diy = 0

        if dy and dix > diy:
            ddx = -1 if xx > tx else 1
            if grid[xx + ddx][yy].kind in DIGGABLE_KINDS:
                dx, dy = ddx, 0
                continue
        elif dx and diy > dix:
            ddy = -1 if yy > ty else 1
            if grid[xx][yy + ddy].kind in DIGGABLE_KINDS:
                dx, dy = 0, ddy
                continue

        if grid[xx + dx][yy + dy].kind in DIGGABLE_KINDS:
            continue
        if dx:
            dx, dy = 0, (-1 if ty < yy else 1)
        else:
            dx, dy = (-1 if tx < xx else 1), 0
        if grid[xx + dx][yy + dy].kind in DIGGABLE_KINDS:
            continue
        dx, dy = -dx, -dy
    return steps


def join(ctx: "GenerationContext", a: int, b: int, nxcor: bool = False) -> bool:
    """Connect rooms ``a`` and ``b`` with a corridor and a door at each end.

    ``nxcor`` marks an extra corridor: it may stop at random, may contain
    secret corridor cells and does not force doors next to existing ones.
    Returns True when the corridor reached the destination with a door at
    each end; only then are the two rooms tagged as connected.
    """
    rooms = ctx.rooms
    if not (0 <= a < len(rooms) and 0 <= b < len(rooms)):
        return False
    croom, troom = rooms[a], rooms[b]
    if not croom.is_valid or not troom.is_valid or ctx.doors.full:
        return False
    ctx.bump("joins_attempted")

    if troom.left > croom.right:
        dx, dy = 1, 0
        dd = find_door_pos(ctx, croom.right + 1, croom.top, croom.right + 1, croom.bottom)
        tt = find_door_pos(ctx, troom.left - 1, troom.top, troom.left - 1, troom.bottom)
    elif troom.bottom < croom.top:
        dx, dy = 0, -1
        dd = find_door_pos(ctx, croom.left, croom.top - 1, croom.right, croom.top - 1)
        tt = find_door_pos(ctx, troom.left, troom.bottom + 1, troom.right, troom.bottom + 1)
    elif troom.right < croom.left:
        dx, dy = -1, 0
        dd = find_door_pos(ctx, croom.left - 1, croom.top, croom.left - 1, croom.bottom)
        tt = find_door_pos(ctx, troom.right + 1, troom.top, troom.right + 1, troom.bottom)
    else:
        dx, dy = 0, 1
        dd = find_door_pos(ctx, croom.left, croom.bottom + 1, croom.right, croom.bottom + 1)
        tt = find_door_pos(ctx, troom.left, troom.top - 1, troom.right, troom.top - 1)

    org = Coord(dd.x + dx, dd.y + dy)
    dest = Coord(tt.x - dx, tt.y - dy)
    if nxcor and ctx.grid[org.x][org.y].kind is not CellKind.STONE:
        return False

    if ok_door(ctx, dd.x, dd.y) or not nxcor:
        place_door(ctx, dd.x, dd.y, croom)

    try:
        steps = dig_corridor(ctx, org, dest, nxcor)
    except GenerationError as exc:
        ctx.bump("corridors_abandoned")
        logger.debug("corridor %d->%d abandoned: %s", a, b, exc)
        return False

    if ok_door(ctx, tt.x, tt.y) or not nxcor:
        place_door(ctx, tt.x, tt.y, troom)

    # a dropped or skipped door leaves the corridor dead-ended at a wall
    if ctx.grid[dd.x][dd.y].kind not in DOOR_KINDS or ctx.grid[tt.x][tt.y].kind not in DOOR_KINDS:
        ctx.bump("corridors_unlinked")
        logger.debug("corridor %d->%d dug but a wall end has no door", a, b)
        return False

    ctx.tags.union(a, b)
    ctx.bump("corridors_dug")
    ctx.high_water("corridor_steps_max", steps)
    return True
