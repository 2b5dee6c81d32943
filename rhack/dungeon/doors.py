"""Door registry and door placement.

All doors live in one ordered list. A room owns the contiguous slice
``doors[room.first_door:room.first_door + room.door_count]``; a room's first
door is appended at the tail, later doors of the same room are inserted at the
front of its slice and every room whose slice starts at or after that point is
shifted right by one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from .cells import Grid, in_bounds
from .errors import CapacityExceeded
from .geometry import Coord
from .tiles import DOOR_KINDS, WALL_KINDS, CellKind, DoorState

if TYPE_CHECKING:
    from .context import GenerationContext
    from .rooms import Room

logger = logging.getLogger(__name__)

# Cells a new door may be cut into. Corners never take a door.
DOORABLE_KINDS = frozenset({CellKind.HWALL, CellKind.VWALL})


@dataclass
class Door:
    x: int
    y: int
    state: DoorState = DoorState.CLOSED
    secret: bool = True

    @property
    def kind(self) -> CellKind:
        return CellKind.SECRET_DOOR if self.secret else CellKind.DOOR

    def to_dict(self):
        return {"x": self.x, "y": self.y, "state": self.state.value, "secret": self.secret}


class DoorRegistry:
    def __init__(self, capacity: int):
        self.capacity = capacity
        self._doors: List[Door] = []

    def __len__(self) -> int:
        return len(self._doors)

    def __iter__(self) -> Iterator[Door]:
        return iter(self._doors)

    def __getitem__(self, index):
        return self._doors[index]

    @property
    def full(self) -> bool:
        return len(self._doors) >= self.capacity

    def for_room(self, room: "Room") -> List[Door]:
        if room.door_count == 0:
            return []
        return self._doors[room.first_door:room.first_door + room.door_count]

    def insert(self, rooms: Sequence["Room"], room: "Room", door: Door) -> int:
        """Record ``door`` as belonging to ``room``; returns its list index.

        Raises CapacityExceeded when the registry is full.
        """
        if self.full:
            raise CapacityExceeded("door list", self.capacity)
        if room.door_count == 0:
            room.first_door = len(self._doors)
        else:
            for other in rooms:
                if other is not room and other.door_count and other.first_door >= room.first_door:
                    other.first_door += 1
        room.door_count += 1
        self._doors.insert(room.first_door, door)
        return room.first_door


def by_door(grid: Grid, x: int, y: int) -> bool:
    """True when an orthogonal neighbour of (x, y) is already a door."""
    for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
        if nx >= 1 and in_bounds(grid, nx, ny) and grid[nx][ny].kind in DOOR_KINDS:
            return True
    return False


def ok_door(ctx: "GenerationContext", x: int, y: int) -> bool:
    return (
        ctx.grid[x][y].kind in DOORABLE_KINDS
        and not ctx.doors.full
        and not by_door(ctx.grid, x, y)
    )


def find_door_pos(ctx: "GenerationContext", xl: int, yl: int, xh: int, yh: int) -> Coord:
    """Pick a door anchor on the wall segment (xl, yl)-(xh, yh).

    A random cell is tried first, then the segment is scanned for a cell that
    can take a new door, then for an existing door to reuse. Falls back to
    the (xl, yh) end.
    """
    rng = ctx.rng
    x = xl + rng.randrange(xh - xl + 1)
    y = yl + rng.randrange(yh - yl + 1)
    if ok_door(ctx, x, y):
        return Coord(x, y)
    for x in range(xl, xh + 1):
        for y in range(yl, yh + 1):
            if ok_door(ctx, x, y):
                return Coord(x, y)
    for x in range(xl, xh + 1):
        for y in range(yl, yh + 1):
            if ctx.grid[x][y].kind in DOOR_KINDS:
                return Coord(x, y)
    return Coord(xl, yh)


def roll_door(rng, kind: CellKind) -> DoorState:
    if kind is CellKind.DOOR:
        if rng.randrange(15) == 0:
            return DoorState.OPEN
        if rng.randrange(18) == 0:
            return DoorState.LOCKED
        return DoorState.CLOSED
    return DoorState.LOCKED if rng.randrange(5) == 0 else DoorState.CLOSED


def place_door(ctx: "GenerationContext", x: int, y: int, room: "Room", kind: Optional[CellKind] = None) -> Optional[Door]:
    """Cut a door into (x, y) for ``room``.

    Mostly secret doors; 1 in 8 is a true door. A target that is not a wall
    always becomes a true door. Returns None when the door list is full.
    """
    rng = ctx.rng
    if kind is None:
        kind = CellKind.DOOR if rng.randrange(8) == 0 else CellKind.SECRET_DOOR
    cell = ctx.grid[x][y]
    if cell.kind not in WALL_KINDS:
        kind = CellKind.DOOR
    door = Door(x, y, roll_door(rng, kind), secret=kind is CellKind.SECRET_DOOR)
    try:
        ctx.doors.insert(ctx.rooms, room, door)
    except CapacityExceeded as exc:
        ctx.bump("doors_dropped")
        logger.debug("door at (%d,%d) dropped: %s", x, y, exc)
        return None
    cell.kind = kind
    cell.door_state = door.state
    ctx.bump("doors_created")
    return door
