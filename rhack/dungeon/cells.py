from typing import List

from .tiles import CellKind, DoorState


class Cell:
    """Lightweight container for a level grid cell."""
    __slots__ = ("kind", "lit", "door_state")

    def __init__(self, kind: CellKind = CellKind.STONE, lit: bool = False, door_state: DoorState = DoorState.NONE):
        self.kind = kind
        self.lit = lit
        self.door_state = door_state

    def to_dict(self):
        return {"kind": self.kind.value, "lit": self.lit, "door_state": self.door_state.value}

    def __repr__(self):
        return f"Cell({self.kind.value}, lit={self.lit}, door={self.door_state.value})"


# Column-major: grid[x][y]
Grid = List[List[Cell]]


def make_grid(width: int, height: int) -> Grid:
    return [[Cell() for _ in range(height)] for _ in range(width)]


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    return 0 <= x < len(grid) and 0 <= y < len(grid[0])

