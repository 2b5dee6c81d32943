"""Rasterize a room (floor, wall ring, corners, lighting) into the grid."""
from __future__ import annotations

from .cells import Grid
from .tiles import CellKind


def carve(grid: Grid, room) -> None:
    """Paint ``room`` into ``grid``.

    Edges flush with the outer boundary are pulled in by one cell first so the
    wall ring always fits; the room's recorded bounds are updated to match.
    """
    width = len(grid)
    height = len(grid[0])
    if room.left == 0:
        room.left = 1
    if room.top == 0:
        room.top = 1
    if room.right >= width - 1:
        room.right = width - 2
    if room.bottom >= height - 1:
        room.bottom = height - 2
    lowx, lowy, hix, hiy = room.left, room.top, room.right, room.bottom

    if room.lit:
        for x in range(max(lowx - 1, 0), min(hix + 1, width - 1) + 1):
            for y in range(max(lowy - 1, 0), min(hiy + 1, height - 1) + 1):
                grid[x][y].lit = True

    for x in range(lowx - 1, hix + 2):
        grid[x][lowy - 1].kind = CellKind.HWALL
        grid[x][hiy + 1].kind = CellKind.HWALL
    for y in range(lowy, hiy + 1):
        grid[lowx - 1][y].kind = CellKind.VWALL
        grid[hix + 1][y].kind = CellKind.VWALL
    for x in range(lowx, hix + 1):
        for y in range(lowy, hiy + 1):
            grid[x][y].kind = CellKind.ROOM

    grid[lowx - 1][lowy - 1].kind = CellKind.TLCORNER
    grid[hix + 1][lowy - 1].kind = CellKind.TRCORNER
    grid[lowx - 1][hiy + 1].kind = CellKind.BLCORNER
    grid[hix + 1][hiy + 1].kind = CellKind.BRCORNER
