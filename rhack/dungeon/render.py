"""Glyph mapping for the level grid (display only, never mutates)."""
from typing import Dict, List

from .cells import Cell, Grid
from .tiles import CellKind

GLYPHS: Dict[CellKind, str] = {
    CellKind.STONE: ' ',
    CellKind.ROOM: '.',
    CellKind.HWALL: '-',
    CellKind.VWALL: '|',
    CellKind.TLCORNER: '-',
    CellKind.TRCORNER: '-',
    CellKind.BLCORNER: '-',
    CellKind.BRCORNER: '-',
    CellKind.DOOR: '+',
    CellKind.SECRET_DOOR: '+',
    CellKind.CORRIDOR: '#',
    CellKind.SECRET_CORRIDOR: '#',
    CellKind.STAIRS_UP: '<',
    CellKind.STAIRS_DOWN: '>',
}


def glyph_for(cell: Cell) -> str:
    return GLYPHS.get(cell.kind, '?')


def render_rows(grid: Grid) -> List[str]:
    width = len(grid)
    height = len(grid[0]) if width else 0
    return [''.join(glyph_for(grid[x][y]) for x in range(width)) for y in range(height)]


def render_text(grid: Grid) -> str:
    return '\n'.join(render_rows(grid))
