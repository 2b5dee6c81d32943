from rhack.dungeon.cells import make_grid
from rhack.dungeon.painter import carve
from rhack.dungeon.rooms import Room
from rhack.dungeon.tiles import CellKind


def test_carve_paints_walls_corners_and_floor():
    grid = make_grid(20, 10)
    room = Room(3, 2, 6, 4, lit=True)
    carve(grid, room)
    assert grid[2][1].kind is CellKind.TLCORNER
    assert grid[7][1].kind is CellKind.TRCORNER
    assert grid[2][5].kind is CellKind.BLCORNER
    assert grid[7][5].kind is CellKind.BRCORNER
    for x in range(3, 7):
        assert grid[x][1].kind is CellKind.HWALL
        assert grid[x][5].kind is CellKind.HWALL
    for y in range(2, 5):
        assert grid[2][y].kind is CellKind.VWALL
        assert grid[7][y].kind is CellKind.VWALL
    assert all(grid[x][y].kind is CellKind.ROOM for x, y in room.cells())
    # lighting covers the wall ring too, nothing beyond it
    assert grid[2][1].lit and grid[7][5].lit
    assert not grid[8][3].lit
    assert grid[10][8].kind is CellKind.STONE


def test_carve_dark_room_stays_unlit():
    grid = make_grid(20, 10)
    carve(grid, Room(3, 2, 6, 4, lit=False))
    assert not any(grid[x][y].lit for x in range(20) for y in range(10))


def test_carve_pulls_flush_edges_inward():
    grid = make_grid(20, 10)
    room = Room(0, 0, 5, 9)
    carve(grid, room)
    assert (room.left, room.top, room.right, room.bottom) == (1, 1, 5, 8)
    assert grid[0][0].kind is CellKind.TLCORNER
    assert grid[0][9].kind is CellKind.BLCORNER
    assert grid[6][9].kind is CellKind.BRCORNER
