import pytest

from rhack.dungeon import Level, connectivity
from rhack.dungeon.connectivity import UnionFind, connect_rooms, link_extra, reachable_cells
from rhack.dungeon.rooms import add_room

from level_test_utils import unreachable_rooms


def test_union_find_lowest_label_wins():
    uf = UnionFind(4)
    assert uf.union(3, 1) == 1
    assert uf.find(3) == 1
    uf.union(1, 0)
    assert uf.find(3) == 0
    assert uf.same(0, 3)
    assert not uf.same(0, 2)
    assert uf.components() == 2
    assert uf.add() == 4
    assert uf.components() == 3


def test_union_find_reset():
    uf = UnionFind(3)
    uf.union(0, 2)
    uf.reset(5)
    assert len(uf) == 5
    assert uf.components() == 5


def test_connect_rooms_without_rooms(make_ctx):
    ctx = make_ctx()
    assert connect_rooms(ctx) == 0
    assert link_extra(ctx) == 0


def test_connect_rooms_links_every_room(make_ctx):
    ctx = make_ctx(seed=17)
    add_room(ctx, 5, 3, 9, 5, lit=True)
    add_room(ctx, 25, 12, 30, 15, lit=True)
    add_room(ctx, 50, 3, 55, 6, lit=True)
    add_room(ctx, 65, 12, 70, 14, lit=True)
    assert connect_rooms(ctx) == 1
    assert unreachable_rooms(ctx) == []
    assert ctx.metrics['components'] == 1


def test_link_extra_needs_three_rooms(make_ctx):
    ctx = make_ctx()
    add_room(ctx, 5, 3, 9, 5, lit=True)
    add_room(ctx, 25, 12, 30, 15, lit=True)
    assert link_extra(ctx) == 0
    assert ctx.metrics['joins_attempted'] == 0


@pytest.mark.structure
@pytest.mark.parametrize("seed", [1, 2, 3, 42, 1234])
def test_generated_levels_are_connected(seed):
    level = Level(seed=seed)
    assert level.rooms
    assert unreachable_rooms(level) == []
    assert level.metrics['components'] == 1


def test_reachable_cells_stops_at_walls(make_ctx):
    ctx = make_ctx()
    room = add_room(ctx, 5, 3, 9, 5, lit=True)
    seen = reachable_cells(ctx.grid, (5, 3))
    assert seen == set(room.cells())


def test_convergence_scan_joins_what_neighbour_passes_missed(make_ctx, monkeypatch):
    ctx = make_ctx(seed=5)
    add_room(ctx, 5, 3, 9, 5, lit=True)
    add_room(ctx, 25, 14, 30, 16, lit=True)
    add_room(ctx, 40, 14, 45, 16, lit=True)
    add_room(ctx, 60, 3, 65, 5, lit=True)
    real_join = connectivity.join

    # the last room refuses its near neighbours, so only a full scan can reach it
    def refusing_join(ctx, a, b, nxcor=False):
        if 3 in (a, b) and abs(a - b) <= 2:
            return False
        return real_join(ctx, a, b, nxcor)

    monkeypatch.setattr(connectivity, "join", refusing_join)
    assert connect_rooms(ctx) == 1
    assert ctx.metrics['convergence_scans'] >= 1
    assert ctx.metrics['components'] == 1
    assert ctx.tags.same(0, 3)
    assert unreachable_rooms(ctx) == []


def test_convergence_gives_up_when_a_scan_joins_nothing(make_ctx, monkeypatch):
    ctx = make_ctx(seed=5)
    add_room(ctx, 5, 3, 9, 5, lit=True)
    add_room(ctx, 40, 12, 45, 15, lit=True)
    monkeypatch.setattr(connectivity, "join", lambda ctx, a, b, nxcor=False: False)
    assert connect_rooms(ctx) == 2
    assert ctx.metrics['convergence_scans'] == 1
    assert ctx.metrics['components'] == 2
