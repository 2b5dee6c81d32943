from rhack.dungeon.geometry import FreeRect, overlaps
from rhack.dungeon.rects import FreeRectPool, split_rects


def test_split_full_grid_keeps_large_remainders():
    pool = FreeRectPool(FreeRect(0, 0, 79, 20), 50)
    r1 = pool[0]
    r2 = FreeRect(30, 5, 40, 10)
    added = split_rects(pool, r1, r2, 4, 3)
    # top strip is too thin for the clearance + pad, the other three survive
    assert added == 3
    assert set(pool) == {
        FreeRect(0, 0, 28, 20),
        FreeRect(0, 12, 79, 20),
        FreeRect(42, 0, 79, 20),
    }
    assert all(not overlaps(r, r2) for r in pool)


def test_split_descends_into_overlapping_members():
    pool = FreeRectPool(FreeRect(0, 0, 50, 20), 50)
    other = FreeRect(30, 0, 79, 20)
    assert pool.add(other)
    r1 = pool[0]
    r2 = FreeRect(35, 5, 45, 10)
    added = split_rects(pool, r1, r2, 4, 3)
    assert other not in list(pool)
    assert all(not overlaps(r, r2) for r in pool)
    assert added == 4
    assert set(pool) == {
        FreeRect(30, 12, 79, 20),
        FreeRect(47, 0, 79, 20),
        FreeRect(0, 0, 33, 20),
        FreeRect(0, 12, 50, 20),
    }


def test_split_respects_capacity():
    pool = FreeRectPool(FreeRect(0, 0, 79, 20), 1)
    split_rects(pool, pool[0], FreeRect(30, 5, 40, 10), 4, 3)
    assert len(pool) == 1
    assert pool.dropped == 2
