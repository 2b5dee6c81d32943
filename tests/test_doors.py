import random

import pytest

from rhack.dungeon.doors import Door, DoorRegistry, by_door, find_door_pos, ok_door, place_door, roll_door
from rhack.dungeon.errors import CapacityExceeded
from rhack.dungeon.rooms import Room, add_room
from rhack.dungeon.tiles import CellKind, DoorState


def _rooms():
    return [Room(5, 3, 8, 5), Room(20, 3, 24, 6), Room(40, 10, 44, 12)]


def test_registry_keeps_room_slices_contiguous():
    rooms = _rooms()
    reg = DoorRegistry(120)
    d1, d2, d3, d4 = (Door(i, 0) for i in range(1, 5))
    reg.insert(rooms, rooms[2], d1)
    reg.insert(rooms, rooms[0], d2)
    reg.insert(rooms, rooms[1], d3)
    reg.insert(rooms, rooms[0], d4)
    assert list(reg) == [d1, d4, d2, d3]
    assert [r.first_door for r in rooms] == [1, 3, 0]
    assert [r.door_count for r in rooms] == [2, 1, 1]
    assert reg.for_room(rooms[0]) == [d4, d2]
    assert reg.for_room(rooms[1]) == [d3]
    assert reg.for_room(rooms[2]) == [d1]


def test_registry_capacity():
    rooms = _rooms()
    reg = DoorRegistry(1)
    reg.insert(rooms, rooms[0], Door(1, 1))
    assert reg.full
    with pytest.raises(CapacityExceeded):
        reg.insert(rooms, rooms[1], Door(2, 2))
    assert rooms[1].door_count == 0


def test_ok_door_only_on_plain_walls(make_ctx):
    ctx = make_ctx()
    add_room(ctx, 10, 5, 15, 8, lit=False)
    assert ok_door(ctx, 12, 4)        # top wall
    assert ok_door(ctx, 16, 6)        # right wall
    assert not ok_door(ctx, 9, 4)     # corner
    assert not ok_door(ctx, 12, 6)    # floor
    assert not ok_door(ctx, 30, 10)   # stone


def test_place_door_blocks_neighbours(make_ctx):
    ctx = make_ctx()
    room = add_room(ctx, 10, 5, 15, 8, lit=False)
    door = place_door(ctx, 12, 4, room, kind=CellKind.DOOR)
    assert door is not None and not door.secret
    assert ctx.grid[12][4].kind is CellKind.DOOR
    assert ctx.grid[12][4].door_state is door.state
    assert by_door(ctx.grid, 13, 4)
    assert not ok_door(ctx, 13, 4)
    assert ok_door(ctx, 14, 4)
    assert room.door_count == 1 and list(ctx.doors) == [door]
    assert ctx.metrics['doors_created'] == 1


def test_place_door_off_wall_is_forced_to_true_door(make_ctx):
    ctx = make_ctx()
    room = add_room(ctx, 10, 5, 15, 8, lit=False)
    door = place_door(ctx, 12, 6, room, kind=CellKind.SECRET_DOOR)
    assert door.secret is False
    assert ctx.grid[12][6].kind is CellKind.DOOR


def test_place_door_drops_when_registry_full(make_ctx):
    ctx = make_ctx(max_doors=1)
    room = add_room(ctx, 10, 5, 15, 8, lit=False)
    assert place_door(ctx, 11, 4, room) is not None
    assert place_door(ctx, 14, 4, room) is None
    assert ctx.grid[14][4].kind is CellKind.HWALL
    assert ctx.metrics['doors_dropped'] == 1
    assert len(ctx.doors) == 1


def test_find_door_pos_on_wall_segment(make_ctx):
    ctx = make_ctx(seed=3)
    add_room(ctx, 10, 5, 15, 8, lit=False)
    for _ in range(10):
        pos = find_door_pos(ctx, 16, 5, 16, 8)
        assert pos.x == 16 and 5 <= pos.y <= 8
        assert ok_door(ctx, *pos)


def test_find_door_pos_reuses_existing_door(make_ctx):
    ctx = make_ctx(seed=3)
    room = add_room(ctx, 10, 5, 15, 5, lit=False)
    # single-row right wall: once it holds a door there is no free cell left
    place_door(ctx, 16, 5, room)
    assert find_door_pos(ctx, 16, 5, 16, 5) == (16, 5)


def test_find_door_pos_falls_back_to_segment_end(make_ctx):
    ctx = make_ctx()
    assert find_door_pos(ctx, 40, 10, 40, 12) == (40, 12)


def test_door_state_rolls():
    rng = random.Random(8)
    secret_states = {roll_door(rng, CellKind.SECRET_DOOR) for _ in range(300)}
    assert secret_states <= {DoorState.LOCKED, DoorState.CLOSED}
    door_states = [roll_door(rng, CellKind.DOOR) for _ in range(600)]
    assert set(door_states) <= {DoorState.OPEN, DoorState.LOCKED, DoorState.CLOSED}
    assert door_states.count(DoorState.CLOSED) > len(door_states) // 2
