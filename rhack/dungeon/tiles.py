"""Cell kinds and door states for the level grid.

Centralized so every generation module (and the renderer) agrees on the
vocabulary. Values are the lowercase names used in the JSON payloads.
"""
from __future__ import annotations

from enum import Enum


class CellKind(Enum):
    STONE = "stone"
    VWALL = "vwall"
    HWALL = "hwall"
    TLCORNER = "tlcorner"
    TRCORNER = "trcorner"
    BLCORNER = "blcorner"
    BRCORNER = "brcorner"
    DOOR = "door"
    SECRET_DOOR = "secret_door"
    CORRIDOR = "corridor"
    SECRET_CORRIDOR = "secret_corridor"
    ROOM = "room"
    STAIRS_UP = "stairs_up"
    STAIRS_DOWN = "stairs_down"


class DoorState(Enum):
    NONE = "none"
    OPEN = "open"
    CLOSED = "closed"
    LOCKED = "locked"


CORNER_KINDS = frozenset({CellKind.TLCORNER, CellKind.TRCORNER, CellKind.BLCORNER, CellKind.BRCORNER})
WALL_KINDS = frozenset({CellKind.VWALL, CellKind.HWALL}) | CORNER_KINDS
DOOR_KINDS = frozenset({CellKind.DOOR, CellKind.SECRET_DOOR})
CORRIDOR_KINDS = frozenset({CellKind.CORRIDOR, CellKind.SECRET_CORRIDOR})
STAIRS_KINDS = frozenset({CellKind.STAIRS_UP, CellKind.STAIRS_DOWN})
# Cells a walker may cross; secret variants count once discovered.
PASSABLE_KINDS = frozenset({CellKind.ROOM}) | DOOR_KINDS | CORRIDOR_KINDS | STAIRS_KINDS

__all__ = [
    "CellKind",
    "DoorState",
    "CORNER_KINDS",
    "WALL_KINDS",
    "DOOR_KINDS",
    "CORRIDOR_KINDS",
    "STAIRS_KINDS",
    "PASSABLE_KINDS",
]
