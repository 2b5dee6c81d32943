"""Public level-generation interface."""

from .cells import Cell
from .config import LevelConfig
from .context import GenerationContext
from .doors import Door
from .errors import CapacityExceeded, CorridorAbandoned, GenerationError, InvariantViolation, RetryBudgetExhausted
from .geometry import Coord, FreeRect
from .pipeline import GenerationPhase, Level, generate_level, resolve_options
from .render import render_rows, render_text
from .rooms import Room, RoomKind
from .tiles import CellKind, DoorState  # noqa: F401

__all__ = [
    "Cell",
    "CellKind",
    "Coord",
    "Door",
    "DoorState",
    "FreeRect",
    "GenerationContext",
    "GenerationPhase",
    "Level",
    "LevelConfig",
    "Room",
    "RoomKind",
    "generate_level",
    "resolve_options",
    "render_rows",
    "render_text",
    "GenerationError",
    "RetryBudgetExhausted",
    "CapacityExceeded",
    "InvariantViolation",
    "CorridorAbandoned",
]
