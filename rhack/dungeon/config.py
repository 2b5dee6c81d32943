from dataclasses import astuple, dataclass
from typing import Optional


@dataclass
class LevelConfig:
    width: int = 80
    height: int = 21
    max_rooms: int = 40
    max_rects: int = 50
    max_doors: int = 120
    # Horizontal / vertical clearance around rooms
    xlim: int = 4
    ylim: int = 3
    room_attempts: int = 100
    dig_step_limit: int = 500
    # "1 in N" odds
    extra_abandon_odds: int = 35
    secret_corridor_odds: int = 100
    early_stop_odds: int = 50
    depth: int = 1
    make_vault: bool = True
    up_stairs: bool = True
    seed: Optional[int] = None

    def cache_key(self):
        """Every generation knob except ``seed`` (kept as the last field)."""
        return astuple(self)[:-1]


__all__ = ["LevelConfig"]
