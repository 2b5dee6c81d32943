"""
project: rhack levels
module: level_api.py
License: MIT

Level retrieval API routes.

Levels are generated on demand from a seed and returned as JSON for a
presentation layer to draw. Generation is deterministic per seed, so results
are cached in-process.
"""

import hashlib
import random
import threading
from typing import Optional

from flask import Blueprint, current_app, jsonify, request

from rhack.dungeon import Level, LevelConfig, resolve_options
from rhack.logging_utils import get_logger

bp_level = Blueprint("level_api", __name__)
log = get_logger("rhack.api")

SEED_MAX = 2**63 - 1

# (seed, config key, metrics flag) -> Level. Guarded by a lock since the dev server is threaded.
_level_cache = {}
_level_cache_lock = threading.Lock()
_LEVEL_CACHE_MAX = 8


def _coerce_seed(raw_seed):
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if raw_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw_seed, bool):
        return int(raw_seed)
    if isinstance(raw_seed, int):
        return raw_seed % SEED_MAX
    if isinstance(raw_seed, str):
        s = raw_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    return random.randint(1, 1_000_000)


def get_cached_level(seed: int, config: Optional[LevelConfig] = None) -> Level:
    """Fetch the level for ``seed`` built with ``config`` (env overrides applied)."""
    level_config, enable_metrics = resolve_options(config)
    app_config = current_app.config
    if app_config.get("DUNGEON_DISABLE_CACHE"):
        return Level(seed=seed, config=level_config, enable_metrics=enable_metrics)
    cache_max = app_config.get("LEVEL_CACHE_MAX", _LEVEL_CACHE_MAX)
    key = (seed, level_config.cache_key(), enable_metrics)
    with _level_cache_lock:
        level = _level_cache.get(key)
        if level is not None:
            return level
    level = Level(seed=seed, config=level_config, enable_metrics=enable_metrics)
    with _level_cache_lock:
        _level_cache[key] = level
        while len(_level_cache) > max(cache_max, 1):
            first_key = next(iter(_level_cache.keys()))
            _level_cache.pop(first_key, None)
    return level


def clear_level_cache():
    with _level_cache_lock:
        _level_cache.clear()


@bp_level.route("/api/level")
def level():
    """
    Generate (or fetch from cache) the level for ``?seed=``.
    Response: { seed, width, height, rows, rooms, doors, stairs, vault }
    A missing seed picks a random one; the chosen seed is echoed back.
    """
    seed = _coerce_seed(request.args.get("seed"))
    lvl = get_cached_level(seed)
    log.info(event="level_served", seed=seed, rooms=len(lvl.rooms), doors=len(lvl.doors))
    return jsonify(lvl.to_dict())


@bp_level.route("/api/level/metrics")
def level_metrics():
    """Generation counters and phase timings for ``?seed=``."""
    seed = _coerce_seed(request.args.get("seed"))
    lvl = get_cached_level(seed)
    return jsonify({"seed": seed, "metrics": lvl.metrics})
