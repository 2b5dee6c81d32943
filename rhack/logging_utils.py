"""Structured event logging for the level service and CLI.

Events are emitted through the stdlib ``logging`` tree (so the rotating file
and console handlers set up in ``rhack.server`` pick them up) with the message
rendered as key=value pairs, or as one JSON object per line when
``RHACK_LOG_JSON`` is set.

Usage:
    from rhack.logging_utils import get_logger
    log = get_logger("rhack.api")
    log.info(event="level_served", seed=42, rooms=9)

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import logging
import os
import time

LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}
CURRENT_LEVEL = LEVELS.get(os.getenv("RHACK_LOG_LEVEL", "info").lower(), logging.INFO)
JSON_MODE = os.getenv("RHACK_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _kv(key, value) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        value = str(value).replace(" ", "_")
    return f"{key}={value}"


def _format(level: str, **fields):
    fields = {k: v for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if JSON_MODE:
        fields.update(level=level, ts=ts)
        return json.dumps(fields, separators=(",", ":"), default=str)
    return " ".join([f"level={level}", f"ts={ts}"] + [_kv(k, v) for k, v in fields.items()])


class _Logger:
    """Keyword-only front end over one stdlib logger."""

    def __init__(self, name: str):
        self.name = name
        self._logger = logging.getLogger(name)

    def _log(self, lvl: str, exc_info: bool = False, **fields):
        threshold = LEVELS[lvl]
        if threshold < CURRENT_LEVEL or not self._logger.isEnabledFor(threshold):
            return
        fields.setdefault("logger", self.name)
        self._logger.log(threshold, _format(lvl, **fields), exc_info=exc_info)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)

    def exception(self, **fields):
        """Error event with the active traceback attached."""
        self._log("error", exc_info=True, **fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("rhack")
