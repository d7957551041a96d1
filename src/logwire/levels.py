"""
Symbolic level table.

Maps case-insensitive level names to ordinal severities. Ordinals line up with
the stdlib ``logging`` module where it defines the level, so handlers built here
interoperate with ``logging.LogRecord.levelno`` directly.
"""

import logging
from enum import IntEnum
from typing import Any


class Level(IntEnum):
    """Ordinal severities understood by channel handlers."""

    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    ALERT = 55
    EMERGENCY = 60


LEVELS: dict[str, int] = {level.name: int(level) for level in Level}
LEVELS["WARN"] = Level.WARNING
LEVELS["FATAL"] = Level.CRITICAL

# Lowest severity a handler reacts to when nothing else is configured
MINIMUM_LEVEL = Level.DEBUG

for _level in (Level.NOTICE, Level.ALERT, Level.EMERGENCY):
    logging.addLevelName(int(_level), _level.name)


def to_level(value: Any) -> int:
    """
    Resolve a level name or ordinal to its ordinal severity.

    Args:
        value: Level name (any case, e.g. "warning") or integer ordinal

    Returns:
        Ordinal severity

    Raises:
        ValueError: If the name is not in the level table
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid level: {value!r}")
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        key = value.strip().upper()
        if key in LEVELS:
            return int(LEVELS[key])
        if key.isdigit():
            return int(key)
    available = ", ".join(sorted(LEVELS))
    raise ValueError(f"Unknown level {value!r}. Available: {available}")


def level_name(value: int) -> str:
    """Return the symbolic name for an ordinal, or the number as text."""
    try:
        return Level(value).name
    except ValueError:
        return str(value)
