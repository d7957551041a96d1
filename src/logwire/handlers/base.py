"""Base class for channel handlers."""

import logging
from typing import Any

from logwire.levels import MINIMUM_LEVEL, to_level


class Handler(logging.Handler):
    """
    stdlib handler with a level threshold and a bubble flag.

    ``bubble=False`` tells the owning channel to stop passing a record down
    the chain once this handler has accepted it.

    Args:
        level: Minimum level name or ordinal
        bubble: Whether records continue to the next handler
    """

    def __init__(self, level: Any = MINIMUM_LEVEL, bubble: bool = True):
        super().__init__(to_level(level))
        self.bubble = bool(bubble)

    def set_level(self, level: Any) -> None:
        """Set the threshold from a level name or ordinal."""
        self.setLevel(to_level(level))

    def set_bubble(self, bubble: bool) -> None:
        self.bubble = bool(bubble)

    def is_handling(self, record: logging.LogRecord) -> bool:
        """Check whether ``record`` meets this handler's threshold."""
        return record.levelno >= self.level
