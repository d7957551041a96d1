"""Handler that accepts and discards records."""

import logging
from typing import Any

from logwire.handlers.base import Handler
from logwire.levels import MINIMUM_LEVEL


class NullHandler(Handler):
    """Swallows every record at or above ``level`` without bubbling."""

    def __init__(self, level: Any = MINIMUM_LEVEL):
        super().__init__(level, bubble=False)

    def emit(self, record: logging.LogRecord) -> None:
        pass
