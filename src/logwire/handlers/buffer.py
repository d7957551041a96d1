"""Handler that buffers records and hands them to a wrapped handler in batches."""

import logging
from typing import Any

from logwire.handlers.base import Handler
from logwire.levels import MINIMUM_LEVEL


class BufferHandler(Handler):
    """
    Buffers records until flushed or closed.

    When ``buffer_limit`` is reached the oldest record is dropped, or the
    whole buffer is flushed first when ``flush_on_overflow`` is set.

    Args:
        handler: Wrapped handler that receives the buffered records
        buffer_limit: Maximum buffered records (0 = unlimited)
        level: Minimum level name or ordinal
        bubble: Whether records continue to the next handler
        flush_on_overflow: Flush instead of dropping when the buffer is full
    """

    def __init__(
        self,
        handler: logging.Handler,
        buffer_limit: int = 0,
        level: Any = MINIMUM_LEVEL,
        bubble: bool = True,
        flush_on_overflow: bool = False,
    ):
        super().__init__(level, bubble)
        self.handler = handler
        self.buffer_limit = int(buffer_limit)
        self.flush_on_overflow = bool(flush_on_overflow)
        self.buffer: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        if self.buffer_limit > 0 and len(self.buffer) >= self.buffer_limit:
            if self.flush_on_overflow:
                self.flush()
            else:
                self.buffer.pop(0)
        self.buffer.append(record)

    def flush(self) -> None:
        """Forward buffered records to the wrapped handler."""
        self.acquire()
        try:
            records, self.buffer = self.buffer, []
        finally:
            self.release()
        for record in records:
            if record.levelno >= self.handler.level:
                self.handler.handle(record)
        self.handler.flush()

    def close(self) -> None:
        try:
            self.flush()
            self.handler.close()
        finally:
            super().close()
