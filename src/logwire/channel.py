"""
Channel - a named logger handle with its wired handler and processor chain.

A channel only holds the pipeline built from configuration. Handlers are
stdlib-compatible ``logging.Handler`` objects (anything with ``handle``);
processors are structlog-style callables ``(logger, method_name, event_dict)``.
"""

import logging
from typing import Any, Callable

Processor = Callable[[Any, str, dict[str, Any]], Any]


class Channel:
    """
    Named logging channel.

    Handlers and processors keep their declared order. Deriving a channel with
    :meth:`with_name` shares the already-attached handler and processor
    instances, so anything pushed afterwards lands after the inherited chain.

    Example:
        >>> parent = Channel("default")
        >>> parent.push_handler(console)
        >>> child = parent.with_name("billing")
        >>> child.handlers[0] is console
        True
    """

    def __init__(
        self,
        name: str,
        handlers: list[Any] | None = None,
        processors: list[Processor] | None = None,
        use_microseconds: bool = True,
    ):
        self.name = name
        self._handlers: list[Any] = list(handlers or [])
        self._processors: list[Processor] = list(processors or [])
        self.use_microseconds = use_microseconds

    @property
    def handlers(self) -> list[Any]:
        """Attached handlers in declared order (copy)."""
        return list(self._handlers)

    @property
    def processors(self) -> list[Processor]:
        """Attached processors in declared order (copy)."""
        return list(self._processors)

    def with_name(self, name: str) -> "Channel":
        """Return a new channel named ``name`` sharing this channel's chain."""
        return Channel(name, self._handlers, self._processors, self.use_microseconds)

    def push_handler(self, handler: Any) -> "Channel":
        """Append a handler to the chain."""
        self._handlers.append(handler)
        return self

    def push_processor(self, processor: Processor) -> "Channel":
        """Append a processor to the chain."""
        if not callable(processor):
            raise TypeError(f"Processors must be callable, got {type(processor).__name__}")
        self._processors.append(processor)
        return self

    def use_microsecond_timestamps(self, flag: bool) -> None:
        """Record whether emitted records keep microsecond precision."""
        self.use_microseconds = bool(flag)

    def handle(self, record: logging.LogRecord) -> bool:
        """
        Dispatch a ready-made record to the handler chain.

        Handlers run in declared order. A handler that accepts the record and
        does not bubble stops propagation.

        Args:
            record: Record to dispatch

        Returns:
            True if at least one handler accepted the record
        """
        if not self.use_microseconds:
            record.msecs = float(int(record.msecs))
        handled = False
        for handler in self._handlers:
            if record.levelno < getattr(handler, "level", logging.NOTSET):
                continue
            handler.handle(record)
            handled = True
            if not getattr(handler, "bubble", True):
                break
        return handled

    def close(self) -> None:
        """Close every attached handler."""
        for handler in self._handlers:
            handler.close()

    def __repr__(self) -> str:
        return f"Channel(name={self.name!r}, handlers={len(self._handlers)}, processors={len(self._processors)})"
