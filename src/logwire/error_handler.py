"""
Process-wide error sink registration.

A channel declared with ``register_error_handler: true`` receives uncaught
exceptions from the main thread (``sys.excepthook``) and from other threads
(``threading.excepthook``). Previously installed hooks still run afterwards.
"""

import logging
import sys
import threading
from types import TracebackType
from typing import Any

import structlog

from logwire.levels import Level

logger = structlog.get_logger()


class ErrorHandler:
    """
    Routes uncaught exceptions to a channel.

    Args:
        channel: Channel whose handlers receive the exception records
        level: Level of the emitted records

    Example:
        >>> error_handler = ErrorHandler.register(channel)
        >>> ...
        >>> error_handler.restore()
    """

    def __init__(self, channel: Any, level: int = Level.CRITICAL):
        self.channel = channel
        self.level = int(level)
        self._previous_excepthook: Any = None
        self._previous_threading_excepthook: Any = None
        self.installed = False

    @classmethod
    def register(cls, channel: Any, level: int = Level.CRITICAL) -> "ErrorHandler":
        """Create an error handler for ``channel`` and install it."""
        handler = cls(channel, level)
        handler.install()
        return handler

    def install(self) -> None:
        """Install the exception hooks, remembering the current ones."""
        if self.installed:
            return
        self._previous_excepthook = sys.excepthook
        self._previous_threading_excepthook = threading.excepthook
        sys.excepthook = self.handle_exception
        threading.excepthook = self.handle_thread_exception
        self.installed = True
        logger.debug("error_handler.registered", channel=self.channel.name)

    def restore(self) -> None:
        """Reinstate the hooks that were active before :meth:`install`."""
        if not self.installed:
            return
        if sys.excepthook == self.handle_exception:
            sys.excepthook = self._previous_excepthook
        if threading.excepthook == self.handle_thread_exception:
            threading.excepthook = self._previous_threading_excepthook
        self.installed = False

    def make_record(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
        thread_name: str | None = None,
    ) -> logging.LogRecord:
        """Build the record dispatched for an uncaught exception."""
        pathname, lineno = "(unknown file)", 0
        frame_tb = exc_traceback
        while frame_tb is not None and frame_tb.tb_next is not None:
            frame_tb = frame_tb.tb_next
        if frame_tb is not None:
            pathname = frame_tb.tb_frame.f_code.co_filename
            lineno = frame_tb.tb_lineno

        msg = "Uncaught exception %s: %s"
        args: tuple[Any, ...] = (exc_type.__name__, exc_value)
        if thread_name is not None:
            msg = "Uncaught exception %s in thread %s: %s"
            args = (exc_type.__name__, thread_name, exc_value)

        return logging.LogRecord(
            name=self.channel.name,
            level=self.level,
            pathname=pathname,
            lineno=lineno,
            msg=msg,
            args=args,
            exc_info=(exc_type, exc_value, exc_traceback) if exc_value is not None else None,
        )

    def handle_exception(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        """``sys.excepthook`` replacement."""
        if not issubclass(exc_type, KeyboardInterrupt):
            self.channel.handle(self.make_record(exc_type, exc_value, exc_traceback))
        if self._previous_excepthook is not None:
            self._previous_excepthook(exc_type, exc_value, exc_traceback)

    def handle_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        """``threading.excepthook`` replacement."""
        if not issubclass(args.exc_type, SystemExit):
            thread_name = args.thread.name if args.thread is not None else None
            self.channel.handle(self.make_record(args.exc_type, args.exc_value, args.exc_traceback, thread_name))
        if self._previous_threading_excepthook is not None:
            self._previous_threading_excepthook(args)
