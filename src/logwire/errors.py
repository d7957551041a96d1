"""
Configuration error taxonomy and reporting.

Every error raised while building a channel is fatal: it propagates unchanged
to the caller of ``Builder.get_logger``. Messages carry the channel active at
the point of failure and a dump of the full loaded document, so a broken
configuration can be diagnosed from the traceback alone.
"""

from typing import Any, NoReturn, Type


class ConfigurationError(Exception):
    """Base exception for logging configuration errors."""

    def __init__(self, message: str, channel: str | None = None, config_dump: str = ""):
        self.channel = channel
        self.config_dump = config_dump
        self.reason = message
        if channel is None:
            super().__init__(message)
        else:
            super().__init__(f"{channel}: {message} config:{config_dump}")


class ConfigLoadError(ConfigurationError):
    """Configuration file missing at every searched path, or unparsable."""

    pass


class MissingDefaultChannel(ConfigurationError):
    """The ``default`` channel is not declared."""

    pass


class CyclicInheritance(ConfigurationError):
    """A channel's ``extends`` chain revisits a channel under construction."""

    pass


class UndefinedReference(ConfigurationError):
    """A named handler/processor reference has no matching definition."""

    pass


class MissingTarget(ConfigurationError):
    """A handler definition supplies neither ``type`` nor ``class``."""

    pass


class ComponentConstructionFailure(ConfigurationError):
    """Constructing a component or applying its setters raised."""

    pass


class ErrorReporter:
    """
    Raises configuration errors annotated with channel and document dump.

    The reporter is stateless with respect to the channel being built: the
    active channel is passed on every call, so recursive resolution can never
    report against a stale channel name.

    Args:
        dump: Callable returning the full document rendered as text
    """

    def __init__(self, dump: Any):
        self._dump = dump

    def fail(
        self,
        channel: str,
        message: str,
        kind: Type[ConfigurationError] = ConfigurationError,
        cause: BaseException | None = None,
    ) -> NoReturn:
        """
        Raise ``kind`` for ``channel``.

        Args:
            channel: Channel under construction
            message: Human-readable description of the defect
            kind: ConfigurationError subclass to raise
            cause: Original exception to chain, if any

        Raises:
            ConfigurationError: Always (the requested subclass)
        """
        error = kind(message, channel=channel, config_dump=self._dump())
        if cause is not None:
            raise error from cause
        raise error
