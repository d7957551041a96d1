"""
Channel building.

Resolves a channel name into a fully wired :class:`~logwire.channel.Channel`:

1. A channel already built by this builder is returned from the cache.
2. A channel still being built means its ``extends`` chain loops back to it:
   ``CyclicInheritance``.
3. An undeclared name is built as ``{extends: default}``; an undeclared
   ``default`` is fatal.
4. A channel with ``extends`` is derived from its built parent by renaming,
   so it shares the parent's handler and processor instances and appends its
   own after them.
5. Channel options apply next (``use_microseconds``, then
   ``register_error_handler``), then handlers and processors in declared order.

A failed build leaves nothing cached and withdraws the error sink it
registered; the next request starts from scratch.
"""

from enum import Enum
from typing import Any, Callable, Mapping

import structlog

from logwire.builder.context import ResolutionContext
from logwire.builder.resolver import ComponentResolver
from logwire.channel import Channel
from logwire.config.store import ConfigurationStore
from logwire.error_handler import ErrorHandler
from logwire.errors import CyclicInheritance, ErrorReporter, MissingDefaultChannel

logger = structlog.get_logger()

DEFAULT_CHANNEL = "default"


class ChannelState(Enum):
    """Build state of a channel name within one builder."""

    UNVISITED = "unvisited"
    BUILDING = "building"
    BUILT = "built"


class ChannelBuilder:
    """
    Builds and caches channels.

    Not thread-safe: the state map and cache are shared mutable state.
    :class:`~logwire.builder.factory.Builder` serializes access.

    Args:
        store: Configuration store
        resolver: Handler and processor resolver
        reporter: Error reporter
        register_error_handler: Installs a channel as the process-wide error sink
    """

    def __init__(
        self,
        store: ConfigurationStore,
        resolver: ComponentResolver,
        reporter: ErrorReporter,
        register_error_handler: Callable[[Channel], Any] = ErrorHandler.register,
    ):
        self.store = store
        self.resolver = resolver
        self.reporter = reporter
        self._register_error_handler = register_error_handler
        self._states: dict[str, ChannelState] = {}
        self._built: dict[str, Channel] = {}
        self.error_handlers: list[Any] = []

    def state(self, name: str) -> ChannelState:
        """Current build state of ``name``."""
        return self._states.get(name, ChannelState.UNVISITED)

    def build(self, name: str = DEFAULT_CHANNEL) -> Channel:
        """
        Build (or fetch from cache) the channel ``name``.

        Args:
            name: Channel name

        Returns:
            Wired channel

        Raises:
            MissingDefaultChannel: If ``default`` is not declared
            CyclicInheritance: If the ``extends`` chain loops
            ConfigurationError: Any component resolution error
        """
        state = self.state(name)
        if state is ChannelState.BUILT:
            logger.debug("channel.cache_hit", channel=name)
            return self._built[name]
        if state is ChannelState.BUILDING:
            self.reporter.fail(
                name,
                f"channel '{name}' extends itself through its inheritance chain",
                CyclicInheritance,
            )

        if not self.store.has("channels", DEFAULT_CHANNEL):
            self.reporter.fail(name, f"channel '{DEFAULT_CHANNEL}' is not defined", MissingDefaultChannel)

        self._states[name] = ChannelState.BUILDING
        try:
            channel = self._build(name)
        except BaseException:
            self._states.pop(name, None)
            raise

        self._built[name] = channel
        self._states[name] = ChannelState.BUILT
        logger.debug(
            "channel.built",
            channel=name,
            handlers=len(channel.handlers),
            processors=len(channel.processors),
        )
        return channel

    def channel_definition(self, name: str) -> Mapping[str, Any]:
        """Definition for ``name``, synthesizing ``{extends: default}`` for undeclared names."""
        definition = self.store.lookup("channels", name)
        if definition is not None:
            return definition
        if name == DEFAULT_CHANNEL:
            self.reporter.fail(name, f"channel '{DEFAULT_CHANNEL}' is not defined", MissingDefaultChannel)
        logger.debug("channel.synthesized", channel=name, extends=DEFAULT_CHANNEL)
        return {"extends": DEFAULT_CHANNEL}

    def _build(self, name: str) -> Channel:
        definition = self.channel_definition(name)

        parent = definition.get("extends")
        if parent:
            channel = self.build(str(parent)).with_name(name)
        else:
            channel = Channel(name)

        if "use_microseconds" in definition:
            channel.use_microsecond_timestamps(definition["use_microseconds"])
        error_handler = None
        if definition.get("register_error_handler"):
            error_handler = self._register_error_handler(channel)
            self.error_handlers.append(error_handler)

        context = ResolutionContext(channel=name, reporter=self.reporter)
        try:
            for ref in definition.get("handlers") or ():
                channel.push_handler(self.resolver.resolve_handler(ref, context))
            for ref in definition.get("processors") or ():
                channel.push_processor(self.resolver.resolve_processor(ref, context))
        except BaseException:
            if error_handler is not None:
                self._unregister(error_handler, name)
            raise

        return channel

    def _unregister(self, error_handler: Any, name: str) -> None:
        """Withdraw an error sink registered by a build that failed."""
        self.error_handlers.remove(error_handler)
        if hasattr(error_handler, "restore"):
            error_handler.restore()
        logger.debug("error_handler.withdrawn", channel=name)
