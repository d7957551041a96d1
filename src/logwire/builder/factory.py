"""Public entry point: build channels from a logging document."""

import threading
from pathlib import Path
from typing import Any, Mapping

from logwire.builder.channels import DEFAULT_CHANNEL, ChannelBuilder
from logwire.builder.resolver import ComponentResolver
from logwire.channel import Channel
from logwire.config.loader import load_config
from logwire.config.store import ConfigurationStore
from logwire.errors import ErrorReporter
from logwire.system.config import BuilderSettings, get_settings


class Builder:
    """
    Builds logging channels from a declarative document.

    The document is loaded once, at construction, and never re-read. Channels
    are built lazily on first request and cached for the builder's lifetime.

    Args:
        config_source: Directory (searched for ``logwire.yaml`` then
            ``logwire.dist.yaml``), YAML file path, or parsed mapping.
            If None, uses ``BuilderSettings.config_dir``.
        settings: Builder settings (defaults to the settings singleton)

    Raises:
        ConfigLoadError: If the document cannot be found, parsed or validated

    Example:
        >>> builder = Builder("config")
        >>> channel = builder.get_logger("billing")
        >>> channel is builder.get_logger("billing")
        True
    """

    def __init__(
        self,
        config_source: str | Path | Mapping[str, Any] | None = None,
        settings: BuilderSettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.store = ConfigurationStore(load_config(config_source, self.settings))
        self.reporter = ErrorReporter(self.store.dump)
        self.resolver = ComponentResolver(self.store, handler_namespace=self.settings.handler_namespace)
        self.channels = ChannelBuilder(self.store, self.resolver, self.reporter)
        self._lock = threading.RLock()

    def get_logger(self, name: str = DEFAULT_CHANNEL) -> Channel:
        """
        Get the channel ``name``, building it on first request.

        Args:
            name: Channel name; undeclared names extend ``default``

        Returns:
            Wired channel (the same instance on every call)

        Raises:
            ConfigurationError: On any configuration defect
        """
        with self._lock:
            return self.channels.build(name)

    def channel_names(self) -> list[str]:
        """Names of the channels declared in the document."""
        return self.store.names("channels")
