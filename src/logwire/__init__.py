"""
logwire - Declarative logging channel builder

Public API for building wired logging channels from a YAML document.

Usage:
    >>> from logwire import Builder
    >>> builder = Builder("config")
    >>> channel = builder.get_logger("billing")
"""

from importlib.metadata import version

from logwire.builder.factory import Builder
from logwire.channel import Channel
from logwire.errors import (
    ComponentConstructionFailure,
    ConfigLoadError,
    ConfigurationError,
    CyclicInheritance,
    MissingDefaultChannel,
    MissingTarget,
    UndefinedReference,
)

try:
    __version__ = version("logwire")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
    "Builder",
    "Channel",
    "ConfigurationError",
    "ConfigLoadError",
    "MissingDefaultChannel",
    "CyclicInheritance",
    "UndefinedReference",
    "MissingTarget",
    "ComponentConstructionFailure",
]
