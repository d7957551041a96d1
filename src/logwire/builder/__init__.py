"""
Declarative channel builder.

Exports:
    - Builder: Public entry point (load document, get channels)
    - ChannelBuilder: Channel inheritance, caching and cycle detection
    - ComponentResolver: Handler/processor reference resolution
    - ArgumentBinder: Constructor argument binding
"""

from logwire.builder.binder import ArgumentBinder, BoundArguments
from logwire.builder.channels import DEFAULT_CHANNEL, ChannelBuilder, ChannelState
from logwire.builder.context import ResolutionContext
from logwire.builder.factory import Builder
from logwire.builder.resolver import HANDLER_VARIANTS, ComponentResolver, HandlerVariant, target_name_for_type

__all__ = [
    "Builder",
    "ChannelBuilder",
    "ChannelState",
    "DEFAULT_CHANNEL",
    "ComponentResolver",
    "HandlerVariant",
    "HANDLER_VARIANTS",
    "target_name_for_type",
    "ArgumentBinder",
    "BoundArguments",
    "ResolutionContext",
]
