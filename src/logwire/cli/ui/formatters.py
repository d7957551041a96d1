"""Rich table formatters for CLI output."""

import inspect
from typing import Any

from rich.table import Table

from logwire.channel import Channel
from logwire.levels import level_name


def describe_component(component: Any) -> str:
    """Qualified class name of a handler or processor (function name for plain functions)."""
    target = component if inspect.isroutine(component) else type(component)
    module = getattr(target, "__module__", "")
    name = getattr(target, "__qualname__", repr(target))
    return f"{module}.{name}" if module else name


def create_channel_table(channel: Channel) -> Table:
    """
    Create a Rich table listing a channel's chain in order.

    Args:
        channel: Built channel

    Returns:
        Configured Rich Table
    """
    table = Table(title=f"Channel {channel.name}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Component", style="white")
    table.add_column("Level", style="magenta")
    table.add_column("Bubble", style="yellow")

    for index, handler in enumerate(channel.handlers, start=1):
        level = getattr(handler, "level", None)
        bubble = getattr(handler, "bubble", None)
        table.add_row(
            str(index),
            "handler",
            describe_component(handler),
            level_name(level) if isinstance(level, int) else "-",
            "-" if bubble is None else str(bubble).lower(),
        )

    for index, processor in enumerate(channel.processors, start=1):
        table.add_row(str(index), "processor", describe_component(processor), "-", "-")

    return table
