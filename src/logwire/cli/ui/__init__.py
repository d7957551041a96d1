"""Rich output helpers for the CLI."""

from logwire.cli.ui.formatters import create_channel_table, describe_component

__all__ = ["create_channel_table", "describe_component"]
