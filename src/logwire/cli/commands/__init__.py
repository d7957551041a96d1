"""CLI commands."""

from logwire.cli.commands.check import check_command
from logwire.cli.commands.show import show_command

__all__ = ["check_command", "show_command"]
