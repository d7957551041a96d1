"""Channel display command."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from logwire.builder import Builder
from logwire.cli.commands.options import config_option, configure_diagnostics, log_level_option
from logwire.cli.ui.formatters import create_channel_table
from logwire.errors import ConfigurationError

console = Console()


@click.command("show")
@config_option
@log_level_option
@click.argument("channel", default="default")
def show_command(config_source: Optional[Path], log_level: Optional[str], channel: str):
    """
    Show the handler and processor chain of CHANNEL.

    \b
    Examples:
        logwire show --config config billing
    """
    configure_diagnostics(log_level)

    try:
        built = Builder(config_source).get_logger(channel)
    except ConfigurationError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    console.print(create_channel_table(built))
