"""Configuration check command."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from logwire.builder import Builder
from logwire.cli.commands.options import config_option, configure_diagnostics, log_level_option
from logwire.errors import ConfigurationError

console = Console()


@click.command("check")
@config_option
@log_level_option
@click.argument("channels", nargs=-1)
def check_command(config_source: Optional[Path], log_level: Optional[str], channels: tuple[str, ...]):
    """
    Build channels and report the first configuration error.

    Builds every declared channel unless CHANNELS are given. Exits with
    status 1 on the first error.

    \b
    Examples:
        logwire check --config config
        logwire check -c config/logwire.yaml default billing
    """
    configure_diagnostics(log_level)

    try:
        builder = Builder(config_source)
        names = list(channels) or builder.channel_names()
        for name in names:
            channel = builder.get_logger(name)
            console.print(
                f"[green]✓[/green] {name}: {len(channel.handlers)} handler(s), {len(channel.processors)} processor(s)"
            )
    except ConfigurationError as e:
        console.print(f"[red]✗ {type(e).__name__}[/red]", highlight=False)
        click.echo(str(e), err=True)
        sys.exit(1)
