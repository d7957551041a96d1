"""Options shared by CLI commands."""

from pathlib import Path
from typing import Optional

import click

from logwire.system import LoggerFactory, LoggingConfig

config_option = click.option(
    "--config",
    "-c",
    "config_source",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Logging document or directory holding logwire.yaml / logwire.dist.yaml",
)

log_level_option = click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Show logwire diagnostics (DEBUG shows every constructed component)",
)


def configure_diagnostics(log_level: Optional[str]) -> None:
    """Enable builder diagnostics when ``--log-level`` is given."""
    if log_level:
        LoggerFactory.configure(LoggingConfig(level=log_level.upper()))
