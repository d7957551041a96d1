"""logwire CLI main entry point."""

import click

from logwire import __version__
from logwire.cli.commands import check_command, show_command


@click.group()
@click.version_option(version=__version__)
def main():
    """logwire - Declarative logging channel builder"""
    pass


# Register commands
main.add_command(check_command)
main.add_command(show_command)


if __name__ == "__main__":
    main()
