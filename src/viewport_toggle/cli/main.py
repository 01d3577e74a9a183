"""Viewport toggle CLI entry point: Click group with subcommands."""

import click

from viewport_toggle import __version__


@click.group()
@click.version_option(version=__version__, prog_name="viewport-toggle")
def cli() -> None:
    """Viewport toggle - container-query previews of responsive stylesheets."""


# Import and register subcommands
from viewport_toggle.cli.convert import convert  # noqa: E402
from viewport_toggle.cli.units import units  # noqa: E402

cli.add_command(convert)
cli.add_command(units)
