"""CLI command: viewport-toggle units -- show the unit conversion maps."""

from __future__ import annotations

import click

from viewport_toggle.config import ToggleOptions


@click.command()
def units() -> None:
    """Print the viewport to container unit mappings."""
    options = ToggleOptions()
    click.echo("Units:")
    for unit, target in options.units.items():
        click.echo(f"  {unit} -> {target}")
    click.echo()
    click.echo("Typography units:")
    for unit, target in options.typography_units.items():
        click.echo(f"  {unit} -> {target}")
