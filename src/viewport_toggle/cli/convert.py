"""CLI command: viewport-toggle convert -- transform a stylesheet."""

from __future__ import annotations

import logging
import sys

import click

from viewport_toggle.config import DEFAULT_MODIFIER_ATTR, DEFAULT_UNITS, ToggleOptions
from viewport_toggle.parser import ParseError, parse_css
from viewport_toggle.transforms import ViewportToContainerToggle


def _parse_units(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str] | None:
    """Turn ``--unit vw=cqw`` pairs into overrides of the default unit map."""
    if not value:
        return None
    units = dict(DEFAULT_UNITS)
    for pair in value:
        unit, sep, target = pair.partition("=")
        if not sep or not unit.strip() or not target.strip():
            raise click.BadParameter(f"expected FROM=TO, got {pair!r}", ctx=ctx, param=param)
        units[unit.strip()] = target.strip()
    return units


@click.command()
@click.argument("input_file", metavar="INPUT", type=click.File("r", encoding="utf-8"))
@click.option(
    "-o",
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Where to write the result (default: stdout)",
)
@click.option("--container-el", default="body", help="Container element selector")
@click.option(
    "--modifier-attr",
    default=DEFAULT_MODIFIER_ATTR,
    help="Attribute that switches on preview mode",
)
@click.option(
    "--unit",
    "units",
    multiple=True,
    callback=_parse_units,
    help="Override a unit mapping, e.g. --unit vw=cqi (repeatable)",
)
@click.option("--debug/--no-debug", default=False, help="Log processing details")
@click.option("--debug-filter", default=None, help="Only log nodes from matching files")
def convert(
    input_file,
    output,
    container_el: str,
    modifier_attr: str,
    units: dict[str, str] | None,
    debug: bool,
    debug_filter: str | None,
) -> None:
    """Add container-query variants to the stylesheet INPUT ('-' for stdin)."""
    if debug:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    overrides: dict[str, object] = {
        "container_el": container_el,
        "modifier_attr": modifier_attr,
        "debug": debug,
        "debug_filter": debug_filter,
    }
    if units is not None:
        overrides["units"] = units

    try:
        options = ToggleOptions.resolve(overrides)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    source = None if input_file.name == "<stdin>" else input_file.name
    try:
        root = parse_css(input_file.read(), source=source)
    except ParseError as exc:
        location = f" ({exc.location})" if exc.location else ""
        click.echo(f"Parse error{location}: {exc}", err=True)
        sys.exit(1)

    ViewportToContainerToggle(options).apply(root)
    output.write(root.to_css() + "\n")
