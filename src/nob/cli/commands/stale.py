"""Stale command - report whether an output needs rebuilding."""

import click

from ...rebuild import RebuildStatus, needs_rebuild

_EXIT_CODES = {
    RebuildStatus.UP_TO_DATE: 0,
    RebuildStatus.NEEDED: 1,
    RebuildStatus.ERROR: 2,
}


@click.command()
@click.argument("output")
@click.argument("inputs", nargs=-1, required=True)
def stale(output, inputs):
    """Compare OUTPUT's mtime against INPUTS.

    Prints ``up-to-date`` (exit 0) or ``needed`` (exit 1). A missing or
    unreadable input exits 2.
    """
    status = needs_rebuild(output, inputs)
    if status is RebuildStatus.UP_TO_DATE:
        click.echo("up-to-date")
    elif status is RebuildStatus.NEEDED:
        click.echo("needed")
    raise click.exceptions.Exit(_EXIT_CODES[status])
