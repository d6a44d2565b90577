"""Copy command - recursive file/directory copy."""

import click

from ...context import pass_context
from ...fs import copy_directory_recursively


@click.command()
@click.argument("src", type=click.Path())
@click.argument("dst", type=click.Path())
@pass_context
def copy(ctx, src, dst):
    """Copy SRC to DST, recursing into directories (symlinks are skipped)."""
    if not copy_directory_recursively(src, dst, ctx.arena, init_cap=ctx.init_cap):
        raise click.exceptions.Exit(1)
