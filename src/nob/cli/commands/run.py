"""Run command - execute one program and wait for it."""

import click

from ...context import pass_context
from ...process import Cmd


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.argument("argv", nargs=-1, required=True, type=click.UNPROCESSED)
@pass_context
def run(ctx, argv):
    """Run ARGV synchronously; exit 1 if it fails.

    Use ``--`` before the program when its arguments start with ``-``:

    \b
        nob run -- cc --version
    """
    cmd = ctx.array(Cmd, argv)
    ok = cmd.run_sync_and_reset()
    cmd.free()
    if not ok:
        raise click.exceptions.Exit(1)
