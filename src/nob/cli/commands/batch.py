"""Batch command - start several programs, then wait for all of them."""

import shlex

import click

from ... import log
from ...context import pass_context
from ...process import Cmd, Procs, procs_wait


@click.command()
@click.argument("commands", nargs=-1, required=True)
@pass_context
def batch(ctx, commands):
    """Start every COMMAND (a shell-quoted string) and wait for all.

    Exits 1 if any command fails; every child is still waited for.

    \b
        nob batch "cc -c a.c" "cc -c b.c"
    """
    procs = ctx.array(Procs)
    cmd = ctx.array(Cmd)
    for command in commands:
        try:
            argv = shlex.split(command)
        except ValueError as e:
            log.error(f"Could not parse command `{command}`: {e}")
            argv = []
        procs.append(cmd.append(*argv).run_async_and_reset())
    cmd.free()

    if not procs_wait(procs):
        raise click.exceptions.Exit(1)
