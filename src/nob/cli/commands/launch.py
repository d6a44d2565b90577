"""Launch command - rebuild a program from source if stale, then run it."""

import os

import click

from ...bootstrap import Bootstrap, Step
from ...process import INVALID_PROC, Cmd, exit_status, proc_wait


def _runnable_path(binary: str) -> str:
    # A bare name would be looked up on PATH instead of the working directory.
    if os.sep in binary or (os.altsep and os.altsep in binary):
        return binary
    return os.path.join(os.curdir, binary)


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.argument("source", type=click.Path())
@click.argument("binary", type=click.Path())
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def launch(source, binary, args):
    """Run BINARY with ARGS, recompiling it from SOURCE first if needed.

    A rebuild moves the old binary to BINARY.old and restores it if the
    compiler fails. The exit status is BINARY's own.
    """
    argv = [_runnable_path(binary), *args]
    bootstrap = Bootstrap(argv, source)
    if bootstrap.run() is Step.EXIT:
        raise click.exceptions.Exit(bootstrap.exit_code)

    proc = Cmd(argv).run_async()
    if proc is INVALID_PROC:
        raise click.exceptions.Exit(1)
    proc_wait(proc)
    raise click.exceptions.Exit(exit_status(proc))
