"""Build command - compile the configured binary when its inputs changed."""

from pathlib import Path

import click

from ... import log
from ...context import pass_context
from ...process import Cmd
from ...rebuild import RebuildStatus, needs_rebuild


def _compile_command(ctx) -> Cmd:
    cfg = ctx.config
    return ctx.array(Cmd).append(cfg.cc, *cfg.cflags, *cfg.sources, "-o", cfg.binary)


@click.command()
@click.option("--clean", is_flag=True, help="Remove the binary instead of building it")
@pass_context
def build(ctx, clean):
    """Compile BINARY from SOURCES when any input is newer.

    Everything comes from nob.json:

    \b
        {"cc": "gcc", "cflags": ["-Wall"], "binary": "main",
         "sources": ["main.c"], "inputs": ["tracks.h", "audio.h"]}
    """
    cfg = ctx.config

    if clean:
        binary = Path(cfg.binary)
        try:
            binary.unlink()
        except FileNotFoundError:
            log.warning(f"Nothing to clean: `{binary}` does not exist")
            return
        except OSError as e:
            log.error(f"Could not remove `{binary}`: {e.strerror or e}")
            raise click.exceptions.Exit(1)
        log.info(f"Removed `{binary}`")
        return

    status = needs_rebuild(cfg.binary, cfg.rebuild_inputs())
    if status is RebuildStatus.ERROR:
        raise click.exceptions.Exit(1)
    if status is RebuildStatus.UP_TO_DATE:
        log.info(f"`{cfg.binary}` is up to date")
        return

    cmd = _compile_command(ctx)
    try:
        if not cmd.run_sync_and_reset():
            raise click.exceptions.Exit(1)
    finally:
        cmd.free()
