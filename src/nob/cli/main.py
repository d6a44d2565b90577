"""nob CLI main entry point with global options."""

import click

from .. import config, log
from ..arena import reset_temp, temp
from ..context import NobContext


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to nob.json (overrides $NOB_CONFIG)",
)
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics")
@click.option("--verbose", is_flag=True, help="Log every file operation")
@click.pass_context
def cli(ctx, config_path, no_color, verbose):
    """nob - build orchestration without a build system."""
    ctx.ensure_object(NobContext)

    try:
        cfg = config.use(config_path)
    except (OSError, ValueError) as e:
        click.echo(f"Error: could not load config: {e}", err=True)
        ctx.exit(1)

    log.configure(color=cfg.color_log and not no_color, verbose=cfg.verbose or verbose)
    ctx.obj.config = cfg
    reset_temp()
    ctx.obj.arena = temp()


# Register commands at module level so tests can import cli with commands attached
from .commands.batch import batch
from .commands.build import build
from .commands.copy import copy
from .commands.launch import launch
from .commands.run import run
from .commands.stale import stale
from .commands.tracks import tracks

cli.add_command(build)
cli.add_command(stale)
cli.add_command(run)
cli.add_command(batch)
cli.add_command(copy)
cli.add_command(launch)
cli.add_command(tracks)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
