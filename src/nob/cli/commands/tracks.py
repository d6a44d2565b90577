"""Tracks command - list the tracks of a timestamp file."""

from pathlib import Path

import click

from ... import log
from ...context import pass_context
from ...tracks import Tracks, read_tracks, set_end_time, time_from_seconds, timestamp_path_for


@click.command()
@click.argument("path", type=click.Path())
@click.option("--length", type=int, help="Total length in seconds (end of the last track)")
@click.option("--index", type=int, help="Select one track by index")
@pass_context
def tracks(ctx, path, length, index):
    """List tracks from PATH.

    PATH is a timestamp file, or a known music file whose timestamps live in
    ``../timestamps/`` next to its folder.
    """
    timestamp_file = timestamp_path_for(path, ctx.config.timestamps) or Path(path)

    result = ctx.array(Tracks)
    if not read_tracks(timestamp_file, ctx.arena, result):
        raise click.exceptions.Exit(1)
    if length is not None:
        set_end_time(result, length)

    if index is not None:
        track = result.get_inbound(index)
        if track is None:
            log.error(f"No track {index}: `{timestamp_file}` has {len(result)} tracks")
            raise click.exceptions.Exit(1)
        log.info(f"Selected song {index}: `{track.title}`")
        return

    for i, track in enumerate(result):
        click.echo(
            f"{i} : `{track.title}` {time_from_seconds(track.start)}-{time_from_seconds(track.stop)}"
        )
