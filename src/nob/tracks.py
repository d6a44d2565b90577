"""Track lists parsed from timestamp files.

A timestamp file has one track per line::

    0:00\tIntro
    3:41\tSecond song
    1:02:10\tLast one

The time is ``s``, ``m:ss`` or ``h:mm:ss``. Each track ends where the next one
starts; the last track ends at whatever :func:`set_end_time` is given (the
length of the audio file).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel

from .arena import TempArena
from .containers import DynamicArray, StringBuilder
from .fs import read_entire_file
from .host import CommandArg
from .sv import StringView

SEC60 = 60
TIMESTAMPS_FOLDER = "timestamps"


class Track(BaseModel):
    title: str
    start: int
    stop: int = 0


class Tracks(DynamicArray[Track]):
    def get_inbound(self, index: int) -> Optional[Track]:
        return self[index] if 0 <= index < self.count else None

    def first(self) -> Optional[Track]:
        return self[0] if self.count else None

    def last(self) -> Optional[Track]:
        return self[self.count - 1] if self.count else None


def _atoi(text: str) -> int:
    text = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ("0" <= ch <= "9"):
            break
        digits += ch
    return sign * int(digits) if digits else 0


def seconds_from_time(time: StringView, arena: TempArena) -> int:
    """Parse up to three ``:``-separated fields, most significant first."""

    values = []
    while len(values) < 3 and time.count:
        field = time.chop_by_delim(":")
        values.append(max(_atoi(arena.sv_to_cstr(field)), 0))

    seconds = 0
    for value in values:
        seconds = seconds * SEC60 + value
    return seconds


def time_from_seconds(seconds: int) -> str:
    minutes, secs = divmod(seconds, SEC60)
    if minutes >= SEC60:
        hours, minutes = divmod(minutes, SEC60)
        return "%d:%02d:%02d" % (hours, minutes, secs)
    return "%d:%02d" % (minutes, secs)


def read_tracks(timestamp_file: CommandArg, arena: TempArena, tracks: Tracks) -> bool:
    """Append the tracks listed in ``timestamp_file``; False if it cannot be read."""

    sb = StringBuilder()
    if not read_entire_file(timestamp_file, sb):
        return False

    checkpoint = arena.save()
    try:
        sv = sb.to_sv()
        while sv.count:
            line = sv.chop_by_delim("\n").trim_right()
            if not line.trim():
                continue
            time = line.chop_by_delim("\t")
            tracks.append(Track(title=str(line.trim()), start=seconds_from_time(time.trim(), arena)))
    finally:
        arena.rewind(checkpoint)
        sb.free()

    for prev, nxt in zip(list(tracks), list(tracks)[1:]):
        prev.stop = nxt.start
    return True


def set_end_time(tracks: Tracks, seconds: int) -> bool:
    last = tracks.last()
    if last is None:
        return False
    last.stop = seconds
    return True


def timestamp_path_for(music_file: CommandArg, mapping: Mapping[str, str]) -> Optional[Path]:
    """``<music dir>/../timestamps/<mapped name>``, or None for unknown music."""

    music = Path(os.fspath(music_file)).absolute()
    name = mapping.get(music.name)
    if name is None:
        return None
    return music.parent.parent / TIMESTAMPS_FOLDER / name


__all__ = [
    "Track",
    "Tracks",
    "read_tracks",
    "seconds_from_time",
    "set_end_time",
    "time_from_seconds",
    "timestamp_path_for",
]
