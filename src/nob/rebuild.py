"""Staleness checks based on filesystem modification times.

Only whole-second mtimes are compared, the same way ``make`` does it. An input
whose mtime equals the output's counts as up to date.
"""

from __future__ import annotations

import errno
from collections.abc import Iterable
from enum import IntEnum

from . import host, log
from .host import CommandArg


class RebuildStatus(IntEnum):
    ERROR = -1
    UP_TO_DATE = 0
    NEEDED = 1

    def __bool__(self) -> bool:
        # ERROR is falsy despite being -1.
        return self is RebuildStatus.NEEDED


def _reason(e: OSError) -> str:
    return e.strerror or str(e)


def needs_rebuild(output_path: CommandArg, input_paths: Iterable[CommandArg]) -> RebuildStatus:
    """Decide whether ``output_path`` must be regenerated from ``input_paths``.

    Returns ``NEEDED`` when the output does not exist, ``ERROR`` when any input
    is missing or cannot be stat'ed, ``NEEDED`` when any input is strictly
    newer and ``UP_TO_DATE`` otherwise.
    """

    try:
        output_time = host.mtime_seconds(output_path)
    except FileNotFoundError:
        return RebuildStatus.NEEDED
    except OSError as e:
        log.error(f"Could not stat `{output_path}`: {_reason(e)}")
        return RebuildStatus.ERROR

    input_times = []
    for input_path in input_paths:
        try:
            input_times.append(host.mtime_seconds(input_path))
        except OSError as e:
            log.error(f"Could not stat `{input_path}`: {_reason(e)}")
            return RebuildStatus.ERROR

    if any(input_time > output_time for input_time in input_times):
        return RebuildStatus.NEEDED
    return RebuildStatus.UP_TO_DATE


def needs_rebuild1(output_path: CommandArg, input_path: CommandArg) -> RebuildStatus:
    return needs_rebuild(output_path, [input_path])


def file_exists(file_path: CommandArg) -> int:
    """``1`` if the file exists, ``0`` if not, ``-1`` on error (logged)."""

    try:
        host.mtime_seconds(file_path)
    except OSError as e:
        if e.errno == errno.ENOENT:
            return 0
        log.error(f"Could not check if file `{file_path}` exists: {_reason(e)}")
        return -1
    return 1


def rename(old_path: CommandArg, new_path: CommandArg) -> bool:
    log.info(f"Renaming `{old_path}` -> `{new_path}`")
    try:
        host.rename(old_path, new_path)
    except OSError as e:
        log.error(f"Could not rename `{old_path}` to `{new_path}`: {_reason(e)}")
        return False
    return True


__all__ = ["RebuildStatus", "file_exists", "needs_rebuild", "needs_rebuild1", "rename"]
