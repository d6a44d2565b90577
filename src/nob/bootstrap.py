"""Rebuild-yourself bootstrap for compiled build programs.

Call :func:`go_rebuild_urself` first thing in ``main``. When the program's
source is newer than the running binary, the binary is moved aside to
``<binary>.old``, recompiled in place and re-executed with the same arguments;
the current process then exits with the new child's status. When the binary
is current the call returns and the program carries on.

Each transition is a method on :class:`Bootstrap` so the protocol can be
driven and inspected one step at a time::

    CHECK -> BACKUP -> RECOMPILE -> REEXEC  -> EXIT
                                 -> ROLLBACK -> EXIT
    CHECK -> FRESH
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from . import log
from .config import require
from .process import INVALID_PROC, Cmd, exit_status, proc_wait
from .rebuild import RebuildStatus, file_exists, needs_rebuild1, rename

RebuildCommand = Callable[[str, str], Cmd]


class Step(Enum):
    CHECK = "check"
    BACKUP = "backup"
    RECOMPILE = "recompile"
    ROLLBACK = "rollback"
    REEXEC = "reexec"
    FRESH = "fresh"
    EXIT = "exit"


def default_rebuild_command(binary_path: str, source_path: str) -> Cmd:
    """``<cc> -o <binary> <source>`` with the configured compiler."""

    return Cmd().append(require().cc, "-o", binary_path, source_path)


@dataclass
class Bootstrap:
    argv: Sequence[str]
    source_path: str
    rebuild_command: RebuildCommand = default_rebuild_command
    step: Step = Step.CHECK
    exit_code: Optional[int] = None
    backed_up: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if len(self.argv) < 1:
            log.fatal("Bootstrap needs argv[0] to locate the running binary")
        self.argv = [str(arg) for arg in self.argv]

    @property
    def binary_path(self) -> str:
        return self.argv[0]

    @property
    def backup_path(self) -> str:
        return f"{self.binary_path}.old"

    def _exit(self, code: int) -> Step:
        self.exit_code = code
        return Step.EXIT

    def check_staleness(self) -> Step:
        status = needs_rebuild1(self.binary_path, self.source_path)
        if status is RebuildStatus.ERROR:
            return self._exit(1)
        if status is RebuildStatus.NEEDED:
            return Step.BACKUP
        return Step.FRESH

    def backup_binary(self) -> Step:
        exists = file_exists(self.binary_path)
        if exists < 0:
            return self._exit(1)
        if exists == 0:
            log.info(f"No binary at `{self.binary_path}` yet, nothing to back up")
            return Step.RECOMPILE
        if not rename(self.binary_path, self.backup_path):
            return self._exit(1)
        self.backed_up = True
        return Step.RECOMPILE

    def recompile(self) -> Step:
        cmd = self.rebuild_command(self.binary_path, self.source_path)
        succeeded = cmd.run_sync()
        cmd.free()
        return Step.REEXEC if succeeded else Step.ROLLBACK

    def rollback(self) -> Step:
        if self.backed_up:
            rename(self.backup_path, self.binary_path)
        return self._exit(1)

    def reexec(self) -> Step:
        """Run the rebuilt binary with the original arguments and keep its status."""

        proc = Cmd(self.argv).run_async()
        if proc is INVALID_PROC:
            return self._exit(1)
        proc_wait(proc)
        return self._exit(exit_status(proc))

    def advance(self) -> Step:
        """Perform the current step and move to the next one."""

        transitions = {
            Step.CHECK: self.check_staleness,
            Step.BACKUP: self.backup_binary,
            Step.RECOMPILE: self.recompile,
            Step.ROLLBACK: self.rollback,
            Step.REEXEC: self.reexec,
        }
        action = transitions.get(self.step)
        if action is None:
            return self.step
        self.step = action()
        return self.step

    def run(self) -> Step:
        while self.step not in (Step.FRESH, Step.EXIT):
            self.advance()
        return self.step


def go_rebuild_urself(
    argv: Sequence[str],
    source_path: str,
    *,
    rebuild_command: RebuildCommand = default_rebuild_command,
) -> None:
    """Recompile and re-execute the running binary if its source changed.

    Returns only when the binary is already up to date. Otherwise the process
    exits: with the re-executed child's status after a successful rebuild, or
    with 1 after a failed one (the previous binary is restored first).
    """

    bootstrap = Bootstrap(argv, source_path, rebuild_command)
    if bootstrap.run() is Step.EXIT:
        sys.exit(bootstrap.exit_code)


__all__ = ["Bootstrap", "RebuildCommand", "Step", "default_rebuild_command", "go_rebuild_urself"]
