"""Commands and child processes.

A :class:`Cmd` is built up with :meth:`Cmd.append` and started with
:meth:`Cmd.run_async` (returns a :class:`Process`) or :meth:`Cmd.run_sync`
(waits for it). Several ``run_async`` calls followed by :func:`procs_wait` is
the only way to run children concurrently; there is no scheduler, timeout or
cancellation.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from typing import Any, Optional

from . import host, log
from .containers import DynamicArray
from .host import CommandArg


class Process:
    """Handle to a spawned child; :data:`INVALID_PROC` means none was started."""

    __slots__ = ("_child", "returncode")

    def __init__(self, child: Optional[subprocess.Popen[Any]] = None):
        self._child = child
        self.returncode: Optional[int] = None

    @property
    def valid(self) -> bool:
        return self._child is not None

    @property
    def pid(self) -> Optional[int]:
        return self._child.pid if self._child is not None else None

    @property
    def reaped(self) -> bool:
        return self.returncode is not None

    def __repr__(self) -> str:
        if not self.valid:
            return "Process(invalid)"
        return f"Process(pid={self.pid}, returncode={self.returncode})"


INVALID_PROC = Process()


class Procs(DynamicArray[Process]):
    """Handles collected for a batch wait."""


def proc_wait(proc: Process) -> bool:
    """Wait for ``proc``; True only for a normal exit with status 0."""

    if proc._child is None:
        return False

    try:
        returncode = host.wait(proc._child)
    except OSError as e:
        log.error(f"Could not wait on command (pid {proc.pid}): {e.strerror or e}")
        return False
    proc.returncode = returncode

    if returncode < 0:
        log.error(f"Command process was terminated by {host.describe_signal(-returncode)}")
        return False
    if returncode != 0:
        log.error(f"Command exited with exit code {returncode}")
        return False
    return True


def exit_status(proc: Process) -> int:
    """Shell-style exit status: the exit code, or 128 + signal number."""

    if proc.returncode is None:
        return 1
    if proc.returncode < 0:
        return 128 - proc.returncode
    return proc.returncode


def procs_wait(procs: Iterable[Process]) -> bool:
    """Wait for every handle, even after a failure, and AND the results."""

    success = True
    for proc in procs:
        success = proc_wait(proc) and success
    return success


class Cmd(DynamicArray[CommandArg]):
    """Ordered argument list for one external program invocation.

    The command only holds references to its arguments.
    """

    def append(self, *args: CommandArg) -> Cmd:  # type: ignore[override]
        """Append one or more arguments and return the command for chaining."""

        super().extend(args)
        return self

    def argv(self) -> list[str]:
        return host.normalize_command(list(self)) if self.count else []

    def render(self) -> str:
        """Space-joined form for logs; arguments with spaces get single quotes."""

        parts = []
        for arg in self:
            text = str(arg)
            parts.append(f"'{text}'" if " " in text else text)
        return " ".join(parts)

    def run_async(self, **kwargs: Any) -> Process:
        if self.count < 1:
            log.error("Could not run empty command")
            return INVALID_PROC

        log.info(f"CMD: {self.render()}")

        try:
            child = host.spawn(list(self), **kwargs)
        except (OSError, TypeError, ValueError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            log.error(f"Could not start child process `{self[0]}`: {reason}")
            return INVALID_PROC
        return Process(child)

    def run_async_and_reset(self, **kwargs: Any) -> Process:
        proc = self.run_async(**kwargs)
        self.reset()
        return proc

    def run_sync(self, **kwargs: Any) -> bool:
        proc = self.run_async(**kwargs)
        if proc is INVALID_PROC:
            return False
        return proc_wait(proc)

    def run_sync_and_reset(self, **kwargs: Any) -> bool:
        """Run synchronously, then clear the arguments so the command can be reused."""

        result = self.run_sync(**kwargs)
        self.reset()
        return result

    def __str__(self) -> str:
        return self.render()


__all__ = ["INVALID_PROC", "Cmd", "Process", "Procs", "exit_status", "proc_wait", "procs_wait"]
