"""Host operating system boundary.

Everything platform-specific lives here: spawning and reaping children,
reading modification times and renaming files. The orchestration modules call
these functions and never branch on the platform themselves.
"""

from __future__ import annotations

import os
import signal
import subprocess
from collections.abc import Sequence
from typing import Any

CommandArg = str | os.PathLike[str]


def normalize_command(cmd: Sequence[CommandArg]) -> list[str]:
    """Validate and normalize subprocess command arguments."""
    if not cmd:
        msg = "Command must include at least one argument"
        raise ValueError(msg)

    normalized: list[str] = []
    for arg in cmd:
        if isinstance(arg, os.PathLike):
            value = os.fspath(arg)
        elif isinstance(arg, str):
            value = arg
        else:
            msg = "Command arguments must be strings or os.PathLike"
            raise TypeError(msg)
        normalized.append(value)

    return normalized


def spawn(cmd: Sequence[CommandArg], **kwargs: Any) -> subprocess.Popen[Any]:
    """Start ``cmd`` without waiting for it.

    The child inherits stdin, stdout and stderr unless ``kwargs`` says
    otherwise. Raises ``OSError`` when the program cannot be started.
    """
    normalized_cmd = normalize_command(cmd)
    return subprocess.Popen(normalized_cmd, **kwargs)  # noqa: S603


def wait(child: subprocess.Popen[Any]) -> int:
    """Block until ``child`` exits; return its exit code.

    Negative values mean the child was killed by that signal number.
    """
    return child.wait()


def describe_signal(signum: int) -> str:
    description = signal.strsignal(signum) if hasattr(signal, "strsignal") else None
    if description:
        return description
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def mtime_seconds(path: CommandArg) -> int:
    """Whole-second modification time of ``path``; raises ``OSError``."""
    return int(os.stat(path).st_mtime)


def rename(old_path: CommandArg, new_path: CommandArg) -> None:
    """Rename, replacing ``new_path`` if it exists; raises ``OSError``."""
    os.replace(old_path, new_path)


__all__ = [
    "CommandArg",
    "describe_signal",
    "mtime_seconds",
    "normalize_command",
    "rename",
    "spawn",
    "wait",
]
