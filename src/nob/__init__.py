"""nob: imperative build orchestration (spawn, staleness, self-rebuild)."""

from .arena import TempArena
from .containers import DynamicArray, FilePaths, StringBuilder
from .process import INVALID_PROC, Cmd, Process, Procs, proc_wait, procs_wait
from .rebuild import RebuildStatus, needs_rebuild, needs_rebuild1
from .sv import StringView

__all__ = [
    "INVALID_PROC",
    "Cmd",
    "DynamicArray",
    "FilePaths",
    "Process",
    "Procs",
    "RebuildStatus",
    "StringBuilder",
    "StringView",
    "TempArena",
    "__version__",
    "needs_rebuild",
    "needs_rebuild1",
    "proc_wait",
    "procs_wait",
]

__version__ = "0.0.1"
