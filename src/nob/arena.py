"""Fixed-capacity bump allocator for short-lived scratch data.

Blocks are never freed one by one. Take a checkpoint with :meth:`TempArena.save`
and hand it back to :meth:`TempArena.rewind` to drop everything allocated since,
or call :meth:`TempArena.reset` to drop everything. Blocks handed out before a
rewind are not cleared; they simply get overwritten by later allocations.

An arena has a single mutable cursor and no locking. Give each thread its own
instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import log
from .errors import ArenaOverflowError

if TYPE_CHECKING:
    from .sv import StringView

TEMP_CAPACITY = 8 * 1024


class TempArena:
    def __init__(self, capacity: int = TEMP_CAPACITY):
        if capacity <= 0:
            raise ValueError("arena capacity must be positive")
        self.capacity = capacity
        self.size = 0
        self._buffer = bytearray(capacity)
        self._view = memoryview(self._buffer)

    def alloc(self, size: int) -> memoryview | None:
        """Return ``size`` writable bytes, or None if the arena is full."""

        if size < 0:
            raise ValueError("allocation size must not be negative")
        if self.size + size > self.capacity:
            return None
        block = self._view[self.size : self.size + size]
        self.size += size
        return block

    def save(self) -> int:
        return self.size

    def rewind(self, checkpoint: int) -> None:
        if not 0 <= checkpoint <= self.capacity:
            log.fatal(f"Invalid arena checkpoint {checkpoint}")
        self.size = checkpoint

    def reset(self) -> None:
        self.rewind(0)

    def _store_cstr(self, data: bytes, hint: str) -> str:
        block = self.alloc(len(data) + 1)
        if block is None:
            log.fatal(
                f"Temporary arena exhausted ({self.capacity} bytes): {hint}",
                ArenaOverflowError,
            )
        block[: len(data)] = data
        block[len(data)] = 0
        return block[: len(data)].tobytes().decode("utf-8", errors="replace")

    def strdup(self, cstr: str | bytes) -> str:
        """Copy ``cstr`` (up to its first NUL) into the arena."""

        data = cstr.encode("utf-8") if isinstance(cstr, str) else bytes(cstr)
        end = data.find(b"\0")
        return self._store_cstr(data if end < 0 else data[:end], "increase temp_capacity")

    def sprintf(self, fmt: str, *args: Any) -> str:
        """printf-style formatting into the arena."""

        return self._store_cstr((fmt % args).encode("utf-8"), "extend the temporary allocator")

    def sv_to_cstr(self, sv: StringView) -> str:
        return self._store_cstr(sv.tobytes(), "extend the temporary allocator")

    def __repr__(self) -> str:
        return f"TempArena(size={self.size}, capacity={self.capacity})"


_TEMP: TempArena | None = None


def temp() -> TempArena:
    """Process-wide arena for single-threaded command-line use."""

    global _TEMP
    if _TEMP is None:
        from .config import require

        _TEMP = TempArena(require().temp_capacity)
    return _TEMP


def reset_temp() -> None:
    """Drop the process-wide arena; the next :func:`temp` call re-sizes it from config."""

    global _TEMP
    _TEMP = None


__all__ = ["TEMP_CAPACITY", "TempArena", "reset_temp", "temp"]
