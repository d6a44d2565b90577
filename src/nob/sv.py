"""Borrowed byte slices with split and trim helpers.

A :class:`StringView` never owns its bytes. It stays valid only while the
storage it was taken from (a :class:`~nob.containers.StringBuilder`, a
``bytes`` object, an arena block) is left unmodified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .arena import TempArena

# C-locale isspace()
_WHITESPACE = frozenset(b" \t\n\v\f\r")

Delim = Union[str, bytes, int]


def _delim_byte(delim: Delim) -> int:
    if isinstance(delim, int):
        return delim
    raw = delim.encode("utf-8") if isinstance(delim, str) else delim
    if len(raw) != 1:
        raise ValueError(f"delimiter must be a single byte, got {delim!r}")
    return raw[0]


def _as_view(value: StringView | str | bytes) -> StringView:
    if isinstance(value, StringView):
        return value
    return StringView.from_cstr(value)


class StringView:
    """A ``(items, count)`` pair over externally owned bytes."""

    __slots__ = ("items",)

    def __init__(self, items: bytes | bytearray | memoryview = b""):
        self.items = items if isinstance(items, memoryview) else memoryview(items)

    @classmethod
    def from_cstr(cls, cstr: str | bytes) -> StringView:
        data = cstr.encode("utf-8") if isinstance(cstr, str) else cstr
        end = data.find(b"\0")
        return cls(data if end < 0 else data[:end])

    @classmethod
    def from_parts(cls, data: bytes | bytearray | memoryview, count: int) -> StringView:
        return cls(memoryview(data)[:count])

    @property
    def count(self) -> int:
        return len(self.items)

    def chop_by_delim(self, delim: Delim) -> StringView:
        """Return the part before ``delim`` and advance past it.

        Without a delimiter the whole view is returned and ``self`` is left
        empty.
        """

        i = self.items.tobytes().find(_delim_byte(delim))
        if i < 0:
            result, self.items = self.items, self.items[len(self.items) :]
            return StringView(result)
        result = self.items[:i]
        self.items = self.items[i + 1 :]
        return StringView(result)

    def rchop_by_delim(self, delim: Delim) -> StringView:
        """Return the part after the last ``delim`` and cut it off, delimiter included."""

        i = self.items.tobytes().rfind(_delim_byte(delim))
        if i < 0:
            result, self.items = self.items, self.items[:0]
            return StringView(result)
        result = self.items[i + 1 :]
        self.items = self.items[:i]
        return StringView(result)

    def trim_left(self) -> StringView:
        i = 0
        while i < self.count and self.items[i] in _WHITESPACE:
            i += 1
        return StringView(self.items[i:])

    def trim_right(self) -> StringView:
        end = self.count
        while end > 0 and self.items[end - 1] in _WHITESPACE:
            end -= 1
        return StringView(self.items[:end])

    def trim(self) -> StringView:
        return self.trim_left().trim_right()

    def eq(self, other: StringView | str | bytes) -> bool:
        other = _as_view(other)
        if self.count != other.count:
            return False
        return self.items == other.items

    def starts_with(self, prefix: StringView | str | bytes) -> bool:
        prefix = _as_view(prefix)
        if prefix.count > self.count:
            return False
        return StringView(self.items[: prefix.count]).eq(prefix)

    def ends_with(self, suffix: StringView | str | bytes) -> bool:
        suffix = _as_view(suffix)
        if suffix.count > self.count:
            return False
        return StringView(self.items[self.count - suffix.count :]).eq(suffix)

    def to_cstr(self, arena: TempArena) -> str:
        """Copy into ``arena`` as a NUL-terminated string."""

        return arena.sv_to_cstr(self)

    def tobytes(self) -> bytes:
        return self.items.tobytes()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (StringView, str, bytes)):
            return self.eq(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return self.count > 0

    def __str__(self) -> str:
        return self.items.tobytes().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"StringView({self.tobytes()!r})"


__all__ = ["StringView"]
