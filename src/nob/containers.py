"""Growable sequences with explicit count and capacity.

Storage is preallocated in geometric steps so that ``append`` is amortized
O(1) and capacity is observable. Nothing here ever shrinks capacity; only
``free`` releases the backing storage.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .sv import StringView

DA_INIT_CAP = 256

T = TypeVar("T")


def _grown_capacity(capacity: int, needed: int, init_cap: int) -> int:
    capacity = capacity or init_cap
    while needed > capacity:
        capacity *= 2
    return capacity


class DynamicArray(Generic[T]):
    """Ordered items backed by a list of ``capacity`` slots."""

    def __init__(self, items: Iterable[T] = (), *, init_cap: int = DA_INIT_CAP):
        if init_cap <= 0:
            raise ValueError("init_cap must be positive")
        self.init_cap = init_cap
        self.items: list[T | None] = []
        self.count = 0
        self.capacity = 0
        self.extend(items)

    def _reserve(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        new_capacity = _grown_capacity(self.capacity, needed, self.init_cap)
        # Existing slots are kept as-is; only new empty slots are added.
        self.items.extend([None] * (new_capacity - self.capacity))
        self.capacity = new_capacity

    def append(self, item: T) -> None:
        self._reserve(self.count + 1)
        self.items[self.count] = item
        self.count += 1

    def extend(self, new_items: Iterable[T]) -> None:
        """Append many items, growing once to fit all of them."""

        new_items = list(new_items)
        if not new_items:
            return
        self._reserve(self.count + len(new_items))
        self.items[self.count : self.count + len(new_items)] = new_items
        self.count += len(new_items)

    def reset(self) -> None:
        """Forget the items but keep the capacity for reuse."""

        for i in range(self.count):
            self.items[i] = None
        self.count = 0

    def free(self) -> None:
        self.items = []
        self.count = 0
        self.capacity = 0

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        for i in range(self.count):
            yield self.items[i]  # type: ignore[misc]

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self.count
        if not 0 <= index < self.count:
            raise IndexError("DynamicArray index out of range")
        return self.items[index]  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.count > 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class FilePaths(DynamicArray[str]):
    """Path strings collected from directory listings or rebuild inputs."""


class StringBuilder:
    """Growable byte buffer.

    The contents are not NUL-terminated; call :meth:`append_null` when a
    C-style string is needed.
    """

    def __init__(self, data: bytes = b"", *, init_cap: int = DA_INIT_CAP):
        if init_cap <= 0:
            raise ValueError("init_cap must be positive")
        self.init_cap = init_cap
        self.items = bytearray()
        self.count = 0
        self.capacity = 0
        if data:
            self.append_buf(data)

    def _reserve(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        new_capacity = _grown_capacity(self.capacity, needed, self.init_cap)
        # A fresh buffer keeps views borrowed from the old one readable.
        grown = bytearray(new_capacity)
        grown[: self.count] = self.items[: self.count]
        self.items = grown
        self.capacity = new_capacity

    def append_buf(self, buf: bytes | bytearray | memoryview) -> None:
        size = len(buf)
        if size == 0:
            return
        self._reserve(self.count + size)
        self.items[self.count : self.count + size] = buf
        self.count += size

    def append_cstr(self, cstr: str | bytes) -> None:
        """Append the bytes of ``cstr`` up to (not including) its first NUL."""

        data = cstr.encode("utf-8") if isinstance(cstr, str) else bytes(cstr)
        end = data.find(b"\0")
        self.append_buf(data if end < 0 else data[:end])

    def append_byte(self, value: int) -> None:
        self._reserve(self.count + 1)
        self.items[self.count] = value
        self.count += 1

    def append_null(self) -> None:
        self.append_byte(0)

    def to_sv(self) -> StringView:
        from .sv import StringView

        return StringView(memoryview(self.items)[: self.count])

    def getvalue(self) -> bytes:
        return bytes(self.items[: self.count])

    def reset(self) -> None:
        self.count = 0

    def free(self) -> None:
        self.items = bytearray()
        self.count = 0
        self.capacity = 0

    def __len__(self) -> int:
        return self.count

    def __bytes__(self) -> bytes:
        return self.getvalue()

    def __str__(self) -> str:
        return self.getvalue().decode("utf-8", errors="replace")


__all__ = ["DA_INIT_CAP", "DynamicArray", "FilePaths", "StringBuilder"]
