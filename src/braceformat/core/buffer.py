"""Growable output buffer.

A contiguous byte sequence with an inline capacity that is preallocated
up front, so short outputs never reallocate, and geometric growth beyond it.
All formatting output is written here.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Buffer as BufferLike

from braceformat.constants import (
    BUFFER_GROWTH_DENOMINATOR,
    BUFFER_GROWTH_NUMERATOR,
    INLINE_BUFFER_SIZE,
    MAX_TRANSACTION_SIZE,
)
from braceformat.diagnostics import ErrorTemplate, FormatError

__all__ = ["AppendTransaction", "Buffer"]


class AppendTransaction(Protocol):
    """Protocol for direct appenders.

    A direct appender renders itself straight into spare buffer space,
    bypassing the format-string parser. ``append_to`` receives a writable
    window and returns the number of bytes written, or 0 when the window is
    too small (nothing may be kept in that case; the buffer retries with
    more room).
    """

    def append_to(self, dest: memoryview, /) -> int:
        ...  # pragma: no cover  # Protocol stub - not executable


class Buffer:
    """Byte buffer with inline capacity and amortized O(1) append.

    The logical size and the capacity are tracked separately: ``grow(n)``
    extends the size and hands back the start of the new tail, which the
    caller then fills with ``write``/``fill``/item assignment. Content is
    never NUL-terminated internally; ``c_str()`` produces a terminated copy.

    Growth policy: ``max(needed, capacity * 3 / 2)``. The buffer never
    shrinks; ``clear()`` only resets the size.

    Example:
        >>> buf = Buffer()
        >>> start = buf.grow(3)
        >>> buf.write(start, b"abc")
        >>> buf.data()
        b'abc'
        >>> buf.c_str()
        b'abc\\x00'
    """

    __slots__ = ("_data", "_size")

    def __init__(self, inline_size: int = INLINE_BUFFER_SIZE) -> None:
        """Create an empty buffer with ``inline_size`` bytes preallocated.

        Raises:
            ValueError: If inline_size is not positive
        """
        if inline_size <= 0:
            msg = f"inline_size must be positive, got {inline_size}"
            raise ValueError(msg)
        self._data = bytearray(inline_size)
        self._size = 0

    @property
    def size(self) -> int:
        """Number of bytes written."""
        return self._size

    @property
    def capacity(self) -> int:
        """Number of bytes available without reallocation."""
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self._size:
            msg = f"buffer index {index} out of range"
            raise IndexError(msg)
        return self._data[index]

    def __setitem__(self, index: int, value: int) -> None:
        if not 0 <= index < self._size:
            msg = f"buffer index {index} out of range"
            raise IndexError(msg)
        self._data[index] = value

    def _grow_capacity(self, needed: int) -> None:
        capacity = len(self._data)
        new_capacity = max(
            needed, capacity * BUFFER_GROWTH_NUMERATOR // BUFFER_GROWTH_DENOMINATOR
        )
        self._data.extend(bytes(new_capacity - capacity))

    def reserve(self, capacity: int) -> None:
        """Ensure at least ``capacity`` bytes of storage."""
        if capacity > len(self._data):
            self._grow_capacity(capacity)

    def resize(self, new_size: int) -> None:
        """Set the logical size. New bytes are not initialized."""
        if new_size < 0:
            msg = f"buffer size cannot be negative, got {new_size}"
            raise ValueError(msg)
        if new_size > len(self._data):
            self._grow_capacity(new_size)
        self._size = new_size

    def grow(self, n: int) -> int:
        """Extend the size by ``n`` bytes and return the start of the new tail.

        The window ``[start, start + n)`` is writable and must be filled by
        the caller.
        """
        start = self._size
        self.resize(start + n)
        return start

    def write(self, start: int, data: BufferLike) -> None:
        """Copy ``data`` into the buffer at ``start`` (inside the current size).

        Buffer objects are copied byte for byte whatever their item format.
        """
        data = memoryview(data).cast("B")
        end = start + len(data)
        if start < 0 or end > self._size:
            msg = f"write [{start}, {end}) outside buffer of size {self._size}"
            raise IndexError(msg)
        self._data[start:end] = data

    def fill(self, start: int, end: int, byte: int) -> None:
        """Set every byte in ``[start, end)`` to ``byte``."""
        if end > start:
            self._data[start:end] = bytes((byte,)) * (end - start)

    def copy_within(self, src: int, dest: int, n: int) -> None:
        """Move ``n`` bytes from ``src`` to ``dest`` (ranges may overlap)."""
        self._data[dest : dest + n] = self._data[src : src + n]

    def append(self, data: BufferLike) -> None:
        """Append bytes at the tail."""
        data = memoryview(data).cast("B")
        n = len(data)
        if n:
            start = self.grow(n)
            self._data[start : start + n] = data

    def push(self, byte: int) -> None:
        """Append a single byte."""
        if self._size == len(self._data):
            self._grow_capacity(self._size + 1)
        self._data[self._size] = byte
        self._size += 1

    def truncate(self, size: int) -> None:
        """Drop everything after ``size`` (used to discard failed output)."""
        if size < self._size:
            self._size = max(size, 0)

    def clear(self) -> None:
        """Reset the size to zero, keeping the storage."""
        self._size = 0

    def data(self) -> bytes:
        """Return the content without a terminating NUL."""
        return bytes(self._data[: self._size])

    def c_str(self) -> bytes:
        """Return the content with a terminating NUL appended.

        Reserves one extra byte so the terminator fits without changing
        the logical size.
        """
        size = self._size
        self.reserve(size + 1)
        self._data[size] = 0
        return bytes(self._data[: size + 1])

    def text(self) -> str:
        """Return the content decoded as UTF-8.

        Undecodable bytes round-trip through ``surrogateescape``.
        """
        return self._data[: self._size].decode("utf-8", "surrogateescape")

    def __str__(self) -> str:
        return self.text()

    def __repr__(self) -> str:
        return f"Buffer(size={self._size}, capacity={len(self._data)})"

    def append_transaction(self, txn: AppendTransaction) -> int:
        """Let a direct appender write into the spare capacity.

        The spare space is offered first. When the appender reports 0 the
        offer doubles (the buffer grows accordingly) and the appender is
        asked again.

        Args:
            txn: Object implementing ``append_to(dest) -> int``

        Returns:
            Number of bytes appended

        Raises:
            FormatError: If the appender writes nothing even into
                MAX_TRANSACTION_SIZE bytes, or claims more than it was offered
        """
        offered = (len(self._data) - self._size) or len(self._data)
        while True:
            self.reserve(self._size + offered)
            with memoryview(self._data)[self._size : self._size + offered] as window:
                written = txn.append_to(window)
            if 0 < written <= offered:
                self._size += written
                return written
            if written > offered or offered >= MAX_TRANSACTION_SIZE:
                raise FormatError(
                    ErrorTemplate.transaction_failed(type(txn).__name__, offered)
                )
            offered = min(offered * 2, MAX_TRANSACTION_SIZE)
