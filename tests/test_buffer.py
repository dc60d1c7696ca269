"""Tests for the growable output buffer and append transactions."""

from __future__ import annotations

import array

import pytest
from hypothesis import given
from hypothesis import strategies as st

from braceformat.constants import INLINE_BUFFER_SIZE, MAX_TRANSACTION_SIZE
from braceformat.core import Buffer
from braceformat.diagnostics import DiagnosticCode, FormatError

# ============================================================================
# TEST APPENDERS
# ============================================================================


class _FixedAppender:
    """Writes a fixed payload, or reports 0 when it does not fit."""

    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        self.offers: list[int] = []

    def append_to(self, dest: memoryview, /) -> int:
        self.offers.append(len(dest))
        if len(self.payload) > len(dest):
            return 0
        dest[: len(self.payload)] = self.payload
        return len(self.payload)


class _NeverAppender:
    """Refuses every window."""

    def append_to(self, dest: memoryview, /) -> int:
        return 0


class _OverclaimingAppender:
    """Claims more bytes than it was offered."""

    def append_to(self, dest: memoryview, /) -> int:
        return len(dest) + 1


# ============================================================================
# CONSTRUCTION AND CAPACITY
# ============================================================================


class TestBufferConstruction:
    """Test initial state and inline capacity."""

    def test_default_inline_capacity(self) -> None:
        """A new buffer preallocates the inline capacity."""
        buf = Buffer()

        assert buf.size == 0
        assert len(buf) == 0
        assert buf.capacity == INLINE_BUFFER_SIZE

    def test_custom_inline_capacity(self) -> None:
        """The inline capacity is configurable."""
        assert Buffer(16).capacity == 16

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_inline_size_rejected(self, size: int) -> None:
        """Inline size must be positive."""
        with pytest.raises(ValueError, match="inline_size must be positive"):
            Buffer(size)

    def test_repr(self) -> None:
        """repr shows size and capacity."""
        buf = Buffer(8)
        buf.append(b"abc")

        assert repr(buf) == "Buffer(size=3, capacity=8)"


class TestBufferGrowth:
    """Test the 3/2 geometric growth policy."""

    def test_growth_uses_three_halves(self) -> None:
        """Growing one byte past capacity yields capacity * 3 // 2."""
        buf = Buffer(10)
        buf.resize(11)

        assert buf.capacity == 15

    def test_growth_uses_needed_when_larger(self) -> None:
        """A large request grows straight to the requested size."""
        buf = Buffer(10)
        buf.resize(100)

        assert buf.capacity == 100

    def test_reserve_does_not_change_size(self) -> None:
        """reserve() only affects capacity."""
        buf = Buffer(4)
        buf.reserve(50)

        assert buf.size == 0
        assert buf.capacity >= 50

    def test_reserve_smaller_is_noop(self) -> None:
        """Reserving less than the capacity changes nothing."""
        buf = Buffer(32)
        buf.reserve(8)

        assert buf.capacity == 32

    def test_resize_negative_rejected(self) -> None:
        """Negative sizes are rejected."""
        with pytest.raises(ValueError, match="cannot be negative"):
            Buffer().resize(-1)

    def test_clear_keeps_capacity(self) -> None:
        """clear() resets the size and never shrinks."""
        buf = Buffer(4)
        buf.append(b"0123456789")
        capacity = buf.capacity
        buf.clear()

        assert buf.size == 0
        assert buf.capacity == capacity

    @given(chunks=st.lists(st.binary(max_size=64), max_size=30))
    def test_appends_concatenate(self, chunks: list[bytes]) -> None:
        """Any sequence of appends yields the concatenation."""
        buf = Buffer(8)
        for chunk in chunks:
            buf.append(chunk)

        assert buf.data() == b"".join(chunks)
        assert buf.capacity >= buf.size


# ============================================================================
# WRITING
# ============================================================================


class TestBufferWrites:
    """Test grow/write/fill/push and element access."""

    def test_grow_returns_start_of_tail(self) -> None:
        """grow(n) returns the previous size."""
        buf = Buffer()
        buf.append(b"ab")

        assert buf.grow(3) == 2
        assert buf.size == 5

    def test_write_into_grown_window(self) -> None:
        """Bytes written into the grown window become content."""
        buf = Buffer()
        start = buf.grow(3)
        buf.write(start, b"xyz")

        assert buf.data() == b"xyz"

    def test_write_outside_size_rejected(self) -> None:
        """write() may not extend past the logical size."""
        buf = Buffer()
        buf.grow(2)

        with pytest.raises(IndexError, match="outside buffer"):
            buf.write(1, b"abc")

    def test_write_wide_item_view(self) -> None:
        """write() copies every byte of a view whose items are wider than one byte."""
        words = array.array("H", [0x4241, 0x4443])
        buf = Buffer()
        start = buf.grow(4)
        buf.write(start, memoryview(words))

        assert buf.data() == words.tobytes()
        assert buf.size == 4

    def test_write_wide_item_view_bounds(self) -> None:
        """The bounds check counts bytes, not items."""
        buf = Buffer()
        buf.grow(2)

        with pytest.raises(IndexError, match="outside buffer"):
            buf.write(0, array.array("I", [1]))

    def test_append_wide_item_view(self) -> None:
        """append() grows by the byte length of the view."""
        words = array.array("H", [0x4241, 0x4443])
        buf = Buffer()
        buf.append(b"[")
        buf.append(memoryview(words))
        buf.append(b"]")

        assert buf.data() == b"[" + words.tobytes() + b"]"

    def test_fill_range(self) -> None:
        """fill() sets every byte in the half-open range."""
        buf = Buffer()
        start = buf.grow(5)
        buf.fill(start, start + 5, ord("*"))
        buf.fill(1, 3, ord("-"))

        assert buf.data() == b"*--**"

    def test_fill_empty_range_is_noop(self) -> None:
        """fill() with end <= start writes nothing."""
        buf = Buffer()
        buf.append(b"abc")
        buf.fill(2, 1, ord("x"))

        assert buf.data() == b"abc"

    def test_item_access(self) -> None:
        """Indexing reads and writes single bytes inside the size."""
        buf = Buffer()
        buf.append(b"abc")
        buf[1] = ord("B")

        assert buf[1] == ord("B")
        assert buf.data() == b"aBc"

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_item_access_out_of_range(self, index: int) -> None:
        """Indexing outside the size raises IndexError."""
        buf = Buffer()
        buf.append(b"abc")

        with pytest.raises(IndexError):
            _ = buf[index]
        with pytest.raises(IndexError):
            buf[index] = 0

    def test_push_past_capacity(self) -> None:
        """push() grows the storage when it is full."""
        buf = Buffer(2)
        for byte in b"hello":
            buf.push(byte)

        assert buf.data() == b"hello"
        assert buf.capacity >= 5

    def test_copy_within_overlapping(self) -> None:
        """copy_within() handles overlapping ranges."""
        buf = Buffer()
        buf.append(b"abcdef")
        buf.copy_within(0, 2, 4)

        assert buf.data() == b"ababcd"

    def test_truncate(self) -> None:
        """truncate() drops the tail; larger sizes are ignored."""
        buf = Buffer()
        buf.append(b"abcdef")
        buf.truncate(10)
        assert buf.size == 6

        buf.truncate(2)
        assert buf.data() == b"ab"


# ============================================================================
# OUTPUT VIEWS
# ============================================================================


class TestBufferOutput:
    """Test data(), c_str() and text()."""

    def test_data_has_no_terminator(self) -> None:
        """data() returns exactly the written bytes."""
        buf = Buffer()
        buf.append(b"abc")

        assert buf.data() == b"abc"

    def test_c_str_appends_nul(self) -> None:
        """c_str() adds a terminator without changing the size."""
        buf = Buffer()
        buf.append(b"abc")

        assert buf.c_str() == b"abc\x00"
        assert buf.size == 3

    def test_c_str_at_full_capacity(self) -> None:
        """c_str() reserves room for the terminator."""
        buf = Buffer(3)
        buf.append(b"abc")

        assert buf.c_str() == b"abc\x00"

    def test_c_str_empty(self) -> None:
        """An empty buffer yields a lone NUL."""
        assert Buffer().c_str() == b"\x00"

    def test_text_decodes_utf8(self) -> None:
        """text() decodes UTF-8 content."""
        buf = Buffer()
        buf.append("café".encode())

        assert buf.text() == "café"
        assert str(buf) == "café"

    def test_text_surrogateescape(self) -> None:
        """Invalid UTF-8 survives text() through surrogateescape."""
        buf = Buffer()
        buf.append(b"\xff")

        assert buf.text().encode("utf-8", "surrogateescape") == b"\xff"


# ============================================================================
# APPEND TRANSACTIONS
# ============================================================================


class TestAppendTransaction:
    """Test direct appenders writing into spare capacity."""

    def test_fits_in_spare_capacity(self) -> None:
        """A payload that fits is written on the first offer."""
        buf = Buffer(16)
        buf.append(b"x=")
        txn = _FixedAppender(b"42")

        assert buf.append_transaction(txn) == 2
        assert buf.data() == b"x=42"
        assert txn.offers == [14]

    def test_retries_with_doubled_offer(self) -> None:
        """Refusals double the offered space until the payload fits."""
        buf = Buffer(4)
        txn = _FixedAppender(b"0123456789")

        assert buf.append_transaction(txn) == 10
        assert buf.data() == b"0123456789"
        assert txn.offers == [4, 8, 16]

    def test_full_buffer_offers_capacity(self) -> None:
        """A full buffer offers as much again as its capacity."""
        buf = Buffer(4)
        buf.append(b"abcd")
        txn = _FixedAppender(b"e")

        buf.append_transaction(txn)

        assert txn.offers == [4]
        assert buf.data() == b"abcde"

    def test_overclaim_rejected(self) -> None:
        """Claiming more than offered fails and leaves the size alone."""
        buf = Buffer(8)
        buf.append(b"ab")

        with pytest.raises(FormatError) as exc_info:
            buf.append_transaction(_OverclaimingAppender())

        assert exc_info.value.code is DiagnosticCode.TRANSACTION_FAILED
        assert "_OverclaimingAppender" in str(exc_info.value)
        assert buf.data() == b"ab"

    def test_refusal_up_to_limit_fails(self) -> None:
        """An appender refusing every size up to the limit fails."""
        buf = Buffer(MAX_TRANSACTION_SIZE)

        with pytest.raises(FormatError, match="wrote nothing"):
            buf.append_transaction(_NeverAppender())

        assert buf.size == 0
