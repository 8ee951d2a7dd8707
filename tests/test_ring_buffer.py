"""Tests for the fixed-capacity ring buffer."""

import pytest

from lz77_trie.errors import (
    CapacityExceeded,
    EmptyCollection,
    IndexOutOfRange,
    InvalidConfiguration,
)
from lz77_trie.trie_utils.ring_buffer import RingBuffer


class TestRingBufferBasics:
    """FIFO behaviour and wrap-around."""

    def test_add_and_next_in_order(self):
        """Items come out in insertion order."""
        ring = RingBuffer(3)
        for value in (1, 2, 3):
            ring.add(value)
        assert [ring.next(), ring.next(), ring.next()] == [1, 2, 3]
        assert len(ring) == 0

    def test_wraps_around_backing_storage(self):
        """Alternating next/add keeps working past the physical end."""
        ring = RingBuffer(3)
        ring.add(1)
        ring.add(2)
        ring.add(3)
        for value in range(4, 10):
            ring.next()
            ring.add(value)
        assert list(ring) == [7, 8, 9]
        assert ring.peek() == 7
        assert ring.peek(2) == 9

    def test_is_full_and_capacity(self):
        """is_full tracks length against the fixed capacity."""
        ring = RingBuffer(2)
        assert ring.capacity == 2
        assert not ring.is_full()
        ring.add("a")
        ring.add("b")
        assert ring.is_full()
        assert ring.has_work()

    def test_update_overwrites_in_place(self):
        """update changes a value without changing the length."""
        ring = RingBuffer(4)
        for value in "abc":
            ring.add(value)
        ring.next()
        ring.add("d")
        ring.update(0, "B")
        ring.update(2, "D")
        assert list(ring) == ["B", "c", "D"]
        assert len(ring) == 3

    def test_clear_resets(self):
        """clear discards contents and allows refilling to capacity."""
        ring = RingBuffer(2)
        ring.add(1)
        ring.add(2)
        ring.clear()
        assert len(ring) == 0
        assert not ring.has_work()
        ring.add(3)
        ring.add(4)
        assert list(ring) == [3, 4]

    def test_bytes_snapshot(self):
        """A ring of byte values converts to bytes front to back."""
        ring = RingBuffer(3)
        for byte in b"xyz":
            ring.add(byte)
        ring.next()
        ring.add(ord("w"))
        assert bytes(ring) == b"yzw"


class TestRingBufferErrors:
    """Contract violations raise immediately."""

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_invalid_capacity(self, capacity):
        """Non-positive capacity is rejected."""
        with pytest.raises(InvalidConfiguration, match="positive"):
            RingBuffer(capacity)

    def test_add_when_full(self):
        """Adding to a full buffer raises rather than overwriting."""
        ring = RingBuffer(1)
        ring.add(1)
        with pytest.raises(CapacityExceeded):
            ring.add(2)
        assert list(ring) == [1]

    def test_peek_and_next_on_empty(self):
        """peek() and next() need at least one item."""
        ring = RingBuffer(2)
        with pytest.raises(EmptyCollection):
            ring.peek()
        with pytest.raises(EmptyCollection):
            ring.next()

    @pytest.mark.parametrize("offset", [-1, 2, 5])
    def test_offset_out_of_range(self, offset):
        """Offsets must lie in [0, len)."""
        ring = RingBuffer(4)
        ring.add(1)
        ring.add(2)
        with pytest.raises(IndexOutOfRange):
            ring.peek(offset)
        with pytest.raises(IndexOutOfRange):
            ring.update(offset, 0)

    def test_errors_are_builtin_compatible(self):
        """Errors can also be caught as their builtin counterparts."""
        ring = RingBuffer(1)
        with pytest.raises(IndexError):
            ring.peek(0)
        with pytest.raises(LookupError):
            ring.next()
