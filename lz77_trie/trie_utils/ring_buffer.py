from typing import Generic, Iterator, Optional, TypeVar

from lz77_trie.errors import (
    CapacityExceeded,
    EmptyCollection,
    IndexOutOfRange,
    InvalidConfiguration,
)

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Fixed-capacity circular FIFO with random-offset peek and update.
    The backing list is allocated once; indices wrap modulo the capacity.
    """

    def __init__(self, capacity: int) -> None:
        """
        Args:
            capacity: Maximum number of items the buffer can hold

        Raises:
            InvalidConfiguration: If capacity is not positive
        """
        if capacity <= 0:
            raise InvalidConfiguration(
                f"Ring buffer capacity must be positive, got {capacity}"
            )
        self._capacity = capacity
        self._data: list[Optional[T]] = [None] * capacity
        self._front = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, value: T) -> None:
        """
        Append a value at the logical end of the buffer.

        Raises:
            CapacityExceeded: If the buffer is already full
        """
        if self.is_full():
            raise CapacityExceeded(
                f"Ring buffer is full (capacity {self._capacity})"
            )
        end = (self._front + self._size) % self._capacity
        self._data[end] = value
        self._size += 1

    def peek(self, offset: Optional[int] = None) -> T:
        """
        Return the front value, or the value `offset` positions from the front.

        Raises:
            EmptyCollection: If no offset is given and the buffer is empty
            IndexOutOfRange: If offset is outside [0, len(self))
        """
        if offset is None:
            if self._size == 0:
                raise EmptyCollection("peek() on an empty ring buffer")
            return self._data[self._front]
        return self._data[self._physical(offset)]

    def next(self) -> T:
        """
        Remove and return the front value.

        Raises:
            EmptyCollection: If the buffer is empty
        """
        if self._size == 0:
            raise EmptyCollection("next() on an empty ring buffer")
        value = self._data[self._front]
        self._data[self._front] = None
        self._front = (self._front + 1) % self._capacity
        self._size -= 1
        return value

    def update(self, offset: int, value: T) -> None:
        """
        Overwrite the value `offset` positions from the front.

        Raises:
            IndexOutOfRange: If offset is outside [0, len(self))
        """
        self._data[self._physical(offset)] = value

    def is_full(self) -> bool:
        return self._size == self._capacity

    def has_work(self) -> bool:
        return self._size > 0

    def clear(self) -> None:
        self._data = [None] * self._capacity
        self._front = 0
        self._size = 0

    def _physical(self, offset: int) -> int:
        if offset < 0 or offset >= self._size:
            raise IndexOutOfRange(
                f"Offset {offset} out of range for ring buffer of length {self._size}"
            )
        return (self._front + offset) % self._capacity

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self._data[(self._front + i) % self._capacity]

    def __repr__(self) -> str:
        return f"RingBuffer({list(self)!r}, capacity={self._capacity})"
