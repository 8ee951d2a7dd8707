from collections import deque
from typing import Iterable, Iterator

from lz77_trie.errors import EmptyCollection


class FIFOQueue:
    """
    Unbounded first-in first-out work-list.
    Used as the pending input buffer of the matcher and as its leaf queue.
    """

    def __init__(self, items: Iterable = ()) -> None:
        """
        Args:
            items: Optional initial contents, enqueued front to back
        """
        self._items = deque(items)

    def add(self, item) -> None:
        """Append an item at the back of the queue."""
        self._items.append(item)

    def peek(self):
        """
        Return the front item without removing it.

        Raises:
            EmptyCollection: If the queue is empty
        """
        if not self._items:
            raise EmptyCollection("peek() on an empty queue")
        return self._items[0]

    def next(self):
        """
        Remove and return the front item.

        Raises:
            EmptyCollection: If the queue is empty
        """
        if not self._items:
            raise EmptyCollection("next() on an empty queue")
        return self._items.popleft()

    def has_work(self) -> bool:
        return bool(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"FIFOQueue({list(self._items)!r})"
