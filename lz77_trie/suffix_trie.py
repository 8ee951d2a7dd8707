"""
Suffix trie over a sliding window, used as the match finder for LZ77.

The trie holds every suffix of the last `window_size` committed bytes plus
the empty suffix. Each suffix ends at a leaf, and a node is a leaf exactly
when it has a TERMINATOR child. Leaves are kept in a FIFO ordered from the
longest suffix to the shortest, so the suffix to evict when the window is
full is always at the front.
"""

import logging
from typing import Iterator, Optional

from lz77_trie.errors import IndexCorruption, InvalidConfiguration, NoActiveMatch
from lz77_trie.trie_utils.fifo_queue import FIFOQueue
from lz77_trie.trie_utils.ring_buffer import RingBuffer
from lz77_trie.trie_utils.trie_map import TERMINATOR, NodeHandle, TrieMap

logger = logging.getLogger(__name__)


class SuffixTrie:
    """
    Incrementally maintained suffix trie bounded by a sliding window.

    A match is built with start_new_match(), optionally lengthened with
    extend_match() and add_to_match(), and committed with advance().
    """

    def __init__(self, window_size: int, max_match_length: int) -> None:
        """
        Args:
            window_size: Number of most recent bytes whose suffixes are indexed
            max_match_length: Capacity of the match accumulator; one slot of it
                is kept free for a trailing literal

        Raises:
            InvalidConfiguration: If either argument is not positive
        """
        if max_match_length <= 0:
            raise InvalidConfiguration(
                f"max_match_length must be positive, got {max_match_length}"
            )
        if window_size <= 0:
            raise InvalidConfiguration(
                f"window_size must be positive, got {window_size}"
            )

        self._trie = TrieMap()
        self._current_match: RingBuffer[int] = RingBuffer(max_match_length)
        self._window: RingBuffer[int] = RingBuffer(window_size)
        self._leaves = FIFOQueue()
        self._last_matched_node: Optional[NodeHandle] = None
        self.size = 0
        self._plant_empty_suffix()

    @property
    def window_size(self) -> int:
        return self._window.capacity

    @property
    def max_match_length(self) -> int:
        return self._current_match.capacity

    @property
    def window(self) -> bytes:
        """Snapshot of the committed bytes currently inside the window."""
        return bytes(self._window)

    @property
    def node_count(self) -> int:
        return len(self._trie)

    def start_new_match(self, buffer: FIFOQueue) -> int:
        """
        Find the longest prefix of `buffer` that walks a path from the root.

        Matched bytes are moved from `buffer` into the current match. The walk
        stops at the first byte without a matching edge, when the match has no
        room left, or when the buffer runs dry.

        A COMPLETE match ends on a leaf, i.e. the consumed bytes are exactly
        one of the stored suffixes. A PARTIAL match ends inside the trie: with
        the suffixes {"abcde", "bcde", "cde", "de", "e"} and the buffer "abc",
        "abc" is consumed but it is not itself a suffix.

        Returns:
            The number of bytes in the current match for a complete match,
            0 for a partial one
        """
        self._last_matched_node = self._trie.root
        while (
            self._match_has_room()
            and buffer.has_work()
            and self._trie.has_child(self._last_matched_node, buffer.peek())
        ):
            byte = buffer.next()
            self._current_match.add(byte)
            self._last_matched_node = self._trie.child(self._last_matched_node, byte)

        if self._trie.has_child(self._last_matched_node, TERMINATOR):
            return len(self._current_match)
        return 0

    def extend_match(self, buffer: FIFOQueue) -> int:
        """
        Continue the current match using the match itself as the source.

        With "abc" already in the window and "abcabcabcd" pending, the first
        match is "abc". Once committed, those three bytes sit right behind the
        next ones, so the pending "abcabc" can be copied from them one byte at
        a time, each new byte compared with the byte one match-length earlier:

            abc|abcabcd
            ^--^
             ^--^
              ^--^  ...until 'd' differs

        Returns:
            The number of additional bytes matched by this call
        """
        num_matches = 0
        while (
            self._match_has_room()
            and buffer.has_work()
            and num_matches < len(self._current_match)
            and self._current_match.peek(num_matches) == buffer.peek()
        ):
            self._current_match.add(buffer.next())
            num_matches += 1
        return num_matches

    def add_to_match(self, byte: int) -> None:
        """Append a byte to the current match; ignored once the match is full."""
        if self._current_match.is_full():
            return
        self._current_match.add(byte)

    def get_match(self) -> bytes:
        return bytes(self._current_match)

    def get_distance_to_leaf(self) -> int:
        """
        Count the edges from the last matched node down to the nearest leaf
        along the path of smallest byte keys.

        Raises:
            NoActiveMatch: If there is no match in progress
        """
        if self._last_matched_node is None:
            raise NoActiveMatch("get_distance_to_leaf() requires start_new_match()")
        current = self._last_matched_node
        distance = 0
        while not self._trie.has_child(current, TERMINATOR):
            current = self._trie.first_child(current)
            if current is None:
                raise IndexCorruption("Internal trie node without children")
            distance += 1
        return distance

    def advance(self) -> None:
        """
        Commit the current match to the window, one byte at a time.

        For every byte:
          1. if the window is full, evict the longest suffix and shift the window
          2. extend every stored suffix by the byte
          3. re-insert the empty suffix
        """
        while self._current_match.has_work():
            byte = self._current_match.next()
            self._slide_window(byte)
            self._grow(byte)
            self._leaves.add(self._make_leaf(self._trie.root))
            self.size += 1
        self._last_matched_node = None

    def clear(self) -> None:
        """Reset to the freshly constructed state."""
        self._trie.clear()
        self._current_match.clear()
        self._leaves.clear()
        self._window.clear()
        self._last_matched_node = None
        self.size = 0
        self._plant_empty_suffix()
        logger.debug("Suffix trie cleared (window_size=%d)", self.window_size)

    def suffixes(self) -> list[bytes]:
        """Return every stored suffix, longest first."""
        found = []
        stack = [(self._trie.root, b"")]
        while stack:
            handle, prefix = stack.pop()
            for key, child in self._trie.children(handle):
                if key is TERMINATOR:
                    found.append(prefix)
                else:
                    stack.append((child, prefix + bytes([key])))
        return sorted(found, key=len, reverse=True)

    def _plant_empty_suffix(self) -> None:
        self._leaves.add(self._make_leaf(self._trie.root))
        self.size += 1

    def _slide_window(self, byte: int) -> None:
        if self._window.is_full():
            # front of the leaf queue is the suffix spelled by the whole window
            oldest = self._leaves.next()
            self._make_not_leaf(oldest)
            removed = self._trie.delete(self._window)
            if removed != oldest:
                raise IndexCorruption(
                    f"Window contents {self.window!r} do not lead to the oldest leaf"
                )
            evicted = self._window.next()
            self.size -= 1
            logger.debug("Evicted suffix starting with byte %d", evicted)
        self._window.add(byte)

    def _grow(self, byte: int) -> None:
        # leaves appended during the loop belong to the next pass
        for _ in range(len(self._leaves)):
            leaf = self._leaves.next()
            child = self._trie.add_child(leaf, byte)
            # the leaf's terminator node moves down instead of being rebuilt
            self._trie.move_child(leaf, TERMINATOR, child)
            self._leaves.add(child)

    def _match_has_room(self) -> bool:
        return len(self._current_match) < self._current_match.capacity - 1

    def _make_leaf(self, handle: NodeHandle) -> NodeHandle:
        terminal = self._trie.add_child(handle, TERMINATOR)
        self._trie.set_value(terminal, True)
        return handle

    def _make_not_leaf(self, handle: NodeHandle) -> NodeHandle:
        self._trie.remove_child(handle, TERMINATOR)
        self._trie.set_value(handle, True)
        return handle

    def __len__(self) -> int:
        return self.size

    def __contains__(self, suffix) -> bool:
        handle = self._trie.find(suffix)
        return handle is not None and self._trie.has_child(handle, TERMINATOR)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.suffixes())
