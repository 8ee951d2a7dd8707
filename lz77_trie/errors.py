"""
Exceptions raised by the suffix-trie matcher and its containers.

Every error here is a broken caller contract or a corrupted index,
so nothing in the package catches them.
"""


class LZ77TrieError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfiguration(LZ77TrieError, ValueError):
    """A capacity, window size or match length is out of range."""


class CapacityExceeded(LZ77TrieError, OverflowError):
    """An item was added to a ring buffer that is already full."""


class EmptyCollection(LZ77TrieError, LookupError):
    """peek() or next() was called on an empty work-list."""


class IndexOutOfRange(LZ77TrieError, IndexError):
    """An offset lies outside [0, length) of a ring buffer."""


class InvalidKey(LZ77TrieError, ValueError):
    """A trie edge key is neither a byte value nor the terminator."""


class StaleHandle(LZ77TrieError, LookupError):
    """A node handle refers to a node that has been deleted."""


class IndexCorruption(LZ77TrieError, RuntimeError):
    """The oldest leaf did not match the suffix spelled by the window."""


class NoActiveMatch(LZ77TrieError, RuntimeError):
    """A match query was made before start_new_match()."""
