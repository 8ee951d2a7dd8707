"""
Byte-keyed trie map stored in an arena of nodes.

Nodes live in a flat list and are addressed by NodeHandle(index, generation).
Deleting a node frees its slot and bumps the slot's generation, so any handle
still pointing at it is detected as stale instead of silently reaching a
different node that later reuses the slot.

Edge keys are byte values 0..255 or the reserved TERMINATOR, which never
collides with real data.
"""

from enum import Enum
from typing import Any, Iterable, Iterator, NamedTuple, Optional, Union

from lz77_trie.errors import InvalidKey, StaleHandle


class Terminator(Enum):
    TERMINATOR = "TERMINATOR"

    def __repr__(self) -> str:
        return "TERMINATOR"


TERMINATOR = Terminator.TERMINATOR

Key = Union[int, Terminator]


class NodeHandle(NamedTuple):
    index: int
    generation: int


class _TrieNode:
    __slots__ = ("children", "value", "parent", "key")

    def __init__(self, parent: Optional[NodeHandle], key: Optional[Key]):
        self.children: dict[Key, NodeHandle] = {}
        self.value: Any = None
        self.parent = parent
        self.key = key


def check_key(key: Key) -> Key:
    """Return key unchanged if it is a byte value or TERMINATOR."""
    if key is TERMINATOR:
        return key
    if isinstance(key, int) and not isinstance(key, bool) and 0 <= key <= 255:
        return key
    raise InvalidKey(f"Trie keys must be bytes 0..255 or TERMINATOR, got {key!r}")


class TrieMap:
    """
    Map from byte sequences to values, with single-step child navigation.
    """

    def __init__(self) -> None:
        self._nodes: list[Optional[_TrieNode]] = []
        self._generations: list[int] = []
        self._free: list[int] = []
        self._live = 0
        self.root = self._allocate(None, None)

    def _allocate(self, parent: Optional[NodeHandle], key: Optional[Key]) -> NodeHandle:
        if self._free:
            index = self._free.pop()
            self._nodes[index] = _TrieNode(parent, key)
        else:
            index = len(self._nodes)
            self._nodes.append(_TrieNode(parent, key))
            self._generations.append(0)
        self._live += 1
        return NodeHandle(index, self._generations[index])

    def _release(self, handle: NodeHandle) -> None:
        # children first, iteratively to avoid recursion limits on long paths
        stack = [handle]
        while stack:
            current = stack.pop()
            node = self._node(current)
            stack.extend(node.children.values())
            self._nodes[current.index] = None
            self._generations[current.index] += 1
            self._free.append(current.index)
            self._live -= 1

    def _node(self, handle: NodeHandle) -> _TrieNode:
        if not self.is_live(handle):
            raise StaleHandle(f"Node handle {handle} is no longer valid")
        return self._nodes[handle.index]

    def is_live(self, handle: NodeHandle) -> bool:
        index, generation = handle
        return (
            0 <= index < len(self._nodes)
            and self._nodes[index] is not None
            and self._generations[index] == generation
        )

    # Single-step navigation

    def child(self, handle: NodeHandle, key: Key) -> Optional[NodeHandle]:
        return self._node(handle).children.get(check_key(key))

    def has_child(self, handle: NodeHandle, key: Key) -> bool:
        return check_key(key) in self._node(handle).children

    def add_child(self, handle: NodeHandle, key: Key) -> NodeHandle:
        """Return the child of `handle` under `key`, creating it if needed."""
        key = check_key(key)
        node = self._node(handle)
        existing = node.children.get(key)
        if existing is not None:
            return existing
        child = self._allocate(handle, key)
        node.children[key] = child
        return child

    def remove_child(self, handle: NodeHandle, key: Key) -> None:
        """Detach the child under `key` and free its whole subtree."""
        child = self._node(handle).children.pop(check_key(key), None)
        if child is not None:
            self._release(child)

    def move_child(self, handle: NodeHandle, key: Key, new_parent: NodeHandle) -> None:
        """
        Re-attach the child under `key` from `handle` to `new_parent`, keeping
        its subtree. A child already under `key` at `new_parent` is freed.
        """
        key = check_key(key)
        moved = self._node(handle).children.pop(key)
        target = self._node(new_parent)
        replaced = target.children.get(key)
        if replaced is not None:
            self._release(replaced)
        target.children[key] = moved
        self._node(moved).parent = new_parent

    def first_child(self, handle: NodeHandle) -> Optional[NodeHandle]:
        """
        Return the child with the smallest byte key, ignoring the terminator.
        Any child would do for path-length queries; this keeps them reproducible.
        """
        children = self._node(handle).children
        keys = [key for key in children if key is not TERMINATOR]
        if not keys:
            return None
        return children[min(keys)]

    def children(self, handle: NodeHandle) -> Iterator[tuple[Key, NodeHandle]]:
        return iter(list(self._node(handle).children.items()))

    def set_value(self, handle: NodeHandle, value: Any) -> None:
        self._node(handle).value = value

    # Whole-key operations

    def insert(self, key: Iterable[int], value: Any = True) -> NodeHandle:
        """Store `value` under the byte sequence `key`, creating the path."""
        current = self.root
        for byte in key:
            current = self.add_child(current, byte)
        self._node(current).value = value
        return current

    def find(self, key: Iterable[int]) -> Optional[NodeHandle]:
        """Return the node spelled by `key`, or None if the path is absent."""
        current = self.root
        for byte in key:
            current = self._node(current).children.get(check_key(byte))
            if current is None:
                return None
        return current

    def delete(self, key: Iterable[int]) -> Optional[NodeHandle]:
        """
        Remove the value stored under `key` and prune the path behind it.

        Nodes left without children and without a value are freed, walking
        up towards the root; the root itself is never freed.

        Returns:
            The handle that held the key (now possibly stale), or None if
            the key was not present
        """
        target = self.find(key)
        if target is None:
            return None
        self._node(target).value = None

        current = target
        while current != self.root:
            node = self._node(current)
            if node.children or node.value is not None:
                break
            parent = node.parent
            del self._node(parent).children[node.key]
            self._release(current)
            current = parent
        return target

    def clear(self) -> None:
        # generations survive a clear so handles from before it stay stale
        for index, node in enumerate(self._nodes):
            if node is not None:
                self._nodes[index] = None
                self._generations[index] += 1
        self._free = list(range(len(self._nodes) - 1, -1, -1))
        self._live = 0
        self.root = self._allocate(None, None)

    def __len__(self) -> int:
        return self._live

    def __contains__(self, key: Iterable[int]) -> bool:
        handle = self.find(key)
        return handle is not None and self._node(handle).value is not None
