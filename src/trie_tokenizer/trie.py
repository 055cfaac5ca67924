"""Byte-keyed prefix index used for greedy longest-match tokenization.

Nodes live in a flat arena instead of owning each other:
- node 0 is the root and stands for the empty prefix
- `_children[n]` maps a byte value (0-255) to the index of the child node
- `_values[n]` holds the token id registered for the exact path to `n`, or None

Insert, lookup and release are all iterative, so very long tokens cannot blow
the interpreter stack.
"""
from __future__ import annotations

ROOT = 0


class PrefixIndex:
    """Arena-backed 256-ary trie mapping byte strings to integer ids."""

    __slots__ = ("_children", "_values")

    def __init__(self):
        self._children: list[dict[int, int]] = [{}]
        self._values: list[int | None] = [None]

    def __len__(self) -> int:
        """Number of nodes, root included."""
        return len(self._children)

    def __contains__(self, key: bytes) -> bool:
        return self.get(key) is not None

    def insert(self, key: bytes, value: int) -> None:
        """Register `key` -> `value`, creating missing nodes along the way.

        Re-inserting an existing key overwrites its value (last write wins).
        """
        children = self._children
        node = ROOT
        for byte in key:
            nxt = children[node].get(byte)
            if nxt is None:
                nxt = len(children)
                children[node][byte] = nxt
                children.append({})
                self._values.append(None)
            node = nxt
        self._values[node] = value

    def get(self, key: bytes) -> int | None:
        """Exact-key lookup; None when `key` is not a registered token."""
        children = self._children
        node = ROOT
        for byte in key:
            node = children[node].get(byte)
            if node is None:
                return None
        return self._values[node]

    def longest_match(self, haystack: bytes, start: int = 0) -> tuple[int | None, int]:
        """Greedy longest-prefix match of `haystack[start:]`.

        Follows child edges for as long as they exist and remembers the last
        terminal node seen. There is no backtracking.

        Returns:
            (value, matched_length), or (None, 0) if no terminal node was visited
        """
        children = self._children
        values = self._values
        node = ROOT
        value = None
        matched = 0
        end = len(haystack)
        i = start
        while i < end:
            node = children[node].get(haystack[i])
            if node is None:
                break
            i += 1
            if values[node] is not None:
                value = values[node]
                matched = i - start
        return value, matched

    def clear(self) -> None:
        """Release every node and start over with a bare root."""
        self._children = [{}]
        self._values = [None]
