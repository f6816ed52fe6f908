"""Hash commitment over a set of key-value pairs."""

from __future__ import annotations

import hashlib

ROOT_SIZE = 32


class MerkleTrie:
    """Key-value map whose root hashes every pair, taken in key order."""

    def __init__(self) -> None:
        self._nodes: dict[bytes, bytes] = {}
        self._root = bytes(ROOT_SIZE)

    @property
    def root(self) -> bytes:
        """The 32-byte root; all zeros until the first insert."""
        return self._root

    def __len__(self) -> int:
        return len(self._nodes)

    def insert(self, key: bytes, value: bytes) -> None:
        """Set ``key`` to ``value`` and recompute the root."""
        self._nodes[bytes(key)] = bytes(value)
        self._update_root()

    def get(self, key: bytes) -> bytes | None:
        """Return the value stored for ``key``, if any."""
        return self._nodes.get(bytes(key))

    def _update_root(self) -> None:
        hasher = hashlib.blake2b()
        for key in sorted(self._nodes):
            hasher.update(key)
            hasher.update(self._nodes[key])
        self._root = hasher.digest()[:ROOT_SIZE]