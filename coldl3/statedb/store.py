"""Persistent key-value state with Merkle-root commits."""

from __future__ import annotations

import os
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from coldl3.statedb.errors import StateDBError, wrap_exception
from coldl3.statedb.merkle import MerkleTrie

COMMITMENT_SIZE = 32
_DB_FILE = "state.sqlite3"


class StateStore:
    """Key-value store kept in a directory, with pending changes committed to a Merkle root."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        directory = Path(path)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(directory / _DB_FILE, check_same_thread=False)
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)"
            )
            self._conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise wrap_exception(exc) from exc
        self._trie = MerkleTrie()
        self._pending: dict[bytes, bytes] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> StateStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def get(self, key: bytes) -> bytes | None:
        """Return the stored value for ``key``, if any."""
        with self._lock:
            try:
                row = self._conn.execute(
                    "SELECT value FROM kv WHERE key = ?", (bytes(key),)
                ).fetchone()
            except sqlite3.Error as exc:
                raise wrap_exception(exc) from exc
        return None if row is None else bytes(row[0])

    def put(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key`` and record it for the next commit."""
        key, value = bytes(key), bytes(value)
        with self._lock:
            try:
                self._conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value)
                )
                self._conn.commit()
            except sqlite3.Error as exc:
                raise wrap_exception(exc) from exc
            self._pending[key] = value

    def commit(self, version: int) -> bytes:
        """Fold pending changes into the Merkle trie and return its root."""
        with self._lock:
            for key, value in self._pending.items():
                self._trie.insert(key, value)
            self._pending.clear()
            return self._trie.root

    def close(self) -> None:
        """Close the underlying database."""
        with self._lock:
            try:
                self._conn.close()
            except sqlite3.Error as exc:
                raise wrap_exception(exc) from exc


@dataclass(frozen=True)
class BlockState:
    """State summary of one block."""

    height: int
    merkle_root: bytes
    timestamp: int


def _check_commitment(commitment: bytes) -> bytes:
    commitment = bytes(commitment)
    if len(commitment) != COMMITMENT_SIZE:
        raise StateDBError(
            f"commitment must be {COMMITMENT_SIZE} bytes, got {len(commitment)}"
        )
    return commitment


class CommitmentStorage:
    """Stores data keyed by 32-byte commitments."""

    def __init__(self, db: StateStore) -> None:
        self._db = db

    def store_commitment(self, commitment: bytes, data: bytes) -> None:
        """Store ``data`` under ``commitment``."""
        self._db.put(_check_commitment(commitment), data)

    def get_commitment(self, commitment: bytes) -> bytes | None:
        """Return the data stored under ``commitment``, if any."""
        return self._db.get(_check_commitment(commitment))