"""Exceptions raised by the state database."""

from __future__ import annotations

import dbm
import json
import sqlite3


class StateDBError(Exception):
    """Base class for every state database failure."""

    label = "State database error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"{self.label}: {detail}")


class StorageError(StateDBError):
    label = "Storage error"


class MerkleTrieError(StateDBError):
    label = "Merkle trie error"


class StateIOError(StateDBError):
    label = "IO error"


class StateSerializationError(StateDBError):
    label = "Serialization error"


def wrap_exception(exc: BaseException) -> StateDBError:
    """Map a foreign exception onto the matching StateDBError."""
    if isinstance(exc, StateDBError):
        return exc
    if isinstance(exc, (sqlite3.Error, *dbm.error)):
        return StorageError(str(exc))
    if isinstance(exc, json.JSONDecodeError):
        return StateSerializationError(str(exc))
    if isinstance(exc, OSError):
        return StateIOError(str(exc))
    return StateDBError(str(exc))