import json
import sqlite3

import pytest

from coldl3.statedb.errors import (
    MerkleTrieError,
    StateDBError,
    StateIOError,
    StateSerializationError,
    StorageError,
    wrap_exception,
)


def test_merkle_error_message():
    error = MerkleTrieError("bad node")
    assert str(error) == "Merkle trie error: bad node"
    assert error.detail == "bad node"


def test_io_error_message_contains_detail():
    assert "File not found" in str(StateIOError("File not found"))


def test_wrap_json_error():
    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{ invalid json }")
    wrapped = wrap_exception(info.value)
    assert isinstance(wrapped, StateSerializationError)
    assert "Serialization error" in str(wrapped)


def test_wrap_sqlite_error():
    wrapped = wrap_exception(sqlite3.OperationalError("database is locked"))
    assert isinstance(wrapped, StorageError)
    assert "database is locked" in str(wrapped)


def test_wrap_keeps_own_errors():
    error = MerkleTrieError("x")
    assert wrap_exception(error) is error


@pytest.mark.parametrize(
    "cls", [StorageError, MerkleTrieError, StateIOError, StateSerializationError]
)
def test_all_errors_share_base(cls):
    error = cls("some detail")
    assert isinstance(error, StateDBError)
    assert "some detail" in str(error)