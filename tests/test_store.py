import pytest

from coldl3.statedb.errors import StateDBError
from coldl3.statedb.merkle import MerkleTrie
from coldl3.statedb.store import BlockState, CommitmentStorage, StateStore


def test_state_db_basic_operations(tmp_path):
    with StateStore(tmp_path) as db:
        db.put(b"test_key", b"test_value")
        assert db.get(b"test_key") == b"test_value"
        root = db.commit(1)
        assert len(root) == 32


def test_missing_key_returns_none(tmp_path):
    with StateStore(tmp_path) as db:
        assert db.get(b"absent") is None


def test_values_persist_across_reopen(tmp_path):
    with StateStore(tmp_path / "state") as db:
        db.put(b"k", b"v")
    with StateStore(tmp_path / "state") as db:
        assert db.get(b"k") == b"v"


def test_commit_root_matches_trie(tmp_path):
    expected = MerkleTrie()
    expected.insert(b"a", b"1")
    expected.insert(b"b", b"2")
    with StateStore(tmp_path) as db:
        db.put(b"a", b"1")
        db.put(b"b", b"2")
        assert db.commit(1) == expected.root


def test_commit_without_changes_keeps_root(tmp_path):
    with StateStore(tmp_path) as db:
        assert db.commit(0) == bytes(32)
        db.put(b"a", b"1")
        first = db.commit(1)
        assert db.commit(2) == first


def test_block_state_fields():
    state = BlockState(height=7, merkle_root=bytes(32), timestamp=1234567890)
    assert state.height == 7
    assert state.merkle_root == bytes(32)
    assert state.timestamp == 1234567890


def test_commitment_storage_round_trip(tmp_path):
    with StateStore(tmp_path) as db:
        storage = CommitmentStorage(db)
        commitment = bytes([1]) * 32
        storage.store_commitment(commitment, b"payload")
        assert storage.get_commitment(commitment) == b"payload"
        assert storage.get_commitment(bytes(32)) is None


def test_commitment_must_be_32_bytes(tmp_path):
    with StateStore(tmp_path) as db:
        storage = CommitmentStorage(db)
        with pytest.raises(StateDBError):
            storage.store_commitment(b"short", b"payload")