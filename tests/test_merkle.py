from coldl3.statedb.merkle import MerkleTrie


def test_empty_root_is_zero():
    assert MerkleTrie().root == bytes(32)


def test_insert_and_get():
    trie = MerkleTrie()
    trie.insert(b"key", b"value")
    assert trie.get(b"key") == b"value"
    assert trie.get(b"missing") is None
    assert len(trie) == 1


def test_root_changes_after_insert():
    trie = MerkleTrie()
    trie.insert(b"a", b"1")
    first = trie.root
    assert len(first) == 32
    assert first != bytes(32)
    trie.insert(b"b", b"2")
    assert trie.root != first


def test_root_independent_of_insert_order():
    one, two = MerkleTrie(), MerkleTrie()
    for key, value in [(b"a", b"1"), (b"b", b"2"), (b"c", b"3")]:
        one.insert(key, value)
    for key, value in [(b"c", b"3"), (b"a", b"1"), (b"b", b"2")]:
        two.insert(key, value)
    assert one.root == two.root


def test_overwrite_replaces_value_and_root():
    trie = MerkleTrie()
    trie.insert(b"k", b"old")
    old_root = trie.root
    trie.insert(b"k", b"new")
    assert trie.get(b"k") == b"new"
    assert len(trie) == 1
    assert trie.root != old_root
    trie.insert(b"k", b"old")
    assert trie.root == old_root