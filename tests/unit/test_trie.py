"""
Trie Facade Unit Tests
Tests for patricia/trie/trie.py

Required tests:
1. Empty trie digest is NULL_DIGEST
2. Root digest independent of insertion order
3. Size equals number of distinct keys
4. Every branch has at least 2 children
5. Inserted values round trip through get()
6. Immutability: insert() never changes the receiver
7. Raw routing scenario: keys 0x12, 0x13 under Branch edge (1,)
"""
import itertools
import random

import pytest

from patricia.config import RuntimeConfig, TrieConfig, set_default_config
from patricia.crypto.hashing import NULL_DIGEST, sha256
from patricia.schemas.errors import (
    DuplicateKeyError,
    InvalidKeyError,
    StructuralInvariantError,
)
from patricia.trie import (
    BranchNode,
    LeafNode,
    RoutingMode,
    Trie,
    iter_leaf_paths,
    make_leaf,
    to_nibbles,
)
from patricia.trie.digests import DEFAULT_PROTOCOL


def _branches(node):
    if isinstance(node, BranchNode):
        yield node
        for _, child in node.populated():
            yield from _branches(child)


class TestEmptyTrie:
    """Tests for the empty trie."""

    def test_digest_is_null(self):
        trie = Trie.new()

        assert trie.hash() == NULL_DIGEST
        assert trie.root_hex == "0x" + "00" * 32
        assert trie.size() == 0
        assert len(trie) == 0
        assert trie.is_empty()

    def test_get_on_empty(self):
        assert Trie.new().get(b"anything") is None

    def test_empty_tries_equal_across_routing_digest(self):
        assert Trie.new().hash() == Trie.new(routing="raw").hash()


class TestRawRoutingScenario:
    """Keys 0x12 and 0x13 routed by their own nibbles."""

    def test_single_key(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a")

        assert isinstance(trie.root, LeafNode)
        assert trie.root.edge == (1, 2)
        assert trie.hash() == sha256(b"\x00\x12" + sha256(b"a"))
        assert trie.size() == 1

    def test_two_keys(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a").insert(b"\x13", b"b")

        root = trie.root
        assert isinstance(root, BranchNode)
        assert root.edge == (1,)
        assert root.children[2].edge == (2,)
        assert root.children[3].edge == (3,)
        assert trie.size() == 2
        assert trie.get(b"\x12") == b"a"
        assert trie.get(b"\x13") == b"b"

    def test_duplicate_raises_identically_twice(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a").insert(b"\x13", b"b")

        errors = []
        for _ in range(2):
            with pytest.raises(DuplicateKeyError) as exc_info:
                trie.insert(b"\x13", b"c")
            errors.append(exc_info.value.to_error_model())

        assert errors[0] == errors[1]
        assert trie.get(b"\x13") == b"b"


class TestOrderIndependence:
    """The root digest commits to the set of entries, not the history."""

    def test_all_permutations_hashed(self, entries):
        sample = entries[:5]
        digests = {
            Trie.from_items(order).hash()
            for order in itertools.permutations(sample)
        }
        assert len(digests) == 1

    def test_all_permutations_raw(self):
        from fixtures.common import make_raw_entries

        digests = {
            Trie.from_items(order, routing="raw").hash()
            for order in itertools.permutations(make_raw_entries())
        }
        assert len(digests) == 1

    def test_shuffled_large_set(self):
        from fixtures.common import make_entries

        items = make_entries(200)
        shuffled = list(items)
        random.Random(7).shuffle(shuffled)

        first = Trie.from_items(items)
        second = Trie.from_items(shuffled)

        assert first.hash() == second.hash()
        assert first == second
        assert hash(first) == hash(second)

    def test_different_sets_differ(self, entries):
        base = Trie.from_items(entries)
        assert base.hash() != Trie.from_items(entries[:-1]).hash()
        assert base.hash() != Trie.from_items(entries[:-1] + [(entries[-1][0], b"other")]).hash()


class TestStructure:
    """Structural invariants of built tries."""

    def test_size_counts_entries(self, trie, entries):
        assert trie.size() == len(entries)
        assert len(trie) == len(entries)

    def test_every_branch_has_two_children(self, trie, raw_trie):
        for t in (trie, raw_trie):
            branches = list(_branches(t.root))
            assert branches
            for branch in branches:
                assert sum(1 for c in branch.children if c is not None) >= 2

    def test_leaf_paths_match_keys(self, trie, raw_trie):
        for path, leaf in iter_leaf_paths(raw_trie.root):
            assert path == to_nibbles(leaf.key)
        for path, leaf in iter_leaf_paths(trie.root):
            assert path == to_nibbles(sha256(leaf.key))
            assert len(path) == 64

    def test_check_invariants_passes(self, trie, raw_trie, assert_valid_trie):
        assert_valid_trie(trie, expected_size=8)
        assert_valid_trie(raw_trie, expected_size=5)

    def test_check_invariants_detects_bad_digest(self):
        good = make_leaf((1, 2), b"\x12", b"a", DEFAULT_PROTOCOL)
        forged = LeafNode(edge=good.edge, key=good.key, value=b"b", digest=good.digest)
        trie = Trie(root=forged, routing=RoutingMode.RAW)

        with pytest.raises(StructuralInvariantError, match="digest"):
            trie.check_invariants()

    def test_check_invariants_detects_misplaced_leaf(self):
        leaf = make_leaf((1, 2), b"\x13", b"a", DEFAULT_PROTOCOL)
        trie = Trie(root=leaf, routing=RoutingMode.RAW)

        with pytest.raises(StructuralInvariantError, match="sits at path"):
            trie.check_invariants()


class TestOperations:
    """Tests for insert/update/get/items."""

    def test_round_trip(self, trie, entries):
        for key, value in entries:
            assert trie.get(key) == value

    def test_absent_keys(self, trie):
        assert trie.get(b"missing") is None
        assert trie.get(b"") is None
        assert b"missing" not in trie
        assert "key-0" not in trie
        assert b"key-0" in trie

    def test_insert_is_immutable(self, trie):
        before = trie.hash()
        newer = trie.insert(b"new", b"value")

        assert trie.hash() == before
        assert trie.get(b"new") is None
        assert newer.get(b"new") == b"value"
        assert newer.size() == trie.size() + 1

    def test_duplicate_leaves_trie_unchanged(self, trie):
        before = trie.hash()
        with pytest.raises(DuplicateKeyError):
            trie.insert(b"key-0", b"again")
        assert trie.hash() == before

    def test_update_overwrites(self, trie):
        updated = trie.update(b"key-0", b"changed")

        assert updated.get(b"key-0") == b"changed"
        assert updated.size() == trie.size()
        assert updated.hash() != trie.hash()
        assert trie.get(b"key-0") == b"value-0"

    def test_update_back_restores_digest(self, trie):
        assert trie.update(b"key-0", b"x").update(b"key-0", b"value-0").hash() == trie.hash()

    def test_update_inserts_absent_key(self, trie):
        assert trie.update(b"fresh", b"1").size() == trie.size() + 1

    def test_items_and_keys(self, trie, entries):
        assert dict(trie.items()) == dict(entries)
        assert sorted(trie.keys()) == sorted(key for key, _ in entries)

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidKeyError):
            Trie.new().insert(b"", b"v")

    def test_empty_value_allowed(self):
        trie = Trie.new().insert(b"k", b"")
        assert trie.get(b"k") == b""
        assert b"k" in trie

    def test_raw_key_length_enforced(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a")

        with pytest.raises(InvalidKeyError) as exc_info:
            trie.insert(b"\x12\x34", b"b")

        assert exc_info.value.details == {"expected": 1, "actual": 2}

    def test_accepts_bytearray(self):
        trie = Trie.new().insert(bytearray(b"k"), bytearray(b"v"))
        assert trie.get(b"k") == b"v"


class TestConstruction:
    """Tests for constructors and hash algorithm selection."""

    def test_routing_parsed_from_string(self):
        assert Trie.new(routing="RAW").routing is RoutingMode.RAW

    def test_unknown_routing(self):
        with pytest.raises(ValueError, match="routing mode"):
            Trie.new(routing="sorted")

    def test_hash_algorithm_changes_digest(self, entries):
        sha = Trie.from_items(entries)
        sha3 = Trie.from_items(entries, hash_algorithm="sha3_256")

        assert sha3.hash_algorithm == "sha3_256"
        assert sha.hash() != sha3.hash()
        assert sha != sha3

    def test_routing_changes_digest(self):
        items = [(b"\x12", b"a"), (b"\x34", b"b")]
        assert Trie.from_items(items).hash() != Trie.from_items(items, routing="raw").hash()

    def test_from_config(self):
        trie = Trie.from_config(TrieConfig(hash_algorithm="blake2b", routing="raw"))

        assert trie.routing is RoutingMode.RAW
        assert trie.hash_algorithm == "blake2b"

    def test_from_default_config(self):
        set_default_config(RuntimeConfig.from_dict({"trie": {"routing": "raw"}}))
        assert Trie.from_config().routing is RoutingMode.RAW

        set_default_config(None)
        assert Trie.from_config().routing is RoutingMode.HASHED

    def test_render(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a").insert(b"\x13", b"b")
        lines = trie.render().splitlines()

        assert len(lines) == 3
        assert lines[0].startswith("Branch ")
        assert Trie.new().render() == "Empty"
