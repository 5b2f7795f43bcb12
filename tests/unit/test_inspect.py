"""
Inspection Unit Tests
Tests for patricia/trie/inspect.py
"""
from patricia.trie import Trie
from patricia.trie.inspect import (
    DIGEST_SUMMARY_LENGTH,
    PREFIX_CUTOFF,
    describe_node,
    render_node,
    summarize_digest,
    summarize_path,
)
from patricia.trie.nodes import EMPTY


class TestSummaries:
    """Tests for digest and path shortening."""

    def test_digest_shortened(self):
        text = summarize_digest(b"\xab" * 32)

        assert text == "ab" * 6 + "..."
        assert len(text) == DIGEST_SUMMARY_LENGTH + 3

    def test_short_digest_kept(self):
        assert summarize_digest(b"\x01\x02") == "0102"

    def test_empty_path(self):
        assert summarize_path(()) == "-"

    def test_long_path_cut(self):
        path = tuple(range(16))
        assert summarize_path(path) == "01234567..."
        assert len(summarize_path(path)) == PREFIX_CUTOFF + 3

    def test_short_path_kept(self):
        assert summarize_path((1, 10)) == "1a"


class TestRender:
    """Tests for render_node() / describe_node()."""

    def test_empty(self):
        assert describe_node(EMPTY) == "Empty"
        assert render_node(EMPTY) == "Empty"

    def test_two_key_tree(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a").insert(b"\x13", b"b")
        root = trie.root

        lines = render_node(root).splitlines()

        assert lines == [
            f"Branch {summarize_digest(root.digest)} edge=1 size=2",
            f"  [2] Leaf {summarize_digest(root.children[2].digest)} edge=2 key=0x12",
            f"  [3] Leaf {summarize_digest(root.children[3].digest)} edge=3 key=0x13",
        ]

    def test_slots_rendered_in_hex(self):
        trie = Trie.new(routing="raw").insert(b"\x1a", b"a").insert(b"\x1f", b"b")
        text = render_node(trie.root)

        assert "[a] Leaf" in text
        assert "[f] Leaf" in text

    def test_root_branch_without_edge(self):
        trie = Trie.new(routing="raw").insert(b"\x12", b"a").insert(b"\x34", b"b")
        assert describe_node(trie.root).endswith("edge=- size=2")

    def test_long_key_shortened(self):
        trie = Trie.new().insert(b"k" * 20, b"v")
        line = describe_node(trie.root)

        assert line.startswith("Leaf ")
        assert line.endswith("key=0x" + ("6b" * 6) + "...")
        assert "edge=" in line and "..." in line.split("edge=")[1]
