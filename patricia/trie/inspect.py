"""
Human-readable rendering of trie nodes.

Purely cosmetic: digests and paths are shortened for display and are
not part of the authenticated structure.

Example output:
    Branch 5b0f3ec2a1d4... edge=1 size=2
      [2] Leaf 8a1e6f0b9c3d... edge=2 key=0x12
      [3] Leaf 0c47d93e1b2a... edge=3 key=0x13
"""
from __future__ import annotations

from typing import Sequence

from patricia.trie.nibbles import format_nibbles
from patricia.trie.nodes import BranchNode, LeafNode, Node


# Number of hex digits shown for digests
DIGEST_SUMMARY_LENGTH = 12

# Maximum number of nibbles shown for paths before the ellipsis
PREFIX_CUTOFF = 8

ELLIPSIS = "..."

INDENT = "  "


def summarize_digest(digest: bytes) -> str:
    """Show the first DIGEST_SUMMARY_LENGTH hex digits of a digest."""
    text = digest.hex()
    if len(text) > DIGEST_SUMMARY_LENGTH:
        return text[:DIGEST_SUMMARY_LENGTH] + ELLIPSIS
    return text


def summarize_path(nibbles: Sequence[int]) -> str:
    """Show at most PREFIX_CUTOFF nibbles of a path; '-' for an empty path."""
    if not nibbles:
        return "-"
    return format_nibbles(nibbles, cutoff=PREFIX_CUTOFF)


def describe_node(node: Node) -> str:
    """One-line description of a single node."""
    if isinstance(node, BranchNode):
        return (
            f"Branch {summarize_digest(node.digest)} "
            f"edge={summarize_path(node.edge)} size={node.size}"
        )
    if isinstance(node, LeafNode):
        key = node.key.hex()
        if len(key) > DIGEST_SUMMARY_LENGTH:
            key = key[:DIGEST_SUMMARY_LENGTH] + ELLIPSIS
        return (
            f"Leaf {summarize_digest(node.digest)} "
            f"edge={summarize_path(node.edge)} key=0x{key}"
        )
    return "Empty"


def render_node(node: Node) -> str:
    """Render a subtree as an indented multi-line string."""
    lines: list[str] = []
    _render(node, depth=0, label="", lines=lines)
    return "\n".join(lines)


def _render(node: Node, depth: int, label: str, lines: list[str]) -> None:
    lines.append(f"{INDENT * depth}{label}{describe_node(node)}")
    if isinstance(node, BranchNode):
        for slot, child in node.populated():
            _render(child, depth + 1, f"[{slot:x}] ", lines)


__all__ = [
    "DIGEST_SUMMARY_LENGTH",
    "PREFIX_CUTOFF",
    "ELLIPSIS",
    "summarize_digest",
    "summarize_path",
    "describe_node",
    "render_node",
]
