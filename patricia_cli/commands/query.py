"""
CLI Query Commands

Read-only commands over a committed trie:
    patricia get STORE KEY [--json]
    patricia root STORE [--json]
    patricia inspect STORE
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from patricia.store import JsonFileNodeStore, load_trie
from patricia.trie import Trie

from patricia_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    decode_text,
    display_bytes,
    require_store,
)


def _open(path: str) -> Trie:
    return load_trie(JsonFileNodeStore(require_store(path)))


def get_cmd(args: Namespace) -> int:
    """Print the value stored for a key."""
    trie = _open(args.store)
    key = decode_text(args.key)
    value = trie.get(key)

    if args.json:
        print(json.dumps({
            "key": "0x" + key.hex(),
            "found": value is not None,
            "value": None if value is None else "0x" + value.hex(),
        }, indent=2))
    elif value is not None:
        print(display_bytes(value))

    if value is None:
        if not args.json:
            print(f"Error: key not found: {args.key}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Print the root digest and size."""
    trie = _open(args.store)
    if args.json:
        print(json.dumps({"root": trie.root_hex, "size": trie.size()}, indent=2))
    else:
        print(f"root: {trie.root_hex}")
        print(f"size: {trie.size()}")
    return EXIT_SUCCESS


def inspect_cmd(args: Namespace) -> int:
    """Print the rendered tree."""
    trie = _open(args.store)
    print(trie.render())
    return EXIT_SUCCESS
