"""
CLI Build Command

Build a trie from a JSON object of key/value strings and commit it to a
JSON node store.

Usage:
    patricia build entries.json --out state.json [--routing raw] [--hash sha3_256] [--json]

Entries file:
    {"alice": "100", "0x0102": "0xff"}
    0x-prefixed strings are hex-decoded, others are UTF-8 encoded.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from patricia.config.runtime import TrieConfig
from patricia.schemas.errors import PatriciaException
from patricia.store import JsonFileNodeStore, commit_trie
from patricia.trie import Trie

from patricia_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    decode_text,
)


logger = logging.getLogger(__name__)


def read_entries(path: Path) -> list[tuple[bytes, bytes]]:
    """
    Read key/value pairs from a JSON object file.

    Raises:
        ValueError: If the file is not a JSON object of strings
    """
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Entries file must contain a JSON object, got {type(data).__name__}")

    entries = []
    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"Value for key {key!r} must be a string")
        entries.append((decode_text(key), decode_text(value)))
    return entries


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    entries_path = Path(args.entries)
    if not entries_path.exists():
        print(f"Error: Entries file not found: {entries_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    defaults = args.runtime_config.trie
    trie_config = TrieConfig(
        hash_algorithm=args.hash or defaults.hash_algorithm,
        routing=args.routing or defaults.routing,
    )

    try:
        entries = read_entries(entries_path)
    except ValueError as e:
        print(f"Error reading entries: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Building trie from {len(entries)} entries ({trie_config.routing} routing)")
    try:
        trie = Trie.from_config(trie_config).extend(entries)
    except PatriciaException as e:
        print(f"Error building trie: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    store = JsonFileNodeStore(args.out)
    root = commit_trie(trie, store)

    summary = {
        "store": str(store.path),
        "root": root,
        "size": trie.size(),
        "routing": trie.routing.value,
        "hash_algorithm": trie.hash_algorithm,
    }
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        for name, value in summary.items():
            print(f"{name}: {value}")
    return EXIT_SUCCESS
