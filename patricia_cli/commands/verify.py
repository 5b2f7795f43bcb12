"""
CLI Verify Command

Verify a committed trie offline:
- Every stored record hashes to the digest it is stored under
- Every digest and size recomputes from scratch
- Every branch has at least 2 children, every leaf sits at its key's path

Usage:
    patricia verify state.json [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from patricia.schemas.errors import RecordIntegrityError, StructuralInvariantError
from patricia.store import JsonFileNodeStore, NodeStoreError, load_trie

from patricia_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    require_store,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of store verification for CLI output."""
    store: str = ""
    root: str = ""
    size: int = 0
    records_ok: bool = False
    structure_ok: bool = False
    errors: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        return self.records_ok and self.structure_ok


def verify_store(path: str) -> VerifySummary:
    """Load and check a store, collecting failures instead of raising."""
    store_path = require_store(path)
    summary = VerifySummary(store=str(store_path))

    try:
        trie = load_trie(JsonFileNodeStore(store_path))
    except RecordIntegrityError as e:
        summary.errors.append(e.to_error_model().model_dump())
        return summary
    except NodeStoreError as e:
        summary.errors.append(
            RecordIntegrityError(str(e), details={"store": str(store_path)})
            .to_error_model()
            .model_dump()
        )
        return summary

    summary.records_ok = True
    summary.root = trie.root_hex
    summary.size = trie.size()

    try:
        trie.check_invariants()
    except StructuralInvariantError as e:
        summary.errors.append(e.to_error_model().model_dump())
        return summary

    summary.structure_ok = True
    return summary


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if every check passed, EXIT_VERIFICATION_FAILED otherwise
    """
    summary = verify_store(args.store)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"store: {summary.store}")
        print(f"root: {summary.root}")
        print(f"size: {summary.size}")
        print(f"records_ok: {str(summary.records_ok).lower()}")
        print(f"structure_ok: {str(summary.structure_ok).lower()}")
        for error in summary.errors:
            print(f"  ✗ [{error['code']}] {error['message']}")

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
