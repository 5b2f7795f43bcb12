"""
Node Stores

Key/value stores holding canonical JSON node records keyed by node
digest, plus the root manifest under ROOT_KEY.

- MemoryNodeStore: dict-backed, for tests and short-lived tries
- JsonFileNodeStore: one JSON document on disk, written atomically
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Optional, Protocol


logger = logging.getLogger(__name__)


# Reserved key for the root manifest, so the root digest (and with it the
# whole trie) can always be recovered.
ROOT_KEY = "__root__"


class NodeStoreError(Exception):
    """Error during node store IO operations."""
    pass


class NodeStore(Protocol):
    """Minimal interface the trie needs from a backing store."""

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def __contains__(self, key: object) -> bool: ...

    def flush(self) -> None: ...


class MemoryNodeStore:
    """In-memory node store."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def flush(self) -> None:
        pass


class JsonFileNodeStore(MemoryNodeStore):
    """
    Node store persisted as a single JSON object on disk.

    Writes are buffered in memory until flush(), which replaces the file
    atomically (temp file in the same directory + os.replace).
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise NodeStoreError(f"Cannot read node store {self.path}: {e}") from e
        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise NodeStoreError(f"Node store {self.path} is not a JSON object of strings")
        logger.debug(f"Loaded {len(data)} records from {self.path}")
        return data

    def flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, sort_keys=True, indent=1)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Wrote {len(self._data)} records to {self.path}")


__all__ = [
    "ROOT_KEY",
    "NodeStore",
    "NodeStoreError",
    "MemoryNodeStore",
    "JsonFileNodeStore",
]
