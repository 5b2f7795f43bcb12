"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

from pathlib import Path

from patricia.crypto.hashing import from_hex


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def decode_text(text: str) -> bytes:
    """
    Turn a command-line or JSON string into bytes.

    0x-prefixed strings are hex-decoded, anything else is UTF-8 encoded.
    """
    if text.startswith("0x"):
        return from_hex(text)
    return text.encode("utf-8")


def display_bytes(data: bytes) -> str:
    """Show bytes as UTF-8 text when printable, otherwise as 0x hex."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return "0x" + data.hex()
    if text.isprintable() and not text.startswith("0x"):
        return text
    return "0x" + data.hex()


def require_store(path: str) -> Path:
    """Resolve a store path, raising if it does not exist."""
    store_path = Path(path)
    if not store_path.exists():
        raise FileNotFoundError(f"Store not found: {store_path}")
    return store_path
