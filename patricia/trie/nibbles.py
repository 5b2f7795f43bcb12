"""
Nibble Codec and Path Utilities

Routing paths are sequences of nibbles (4-bit values, 0..15) stored as
tuples of ints. This module converts bytes to and from nibbles, provides
the hex-prefix encoding used in leaf digests, and the common-prefix
helper used by insertion.

Hex-prefix encoding:
- Even length: flag byte 0x00, then the nibbles re-paired into bytes
- Odd length:  flag byte 0x10 | first nibble, then the remaining
               nibbles re-paired into bytes

Examples:
    (1, 2)    -> b"\\x00\\x12"
    (1, 2, 3) -> b"\\x11\\x23"
    ()        -> b"\\x00"
"""
from __future__ import annotations

from typing import Iterable, Sequence


Nibbles = tuple[int, ...]

EVEN_FLAG = 0x00
ODD_FLAG = 0x10

_HEX_DIGITS = "0123456789abcdef"


def validate_nibbles(nibbles: Iterable[int]) -> None:
    """
    Check that every element is a valid nibble.

    Raises:
        ValueError: If any value is outside 0..15 or not an int
    """
    for i, nibble in enumerate(nibbles):
        if not isinstance(nibble, int) or isinstance(nibble, bool) or not 0 <= nibble <= 0x0F:
            raise ValueError(f"Invalid nibble {nibble!r} at position {i}")


def to_nibbles(data: bytes) -> Nibbles:
    """
    Expand bytes into nibbles, high nibble first.

    Args:
        data: Raw bytes

    Returns:
        Tuple of 2 * len(data) nibbles

    Example:
        >>> to_nibbles(b"\\x12\\xab")
        (1, 2, 10, 11)
    """
    result: list[int] = []
    for byte in data:
        result.append(byte >> 4)
        result.append(byte & 0x0F)
    return tuple(result)


def from_nibbles(nibbles: Sequence[int]) -> bytes:
    """
    Pair nibbles back into bytes (inverse of to_nibbles).

    Raises:
        ValueError: If the sequence has odd length or invalid nibbles
    """
    if len(nibbles) % 2:
        raise ValueError(f"Nibbles must be of even length, got {len(nibbles)}")
    validate_nibbles(nibbles)
    return bytes(
        (nibbles[i] << 4) | nibbles[i + 1]
        for i in range(0, len(nibbles), 2)
    )


def encode_path(nibbles: Sequence[int]) -> bytes:
    """
    Hex-prefix encode a nibble sequence.

    The flag byte records the parity of the path. For odd lengths the
    unpaired first nibble is packed into the low bits of the flag byte so
    the rest re-pairs into whole bytes.

    Args:
        nibbles: Nibble sequence (any length, including empty)

    Returns:
        Encoded bytes, 1 + len(nibbles) // 2 long
    """
    validate_nibbles(nibbles)
    if len(nibbles) % 2:
        return bytes([ODD_FLAG | nibbles[0]]) + from_nibbles(nibbles[1:])
    return bytes([EVEN_FLAG]) + from_nibbles(nibbles)


def decode_path(data: bytes) -> Nibbles:
    """
    Decode a hex-prefix encoded path.

    Raises:
        ValueError: If the input is empty or the flag is not recognised
    """
    if not data:
        raise ValueError("Cannot decode an empty hex-prefix path")

    flag = data[0] & 0xF0
    if flag == ODD_FLAG:
        return (data[0] & 0x0F,) + to_nibbles(data[1:])
    if data[0] == EVEN_FLAG:
        return to_nibbles(data[1:])
    raise ValueError(f"Invalid hex-prefix flag byte 0x{data[0]:02x}")


def common_prefix(*sequences: Sequence[int]) -> Nibbles:
    """
    Longest sequence that is a prefix of every input.

    Reduces pairwise from left to right. No inputs, or a mismatch at the
    first position, yields an empty tuple.

    Example:
        >>> common_prefix((1, 2, 3), (1, 2, 4), (1, 5))
        (1,)
    """
    if not sequences:
        return ()

    prefix = tuple(sequences[0])
    for word in sequences[1:]:
        length = 0
        for a, b in zip(prefix, word):
            if a != b:
                break
            length += 1
        prefix = prefix[:length]
        if not prefix:
            break
    return prefix


def starts_with(path: Sequence[int], prefix: Sequence[int]) -> bool:
    """Check if `prefix` is a prefix of `path`."""
    if len(prefix) > len(path):
        return False
    return tuple(path[:len(prefix)]) == tuple(prefix)


def format_nibbles(nibbles: Sequence[int], cutoff: int | None = None) -> str:
    """
    Render nibbles as hex digits, truncated with '...' past `cutoff`.

    Example:
        >>> format_nibbles((1, 10, 15))
        '1af'
    """
    text = "".join(_HEX_DIGITS[n] for n in nibbles)
    if cutoff is not None and len(text) > cutoff:
        return text[:cutoff] + "..."
    return text


def parse_nibbles(text: str) -> Nibbles:
    """
    Parse a string of hex digits into nibbles (inverse of format_nibbles).

    Raises:
        ValueError: If the text contains a non-hex character
    """
    try:
        return tuple(int(ch, 16) for ch in text)
    except ValueError:
        raise ValueError(f"Invalid nibble string {text!r}") from None


__all__ = [
    "Nibbles",
    "EVEN_FLAG",
    "ODD_FLAG",
    "validate_nibbles",
    "to_nibbles",
    "from_nibbles",
    "encode_path",
    "decode_path",
    "common_prefix",
    "starts_with",
    "format_nibbles",
    "parse_nibbles",
]
