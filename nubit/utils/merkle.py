"""
Nubit DA utilities — Merkle root over byte slices

RFC 6962 style binary Merkle tree, identical to Tendermint's
`HashFromByteSlices`, used to roll the row and column roots of an extended
data square into the block data root.

  • empty  → SHA-256("")
  • leaf   → SHA-256(0x00 || item)
  • inner  → SHA-256(0x01 || left || right)
  • split  → largest power of two strictly less than the item count

Unlike Bitcoin-style trees the last node of an odd layer is never duplicated,
so input order and count are both committed to. Items are never sorted or
deduplicated.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .hash import empty_hash, inner_hash, leaf_hash

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import PreimageRecorder


def split_point(length: int) -> int:
    """Largest power of two strictly less than `length` (length >= 2)."""
    if length < 2:
        raise ValueError("split point requires at least two items")
    k = 1 << (length.bit_length() - 1)
    if k == length:
        k >>= 1
    return k


def hash_from_byte_slices(
    items: Sequence[bytes],
    recorder: Optional["PreimageRecorder"] = None,
) -> bytes:
    """
    Merkle root of `items` in the given order.

    Args:
        items:    byte strings (row roots followed by column roots for a data root).
        recorder: optional preimage sink; every hashed preimage is reported.
    """
    n = len(items)
    if n == 0:
        return empty_hash()
    if n == 1:
        return leaf_hash(recorder, items[0])
    k = split_point(n)
    left = hash_from_byte_slices(items[:k], recorder)
    right = hash_from_byte_slices(items[k:], recorder)
    return inner_hash(recorder, left, right)


__all__ = ["split_point", "hash_from_byte_slices"]
