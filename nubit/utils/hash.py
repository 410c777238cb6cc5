"""
Nubit DA utilities — Hashing helpers (SHA-256 + preimage recording)

Everything the verifier hashes goes through `sha256_recorded`, so a single
optional PreimageRecorder observes every (digest, preimage) pair of a
verification run. With no recorder the result is identical; only the
recording is skipped.

Domain prefixes shared by the NMT and the data-root tree:

  LEAF_PREFIX = 0x00
  NODE_PREFIX = 0x01
"""

from __future__ import annotations

from hashlib import sha256 as _sha256
from typing import TYPE_CHECKING, Optional

from .bytes import BytesLike, _b

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import PreimageRecorder

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


def sha256(data: BytesLike) -> bytes:
    """Return SHA-256(bytes(data))."""
    return _sha256(_b(data)).digest()


def sha256_recorded(recorder: Optional["PreimageRecorder"], preimage: BytesLike) -> bytes:
    """SHA-256 of `preimage`, reporting the pair to `recorder` when given."""
    pre = _b(preimage)
    digest = _sha256(pre).digest()
    if recorder is not None:
        recorder.record(digest, pre)
    return digest


def empty_hash() -> bytes:
    """SHA-256 of the empty string."""
    return _sha256(b"").digest()


def leaf_hash(recorder: Optional["PreimageRecorder"], leaf: BytesLike) -> bytes:
    """RFC 6962 leaf hash: SHA-256(0x00 || leaf)."""
    return sha256_recorded(recorder, LEAF_PREFIX + _b(leaf))


def inner_hash(recorder: Optional["PreimageRecorder"], left: bytes, right: bytes) -> bytes:
    """RFC 6962 inner hash: SHA-256(0x01 || left || right)."""
    return sha256_recorded(recorder, NODE_PREFIX + left + right)


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "sha256",
    "sha256_recorded",
    "empty_hash",
    "leaf_hash",
    "inner_hash",
]
