"""
In-memory preimage recorder.

Collects the (digest → preimage) pairs produced while recomputing NMT row
roots and the data root, so the same computation can be replayed later from
preimages alone (e.g. inside a fraud-proof prover).
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple


class MemoryPreimageRecorder:
    """
    Dict-backed recorder. Recording the same digest twice keeps the first
    preimage; SHA-256 collisions are out of scope.
    """

    def __init__(self) -> None:
        self._preimages: Dict[bytes, bytes] = {}

    def record(self, hash: bytes, preimage: bytes) -> None:
        self._preimages.setdefault(bytes(hash), bytes(preimage))

    def get(self, hash: bytes) -> Optional[bytes]:
        return self._preimages.get(bytes(hash))

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        return iter(self._preimages.items())

    def __contains__(self, hash: object) -> bool:
        return isinstance(hash, (bytes, bytearray)) and bytes(hash) in self._preimages

    def __len__(self) -> int:
        return len(self._preimages)


__all__ = ["MemoryPreimageRecorder"]
