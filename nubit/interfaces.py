"""
Nubit DA ⇄ Collaborator Interfaces
==================================

Narrow capabilities the batch adapters consume. The DA transport (JSON-RPC
client, light node, test double) only has to implement these; adapters never
see the full client surface.

  • BlobReader        — resolve a BlobPointer into payload bytes + SquareData,
                        and forward proof requests unchanged
  • BlobWriter        — submit payload bytes, get back opaque commitment bytes
  • PreimageRecorder  — append-only sink for (hash, preimage) pairs produced
                        while verifying, used later for fraud-proof replay

Contracts
---------
- `BlobReader.read` raises on transport/availability failure. An empty payload
  (with or without square data) means "this batch is provably empty".
- Cancellation and timeouts belong to the implementation; they must surface as
  exceptions from `read`/`store`, never as empty results.
- `PreimageRecorder.record` must not influence verification results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from .blob.types import BlobPointer, SquareData


@runtime_checkable
class PreimageRecorder(Protocol):
    def record(self, hash: bytes, preimage: bytes) -> None:
        ...


@runtime_checkable
class BlobReader(Protocol):
    def read(self, pointer: "BlobPointer") -> Tuple[bytes, Optional["SquareData"]]:
        ...

    def get_proof(self, msg: bytes) -> bytes:
        ...


@runtime_checkable
class BlobWriter(Protocol):
    def store(self, message: bytes) -> bytes:
        ...


__all__ = ["PreimageRecorder", "BlobReader", "BlobWriter"]
