"""
Nubit DA • NMT — Tree builder and erasured row roots

`NMT` is an append-only Namespaced Merkle Tree:

    t = NMT()
    t.push(ns_bytes + share)       # namespaced data, non-decreasing namespaces
    root = t.root()                # 90-byte node: min_ns || max_ns || digest

The root is computed RFC 6962 style: a range of n >= 2 leaves splits at the
largest power of two strictly below n, there is no odd-node duplication, and
an empty tree has the well-known empty root (see `NmtHasher.empty_root`).

Erasured rows
-------------
A row (or column) of the extended data square holds 2*ods shares. Shares that
lie in the original quadrant (row < ods and col < ods) are pushed under their
own namespace prefix; every other share is parity and is pushed under
PARITY_SHARES_NAMESPACE:

    compute_row_root(ods_size, row_index, shares, recorder)

The same rule applies to columns with the axis roles swapped, which is why
the helper only needs the axis index.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from ..constants import NAMESPACE_SIZE
from .namespace import PARITY_SHARES_NAMESPACE
from .node import NmtHasher, NMTNodeError
from ..utils.merkle import split_point

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import PreimageRecorder


class NMT:
    """
    Append-only NMT over namespaced data.

    Notes
    -----
    • Leaves are hashed on push; inner nodes are computed on `root()` and the
      result is cached until the next push.
    • Pushing a namespace lower than the previous one raises NMTNodeError.
    """

    def __init__(self, hasher: Optional[NmtHasher] = None) -> None:
        self._hasher = hasher or NmtHasher()
        self._leaves: List[bytes] = []
        self._max_ns: Optional[bytes] = None
        self._root: Optional[bytes] = None

    # ------------------------------------------------------------------ #
    # Appends
    # ------------------------------------------------------------------ #

    def push(self, ndata: bytes) -> int:
        """Append namespaced data `ns || data`; returns the leaf index."""
        if len(ndata) < NAMESPACE_SIZE:
            raise NMTNodeError(
                f"namespaced data must be at least {NAMESPACE_SIZE} bytes, got {len(ndata)}"
            )
        ns = bytes(ndata[:NAMESPACE_SIZE])
        if self._max_ns is not None and ns < self._max_ns:
            raise NMTNodeError(
                f"leaf {len(self._leaves)}: namespace 0x{ns.hex()} pushed after 0x{self._max_ns.hex()}"
            )
        self._leaves.append(self._hasher.hash_leaf(bytes(ndata)))
        self._max_ns = ns
        self._root = None
        return len(self._leaves) - 1

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    # ------------------------------------------------------------------ #
    # Root
    # ------------------------------------------------------------------ #

    def root(self) -> bytes:
        if self._root is None:
            self._root = self._compute_root(0, len(self._leaves))
        return self._root

    def _compute_root(self, start: int, end: int) -> bytes:
        n = end - start
        if n == 0:
            return self._hasher.empty_root()
        if n == 1:
            return self._leaves[start]
        k = split_point(n)
        left = self._compute_root(start, start + k)
        right = self._compute_root(start + k, end)
        return self._hasher.hash_node(left, right)


def compute_row_root(
    ods_size: int,
    row_index: int,
    shares: Sequence[bytes],
    recorder: Optional["PreimageRecorder"] = None,
) -> bytes:
    """
    NMT root of one extended-square row (or column) at `row_index`.

    Raises NMTNodeError for shares shorter than a namespace or shares whose
    namespaces are out of order.
    """
    if ods_size <= 0:
        raise NMTNodeError("original square size must be positive")
    tree = NMT(NmtHasher(recorder=recorder))
    in_original_axis = row_index < ods_size
    for col_index, share in enumerate(shares):
        if len(share) < NAMESPACE_SIZE:
            raise NMTNodeError(
                f"share ({row_index},{col_index}) shorter than a namespace: {len(share)} bytes"
            )
        if in_original_axis and col_index < ods_size:
            ns = bytes(share[:NAMESPACE_SIZE])
        else:
            ns = PARITY_SHARES_NAMESPACE.raw
        tree.push(ns + bytes(share))
    return tree.root()


__all__ = ["NMT", "compute_row_root"]
