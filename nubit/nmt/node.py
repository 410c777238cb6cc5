"""
Nubit DA • NMT — Node hashing rules

A serialized NMT node is

    min_ns (29) || max_ns (29) || digest (32)          = 90 bytes

and is produced by two hashing rules over SHA-256:

  • Leaf (namespaced data `ns || data`):
        digest = H( 0x00 || ns || data )
        node   = ns || ns || digest

  • Inner node:
        digest = H( 0x01 || left_node || right_node )
        min_ns = min(left.min, right.min)
        max_ns = see below
        node   = min_ns || max_ns || digest

Max-namespace rule (IgnoreMaxNamespace)
---------------------------------------
Parity shares carry PARITY_SHARES_NAMESPACE (all 0xFF). So that the root of a
row still advertises the highest *data* namespace it holds:

    if left.min  == PARITY: max_ns = PARITY
    elif right.min == PARITY: max_ns = left.max
    else: max_ns = max(left.max, right.max)

Siblings must be namespace-ordered (right.min >= left.max) and every node
must satisfy min_ns <= max_ns; violations raise NMTNodeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..constants import NAMESPACE_SIZE, NMT_NODE_SIZE
from ..utils.hash import LEAF_PREFIX, NODE_PREFIX, empty_hash, sha256_recorded
from .namespace import PARITY_SHARES_NAMESPACE, ZERO_NAMESPACE

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import PreimageRecorder


class NMTNodeError(ValueError):
    """Raised for malformed node inputs (sizes, namespace ordering)."""


def min_namespace(node: bytes) -> bytes:
    return node[:NAMESPACE_SIZE]


def max_namespace(node: bytes) -> bytes:
    return node[NAMESPACE_SIZE : 2 * NAMESPACE_SIZE]


def node_digest(node: bytes) -> bytes:
    return node[2 * NAMESPACE_SIZE :]


@dataclass
class NmtHasher:
    """
    SHA-256 NMT hasher with optional preimage recording.

    Attributes:
        recorder:        optional sink for every (digest, preimage) pair
        ignore_max_ns:   apply the parity max-namespace rule (on by default)
    """

    recorder: Optional["PreimageRecorder"] = None
    ignore_max_ns: bool = True

    # ------------------------------------------------------------------ #

    def empty_root(self) -> bytes:
        """Root of a tree with no leaves."""
        return ZERO_NAMESPACE.raw + ZERO_NAMESPACE.raw + empty_hash()

    def hash_leaf(self, ndata: bytes) -> bytes:
        """Hash namespaced data `ns || data` into a leaf node."""
        if len(ndata) < NAMESPACE_SIZE:
            raise NMTNodeError(
                f"namespaced data must be at least {NAMESPACE_SIZE} bytes, got {len(ndata)}"
            )
        ns = bytes(ndata[:NAMESPACE_SIZE])
        digest = sha256_recorded(self.recorder, LEAF_PREFIX + bytes(ndata))
        return ns + ns + digest

    def hash_node(self, left: bytes, right: bytes) -> bytes:
        """Hash two child nodes into their parent node."""
        self.validate_node(left)
        self.validate_node(right)

        l_min, l_max = min_namespace(left), max_namespace(left)
        r_min, r_max = min_namespace(right), max_namespace(right)
        if r_min < l_max:
            raise NMTNodeError("unordered siblings: right.min < left.max")

        parity = PARITY_SHARES_NAMESPACE.raw
        ns_min = min(l_min, r_min)
        if self.ignore_max_ns and l_min == parity:
            ns_max = parity
        elif self.ignore_max_ns and r_min == parity:
            ns_max = l_max
        else:
            ns_max = max(l_max, r_max)

        digest = sha256_recorded(self.recorder, NODE_PREFIX + left + right)
        return ns_min + ns_max + digest

    @staticmethod
    def validate_node(node: bytes) -> None:
        if len(node) != NMT_NODE_SIZE:
            raise NMTNodeError(f"NMT node must be {NMT_NODE_SIZE} bytes, got {len(node)}")
        if max_namespace(node) < min_namespace(node):
            raise NMTNodeError("NMT node has max namespace below min namespace")


__all__ = [
    "NMTNodeError",
    "NmtHasher",
    "min_namespace",
    "max_namespace",
    "node_digest",
]
