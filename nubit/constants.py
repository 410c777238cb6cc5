"""
Nubit DA constants.

Protocol-level sizes and markers shared by the codec, the NMT verifier and the
batch adapters. Changing any of these is a protocol-breaking change for every
node that replays batches referencing Nubit blobs.

- Namespace width and its (version, id) subdivision
- Hash / NMT node / share sizes
- Sequencer message framing and the DA header flag
- Blob pointer layout version
"""

from __future__ import annotations


# ------------------------------ namespaces ----------------------------------

#: Total namespace width in bytes (version byte + id bytes).
NAMESPACE_SIZE: int = 29
#: Width of the namespace id part.
NAMESPACE_ID_SIZE: int = 28
#: Largest representable namespace version (a single unsigned byte).
NAMESPACE_VERSION_MAX: int = 0xFF


# ------------------------------ hashing & shares ----------------------------

#: SHA-256 digest size.
HASH_SIZE: int = 32
#: Serialized NMT node: min_ns || max_ns || digest.
NMT_NODE_SIZE: int = 2 * NAMESPACE_SIZE + HASH_SIZE
#: Nominal share size served by the DA network.
SHARE_SIZE: int = 512


# ------------------------------ batch framing -------------------------------

#: Bytes of batch metadata (five u64 bounds) preceding the DA header byte.
SEQUENCER_HEADER_SIZE: int = 40
#: Header flag marking "the rest of this message is a Nubit blob pointer".
MESSAGE_HEADER_FLAG: int = 0xDA


# ------------------------------ pointer layout ------------------------------

#: Current BlobPointer binary layout version.
POINTER_VERSION: int = 1

#: Largest value of a u64 pointer field (square size, row indices).
U64_MAX: int = 2**64 - 1


#: Adapter name reported to logs and metrics.
ADAPTER_NAME: str = "Nubit"


__all__ = [
    "NAMESPACE_SIZE",
    "NAMESPACE_ID_SIZE",
    "NAMESPACE_VERSION_MAX",
    "HASH_SIZE",
    "NMT_NODE_SIZE",
    "SHARE_SIZE",
    "SEQUENCER_HEADER_SIZE",
    "MESSAGE_HEADER_FLAG",
    "POINTER_VERSION",
    "U64_MAX",
    "ADAPTER_NAME",
]
