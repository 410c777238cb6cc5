"""
Nubit DA • Protocol • BlobPointer encoding
==========================================

Fixed-width, big-endian binary layout (version 1):

    offset  size  field
    ------  ----  -----------
         0     1  version (= POINTER_VERSION)
         1    32  data_root
        33     8  square_size   (u64, extended square width)
        41     8  start_row     (u64, inclusive)
        49     8  end_row       (u64, inclusive)
                  -----------
                  57 bytes

Decoding is strict: short buffers, trailing bytes, unknown versions and rows
outside `start_row <= end_row < square_size` all raise MalformedPointer.
Encoding is total for any pointer that decodes, so

    decode_pointer(encode_pointer(p)) == p
"""

from __future__ import annotations

import struct

from ..blob.types import BlobPointer
from ..constants import HASH_SIZE, POINTER_VERSION
from ..errors import MalformedPointer

_LAYOUT = struct.Struct(f">B{HASH_SIZE}sQQQ")

#: Encoded size of a version-1 pointer.
POINTER_SIZE: int = _LAYOUT.size


def encode_pointer(pointer: BlobPointer) -> bytes:
    """Serialize a BlobPointer using the current layout version."""
    return _LAYOUT.pack(
        POINTER_VERSION,
        pointer.data_root,
        pointer.square_size,
        pointer.start_row,
        pointer.end_row,
    )


def decode_pointer(buf: bytes) -> BlobPointer:
    """Parse a BlobPointer; raises MalformedPointer on any layout violation."""
    b = bytes(buf)
    if len(b) < POINTER_SIZE:
        raise MalformedPointer(
            f"pointer needs {POINTER_SIZE} bytes, got {len(b)}",
            data={"length": len(b)},
        )
    if len(b) > POINTER_SIZE:
        raise MalformedPointer(
            f"{len(b) - POINTER_SIZE} trailing bytes after pointer",
            data={"length": len(b)},
        )

    version, data_root, square_size, start_row, end_row = _LAYOUT.unpack(b)
    if version != POINTER_VERSION:
        raise MalformedPointer(
            f"unsupported pointer version {version}",
            data={"version": version},
        )
    if not (start_row <= end_row < square_size):
        raise MalformedPointer(
            "pointer rows must satisfy start_row <= end_row < square_size",
            data={"square_size": square_size, "start_row": start_row, "end_row": end_row},
        )
    return BlobPointer(
        data_root=data_root,
        square_size=square_size,
        start_row=start_row,
        end_row=end_row,
    )


__all__ = ["POINTER_SIZE", "encode_pointer", "decode_pointer"]
