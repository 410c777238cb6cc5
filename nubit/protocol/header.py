"""
Nubit DA • Protocol • Header byte & message framing
===================================================

A sequencer message that references Nubit data looks like

    [ 40-byte batch metadata ][ header byte ][ serialized BlobPointer ]

The metadata prefix belongs to the surrounding batch protocol. The header
byte is tested with a mask, not equality:

    is_pointer_message(b)  <=>  (b & 0xDA) == 0xDA

so reserved bits outside the flag may later carry sub-flags
(0xDA, 0xDF, 0xFF pass; 0x5A, 0x00 do not).
"""

from __future__ import annotations

from typing import Tuple

from ..blob.types import BlobPointer
from ..constants import MESSAGE_HEADER_FLAG, SEQUENCER_HEADER_SIZE
from ..errors import TruncatedMessage
from .encoding import encode_pointer


def has_bits(checking: int, bits: int) -> bool:
    return (checking & bits) == bits


def is_pointer_message(header: int) -> bool:
    """True iff every bit of the Nubit header flag is set in `header`."""
    return has_bits(header, MESSAGE_HEADER_FLAG)


def serialize_pointer_message(pointer: BlobPointer) -> bytes:
    """Header flag followed by the encoded pointer (metadata prefix not included)."""
    return bytes([MESSAGE_HEADER_FLAG]) + encode_pointer(pointer)


def split_sequencer_message(sequencer_msg: bytes) -> Tuple[int, bytes]:
    """
    Skip the batch metadata and return `(header_byte, remaining_bytes)`.

    Raises TruncatedMessage if the message ends before the header byte.
    """
    if len(sequencer_msg) <= SEQUENCER_HEADER_SIZE:
        raise TruncatedMessage(
            f"sequencer message has {len(sequencer_msg)} bytes, "
            f"header byte expected at offset {SEQUENCER_HEADER_SIZE}",
            data={"length": len(sequencer_msg)},
        )
    header = sequencer_msg[SEQUENCER_HEADER_SIZE]
    return header, bytes(sequencer_msg[SEQUENCER_HEADER_SIZE + 1 :])


__all__ = [
    "has_bits",
    "is_pointer_message",
    "serialize_pointer_message",
    "split_sequencer_message",
]
