"""
Nubit DA • Protocol

Wire conventions shared with every node that replays batches:

  • header.py   : the DA header flag and sequencer-message framing
  • encoding.py : BlobPointer binary layout (versioned, fixed width)
"""

from __future__ import annotations

from ..constants import MESSAGE_HEADER_FLAG, POINTER_VERSION
from .encoding import POINTER_SIZE, decode_pointer, encode_pointer
from .header import (
    is_pointer_message,
    serialize_pointer_message,
    split_sequencer_message,
)

__all__ = [
    "MESSAGE_HEADER_FLAG",
    "POINTER_VERSION",
    "POINTER_SIZE",
    "encode_pointer",
    "decode_pointer",
    "is_pointer_message",
    "serialize_pointer_message",
    "split_sequencer_message",
]
