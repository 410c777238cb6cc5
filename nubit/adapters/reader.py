from __future__ import annotations

"""
Nubit DA • Batch Reader Adapter
===============================

Turns a sequencer batch message that carries a Nubit blob pointer back into
the original batch payload, authenticating the data on the way.

Pipeline
--------
    sequencer_msg
      → skip 40-byte batch metadata, read header byte      (TruncatedMessage)
      → header flag check                                   (NotAPointerMessage)
      → decode BlobPointer                                  (MalformedPointer)
      → reader.read(pointer)                                (TransportError)
      → empty payload?  → "discarded", no verification
      → verify_square(pointer, square, recorder)            (VerificationError)
      → payload

Error policy
------------
* Malformed input (the three MalformedInput kinds) is logged and resolved into
  an empty payload. Replaying historical batches must stay deterministic even
  over corrupt data, so these never reach the caller as exceptions.
* Transport failures propagate as TransportError. Anything a reader raises
  that is not already a NubitError is wrapped (`raise ... from`), so a
  cancelled or timed-out fetch surfaces as a transport failure.
* Verification failures propagate unchanged. They are security relevant and
  retrying will not fix them.

No kind is ever converted into another.

Usage
-----
    from nubit.adapters.reader import ReaderForNubit

    reader = ReaderForNubit(client)
    payload = reader.recover_payload_from_batch(
        batch_num, batch_block_hash, sequencer_msg, recorder, validate_seq_msg=True
    )
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from ..blob.types import BlobPointer
from ..errors import (
    MalformedInput,
    MissingSquareData,
    NotAPointerMessage,
    NubitError,
    TransportError,
)
from ..interfaces import BlobReader, PreimageRecorder
from ..metrics import NubitMetrics, get_metrics
from ..nmt.verify import verify_square
from ..protocol.encoding import decode_pointer
from ..protocol.header import is_pointer_message, split_sequencer_message

log = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Result model
# --------------------------------------------------------------------------------------

class RecoveryStatus(str, enum.Enum):
    OK = "ok"
    DISCARDED = "discarded"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Recovery:
    """
    Outcome of a recovery that did not raise.

    Attributes:
        status:  ok | discarded (provably empty batch) | malformed (unreadable)
        payload: verified payload bytes; empty unless status is ok
        pointer: decoded pointer, when decoding got that far
        error:   the MalformedInput that was resolved locally, if any
    """
    status: RecoveryStatus
    payload: bytes = b""
    pointer: Optional[BlobPointer] = None
    error: Optional[MalformedInput] = None


# --------------------------------------------------------------------------------------
# Pipeline
# --------------------------------------------------------------------------------------

def parse_pointer_message(sequencer_msg: bytes) -> BlobPointer:
    """
    Extract the BlobPointer from a sequencer message.

    Raises TruncatedMessage, NotAPointerMessage or MalformedPointer.
    """
    header, rest = split_sequencer_message(sequencer_msg)
    if not is_pointer_message(header):
        raise NotAPointerMessage(
            f"header byte 0x{header:02x} does not carry the Nubit flag",
            data={"header": header},
        )
    return decode_pointer(rest)


def recover(
    sequencer_msg: bytes,
    reader: BlobReader,
    *,
    preimage_recorder: Optional[PreimageRecorder] = None,
    batch_num: Optional[int] = None,
    metrics: Optional[NubitMetrics] = None,
) -> Recovery:
    """
    Run the recovery pipeline (see module docstring) and classify the result.

    Raises:
        TransportError     reader could not deliver the data
        VerificationError  delivered data contradicts the pointer's data root
    """
    m = metrics or get_metrics()

    try:
        pointer = parse_pointer_message(sequencer_msg)
    except MalformedInput as e:
        log.error("couldn't deserialize Nubit blob pointer batch=%s err=%s", batch_num, e)
        m.note_recovery(RecoveryStatus.MALFORMED.value)
        return Recovery(status=RecoveryStatus.MALFORMED, error=e)

    try:
        payload, square = reader.read(pointer)
    except NubitError as e:
        log.error("failed to resolve blob pointer from Nubit batch=%s err=%s", batch_num, e)
        m.note_recovery(e.code)
        raise
    except Exception as e:
        log.error("failed to resolve blob pointer from Nubit batch=%s err=%r", batch_num, e)
        m.note_recovery(TransportError.default_code)
        raise TransportError(
            f"fetch failed: {e.__class__.__name__}: {e}",
            data={"batch_num": batch_num},
        ) from e

    payload = bytes(payload or b"")
    if not payload:
        # batch was discarded upstream
        log.debug("empty Nubit payload batch=%s pointer=%s", batch_num, pointer.to_dict())
        m.note_recovery(RecoveryStatus.DISCARDED.value)
        return Recovery(status=RecoveryStatus.DISCARDED, pointer=pointer)

    try:
        if square is None:
            raise MissingSquareData(
                "non-empty payload returned without square data",
                data={"batch_num": batch_num},
            )
        with m.time_verify():
            verify_square(pointer, square, preimage_recorder)
    except NubitError as e:
        log.error("Nubit square verification failed batch=%s err=%s", batch_num, e)
        m.note_recovery(e.code)
        raise

    m.note_recovery(RecoveryStatus.OK.value)
    return Recovery(status=RecoveryStatus.OK, payload=payload, pointer=pointer)


def recover_payload_from_batch(
    sequencer_msg: bytes,
    reader: BlobReader,
    *,
    preimage_recorder: Optional[PreimageRecorder] = None,
    batch_num: Optional[int] = None,
    metrics: Optional[NubitMetrics] = None,
) -> bytes:
    """Payload-only form of `recover`; malformed and discarded batches yield b""."""
    return recover(
        sequencer_msg,
        reader,
        preimage_recorder=preimage_recorder,
        batch_num=batch_num,
        metrics=metrics,
    ).payload


# --------------------------------------------------------------------------------------
# Adapter
# --------------------------------------------------------------------------------------

class ReaderForNubit:
    """
    Batch-reader adapter around a BlobReader capability.
    """

    def __init__(self, blob_reader: BlobReader, *, metrics: Optional[NubitMetrics] = None) -> None:
        self._blob_reader = blob_reader
        self._metrics = metrics

    def is_valid_header_byte(self, header_byte: int) -> bool:
        return is_pointer_message(header_byte)

    def get_proof(self, msg: bytes) -> bytes:
        return self._blob_reader.get_proof(msg)

    def recover_payload_from_batch(
        self,
        batch_num: int,
        batch_block_hash: bytes,
        sequencer_msg: bytes,
        preimage_recorder: Optional[PreimageRecorder] = None,
        validate_seq_msg: bool = False,
    ) -> bytes:
        # batch_block_hash and validate_seq_msg are part of the batch-reader
        # contract; pointer batches carry nothing they apply to.
        return recover_payload_from_batch(
            sequencer_msg,
            self._blob_reader,
            preimage_recorder=preimage_recorder,
            batch_num=batch_num,
            metrics=self._metrics,
        )


__all__ = [
    "RecoveryStatus",
    "Recovery",
    "parse_pointer_message",
    "recover",
    "recover_payload_from_batch",
    "ReaderForNubit",
]
