"""
Nubit DA • Adapters

Glue between the rollup's batch pipeline and the DA capabilities:

  • reader.py : sequencer message → verified batch payload
  • writer.py : batch payload → DA commitment bytes (with fallback policy)
"""

from __future__ import annotations

from .reader import ReaderForNubit, Recovery, RecoveryStatus, recover, recover_payload_from_batch
from .writer import WriterForNubit

__all__ = [
    "ReaderForNubit",
    "Recovery",
    "RecoveryStatus",
    "recover",
    "recover_payload_from_batch",
    "WriterForNubit",
]
