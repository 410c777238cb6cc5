"""
Nubit DA • Batch Writer Adapter

Submits batch payloads to the DA network through a BlobWriter capability and
hands the opaque commitment bytes back to the batch poster unchanged.

Fallback policy on submit failure:

    fallback_disabled=True   → NoFallbackAvailable (terminal, the caller has
                               no other place to put the data)
    fallback_disabled=False  → the writer's own exception, re-raised as-is,
                               so the caller can post the data on chain
"""

from __future__ import annotations

import logging
from typing import Optional

from ..constants import ADAPTER_NAME
from ..errors import NoFallbackAvailable
from ..interfaces import BlobWriter
from ..metrics import NubitMetrics, get_metrics
from ..utils.bytes import first_few_bytes

log = logging.getLogger(__name__)


class WriterForNubit:
    """Batch-writer adapter around a BlobWriter capability."""

    def __init__(self, blob_writer: BlobWriter, *, metrics: Optional[NubitMetrics] = None) -> None:
        self._blob_writer = blob_writer
        self._metrics = metrics

    @property
    def name(self) -> str:
        return ADAPTER_NAME

    def store(self, message: bytes, fallback_disabled: bool = False) -> bytes:
        """
        Store `message` on the DA network and return the commitment bytes.

        Raises NoFallbackAvailable when the submit fails and fallback is
        disabled; otherwise re-raises the submit failure unchanged.
        """
        m = self._metrics or get_metrics()
        log.debug("%s store message=%s", self.name, first_few_bytes(message))
        try:
            commitment = self._blob_writer.store(message)
        except Exception as e:
            if fallback_disabled:
                log.error("%s store failed and on-chain fallback is disabled: %s", self.name, e)
                m.note_store("no_fallback")
                raise NoFallbackAvailable(
                    "unable to batch to Nubit and fallback storing data on chain is disabled",
                    data={"cause": f"{e.__class__.__name__}: {e}"},
                ) from e
            log.warning("%s store failed, leaving fallback to the caller: %s", self.name, e)
            m.note_store("error")
            raise
        m.note_store("ok")
        return commitment


__all__ = ["WriterForNubit"]
