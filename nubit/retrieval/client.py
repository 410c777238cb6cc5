from __future__ import annotations

"""
Nubit DA • Retrieval • Nuport JSON-RPC client

Synchronous client for the Nuport RPC service (go-da JSON-RPC proxy). It
implements the BlobReader and BlobWriter capabilities consumed by the batch
adapters.

RPC surface used
----------------
- da.Submit(blobs, gasPrice, namespace) -> [id, ...]
    blobs:     list of std-base64 byte strings (one batch per call here)
    gasPrice:  -1.0 lets the node pick the price
    namespace: std-base64 of the 29-byte namespace
    Exactly one id must come back; it is returned as the commitment bytes.

Reads and proofs
----------------
The node does not serve square reads or share proofs yet. `read` returns an
empty payload with no square (the batch reader classifies that as a
discarded batch) and `get_proof` returns an empty proof.

Errors
------
Network failures, timeouts, non-2xx responses, JSON-RPC errors and malformed
results all raise `nubit.errors.TransportError` chained to the cause. The
client does not retry.

Usage
-----
    with NuportClient(get_config()) as client:
        commitment = client.store(batch)
"""

import itertools
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from ..blob.types import BlobPointer, SquareData
from ..config import NubitConfig
from ..errors import TransportError
from ..nmt.namespace import encode_namespace
from ..utils.bytes import b64decode, b64encode, first_few_bytes

log = logging.getLogger(__name__)

#: Gas price sentinel asking the node to estimate.
DEFAULT_GAS_PRICE = -1.0


class NuportClient:
    """
    JSON-RPC 2.0 client for Nuport.
    """

    def __init__(
        self,
        cfg: NubitConfig,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        cfg.validate()
        self.cfg = cfg
        self.namespace = encode_namespace(cfg.namespace)
        log.info("NubitDABackend namespace=%s", self.namespace.hex())

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if cfg.authkey:
            headers["Authorization"] = f"Bearer {cfg.authkey}"

        self._ids = itertools.count(1)
        self._own_client = client is None
        self._client = client or httpx.Client(base_url=cfg.url, headers=headers, timeout=cfg.timeout)
        if client is not None:
            self._client.headers.update(headers)

    def __str__(self) -> str:
        return f"NubitDASClient{{url:{self.cfg.url}}}"

    # --- context management

    def close(self) -> None:
        if self._own_client:
            self._client.close()

    def __enter__(self) -> "NuportClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- capabilities

    def store(self, message: bytes) -> bytes:
        """Submit one batch; returns the blob id as opaque commitment bytes."""
        log.debug("nubit.NuportClient.store message=%s", first_few_bytes(message))
        result = self.call(
            "da.Submit",
            [[b64encode(message)], DEFAULT_GAS_PRICE, b64encode(self.namespace.raw)],
        )
        if not isinstance(result, list) or len(result) != 1:
            n = len(result) if isinstance(result, list) else None
            log.error("submit batch data with NubitDA client failed: expected 1 blob id, got %s", n)
            raise TransportError(
                f"da.Submit returned {n} blob ids, expected exactly 1",
                data={"ids": n},
            )
        try:
            commitment = b64decode(result[0])
        except (TypeError, ValueError) as e:
            raise TransportError("da.Submit returned a malformed blob id") from e
        log.info("submit batch data with NubitDA client succeeded commitment=%s", commitment.hex())
        return commitment

    def read(self, pointer: BlobPointer) -> Tuple[bytes, Optional[SquareData]]:
        log.debug("nubit.NuportClient.read pointer=%s", pointer.to_dict())
        return b"", None

    def get_proof(self, msg: bytes) -> bytes:
        return b""

    # --- JSON-RPC

    def call(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Perform one JSON-RPC call and return its `result`."""
        payload: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params or []),
        }
        try:
            resp = self._client.post("", json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            log.error("Nuport RPC %s failed: %s", method, e)
            raise TransportError(f"{method}: {e.__class__.__name__}: {e}", data={"method": method}) from e
        except ValueError as e:
            raise TransportError(f"{method}: response is not JSON", data={"method": method}) from e

        if not isinstance(body, dict):
            raise TransportError(f"{method}: unexpected response shape", data={"method": method})
        err = body.get("error")
        if err:
            detail: List[str] = []
            if isinstance(err, dict):
                detail = [str(err.get("code", "")), str(err.get("message", ""))]
            log.error("Nuport RPC %s returned error %s", method, err)
            raise TransportError(
                f"{method}: rpc error {' '.join(d for d in detail if d) or err}",
                data={"method": method, "error": err},
            )
        return body.get("result")


__all__ = ["NuportClient", "DEFAULT_GAS_PRICE"]
