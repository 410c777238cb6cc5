"""
Nubit DA utilities — Byte, hex and base64 helpers

  • Hex helpers with a lowercase "0x" prefix
  • Base64 helpers (the DA node's JSON encodes byte strings as std base64)
  • `first_few_bytes` for bounded log previews of large payloads

All functions are deterministic and side-effect free.
"""
from __future__ import annotations

import base64
import binascii
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

HEX_PREFIX = "0x"

#: Preview length used by `first_few_bytes`.
PREVIEW_BYTES = 16


def _b(x: BytesLike) -> bytes:
    if isinstance(x, bytes):
        return x
    if isinstance(x, bytearray):
        return bytes(x)
    if isinstance(x, memoryview):
        return x.tobytes()
    raise TypeError(f"expected bytes-like object, got {type(x)!r}")


# -----------------------------------------------------------------------------
# Hex helpers
# -----------------------------------------------------------------------------

def strip_0x(h: str) -> str:
    """Remove a leading '0x'/'0X' (if present)."""
    return h[2:] if h[:2] in ("0x", "0X") else h


def bytes_to_hex(b: BytesLike) -> str:
    """Return '0x' + lowercase hex for the given bytes."""
    return HEX_PREFIX + _b(b).hex()


def hex_to_bytes(s: str) -> bytes:
    """
    Parse hex with or without '0x'. Raises ValueError on malformed input or
    odd-length hex.
    """
    body = strip_0x(s.strip())
    if len(body) % 2 != 0:
        raise ValueError("hex payload length must be even")
    return bytes.fromhex(body)


# -----------------------------------------------------------------------------
# Base64 helpers
# -----------------------------------------------------------------------------

def b64encode(b: BytesLike) -> str:
    return base64.b64encode(_b(b)).decode("ascii")


def b64decode(s: str) -> bytes:
    """Strict standard base64 decode; raises ValueError on bad input."""
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"invalid base64: {e}") from e


# -----------------------------------------------------------------------------
# Log previews
# -----------------------------------------------------------------------------

def first_few_bytes(b: BytesLike, n: int = PREVIEW_BYTES) -> str:
    """Hex preview of at most `n` bytes, with a marker when truncated."""
    bb = _b(b)
    if len(bb) <= n:
        return bb.hex()
    return f"{bb[:n].hex()}...({len(bb)} bytes)"


__all__ = [
    "BytesLike",
    "HEX_PREFIX",
    "strip_0x",
    "bytes_to_hex",
    "hex_to_bytes",
    "b64encode",
    "b64decode",
    "first_few_bytes",
]
