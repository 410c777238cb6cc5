"""
Nubit DA • NMT — Namespace type & name codec.

A *namespace* is a fixed-width 29-byte identifier tagging every share a
tenant stores on the shared DA network. It subdivides into

    version (1 byte) || id (28 bytes)

The subdivision is kept for forward compatibility with multi-version
namespace schemes; the name codec today always produces one left-zero-padded
29-byte value:

    encode_namespace("nitro-dev")
      hex("nitro-dev")            = 6e6974726f2d646576
      left-pad with '0' to 58 hex = 00…006e6974726f2d646576
      decode                      → 29 bytes

Names whose UTF-8 hex encoding is already longer than 58 characters (i.e.
longer than 29 bytes) are rejected with `NamespaceTooLong`.

Reserved values
---------------
  • PARITY_SHARES_NAMESPACE (0xFF * 29) tags erasure-coded parity shares and
    is ignored when computing an NMT node's max namespace.
  • ZERO_NAMESPACE (0x00 * 29) tags the root of an empty tree.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..constants import NAMESPACE_ID_SIZE, NAMESPACE_SIZE, NAMESPACE_VERSION_MAX
from ..errors import NamespaceTooLong


class NamespaceError(ValueError):
    """Raised when raw namespace bytes or parts are invalid."""


@dataclass(frozen=True, order=True)
class Namespace:
    """
    Immutable 29-byte namespace.

    Ordering is lexicographic over the raw bytes, which is the order the NMT
    requires for its leaves.
    """
    raw: bytes

    def __post_init__(self) -> None:  # type: ignore[override]
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise NamespaceError("namespace must be bytes-like")
        b = bytes(self.raw)
        if len(b) != NAMESPACE_SIZE:
            raise NamespaceError(f"namespace must be {NAMESPACE_SIZE} bytes, got {len(b)}")
        object.__setattr__(self, "raw", b)

    @classmethod
    def from_parts(cls, version: int, id: bytes) -> "Namespace":
        if not (0 <= int(version) <= NAMESPACE_VERSION_MAX):
            raise NamespaceError(f"namespace version must be 0..{NAMESPACE_VERSION_MAX}")
        if len(id) != NAMESPACE_ID_SIZE:
            raise NamespaceError(f"namespace id must be {NAMESPACE_ID_SIZE} bytes, got {len(id)}")
        return cls(bytes([int(version)]) + bytes(id))

    @classmethod
    def from_name(cls, name: str) -> "Namespace":
        return encode_namespace(name)

    @property
    def version(self) -> int:
        return self.raw[0]

    @property
    def id(self) -> bytes:
        return self.raw[1:]

    def hex(self) -> str:
        return self.raw.hex()

    def __bytes__(self) -> bytes:
        return self.raw

    def __repr__(self) -> str:
        return f"Namespace(0x{self.raw.hex()})"


def encode_namespace(name: str) -> Namespace:
    """
    Encode a human-readable namespace name into a Namespace (see module
    docstring). Raises NamespaceTooLong if the name does not fit.
    """
    hex_str = name.encode("utf-8").hex()
    pad = NAMESPACE_SIZE * 2 - len(hex_str)
    if pad < 0:
        raise NamespaceTooLong(
            f"namespace {name!r} needs {len(hex_str) // 2} bytes, max is {NAMESPACE_SIZE}",
            data={"name": name, "max_bytes": NAMESPACE_SIZE},
        )
    return Namespace(bytes.fromhex("0" * pad + hex_str))


ZERO_NAMESPACE = Namespace(b"\x00" * NAMESPACE_SIZE)
PARITY_SHARES_NAMESPACE = Namespace(b"\xff" * NAMESPACE_SIZE)


__all__ = [
    "NamespaceError",
    "Namespace",
    "encode_namespace",
    "ZERO_NAMESPACE",
    "PARITY_SHARES_NAMESPACE",
]
