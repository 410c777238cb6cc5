"""
Nubit DA • Blob Types

Transient value types passed between the batch adapters, the DA transport and
the square verifier.

Key types
---------
- BlobPointer: compact reference embedded in a batch message. Carries the
  data root committing to the extended data square plus the geometry needed
  to re-derive it (square size, first/last row holding the blob).
- SquareData:  the fetched verification envelope: full row/column root
  sequences, the subset of rows actually served, and its geometry.

Notes
-----
• `square_size` is the width of the *extended* square; the original quadrant
  is `square_size // 2` wide.
• Row indices are absolute indices into `row_roots`; `rows[i]` is the row at
  `start_row + i`.
• Root order is the DA network's canonical square layout and is never
  reordered, sorted or deduplicated.
• Binary pointer encoding lives in `nubit.protocol.encoding`; the dict forms
  here are for JSON (CLI, RPC payloads, logs).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from ..constants import HASH_SIZE, U64_MAX
from ..utils.bytes import b64decode, b64encode, bytes_to_hex, hex_to_bytes


# --------------------------------- Types ----------------------------------- #


@dataclass(frozen=True)
class BlobPointer:
    """
    Reference to one stored blob.

      • data_root   — 32-byte data root of the extended data square
      • square_size — extended square width
      • start_row   — first row (inclusive) holding the blob's shares
      • end_row     — last row (inclusive) holding the blob's shares

    Every pointer that can be constructed is encodable: fields fit in a u64
    and `start_row <= end_row < square_size`. Violations raise ValueError; the
    decoder reports the same conditions on wire bytes as MalformedPointer.
    """

    data_root: bytes
    square_size: int
    start_row: int
    end_row: int

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, (bytes, bytearray)) or len(self.data_root) != HASH_SIZE:
            raise ValueError(f"data_root must be {HASH_SIZE} bytes")
        object.__setattr__(self, "data_root", bytes(self.data_root))
        for name in ("square_size", "start_row", "end_row"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise ValueError(f"{name} must be a non-negative integer")
            if v > U64_MAX:
                raise ValueError(f"{name} must fit in an unsigned 64-bit integer")
        if not (self.start_row <= self.end_row < self.square_size):
            raise ValueError(
                f"rows must satisfy start_row <= end_row < square_size, got "
                f"{self.start_row}..{self.end_row} in width {self.square_size}"
            )

    @property
    def row_count(self) -> int:
        return self.end_row - self.start_row + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data_root": bytes_to_hex(self.data_root),
            "square_size": self.square_size,
            "start_row": self.start_row,
            "end_row": self.end_row,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "BlobPointer":
        return BlobPointer(
            data_root=hex_to_bytes(d["data_root"]),
            square_size=int(d["square_size"]),
            start_row=int(d["start_row"]),
            end_row=int(d["end_row"]),
        )


@dataclass(frozen=True)
class SquareData:
    """
    Verification envelope returned alongside a fetched payload.

      • row_roots    — NMT roots of every extended-square row, in order
      • column_roots — NMT roots of every extended-square column, in order
      • rows         — served rows; each row is a sequence of shares
      • square_size  — extended square width
      • start_row    — absolute index of rows[0]
      • end_row      — absolute index of rows[-1]
    """

    row_roots: Tuple[bytes, ...]
    column_roots: Tuple[bytes, ...]
    rows: Tuple[Tuple[bytes, ...], ...]
    square_size: int
    start_row: int
    end_row: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "row_roots", tuple(bytes(r) for r in self.row_roots))
        object.__setattr__(self, "column_roots", tuple(bytes(c) for c in self.column_roots))
        object.__setattr__(self, "rows", tuple(tuple(bytes(s) for s in row) for row in self.rows))

    @property
    def ods_size(self) -> int:
        return self.square_size // 2

    # JSON form mirrors the DA node: snake_case keys, std base64 byte strings.

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_roots": [b64encode(r) for r in self.row_roots],
            "column_roots": [b64encode(c) for c in self.column_roots],
            "rows": [[b64encode(s) for s in row] for row in self.rows],
            "square_size": self.square_size,
            "start_row": self.start_row,
            "end_row": self.end_row,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "SquareData":
        def _list(key: str) -> Sequence[Any]:
            v = d.get(key) or []
            if not isinstance(v, list):
                raise ValueError(f"{key} must be a list")
            return v

        return SquareData(
            row_roots=tuple(b64decode(r) for r in _list("row_roots")),
            column_roots=tuple(b64decode(c) for c in _list("column_roots")),
            rows=tuple(tuple(b64decode(s) for s in row) for row in _list("rows")),
            square_size=int(d["square_size"]),
            start_row=int(d["start_row"]),
            end_row=int(d["end_row"]),
        )


__all__ = ["BlobPointer", "SquareData"]
