"""
Nubit DA • NMT — Square verification

Decides whether a fetched square is consistent with the data root recorded
in a BlobPointer. Accept/reject only; the payload itself is returned by the
caller.

Algorithm
---------
1. Check geometry: the square must describe the same extended width and row
   range as the pointer, carry one row root and one column root per extended
   row/column, and hold exactly the rows `start_row..end_row`.
2. For each served row at absolute index `start_row + offset`, recompute its
   erasured NMT root over `ods_size = square_size // 2` and compare it with
   `row_roots[index]`. The first mismatch raises RowRootMismatch naming the
   row; remaining rows are not checked.
3. Hash `row_roots + column_roots` (in that order, untouched) into the data
   root and compare it byte-for-byte with `pointer.data_root`.

Every hash computed on the way is reported to the optional preimage
recorder; the recorder never changes the outcome.

Errors (all VerificationError subclasses):
    MalformedSquare, RowRootMismatch, DataRootMismatch
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..blob.types import BlobPointer, SquareData
from ..errors import DataRootMismatch, MalformedSquare, RowRootMismatch
from ..utils.bytes import bytes_to_hex
from ..utils.merkle import hash_from_byte_slices
from .node import NMTNodeError
from .tree import compute_row_root

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import PreimageRecorder

log = logging.getLogger(__name__)


def check_geometry(pointer: BlobPointer, square: SquareData) -> None:
    """Raise MalformedSquare unless the square's shape matches the pointer."""
    size = square.square_size
    problems = []
    if size <= 0 or size % 2 != 0:
        problems.append(f"square_size {size} is not a positive even width")
    if size != pointer.square_size:
        problems.append(f"square_size {size} != pointer square_size {pointer.square_size}")
    if (square.start_row, square.end_row) != (pointer.start_row, pointer.end_row):
        problems.append(
            f"rows {square.start_row}..{square.end_row} != pointer rows "
            f"{pointer.start_row}..{pointer.end_row}"
        )
    if len(square.row_roots) != size:
        problems.append(f"{len(square.row_roots)} row roots for width {size}")
    if len(square.column_roots) != size:
        problems.append(f"{len(square.column_roots)} column roots for width {size}")
    if square.end_row < square.start_row or square.end_row >= len(square.row_roots):
        problems.append(f"row range {square.start_row}..{square.end_row} outside the square")
    elif len(square.rows) != square.end_row - square.start_row + 1:
        problems.append(
            f"{len(square.rows)} rows served for range {square.start_row}..{square.end_row}"
        )
    if problems:
        raise MalformedSquare("; ".join(problems), data={"problems": problems})


def compute_data_root(
    square: SquareData,
    recorder: Optional["PreimageRecorder"] = None,
) -> bytes:
    """Data root over the row roots followed by the column roots."""
    return hash_from_byte_slices(list(square.row_roots) + list(square.column_roots), recorder)


def verify_square(
    pointer: BlobPointer,
    square: SquareData,
    recorder: Optional["PreimageRecorder"] = None,
) -> None:
    """
    Verify `square` against `pointer.data_root`. Returns None on success and
    raises a VerificationError subclass otherwise.
    """
    check_geometry(pointer, square)

    ods_size = square.ods_size
    for offset, row in enumerate(square.rows):
        row_index = square.start_row + offset
        try:
            root = compute_row_root(ods_size, row_index, row, recorder)
        except NMTNodeError as e:
            raise MalformedSquare(
                f"row {row_index}: {e}", data={"row_index": row_index}
            ) from e
        expected = square.row_roots[row_index]
        if root != expected:
            log.error(
                "row root mismatch row=%d served=%s computed=%s",
                row_index,
                bytes_to_hex(expected),
                bytes_to_hex(root),
            )
            raise RowRootMismatch(row_index, expected, root)

    data_root = compute_data_root(square, recorder)
    if data_root != pointer.data_root:
        log.error(
            "data root mismatch pointer=%s computed=%s",
            bytes_to_hex(pointer.data_root),
            bytes_to_hex(data_root),
        )
        raise DataRootMismatch(pointer.data_root, data_root)


__all__ = ["check_geometry", "compute_data_root", "verify_square"]
