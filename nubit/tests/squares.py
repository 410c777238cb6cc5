"""
Square builders for the Nubit DA tests.

`make_square` builds a small, fully consistent extended data square (all
original shares under one namespace, parity shares filled with a byte pattern)
and returns the matching pointer + verification envelope. Tests tamper with
the result to exercise the failure paths.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from nubit.blob.types import BlobPointer, SquareData
from nubit.constants import NAMESPACE_SIZE, SEQUENCER_HEADER_SIZE, SHARE_SIZE
from nubit.nmt.namespace import Namespace, encode_namespace
from nubit.nmt.tree import compute_row_root
from nubit.protocol.header import serialize_pointer_message
from nubit.utils.merkle import hash_from_byte_slices

USER_NS = encode_namespace("nitro-dev")


def build_grid(ods_size: int, ns: Namespace = USER_NS) -> List[List[bytes]]:
    size = 2 * ods_size
    grid: List[List[bytes]] = []
    for r in range(size):
        row: List[bytes] = []
        for c in range(size):
            tag = (r * size + c) & 0x7F
            if r < ods_size and c < ods_size:
                row.append(ns.raw + bytes([tag]) * (SHARE_SIZE - NAMESPACE_SIZE))
            else:
                row.append(bytes([0x80 | tag]) * SHARE_SIZE)
        grid.append(row)
    return grid


def square_from_grid(
    grid: List[List[bytes]],
    start_row: int = 0,
    end_row: Optional[int] = None,
) -> Tuple[BlobPointer, SquareData]:
    size = len(grid)
    ods = size // 2
    end_row = size - 1 if end_row is None else end_row
    row_roots = [compute_row_root(ods, r, grid[r]) for r in range(size)]
    column_roots = [compute_row_root(ods, c, [grid[r][c] for r in range(size)]) for c in range(size)]
    data_root = hash_from_byte_slices(row_roots + column_roots)
    pointer = BlobPointer(data_root=data_root, square_size=size, start_row=start_row, end_row=end_row)
    square = SquareData(
        row_roots=row_roots,
        column_roots=column_roots,
        rows=grid[start_row : end_row + 1],
        square_size=size,
        start_row=start_row,
        end_row=end_row,
    )
    return pointer, square


def make_square(
    ods_size: int = 2,
    start_row: int = 0,
    end_row: Optional[int] = None,
) -> Tuple[BlobPointer, SquareData]:
    return square_from_grid(build_grid(ods_size), start_row, end_row)


def flip_last_byte(share: bytes) -> bytes:
    return share[:-1] + bytes([share[-1] ^ 0x01])


def sequencer_message(pointer: BlobPointer, prefix: bytes = b"\x00" * SEQUENCER_HEADER_SIZE) -> bytes:
    return prefix + serialize_pointer_message(pointer)
