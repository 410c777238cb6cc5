import hashlib
import json
from dataclasses import replace

import pytest

from nubit.blob.types import SquareData
from nubit.errors import (
    DataRootMismatch,
    MalformedSquare,
    RowRootMismatch,
    VerificationError,
)
from nubit.nmt.verify import check_geometry, compute_data_root, verify_square
from nubit.preimages import MemoryPreimageRecorder

from .squares import build_grid, flip_last_byte, make_square, square_from_grid


def _tamper_row(square: SquareData, offset: int, col: int = 0) -> SquareData:
    rows = [list(r) for r in square.rows]
    rows[offset][col] = flip_last_byte(rows[offset][col])
    return replace(square, rows=rows)


# ---------------------------------------------------------------------------
# Accept
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("ods", [1, 2, 4])
def test_consistent_square_verifies(ods):
    pointer, square = make_square(ods_size=ods)
    verify_square(pointer, square)


@pytest.mark.parametrize("start,end", [(0, 0), (1, 2), (3, 3), (0, 3)])
def test_partial_row_range_verifies(start, end):
    pointer, square = make_square(ods_size=2, start_row=start, end_row=end)
    assert len(square.rows) == end - start + 1
    verify_square(pointer, square)


def test_data_root_matches_pointer():
    pointer, square = make_square()
    assert compute_data_root(square) == pointer.data_root


# ---------------------------------------------------------------------------
# Reject
# ---------------------------------------------------------------------------

def test_tampered_share_names_absolute_row():
    pointer, square = make_square(ods_size=2, start_row=1, end_row=3)
    bad = _tamper_row(square, offset=1)  # absolute row 2
    with pytest.raises(RowRootMismatch) as ei:
        verify_square(pointer, bad)
    assert ei.value.row_index == 2
    assert ei.value.expected == square.row_roots[2]
    assert ei.value.data["row_index"] == 2


def test_first_mismatch_wins():
    pointer, square = make_square()
    bad = _tamper_row(_tamper_row(square, offset=3), offset=1)
    with pytest.raises(RowRootMismatch) as ei:
        verify_square(pointer, bad)
    assert ei.value.row_index == 1


def test_tampered_parity_share_is_caught():
    pointer, square = make_square()
    bad = _tamper_row(square, offset=0, col=3)
    with pytest.raises(RowRootMismatch) as ei:
        verify_square(pointer, bad)
    assert ei.value.row_index == 0


def test_rows_consistent_with_forged_roots_fail_data_root():
    # a fully self-consistent square that is not the one the pointer commits to
    pointer, _ = make_square()
    grid = build_grid(2)
    grid[0][0] = flip_last_byte(grid[0][0])
    _, forged = square_from_grid(grid)
    with pytest.raises(DataRootMismatch) as ei:
        verify_square(pointer, forged)
    assert ei.value.expected == pointer.data_root
    assert ei.value.computed == compute_data_root(forged)


def test_tampered_column_root_fails_data_root():
    pointer, square = make_square()
    cols = list(square.column_roots)
    cols[1] = cols[0]
    with pytest.raises(DataRootMismatch):
        verify_square(pointer, replace(square, column_roots=cols))


def test_swapped_roots_fail_data_root():
    pointer, square = make_square(start_row=0, end_row=0)
    # row 0 untouched so row verification passes; order of later roots matters
    rows = list(square.row_roots)
    rows[2], rows[3] = rows[3], rows[2]
    with pytest.raises(DataRootMismatch):
        verify_square(pointer, replace(square, row_roots=rows))


def test_wrong_pointer_root():
    pointer, square = make_square()
    with pytest.raises(DataRootMismatch):
        verify_square(replace(pointer, data_root=b"\x00" * 32), square)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def test_square_size_must_match_pointer():
    pointer, square = make_square()
    with pytest.raises(MalformedSquare):
        check_geometry(replace(pointer, square_size=8), square)


def test_row_range_must_match_pointer():
    pointer, square = make_square(start_row=0, end_row=1)
    with pytest.raises(MalformedSquare):
        verify_square(replace(pointer, end_row=2), square)


def test_missing_column_root():
    pointer, square = make_square()
    with pytest.raises(MalformedSquare) as ei:
        verify_square(pointer, replace(square, column_roots=square.column_roots[:-1]))
    assert isinstance(ei.value, VerificationError)
    assert ei.value.data["problems"]


def test_served_rows_must_cover_range():
    pointer, square = make_square()
    with pytest.raises(MalformedSquare):
        verify_square(pointer, replace(square, rows=square.rows[:-1]))


def test_odd_square_size():
    pointer, square = make_square(start_row=0, end_row=1)
    odd = replace(square, square_size=3)
    with pytest.raises(MalformedSquare):
        check_geometry(replace(pointer, square_size=3), odd)


def test_share_shorter_than_namespace():
    pointer, square = make_square(start_row=0, end_row=0)
    rows = [list(square.rows[0])]
    rows[0][1] = b"\x00" * 4
    with pytest.raises(MalformedSquare):
        verify_square(pointer, replace(square, rows=rows))


# ---------------------------------------------------------------------------
# Preimages
# ---------------------------------------------------------------------------

def test_recorder_does_not_change_outcome():
    pointer, square = make_square()
    rec = MemoryPreimageRecorder()
    verify_square(pointer, square, rec)
    assert pointer.data_root in rec
    for root in square.row_roots:
        assert root[-32:] in rec
    for digest, preimage in rec.items():
        assert hashlib.sha256(preimage).digest() == digest


def test_recorder_still_filled_on_failure():
    pointer, square = make_square()
    rec = MemoryPreimageRecorder()
    with pytest.raises(DataRootMismatch):
        verify_square(replace(pointer, data_root=b"\x01" * 32), square, rec)
    assert len(rec) > 0


# ---------------------------------------------------------------------------
# JSON form
# ---------------------------------------------------------------------------

def test_square_json_form_survives_serialization():
    pointer, square = make_square(start_row=1, end_row=2)
    restored = SquareData.from_dict(json.loads(json.dumps(square.to_dict())))
    assert restored == square
    verify_square(pointer, restored)


def test_square_from_dict_rejects_bad_base64():
    _, square = make_square()
    d = square.to_dict()
    d["row_roots"][0] = "!!not-base64!!"
    with pytest.raises(ValueError):
        SquareData.from_dict(d)
