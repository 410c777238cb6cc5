from __future__ import annotations

"""
Nubit DA • inspect_pointer
==========================

Decode the Nubit blob pointer carried by a sequencer message and, optionally,
verify a fetched square against it.

Input forms accepted:
- A hex string (with or without 0x) of the whole sequencer message
  (40-byte batch metadata, header byte, pointer)
- With --raw, a hex string of the bare pointer bytes only
- '-' reads raw bytes from stdin

Exit codes
----------
    0  pointer decoded (and square verified, when --square is given)
    1  malformed input: bad hex, truncated message, unflagged header byte,
       undecodable pointer or unreadable square file
    2  the square does not verify against the pointer

Examples
--------
# Decode a sequencer message
python -m nubit.cli.inspect_pointer 0x0000...00da01ab12...

# Decode bare pointer bytes
python -m nubit.cli.inspect_pointer --raw 01ab12...

# Verify a square dumped as JSON (see SquareData.to_dict)
python -m nubit.cli.inspect_pointer 0x...da01... --square square.json
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional, Sequence

from ..adapters.reader import parse_pointer_message
from ..blob.types import BlobPointer, SquareData
from ..errors import MalformedInput, VerificationError
from ..nmt.verify import verify_square
from ..preimages import MemoryPreimageRecorder
from ..protocol.encoding import decode_pointer
from ..utils.bytes import hex_to_bytes

EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_VERIFY_FAILED = 2


def _read_input(value: str) -> bytes:
    if value == "-":
        return sys.stdin.buffer.read()
    return hex_to_bytes(value.strip().replace("_", ""))


def _load_square(path: str) -> SquareData:
    with open(path, "r", encoding="utf-8") as f:
        return SquareData.from_dict(json.load(f))


def _emit(obj: Dict[str, Any], *, stream=None) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True), file=stream or sys.stdout)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Nubit DA • inspect pointer — decode a blob pointer and optionally verify a square"
    )
    p.add_argument(
        "message",
        help="hex of the sequencer message (or of the bare pointer with --raw); '-' reads raw bytes from stdin",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        help="input is the bare pointer, without batch metadata and header byte",
    )
    p.add_argument(
        "--square",
        metavar="FILE",
        default=None,
        help="JSON file holding the square to verify against the pointer",
    )
    return p.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        data = _read_input(args.message)
    except ValueError as e:
        _emit({"error": {"code": "bad_hex", "message": str(e)}}, stream=sys.stderr)
        return EXIT_MALFORMED

    try:
        pointer: BlobPointer = decode_pointer(data) if args.raw else parse_pointer_message(data)
    except MalformedInput as e:
        _emit({"error": e.to_dict()}, stream=sys.stderr)
        return EXIT_MALFORMED

    out: Dict[str, Any] = {"pointer": pointer.to_dict()}
    if args.square is None:
        _emit(out)
        return EXIT_OK

    try:
        square = _load_square(args.square)
    except (OSError, ValueError, KeyError, TypeError) as e:
        _emit({"error": {"code": "bad_square_file", "message": str(e)}}, stream=sys.stderr)
        return EXIT_MALFORMED

    recorder = MemoryPreimageRecorder()
    try:
        verify_square(pointer, square, recorder)
    except VerificationError as e:
        out["verified"] = False
        out["error"] = e.to_dict()
        _emit(out)
        return EXIT_VERIFY_FAILED

    out["verified"] = True
    out["preimages"] = len(recorder)
    _emit(out)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
