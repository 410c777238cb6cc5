"""
Nubit DA • Blob

Value types describing a stored blob (BlobPointer) and the square data served
with it (SquareData).
"""

from __future__ import annotations

from .types import BlobPointer, SquareData

__all__ = ["BlobPointer", "SquareData"]
