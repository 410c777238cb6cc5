"""
Nubit DA — Namespaced Merkle Tree (NMT)

Client-side NMT used to authenticate square data fetched from the DA network:

  • namespace.py : 29-byte Namespace type and the name → namespace codec
  • node.py      : SHA-256 leaf/inner hashing with namespace ranges
  • tree.py      : append-only tree builder and erasured row roots
  • verify.py    : row-root and data-root verification of a fetched square

Typical usage
-------------
    from nubit.nmt import tree, verify

    root = tree.compute_row_root(ods_size, row_index, shares)
    verify.verify_square(pointer, square, recorder)

Submodules are loaded lazily.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_SUBMODULES = (
    "namespace",
    "node",
    "tree",
    "verify",
)


def __getattr__(name: str) -> Any:
    """Lazily resolve well-known submodules, e.g. `nubit.nmt.tree`."""
    if name in _SUBMODULES:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_SUBMODULES))


__all__ = list(_SUBMODULES)
