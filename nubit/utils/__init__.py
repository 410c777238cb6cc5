"""
Nubit DA utilities package

Small, reusable helpers used across the package:

  - nubit.utils.bytes   : byte/hex/base64 helpers and log previews
  - nubit.utils.hash    : SHA-256 wrappers with optional preimage recording
  - nubit.utils.merkle  : RFC 6962 Merkle root over byte slices (data root)

Submodules are loaded lazily so importing `nubit.utils` is cheap:

    from nubit import utils
    h = utils.hash.sha256(b"...")
"""
from __future__ import annotations

from importlib import import_module
from typing import Any

_SUBMODULES = ("bytes", "hash", "merkle")


def __getattr__(name: str) -> Any:
    """Lazily import and return one of the known utility submodules."""
    if name in _SUBMODULES:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_SUBMODULES))


__all__ = list(_SUBMODULES)
