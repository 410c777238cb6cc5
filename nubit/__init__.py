"""
Nubit Data Availability (DA) integration package.

Public responsibilities:
- Encode namespace names and the Nubit header byte; serialize blob pointers.
- Recover batch payloads from pointer messages and verify the fetched square
  (NMT row roots + data root) before handing the payload back.
- Submit batches through a DA writer with an explicit on-chain fallback policy.
- Talk to the Nuport JSON-RPC service.

Import time stays light: `import nubit` pulls in only the version and the
value types. Adapters, the client and metrics are imported from their
submodules.
"""

from __future__ import annotations

from .blob.types import BlobPointer, SquareData
from .version import __version__, get_version

__all__ = ["__version__", "get_version", "BlobPointer", "SquareData"]
