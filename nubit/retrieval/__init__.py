"""
Nubit DA • Retrieval

Transport to the Nubit DA network:

  • client.py : Nuport JSON-RPC client (BlobReader + BlobWriter)
"""

from __future__ import annotations

from .client import NuportClient

__all__ = ["NuportClient"]
