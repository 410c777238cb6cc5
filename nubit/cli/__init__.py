from __future__ import annotations

"""
Nubit DA • CLI
==============

Small command-line utilities:
- inspect_pointer.py : decode a blob pointer message; verify a square against it.

Run as modules, e.g. `python -m nubit.cli.inspect_pointer`.
"""

from ..version import __version__

__all__ = ["__version__"]
