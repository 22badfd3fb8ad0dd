"""
blockrz_sdk.cli
===============

Command-line interface for the BlockRazor Sui SDK, exposed via the `blockrz-sdk`
console script.

    $ blockrz-sdk --help
    $ python -m blockrz_sdk.cli fee --computation 1000000 --storage 2000000
"""

from __future__ import annotations

from .main import app, main

__all__ = ["app", "main"]
