"""
blockrz_sdk.tx
==============

Transaction-graph helpers.

Submodules
----------
- ptb : append-only programmable transaction builder and the `TransactionGraph`
        protocol the tip injector depends on.
- bcs : deterministic BCS writer used to encode the graph.
"""

from __future__ import annotations

from . import bcs as bcs
from . import ptb as ptb
from .ptb import ProgrammableTransaction, TransactionGraph, TypeTag

__all__ = ["bcs", "ptb", "ProgrammableTransaction", "TransactionGraph", "TypeTag"]
