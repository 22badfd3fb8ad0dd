"""
blockrz_sdk.tip
===============

Tip routing: the shared tip-object pool (`pool`) and the command injector
(`inject`).

    from blockrz_sdk.tip import TipInjector, TipObjectPool, RandomSelector

    injector = TipInjector(TipObjectPool.default(), RandomSelector())
    injector.add_tip(tx, fee.tip_amount)
"""

from __future__ import annotations

from .inject import TipInjector, add_shared_object_input, add_tip
from .pool import (
    DEFAULT_POOL,
    FixedSelector,
    RandomSelector,
    TipObjectPool,
    TipObjectSelector,
    select_tip_object,
)

__all__ = [
    "DEFAULT_POOL",
    "FixedSelector",
    "RandomSelector",
    "TipInjector",
    "TipObjectPool",
    "TipObjectSelector",
    "add_shared_object_input",
    "add_tip",
    "select_tip_object",
]
