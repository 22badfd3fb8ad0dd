"""
blockrz_sdk.tip.inject
======================

Append the BlockRazor tip to a programmable transaction.

Commands appended, in order (each consumes the previous one's output):

    coin    = SplitCoins(GasCoin, [tip])
    balance = 0x2::coin::into_balance<0x2::sui::SUI>(coin)
    <tip pkg>::tipmanager::add_tip(shared_tip_object, tip, balance)

The shared tip object is registered as a mutable shared input using its pinned
initial shared version. Nothing else in the graph is touched; no network I/O,
signing or submission happens here.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .. import address as _address
from ..constants import (
    ADD_TIP_FUNCTION,
    BLOCKRZ_PACKAGE_ID,
    COIN_MODULE,
    INTO_BALANCE_FUNCTION,
    SUI_COIN_TYPE,
    SUI_PACKAGE_ID,
    TIPMANAGER_MODULE,
    U64_MAX,
)
from ..errors import GraphError
from ..tx.ptb import Argument, TransactionGraph, TypeTag
from ..types.core import SharedTipObject
from .pool import TipObjectPool, TipObjectSelector

_LOG = logging.getLogger("blockrz_sdk.tip")

__all__ = ["TipInjector", "add_tip", "add_shared_object_input"]


def _sui_type_tag() -> TypeTag:
    try:
        return TypeTag.parse(SUI_COIN_TYPE)
    except ValueError as e:
        raise GraphError(f"cannot build coin type tag: {e}", step="into_balance") from e


def add_shared_object_input(tx: TransactionGraph, obj: SharedTipObject) -> Argument:
    """Register `obj` as a mutable shared input and return its argument reference."""
    try:
        object_id = _address.normalize(obj.object_id)
        return tx.shared_object(object_id, obj.version, mutable=True)
    except (ValueError, TypeError) as e:
        raise GraphError(str(e), step="shared_input", object_id=obj.object_id) from e


def _mark(tx: TransactionGraph) -> Optional[Tuple[int, int]]:
    inputs = getattr(tx, "inputs", None)
    commands = getattr(tx, "commands", None)
    if isinstance(inputs, list) and isinstance(commands, list):
        return len(inputs), len(commands)
    return None


def _rewind(tx: TransactionGraph, mark: Optional[Tuple[int, int]]) -> None:
    if mark is None:
        _LOG.warning("tip injection failed on a graph that cannot be rewound: %r", type(tx).__name__)
        return
    n_inputs, n_commands = mark
    del tx.inputs[n_inputs:]  # type: ignore[attr-defined]
    del tx.commands[n_commands:]  # type: ignore[attr-defined]


class TipInjector:
    """
    Appends tip commands to transaction graphs.

    `pool` and `selector` are injected so callers (and tests) control which
    tip object is used; `package_id` allows pointing at a non-mainnet
    deployment of the tipmanager package.
    """

    def __init__(
        self,
        pool: TipObjectPool,
        selector: TipObjectSelector,
        *,
        package_id: str = BLOCKRZ_PACKAGE_ID,
    ) -> None:
        self.pool = pool
        self.selector = selector
        self.package_id = package_id

    def add_tip(self, tx: TransactionGraph, tip_amount: int) -> SharedTipObject:
        """
        Append split → into_balance → add_tip to `tx`.

        Returns the tip object that was used. On failure the graph is left as
        it was: the tip object is chosen before anything is appended, and
        graphs exposing `inputs`/`commands` lists (`ProgrammableTransaction`)
        are truncated back to their prior length.

        Raises:
            GraphError if the amount is not a u64 or any graph step fails.
            PoolError if the selector picks an index outside the pool.
        """
        if isinstance(tip_amount, bool) or not isinstance(tip_amount, int):
            raise GraphError(f"tip amount must be an int, got {type(tip_amount).__name__}", step="split")
        if not (0 <= tip_amount <= U64_MAX):
            raise GraphError(f"tip amount out of u64 range: {tip_amount}", step="split")

        obj = self.pool.select(self.selector)
        try:
            _address.normalize(obj.object_id)
        except ValueError as e:
            raise GraphError(str(e), step="shared_input", object_id=obj.object_id) from e
        coin_type = _sui_type_tag()

        mark = _mark(tx)
        try:
            self._append_tip(tx, tip_amount, obj, coin_type)
        except Exception:
            _rewind(tx, mark)
            raise

        _LOG.debug("tip of %d appended via %s", tip_amount, obj.object_id)
        return obj

    def _append_tip(self, tx: TransactionGraph, tip_amount: int, obj: SharedTipObject, coin_type: TypeTag) -> None:
        try:
            amount = tx.pure_u64(tip_amount)
            coin = tx.split_coins(tx.gas(), [amount])
        except (ValueError, TypeError) as e:
            raise GraphError(str(e), step="split") from e

        try:
            balance = tx.move_call(
                SUI_PACKAGE_ID,
                COIN_MODULE,
                INTO_BALANCE_FUNCTION,
                [coin_type],
                [coin],
            )
        except (ValueError, TypeError) as e:
            raise GraphError(str(e), step="into_balance") from e

        shared = add_shared_object_input(tx, obj)

        try:
            tx.move_call(
                self.package_id,
                TIPMANAGER_MODULE,
                ADD_TIP_FUNCTION,
                [],
                [shared, amount, balance],
            )
        except (ValueError, TypeError) as e:
            raise GraphError(str(e), step="add_tip", object_id=obj.object_id) from e


def add_tip(tx: TransactionGraph, tip_amount: int, injector: Optional[TipInjector] = None) -> SharedTipObject:
    """Append the tip using `injector`, or the process-wide default one."""
    if injector is None:
        from ..context import default_context

        injector = default_context().injector
    return injector.add_tip(tx, tip_amount)
