"""
blockrz_sdk.tip.pool
====================

The catalog of shared `tipmanager` objects a tip may be deposited into, and the
strategies used to pick one per transaction.

Picking spreads load across several shared objects so concurrent tipped
transactions do not all serialize on a single object. The choice carries no
security property, so a non-cryptographic PRNG is fine.

Pinned versions
---------------
Every entry carries the object's *initial shared version* as it was when the
pool was assembled. Nothing here re-fetches it. If an object is re-shared on
chain, refresh the pool (e.g. regenerate the JSON file passed to
`TipObjectPool.from_file`, using `SuiClient.get_initial_shared_version`);
otherwise the enclosing transaction fails object-version validation at
execution time.

File format accepted by `TipObjectPool.from_file`::

    [{"objectId": "0x…", "version": 730767796}, …]

or the mapping form ``{"0x…": 730767796, …}``.
"""

from __future__ import annotations

import json
import logging
import random
import threading
import time
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Protocol, Sequence, Tuple, Union

from .. import address as _address
from ..constants import DEFAULT_TIP_OBJECTS, U64_MAX
from ..errors import PoolError
from ..types.core import SharedTipObject

_LOG = logging.getLogger("blockrz_sdk.tip")

__all__ = [
    "TipObjectPool",
    "TipObjectSelector",
    "RandomSelector",
    "FixedSelector",
    "DEFAULT_POOL",
    "select_tip_object",
]


def _entry(object_id: Any, version: Any) -> SharedTipObject:
    try:
        oid = _address.normalize(object_id)
    except _address.AddressError as e:
        raise PoolError(str(e)) from e
    if isinstance(version, bool) or not isinstance(version, int):
        raise PoolError(f"version for {oid} must be an integer, got {version!r}")
    if not (0 <= version <= U64_MAX):
        raise PoolError(f"version for {oid} out of u64 range: {version}")
    return SharedTipObject(object_id=oid, version=version)


class TipObjectPool(Sequence[SharedTipObject]):
    """Immutable, ordered, non-empty sequence of `SharedTipObject`."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[SharedTipObject]) -> None:
        items = tuple(_entry(e.object_id, e.version) for e in entries)
        if not items:
            raise PoolError("tip object pool must contain at least one entry")
        seen = set()
        for e in items:
            if e.object_id in seen:
                raise PoolError(f"duplicate tip object {e.object_id}")
            seen.add(e.object_id)
        self._entries: Tuple[SharedTipObject, ...] = items

    # --- constructors ----------------------------------------------------

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, int]]) -> "TipObjectPool":
        return cls(_entry(oid, ver) for oid, ver in pairs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, int]) -> "TipObjectPool":
        """Build from ``{object_id: initial_shared_version}`` (insertion order kept)."""
        return cls.from_pairs(mapping.items())

    @classmethod
    def from_json(cls, data: Any) -> "TipObjectPool":
        if isinstance(data, Mapping):
            return cls.from_mapping(data)
        if isinstance(data, list):
            pairs = []
            for item in data:
                if not isinstance(item, Mapping) or "objectId" not in item or "version" not in item:
                    raise PoolError(f"pool entry must have objectId and version: {item!r}")
                pairs.append((item["objectId"], item["version"]))
            return cls.from_pairs(pairs)
        raise PoolError(f"unsupported pool document type: {type(data).__name__}")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TipObjectPool":
        p = Path(path)
        try:
            with p.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as e:
            raise PoolError(f"invalid JSON in tip pool file {p}: {e}") from e
        except OSError as e:
            raise PoolError(f"cannot read tip pool file {p}: {e}") from e
        pool = cls.from_json(data)
        _LOG.info("loaded %d tip objects from %s", len(pool), p)
        return pool

    @classmethod
    def default(cls) -> "TipObjectPool":
        return DEFAULT_POOL

    # --- sequence protocol -----------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __iter__(self) -> Iterator[SharedTipObject]:
        return iter(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"TipObjectPool(<{len(self._entries)} entries>)"

    def to_json(self) -> list:
        return [e.to_dict() for e in self._entries]

    def select(self, selector: "TipObjectSelector") -> SharedTipObject:
        idx = selector.choose(len(self._entries))
        if not (0 <= idx < len(self._entries)):
            raise PoolError(f"selector returned index {idx} for pool of size {len(self._entries)}")
        obj = self._entries[idx]
        _LOG.debug("selected tip object %s (version %d, index %d)", obj.object_id, obj.version, idx)
        return obj


DEFAULT_POOL = TipObjectPool.from_pairs(DEFAULT_TIP_OBJECTS)


# -----------------------------------------------------------------------------
# Selection strategies
# -----------------------------------------------------------------------------


class TipObjectSelector(Protocol):
    def choose(self, n: int) -> int:
        """Return an index in ``range(n)``."""
        ...


class RandomSelector:
    """
    Uniform choice backed by its own `random.Random`.

    Seeded from the clock when no seed is given. Calls are serialized on a lock,
    so one instance may be shared across threads; the order of picks across
    threads is unspecified.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(time.time_ns() if seed is None else seed)
        self._lock = threading.Lock()

    def choose(self, n: int) -> int:
        if n <= 0:
            raise PoolError("cannot choose from an empty pool")
        with self._lock:
            return self._rng.randrange(n)


class FixedSelector:
    """Always returns the same index; for reproducible tests and pinning."""

    def __init__(self, index: int = 0) -> None:
        self.index = int(index)

    def choose(self, n: int) -> int:
        return self.index


def select_tip_object(
    pool: Optional[TipObjectPool] = None,
    selector: Optional[TipObjectSelector] = None,
) -> SharedTipObject:
    """
    Pick one tip object.

    Without arguments, uses the process-wide default pool and random selector
    (see `blockrz_sdk.context.default_context`).
    """
    if pool is None or selector is None:
        from ..context import default_context

        ctx = default_context()
        pool = pool if pool is not None else ctx.pool
        selector = selector if selector is not None else ctx.selector
    return pool.select(selector)
