"""
Tip-object pool: catalog integrity, loading overrides, selection strategies.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from blockrz_sdk.constants import DEFAULT_TIP_OBJECTS
from blockrz_sdk.errors import PoolError
from blockrz_sdk.tip.pool import (
    DEFAULT_POOL,
    FixedSelector,
    RandomSelector,
    TipObjectPool,
    select_tip_object,
)
from blockrz_sdk.types.core import SharedTipObject


def test_default_pool_matches_compiled_catalog() -> None:
    assert len(DEFAULT_POOL) == len(DEFAULT_TIP_OBJECTS) == 26
    for entry, (oid, ver) in zip(DEFAULT_POOL, DEFAULT_TIP_OBJECTS):
        assert entry == SharedTipObject(object_id=oid, version=ver)
    assert TipObjectPool.default() is DEFAULT_POOL


def test_pool_is_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_POOL[0] = DEFAULT_POOL[1]  # type: ignore[index]


def test_empty_pool_is_rejected() -> None:
    with pytest.raises(PoolError):
        TipObjectPool([])


def test_duplicates_are_rejected_after_normalization() -> None:
    with pytest.raises(PoolError):
        TipObjectPool.from_pairs([("0x2", 1), ("0x" + "0" * 63 + "2", 1)])


@pytest.mark.parametrize("version", [-1, 1 << 64, "7", True, 1.0])
def test_bad_versions_are_rejected(version: object) -> None:
    with pytest.raises(PoolError):
        TipObjectPool.from_pairs([("0x1", version)])  # type: ignore[list-item]


def test_bad_object_id_is_rejected() -> None:
    with pytest.raises(PoolError):
        TipObjectPool.from_pairs([("0xnothex", 1)])


def test_from_mapping_keeps_order_and_normalizes() -> None:
    pool = TipObjectPool.from_mapping({"0xB": 3, "0xa": 4})
    assert [e.object_id for e in pool] == ["0x" + "0" * 63 + "b", "0x" + "0" * 63 + "a"]
    assert [e.version for e in pool] == [3, 4]


def test_from_file_list_form(pool_file: Path) -> None:
    pool = TipObjectPool.from_file(pool_file)
    assert len(pool) == 2
    assert pool[1] == SharedTipObject("0x" + "22" * 32, 9)
    assert pool.to_json() == json.loads(pool_file.read_text(encoding="utf-8"))


def test_from_file_mapping_form(tmp_path: Path) -> None:
    p = tmp_path / "pool.json"
    p.write_text(json.dumps({"0x" + "33" * 32: 11}), encoding="utf-8")
    assert TipObjectPool.from_file(p)[0].version == 11


@pytest.mark.parametrize(
    "content",
    ["not json", "[]", "42", '[{"objectId": "0x1"}]', '[["0x1", 1]]'],
)
def test_from_file_rejects_bad_documents(tmp_path: Path, content: str) -> None:
    p = tmp_path / "pool.json"
    p.write_text(content, encoding="utf-8")
    with pytest.raises(PoolError):
        TipObjectPool.from_file(p)


def test_from_file_missing(tmp_path: Path) -> None:
    with pytest.raises(PoolError):
        TipObjectPool.from_file(tmp_path / "absent.json")


# -- selection -------------------------------------------------------------------


def test_fixed_selector_picks_the_given_entry() -> None:
    assert DEFAULT_POOL.select(FixedSelector(3)) == DEFAULT_POOL[3]
    assert select_tip_object(DEFAULT_POOL, FixedSelector(25)) == DEFAULT_POOL[25]


@pytest.mark.parametrize("index", [-1, 26, 1000])
def test_out_of_range_selection_is_a_pool_error(index: int) -> None:
    with pytest.raises(PoolError):
        DEFAULT_POOL.select(FixedSelector(index))


def test_random_selection_stays_in_pool_and_varies() -> None:
    sel = RandomSelector()
    picks = [DEFAULT_POOL.select(sel) for _ in range(1000)]
    members = set(DEFAULT_POOL)
    assert all(p in members for p in picks)
    assert len(set(picks)) > 1


def test_seeded_selection_is_reproducible() -> None:
    s1, s2 = RandomSelector(42), RandomSelector(42)
    assert [s1.choose(26) for _ in range(50)] == [s2.choose(26) for _ in range(50)]


def test_random_selector_rejects_empty_range() -> None:
    with pytest.raises(PoolError):
        RandomSelector(1).choose(0)


def test_random_selector_can_be_shared_across_threads() -> None:
    sel = RandomSelector(7)
    out: list = []
    lock = threading.Lock()

    def worker() -> None:
        local = [sel.choose(26) for _ in range(200)]
        with lock:
            out.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(out) == 1600
    assert all(0 <= i < 26 for i in out)


def test_select_without_arguments_uses_default_pool() -> None:
    picks = {select_tip_object() for _ in range(200)}
    assert picks <= set(DEFAULT_POOL)
    assert len(picks) > 1


def test_default_context_honours_pool_file_and_seed(monkeypatch: pytest.MonkeyPatch, pool_file: Path) -> None:
    monkeypatch.setenv("BLOCKRZ_TIP_POOL_FILE", str(pool_file))
    monkeypatch.setenv("BLOCKRZ_SELECTOR_SEED", "5")
    picked = select_tip_object()
    assert picked.object_id in {"0x" + "11" * 32, "0x" + "22" * 32}
