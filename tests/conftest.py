"""
Shared pytest fixtures:
- Clean BLOCKRZ_* environment per test
- Reset of the process-wide default SDK context
- In-memory fake RPC / Sui clients (no network)
- Temporary tip-pool JSON files
"""
from __future__ import annotations

import json
import os
import typing as t
from pathlib import Path

import pytest

from blockrz_sdk.context import set_default_context


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("BLOCKRZ_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_default_context() -> t.Iterator[None]:
    set_default_context(None)
    yield
    set_default_context(None)


class FakeRpc:
    """
    Minimal in-memory JSON-RPC stub: answers from a {method: result} table and
    records every call. A result that is an Exception instance is raised.
    """

    def __init__(self, results: t.Optional[t.Dict[str, t.Any]] = None) -> None:
        self.results = dict(results or {})
        self.calls: t.List[t.Tuple[str, t.Any]] = []

    def request(self, method: str, params: t.Any = None) -> t.Any:
        self.calls.append((method, params))
        if method not in self.results:
            raise AssertionError(f"unexpected RPC method {method}")
        res = self.results[method]
        if isinstance(res, Exception):
            raise res
        return res

    call = request


def dry_run_response(computation: str, storage: str, rebate: str = "0") -> t.Dict[str, t.Any]:
    return {
        "effects": {
            "status": {"status": "success"},
            "gasUsed": {
                "computationCost": computation,
                "storageCost": storage,
                "storageRebate": rebate,
                "nonRefundableStorageFee": "0",
            },
        },
        "events": [],
    }


@pytest.fixture
def fake_rpc() -> t.Type[FakeRpc]:
    """The FakeRpc class; build one per test with the results it should serve."""
    return FakeRpc


@pytest.fixture
def dry_run() -> t.Callable[..., t.Dict[str, t.Any]]:
    return dry_run_response


@pytest.fixture
def pool_file(tmp_path: Path) -> Path:
    p = tmp_path / "pool.json"
    p.write_text(
        json.dumps(
            [
                {"objectId": "0x" + "11" * 32, "version": 7},
                {"objectId": "0x" + "22" * 32, "version": 9},
            ]
        ),
        encoding="utf-8",
    )
    return p
