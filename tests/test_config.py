from __future__ import annotations

import pytest

from blockrz_sdk.config import SDKConfig
from blockrz_sdk.constants import DEFAULT_MAINNET_RPC


def test_defaults_from_empty_env() -> None:
    cfg = SDKConfig.from_env()
    assert cfg.rpc_url == DEFAULT_MAINNET_RPC
    assert cfg.relay_url is None and cfg.auth_token is None
    assert cfg.max_retries == 3
    assert cfg.tip_pool_file is None and cfg.selector_seed is None
    assert cfg.user_agent.startswith("blockrz-sui-sdk-py/")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCKRZ_RPC_URL", "http://127.0.0.1:9000")
    monkeypatch.setenv("BLOCKRZ_RELAY_URL", "https://relay.example")
    monkeypatch.setenv("BLOCKRZ_AUTH_TOKEN", "tok")
    monkeypatch.setenv("BLOCKRZ_TIMEOUT", "2.5")
    monkeypatch.setenv("BLOCKRZ_MAX_RETRIES", "0")
    monkeypatch.setenv("BLOCKRZ_SELECTOR_SEED", "99")
    monkeypatch.setenv("BLOCKRZ_TIP_POOL_FILE", "/tmp/pool.json")

    cfg = SDKConfig.from_env()

    assert cfg.rpc_url == "http://127.0.0.1:9000"
    assert cfg.relay_url == "https://relay.example"
    assert cfg.request_timeout == 2.5
    assert cfg.max_retries == 0
    assert cfg.selector_seed == 99
    assert cfg.tip_pool_file == "/tmp/pool.json"
    assert cfg.relay_headers()["auth_token"] == "tok"
    assert "auth_token" not in cfg.http_headers()


def test_empty_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCKRZ_RPC_URL", "")
    assert SDKConfig.from_env().rpc_url == DEFAULT_MAINNET_RPC


@pytest.mark.parametrize("var", ["BLOCKRZ_RPC_URL", "BLOCKRZ_RELAY_URL"])
def test_urls_must_be_http(monkeypatch: pytest.MonkeyPatch, var: str) -> None:
    monkeypatch.setenv(var, "ws://node")
    with pytest.raises(ValueError):
        SDKConfig.from_env()


def test_custom_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TESTNET_RPC_URL", "https://fullnode.testnet.sui.io:443")
    assert SDKConfig.from_env(prefix="TESTNET_").rpc_url.endswith("testnet.sui.io:443")


def test_with_overrides_ignores_unknown_keys_and_validates() -> None:
    base = SDKConfig()
    cfg = SDKConfig.with_overrides(base, max_retries=7, nonsense=1)
    assert cfg.max_retries == 7
    assert cfg.to_dict()["rpc_url"] == base.rpc_url
    with pytest.raises(ValueError):
        SDKConfig.with_overrides(base, rpc_url="ftp://x")
