"""
blockrz_sdk.rpc
---------------

RPC helpers.

This package exposes:
- RpcClient: HTTP JSON-RPC client with retries (see .http)
- SuiClient: typed wrapper for the Sui methods the tip flow needs (see .sui)

    from blockrz_sdk.rpc import RpcClient, SuiClient
    sui = SuiClient(RpcClient(url="https://fullnode.mainnet.sui.io:443"))
"""

from __future__ import annotations

from .http import RpcClient
from .sui import SuiClient

__all__ = ["RpcClient", "SuiClient"]
