"""
blockrz_sdk.rpc.sui
===================

Typed wrapper over the handful of Sui fullnode JSON-RPC methods the tip flow
touches:

- ``sui_dryRunTransactionBlock``    -> gas cost report for a serialized tx
- ``sui_getObject``                 -> latest (id, version, digest) / owner info
- ``suix_getReferenceGasPrice``     -> current reference gas price
- ``sui_executeTransactionBlock``   -> submission (optionally via the BlockRazor relay)

Submission to the relay uses the same JSON-RPC method; the relay authenticates
requests through an ``auth_token`` HTTP header (see `SDKConfig.relay_headers`).

Typical usage
-------------
    from blockrz_sdk.rpc.http import RpcClient
    from blockrz_sdk.rpc.sui import SuiClient

    sui = SuiClient(RpcClient("https://fullnode.mainnet.sui.io:443"))
    report = sui.dry_run_transaction_block(tx_b64)
    ref = sui.get_latest_object_ref("0x…")
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Union

from ..constants import DEFAULT_REQUEST_TYPE
from ..errors import JsonRpcCode, RpcError
from ..types.core import ObjectRef

_LOG = logging.getLogger("blockrz_sdk.rpc")

JsonDict = Dict[str, Any]


class _RpcClient(Protocol):
    """Minimal interface expected from `blockrz_sdk.rpc.http.RpcClient`."""

    def request(self, method: str, params: Optional[Union[Sequence[Any], Mapping[str, Any]]] = None) -> Any: ...


def _as_b64(tx: Union[bytes, bytearray, str]) -> str:
    if isinstance(tx, (bytes, bytearray)):
        return base64.b64encode(bytes(tx)).decode("ascii")
    if isinstance(tx, str):
        return tx
    raise TypeError(f"transaction must be bytes or base64 str, got {type(tx).__name__}")


def _require_dict(result: Any, method: str) -> JsonDict:
    if not isinstance(result, dict):
        raise RpcError(
            code=JsonRpcCode.INTERNAL_ERROR,
            message="unexpected result shape",
            data=type(result).__name__,
            method=method,
        )
    return result


class SuiClient:
    """
    Thin Sui JSON-RPC surface.

    Parameters
    ----------
    rpc : RpcClient-like
        Used for reads (dry runs, object lookups, gas price).
    relay : RpcClient-like, optional
        Used for `execute_transaction_block`. Falls back to `rpc` when absent.
    """

    def __init__(self, rpc: _RpcClient, relay: Optional[_RpcClient] = None) -> None:
        self.rpc = rpc
        self.relay = relay

    # --- reads -----------------------------------------------------------

    def dry_run_transaction_block(self, tx: Union[bytes, bytearray, str]) -> JsonDict:
        """Dry-run a BCS `TransactionData` (raw bytes or base64) and return the full response."""
        method = "sui_dryRunTransactionBlock"
        return _require_dict(self.rpc.request(method, [_as_b64(tx)]), method)

    def get_object(self, object_id: str, *, show_owner: bool = True, show_type: bool = False) -> JsonDict:
        method = "sui_getObject"
        options = {"showOwner": show_owner, "showType": show_type}
        return _require_dict(self.rpc.request(method, [object_id, options]), method)

    def get_latest_object_ref(self, object_id: str) -> ObjectRef:
        """
        Resolve the current (id, version, digest) of an object.

        Raises RpcError if the node reports the object as missing/deleted or
        returns an incomplete reference.
        """
        method = "sui_getObject"
        resp = self.get_object(object_id, show_owner=False)
        data = resp.get("data")
        if not isinstance(data, dict):
            err = resp.get("error")
            raise RpcError(
                code=JsonRpcCode.SERVER_ERROR,
                message=f"object {object_id} not available",
                data=err,
                method=method,
            )
        try:
            return ObjectRef.from_rpc_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message=f"incomplete object reference for {object_id}",
                data=data,
                method=method,
            ) from e

    def get_initial_shared_version(self, object_id: str) -> int:
        """Return `owner.Shared.initial_shared_version`, or raise RpcError if not shared."""
        method = "sui_getObject"
        resp = self.get_object(object_id, show_owner=True)
        data = resp.get("data") or {}
        owner = data.get("owner") if isinstance(data, dict) else None
        shared = owner.get("Shared") if isinstance(owner, dict) else None
        if not isinstance(shared, dict) or "initial_shared_version" not in shared:
            raise RpcError(
                code=JsonRpcCode.SERVER_ERROR,
                message=f"object {object_id} is not a shared object",
                data=owner,
                method=method,
            )
        return int(shared["initial_shared_version"])

    def get_reference_gas_price(self) -> int:
        return int(self.rpc.request("suix_getReferenceGasPrice", []))

    # --- writes ----------------------------------------------------------

    def execute_transaction_block(
        self,
        tx: Union[bytes, bytearray, str],
        signatures: Sequence[str],
        options: Optional[Mapping[str, Any]] = None,
        request_type: str = DEFAULT_REQUEST_TYPE,
    ) -> JsonDict:
        """Submit a signed transaction. Goes to the relay when one is configured."""
        method = "sui_executeTransactionBlock"
        target = self.relay if self.relay is not None else self.rpc
        opts = dict(options) if options is not None else {"showEffects": True}
        params = [_as_b64(tx), list(signatures), opts, request_type]
        _LOG.info("submitting transaction via %s", "relay" if self.relay is not None else "fullnode")
        return _require_dict(target.request(method, params), method)


__all__ = ["SuiClient"]
