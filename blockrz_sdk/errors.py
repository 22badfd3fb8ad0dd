"""
Typed error classes for the BlockRazor Sui SDK.

These are raised by the fee calculator, the tip injector, rpc/http and the pool
loader so callers can catch specific failure modes while still being able to
catch the base `BlockRzSdkError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional

__all__ = [
    "BlockRzSdkError",
    "InvalidAmount",
    "AmountOverflow",
    "GraphError",
    "PoolError",
    "RpcError",
    "JsonRpcCode",
    "from_jsonrpc_error",
]


class BlockRzSdkError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 spec
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000

    # Client-side transport failure (never sent by a node)
    TRANSPORT_ERROR = -32098


@dataclass(eq=False)
class InvalidAmount(BlockRzSdkError, ValueError):
    """Raised when a cost field is not a base-10, non-negative integer string."""

    field: str
    value: Any

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"invalid {self.field}: {self.value!r}"


@dataclass(eq=False)
class AmountOverflow(BlockRzSdkError, OverflowError):
    """
    Raised when a computed amount does not fit in 64 unsigned bits.

    This is fatal for the given inputs: the cost report is pathological and the
    transaction must not be budgeted or signed from it.
    """

    field: str
    value: int

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.field} exceeds uint64: {self.value}"


@dataclass(eq=False)
class GraphError(BlockRzSdkError):
    """
    Raised when appending tip commands to a transaction graph fails.

    Fields:
      - message: human-readable description
      - step: which injection step failed (e.g. "split", "shared_input")
      - object_id: pool object involved, if any
    """

    message: str
    step: Optional[str] = None
    object_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        where = []
        if self.step:
            where.append(f"step={self.step}")
        if self.object_id:
            where.append(f"object={self.object_id}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"GraphError{where_s}: {self.message}"


class PoolError(BlockRzSdkError, ValueError):
    """Raised for an empty or malformed tip-object pool configuration."""


@dataclass(eq=False)
class RpcError(BlockRzSdkError):
    """Raised when a JSON-RPC call returns an error object or the transport fails."""

    code: int
    message: str
    data: Optional[Any] = None
    method: Optional[str] = None
    request_id: Optional[Any] = None
    http_status: Optional[int] = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"{self.method or 'rpc'} failed ({self.code}): {self.message}"
        extra = []
        if self.http_status is not None:
            extra.append(f"HTTP {self.http_status}")
        if self.request_id is not None:
            extra.append(f"request {self.request_id}")
        if extra:
            text += " [" + ", ".join(extra) + "]"
        if self.data is not None:
            text += f"; data={self.data!r}"
        return text

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


def from_jsonrpc_error(
    err_obj: Mapping[str, Any],
    *,
    method: Optional[str] = None,
    request_id: Optional[Any] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """Build an RpcError from a node's `{"code", "message", "data"}` error object."""
    try:
        code = int(err_obj.get("code", JsonRpcCode.SERVER_ERROR))
    except (TypeError, ValueError):
        code = int(JsonRpcCode.SERVER_ERROR)
    return RpcError(
        code=code,
        message=str(err_obj.get("message", "unknown error")),
        data=err_obj.get("data"),
        method=method,
        request_id=request_id,
        http_status=http_status,
    )

