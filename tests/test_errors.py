from __future__ import annotations

from blockrz_sdk.errors import (
    AmountOverflow,
    BlockRzSdkError,
    GraphError,
    InvalidAmount,
    JsonRpcCode,
    from_jsonrpc_error,
)


def test_hierarchy() -> None:
    assert isinstance(InvalidAmount("storageCost", "x"), ValueError)
    assert isinstance(AmountOverflow("gasBudget", 1 << 64), OverflowError)
    for e in (InvalidAmount("a", 1), AmountOverflow("b", 2), GraphError("c")):
        assert isinstance(e, BlockRzSdkError)


def test_messages_carry_context() -> None:
    assert str(InvalidAmount("computationCost", "-1")) == "invalid computationCost: '-1'"
    assert str(AmountOverflow("tipAmount", 5)) == "tipAmount exceeds uint64: 5"
    assert str(GraphError("bad id", step="shared_input", object_id="0x1")) == (
        "GraphError [step=shared_input, object=0x1]: bad id"
    )


def test_from_jsonrpc_error() -> None:
    err = from_jsonrpc_error({"code": -32601, "message": "no such method"}, method="sui_x", request_id=3, http_status=200)
    assert err.code_enum is JsonRpcCode.METHOD_NOT_FOUND
    assert str(err) == "sui_x failed (-32601): no such method [HTTP 200, request 3]"


def test_from_jsonrpc_error_tolerates_odd_codes() -> None:
    err = from_jsonrpc_error({"code": "weird", "message": "m", "data": {"x": 1}})
    assert err.code == JsonRpcCode.SERVER_ERROR
    assert err.code_enum is JsonRpcCode.SERVER_ERROR
    assert str(err).endswith("; data={'x': 1}")
    assert from_jsonrpc_error({"code": 12345, "message": "m"}).code_enum is None
