"""
Programmable transaction builder, type tags and the BCS writer.
"""

from __future__ import annotations

import pytest

from blockrz_sdk.address import AddressError
from blockrz_sdk.tx.bcs import BcsEncodeError, BcsWriter, u64_bytes
from blockrz_sdk.tx.ptb import (
    GasCoin,
    Input,
    NestedResult,
    OwnedObjectArg,
    ProgrammableTransaction,
    Result,
    TypeTag,
)
from blockrz_sdk.types.core import ObjectRef
from blockrz_sdk.utils.base58 import b58decode, b58encode

TWO = "0x" + "0" * 63 + "2"


# -- BCS writer ------------------------------------------------------------------


def test_integers_are_little_endian() -> None:
    w = BcsWriter().u8(1).u16(0x0203).u64(0x0405)
    assert w.getvalue() == b"\x01" + b"\x03\x02" + b"\x05\x04" + bytes(6)


def test_uleb128_lengths() -> None:
    assert BcsWriter().bytes(b"a" * 127).getvalue()[:1] == b"\x7f"
    assert BcsWriter().bytes(b"a" * 128).getvalue()[:2] == b"\x80\x01"
    assert BcsWriter().string("héllo").getvalue() == b"\x06" + "héllo".encode()


@pytest.mark.parametrize("call", [lambda w: w.u8(256), lambda w: w.u16(-1), lambda w: w.u64(1 << 64), lambda w: w.u64(True)])
def test_out_of_range_integers(call) -> None:
    with pytest.raises(BcsEncodeError):
        call(BcsWriter())


def test_fixed_bytes_length_is_checked() -> None:
    with pytest.raises(BcsEncodeError):
        BcsWriter().fixed_bytes(b"\x00" * 31, 32)


def test_u64_bytes() -> None:
    assert u64_bytes(180_000) == bytes.fromhex("20bf020000000000")


def test_base58_vectors() -> None:
    assert b58encode(b"hello world") == "StV1DL6CwTryKyV"
    assert b58decode("StV1DL6CwTryKyV") == b"hello world"
    assert b58encode(b"\x00\x00\x01") == "112"
    assert b58decode("112") == b"\x00\x00\x01"
    with pytest.raises(ValueError):
        b58decode("0OIl")


# -- type tags -------------------------------------------------------------------


@pytest.mark.parametrize(
    "text,rendered",
    [
        ("u64", "u64"),
        ("vector<u8>", "vector<u8>"),
        ("0x2::sui::SUI", f"{TWO}::sui::SUI"),
        ("0x2::coin::Coin<0x2::sui::SUI>", f"{TWO}::coin::Coin<{TWO}::sui::SUI>"),
        ("0x1::m::Pair<u8, vector<address>>", "0x" + "0" * 63 + "1::m::Pair<u8, vector<address>>"),
    ],
)
def test_type_tag_parse_and_render(text: str, rendered: str) -> None:
    assert str(TypeTag.parse(text)) == rendered


@pytest.mark.parametrize("text", ["", "u7", "vector<u8", "0x2::sui", "0x2::sui::SUI<u8", "u8 u8", "0xzz::a::B"])
def test_type_tag_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        TypeTag.parse(text)


def test_type_tag_bcs() -> None:
    w = BcsWriter()
    TypeTag.parse("vector<u64>").write(w)
    assert w.getvalue() == b"\x06\x02"


# -- builder ---------------------------------------------------------------------


def test_builder_returns_sequential_handles() -> None:
    tx = ProgrammableTransaction()
    assert tx.pure_u64(1) == Input(0)
    assert tx.pure_address("0x1") == Input(1)
    coin = tx.split_coins(tx.gas(), [Input(0), 5])
    assert coin == Result(0)
    assert len(tx.inputs) == 3
    assert tx.merge_coins(tx.gas(), [NestedResult(0, 0)]) == Result(1)


def test_forward_references_are_rejected() -> None:
    tx = ProgrammableTransaction()
    with pytest.raises(ValueError):
        tx.split_coins(GasCoin(), [Input(0)])
    with pytest.raises(ValueError):
        tx.merge_coins(GasCoin(), [Result(0)])
    assert tx.commands == []


def test_invalid_addresses_raise_address_error() -> None:
    tx = ProgrammableTransaction()
    with pytest.raises(AddressError):
        tx.pure_address("not-an-address")
    with pytest.raises(AddressError):
        tx.shared_object("0xgg", 1)


def test_shared_object_version_must_be_u64() -> None:
    with pytest.raises(ValueError):
        ProgrammableTransaction().shared_object("0x5", 1 << 64)


def test_to_dict_shape() -> None:
    tx = ProgrammableTransaction(sender="0x1", gas_budget=3_600_000, gas_price=750)
    coin = tx.split_coins(tx.gas(), [10])
    tx.transfer_objects([coin], "0x2")
    d = tx.to_dict()
    assert d["gasBudget"] == 3_600_000
    assert d["gasPrice"] == 750
    assert d["inputs"][0] == {"Pure": list((10).to_bytes(8, "little"))}
    assert d["commands"] == [
        {"SplitCoins": ["GasCoin", [{"Input": 0}]]},
        {"TransferObjects": [[{"Result": 0}], {"Input": 1}]},
    ]


def test_owned_object_input_bcs() -> None:
    digest = b58encode(bytes(range(32)))
    ref = ObjectRef(object_id="0x" + "cd" * 32, version=9, digest=digest)
    tx = ProgrammableTransaction()
    assert tx.owned_object(ref) == Input(0)
    assert isinstance(tx.inputs[0], OwnedObjectArg)
    assert tx.to_bcs() == (
        b"\x00" + b"\x01"
        + b"\x01\x00" + b"\xcd" * 32 + (9).to_bytes(8, "little") + b"\x20" + bytes(range(32))
        + b"\x00"
    )


def test_transfer_bcs() -> None:
    tx = ProgrammableTransaction()
    coin = tx.split_coins(tx.gas(), [1])
    tx.transfer_objects([coin], "0x2")
    out = tx.to_bcs()
    # TransferObjects: variant 1, one object Result(0), recipient Input(1)
    assert out.endswith(b"\x01\x01\x02\x00\x00\x01\x01\x00")


def test_transaction_data_requires_gas_fields() -> None:
    tx = ProgrammableTransaction(sender="0x1", gas_price=1, gas_budget=10)
    with pytest.raises(ValueError):
        tx.to_transaction_data_bcs()
    tx.gas_payment.append(ObjectRef("0x9", 1, "11111111111111111111111111111111"))
    tx.gas_budget = None
    with pytest.raises(ValueError):
        tx.to_transaction_data_bcs()


def test_transaction_data_bcs() -> None:
    digest = b58encode(b"\x07" * 32)
    tx = ProgrammableTransaction(
        sender="0x" + "aa" * 32,
        gas_price=750,
        gas_budget=3_600_000,
        gas_payment=[ObjectRef("0x" + "bb" * 32, 5, digest)],
    )
    out = tx.to_transaction_data_bcs()
    kind = tx.to_bcs()
    assert out == (
        b"\x00"
        + kind
        + b"\xaa" * 32
        + b"\x01" + b"\xbb" * 32 + (5).to_bytes(8, "little") + b"\x20" + b"\x07" * 32
        + b"\xaa" * 32
        + (750).to_bytes(8, "little")
        + (3_600_000).to_bytes(8, "little")
        + b"\x00"
    )
