"""
blockrz_sdk.tx.ptb
==================

An in-memory programmable transaction block (PTB): an ordered input table plus
an ordered, append-only list of commands whose arguments reference the gas
coin, inputs, or the results of earlier commands.

The builder never removes or reorders anything it has appended, so the BCS
encoding produced by `ProgrammableTransaction.to_bcs()` is a pure function of
the append sequence.

Examples
--------
    from blockrz_sdk.tx.ptb import ProgrammableTransaction

    tx = ProgrammableTransaction()
    coin = tx.split_coins(tx.gas(), [tx.pure_u64(100_000)])
    tx.transfer_objects([coin], tx.pure_address("0xabc"))
    kind_bytes = tx.to_bcs()

Only the pieces a fee/tip flow needs are modelled; `Publish`, `Upgrade` and
`MakeMoveVec` commands are not.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from .. import address as _address
from ..types.core import ObjectRef
from ..utils.base58 import b58decode
from .bcs import BcsWriter, u64_bytes

_U16_MAX = 0xFFFF

# -----------------------------------------------------------------------------
# Arguments
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class GasCoin:
    def to_json(self) -> Any:
        return "GasCoin"


@dataclass(frozen=True)
class Input:
    index: int

    def to_json(self) -> Any:
        return {"Input": self.index}


@dataclass(frozen=True)
class Result:
    index: int

    def to_json(self) -> Any:
        return {"Result": self.index}


@dataclass(frozen=True)
class NestedResult:
    index: int
    result_index: int

    def to_json(self) -> Any:
        return {"NestedResult": [self.index, self.result_index]}


Argument = Union[GasCoin, Input, Result, NestedResult]


def _write_argument(w: BcsWriter, arg: Argument) -> None:
    if isinstance(arg, GasCoin):
        w.variant(0)
    elif isinstance(arg, Input):
        w.variant(1).u16(arg.index)
    elif isinstance(arg, Result):
        w.variant(2).u16(arg.index)
    elif isinstance(arg, NestedResult):
        w.variant(3).u16(arg.index).u16(arg.result_index)
    else:
        raise TypeError(f"not a transaction argument: {arg!r}")


# -----------------------------------------------------------------------------
# Type tags
# -----------------------------------------------------------------------------

_PRIMITIVE_TAGS = {
    "bool": 0,
    "u8": 1,
    "u64": 2,
    "u128": 3,
    "address": 4,
    "signer": 5,
    "u16": 8,
    "u32": 9,
    "u256": 10,
}
_VECTOR_TAG = 6
_STRUCT_TAG = 7

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class StructTag:
    address: str
    module: str
    name: str
    type_params: Tuple["TypeTag", ...] = ()

    def __str__(self) -> str:
        base = f"{self.address}::{self.module}::{self.name}"
        if self.type_params:
            base += "<" + ", ".join(str(t) for t in self.type_params) + ">"
        return base


@dataclass(frozen=True)
class TypeTag:
    """A Move type: a primitive name, `vector<T>`, or a struct."""

    primitive: Optional[str] = None
    vector_of: Optional["TypeTag"] = None
    struct: Optional[StructTag] = None

    @classmethod
    def parse(cls, text: str) -> "TypeTag":
        tag, rest = _parse_type(text.strip())
        if rest.strip():
            raise ValueError(f"trailing characters in type tag: {text!r}")
        return tag

    def __str__(self) -> str:
        if self.primitive is not None:
            return self.primitive
        if self.vector_of is not None:
            return f"vector<{self.vector_of}>"
        return str(self.struct)

    def write(self, w: BcsWriter) -> None:
        if self.primitive is not None:
            w.variant(_PRIMITIVE_TAGS[self.primitive])
        elif self.vector_of is not None:
            w.variant(_VECTOR_TAG)
            self.vector_of.write(w)
        elif self.struct is not None:
            st = self.struct
            w.variant(_STRUCT_TAG)
            w.fixed_bytes(_address.to_bytes(st.address), _address.ADDRESS_LENGTH)
            w.string(st.module).string(st.name)
            w.uleb128(len(st.type_params))
            for tp in st.type_params:
                tp.write(w)
        else:
            raise ValueError("empty type tag")


def _parse_type(s: str) -> Tuple[TypeTag, str]:
    s = s.lstrip()
    if s.startswith("vector<"):
        inner, rest = _parse_type(s[len("vector<"):])
        rest = rest.lstrip()
        if not rest.startswith(">"):
            raise ValueError(f"unterminated vector type near {s!r}")
        return TypeTag(vector_of=inner), rest[1:]

    m = re.match(r"[A-Za-z0-9_]+", s)
    if m is None:
        raise ValueError(f"invalid type tag near {s!r}")
    head = m.group(0)
    rest = s[m.end():]
    if not rest.startswith("::"):
        if head not in _PRIMITIVE_TAGS:
            raise ValueError(f"unknown primitive type {head!r}")
        return TypeTag(primitive=head), rest

    parts = [head]
    while rest.startswith("::"):
        rest = rest[2:]
        m = _IDENT_RE.match(rest)
        if m is None:
            raise ValueError(f"invalid identifier in struct type near {rest!r}")
        parts.append(m.group(0))
        rest = rest[m.end():]
    if len(parts) != 3:
        raise ValueError(f"struct type must be address::module::name, got {'::'.join(parts)!r}")

    params: List[TypeTag] = []
    rest = rest.lstrip()
    if rest.startswith("<"):
        rest = rest[1:]
        while True:
            tp, rest = _parse_type(rest)
            params.append(tp)
            rest = rest.lstrip()
            if rest.startswith(","):
                rest = rest[1:]
                continue
            if rest.startswith(">"):
                rest = rest[1:]
                break
            raise ValueError("unterminated type parameter list")

    st = StructTag(
        address=_address.normalize(parts[0]),
        module=parts[1],
        name=parts[2],
        type_params=tuple(params),
    )
    return TypeTag(struct=st), rest


# -----------------------------------------------------------------------------
# Inputs (CallArg)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PureArg:
    value: bytes

    def to_json(self) -> Any:
        return {"Pure": list(self.value)}

    def write(self, w: BcsWriter) -> None:
        w.variant(0).bytes(self.value)


@dataclass(frozen=True)
class SharedObjectArg:
    object_id: str
    initial_shared_version: int
    mutable: bool = True

    def to_json(self) -> Any:
        return {
            "Object": {
                "SharedObject": {
                    "id": self.object_id,
                    "initial_shared_version": self.initial_shared_version,
                    "mutable": self.mutable,
                }
            }
        }

    def write(self, w: BcsWriter) -> None:
        w.variant(1).variant(1)
        w.fixed_bytes(_address.to_bytes(self.object_id), _address.ADDRESS_LENGTH)
        w.u64(self.initial_shared_version).bool(self.mutable)


@dataclass(frozen=True)
class OwnedObjectArg:
    ref: ObjectRef

    def to_json(self) -> Any:
        return {
            "Object": {
                "ImmOrOwnedObject": [self.ref.object_id, self.ref.version, self.ref.digest]
            }
        }

    def write(self, w: BcsWriter) -> None:
        w.variant(1).variant(0)
        w.fixed_bytes(_address.to_bytes(self.ref.object_id), _address.ADDRESS_LENGTH)
        w.u64(self.ref.version)
        w.bytes(b58decode(self.ref.digest))


CallArg = Union[PureArg, SharedObjectArg, OwnedObjectArg]


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    type_arguments: Tuple[TypeTag, ...] = ()
    arguments: Tuple[Argument, ...] = ()

    def to_json(self) -> Any:
        return {
            "MoveCall": {
                "package": self.package,
                "module": self.module,
                "function": self.function,
                "type_arguments": [str(t) for t in self.type_arguments],
                "arguments": [a.to_json() for a in self.arguments],
            }
        }

    def write(self, w: BcsWriter) -> None:
        w.variant(0)
        w.fixed_bytes(_address.to_bytes(self.package), _address.ADDRESS_LENGTH)
        w.string(self.module).string(self.function)
        w.uleb128(len(self.type_arguments))
        for t in self.type_arguments:
            t.write(w)
        w.uleb128(len(self.arguments))
        for a in self.arguments:
            _write_argument(w, a)


@dataclass(frozen=True)
class TransferObjects:
    objects: Tuple[Argument, ...]
    recipient: Argument

    def to_json(self) -> Any:
        return {"TransferObjects": [[o.to_json() for o in self.objects], self.recipient.to_json()]}

    def write(self, w: BcsWriter) -> None:
        w.variant(1).uleb128(len(self.objects))
        for o in self.objects:
            _write_argument(w, o)
        _write_argument(w, self.recipient)


@dataclass(frozen=True)
class SplitCoins:
    coin: Argument
    amounts: Tuple[Argument, ...]

    def to_json(self) -> Any:
        return {"SplitCoins": [self.coin.to_json(), [a.to_json() for a in self.amounts]]}

    def write(self, w: BcsWriter) -> None:
        w.variant(2)
        _write_argument(w, self.coin)
        w.uleb128(len(self.amounts))
        for a in self.amounts:
            _write_argument(w, a)


@dataclass(frozen=True)
class MergeCoins:
    destination: Argument
    sources: Tuple[Argument, ...]

    def to_json(self) -> Any:
        return {"MergeCoins": [self.destination.to_json(), [s.to_json() for s in self.sources]]}

    def write(self, w: BcsWriter) -> None:
        w.variant(3)
        _write_argument(w, self.destination)
        w.uleb128(len(self.sources))
        for s in self.sources:
            _write_argument(w, s)


Command = Union[MoveCall, TransferObjects, SplitCoins, MergeCoins]


# -----------------------------------------------------------------------------
# Graph protocol + builder
# -----------------------------------------------------------------------------


@runtime_checkable
class TransactionGraph(Protocol):
    """
    Minimal interface the tip injector needs from a transaction builder.

    Any builder exposing these methods (for example an adapter over another
    SDK's transaction type) can be tipped.
    """

    def gas(self) -> Argument: ...

    def pure_u64(self, value: int) -> Argument: ...

    def shared_object(self, object_id: str, initial_shared_version: int, mutable: bool = True) -> Argument: ...

    def split_coins(self, coin: Argument, amounts: Sequence[Argument]) -> Argument: ...

    def move_call(
        self,
        package: str,
        module: str,
        function: str,
        type_arguments: Sequence[Union[str, TypeTag]] = (),
        arguments: Sequence[Argument] = (),
    ) -> Argument: ...


@dataclass
class ProgrammableTransaction:
    """Append-only PTB builder implementing `TransactionGraph`."""

    inputs: List[CallArg] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)
    sender: Optional[str] = None
    gas_budget: Optional[int] = None
    gas_price: Optional[int] = None
    gas_payment: List[ObjectRef] = field(default_factory=list)

    # --- inputs ----------------------------------------------------------

    def add_input(self, arg: CallArg) -> Input:
        if len(self.inputs) > _U16_MAX:
            raise ValueError("input table is full (u16 index space exhausted)")
        self.inputs.append(arg)
        return Input(len(self.inputs) - 1)

    def gas(self) -> GasCoin:
        return GasCoin()

    def pure_bytes(self, value: bytes) -> Input:
        return self.add_input(PureArg(bytes(value)))

    def pure_u64(self, value: int) -> Input:
        return self.add_input(PureArg(u64_bytes(value)))

    def pure_address(self, addr: str) -> Input:
        return self.add_input(PureArg(_address.to_bytes(addr)))

    def shared_object(self, object_id: str, initial_shared_version: int, mutable: bool = True) -> Input:
        if not (0 <= int(initial_shared_version) <= 0xFFFFFFFFFFFFFFFF):
            raise ValueError(f"initial_shared_version out of u64 range: {initial_shared_version}")
        return self.add_input(
            SharedObjectArg(
                object_id=_address.normalize(object_id),
                initial_shared_version=int(initial_shared_version),
                mutable=bool(mutable),
            )
        )

    def owned_object(self, ref: ObjectRef) -> Input:
        return self.add_input(OwnedObjectArg(ref))

    # --- commands --------------------------------------------------------

    def _append(self, cmd: Command) -> Result:
        self._check_refs(cmd)
        if len(self.commands) > _U16_MAX:
            raise ValueError("command list is full (u16 index space exhausted)")
        self.commands.append(cmd)
        return Result(len(self.commands) - 1)

    def _check_refs(self, cmd: Command) -> None:
        # Producers must precede consumers.
        if isinstance(cmd, MoveCall):
            args: Tuple[Argument, ...] = cmd.arguments
        elif isinstance(cmd, TransferObjects):
            args = cmd.objects + (cmd.recipient,)
        elif isinstance(cmd, SplitCoins):
            args = (cmd.coin,) + cmd.amounts
        else:
            args = (cmd.destination,) + cmd.sources
        for a in args:
            if isinstance(a, Input) and not (0 <= a.index < len(self.inputs)):
                raise ValueError(f"argument references unknown input {a.index}")
            if isinstance(a, (Result, NestedResult)) and not (0 <= a.index < len(self.commands)):
                raise ValueError(f"argument references unknown command result {a.index}")

    def split_coins(self, coin: Argument, amounts: Sequence[Union[Argument, int]]) -> Result:
        amount_args = tuple(self.pure_u64(a) if isinstance(a, int) else a for a in amounts)
        return self._append(SplitCoins(coin=coin, amounts=amount_args))

    def merge_coins(self, destination: Argument, sources: Sequence[Argument]) -> Result:
        return self._append(MergeCoins(destination=destination, sources=tuple(sources)))

    def transfer_objects(self, objects: Sequence[Argument], recipient: Union[Argument, str]) -> Result:
        rcpt = self.pure_address(recipient) if isinstance(recipient, str) else recipient
        return self._append(TransferObjects(objects=tuple(objects), recipient=rcpt))

    def move_call(
        self,
        package: str,
        module: str,
        function: str,
        type_arguments: Sequence[Union[str, TypeTag]] = (),
        arguments: Sequence[Argument] = (),
    ) -> Result:
        tags = tuple(TypeTag.parse(t) if isinstance(t, str) else t for t in type_arguments)
        return self._append(
            MoveCall(
                package=_address.normalize(package),
                module=module,
                function=function,
                type_arguments=tags,
                arguments=tuple(arguments),
            )
        )

    # --- encoding --------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "gasBudget": self.gas_budget,
            "gasPrice": self.gas_price,
            "gasPayment": [r.to_dict() for r in self.gas_payment],
            "inputs": [i.to_json() for i in self.inputs],
            "commands": [c.to_json() for c in self.commands],
        }

    def to_bcs(self) -> bytes:
        """BCS of `TransactionKind::ProgrammableTransaction` (no sender/gas data)."""
        w = BcsWriter()
        self._write_kind(w)
        return w.getvalue()

    def to_transaction_data_bcs(self) -> bytes:
        """
        BCS of `TransactionData::V1`: kind, sender, gas data and no expiration.

        This is what `sui_dryRunTransactionBlock` and signing consume. The gas
        owner is the sender. Raises ValueError when sender, gas price, gas
        budget or gas payment is missing.
        """
        if self.sender is None or self.gas_price is None or self.gas_budget is None:
            raise ValueError("sender, gas_price and gas_budget must be set")
        if not self.gas_payment:
            raise ValueError("at least one gas payment coin is required")
        sender = _address.to_bytes(self.sender)
        w = BcsWriter()
        w.variant(0)
        self._write_kind(w)
        w.fixed_bytes(sender, _address.ADDRESS_LENGTH)
        w.uleb128(len(self.gas_payment))
        for ref in self.gas_payment:
            w.fixed_bytes(_address.to_bytes(ref.object_id), _address.ADDRESS_LENGTH)
            w.u64(ref.version)
            w.bytes(b58decode(ref.digest))
        w.fixed_bytes(sender, _address.ADDRESS_LENGTH)
        w.u64(self.gas_price).u64(self.gas_budget)
        w.variant(0)  # TransactionExpiration::None
        return w.getvalue()

    def _write_kind(self, w: BcsWriter) -> None:
        w.variant(0)
        w.uleb128(len(self.inputs))
        for i in self.inputs:
            i.write(w)
        w.uleb128(len(self.commands))
        for c in self.commands:
            c.write(w)


__all__ = [
    "Argument",
    "GasCoin",
    "Input",
    "Result",
    "NestedResult",
    "StructTag",
    "TypeTag",
    "CallArg",
    "PureArg",
    "SharedObjectArg",
    "OwnedObjectArg",
    "Command",
    "MoveCall",
    "TransferObjects",
    "SplitCoins",
    "MergeCoins",
    "TransactionGraph",
    "ProgrammableTransaction",
]
