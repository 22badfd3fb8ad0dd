from __future__ import annotations

"""
Core types for the tip flow.

- `GasCostSummary` mirrors the `effects.gasUsed` object returned by
  `sui_dryRunTransactionBlock`; amounts stay decimal strings as on the wire.
- `CalculatedFee` is the bounded output of the fee calculator.
- `SharedTipObject` / `ObjectRef` describe on-chain objects referenced as
  transaction inputs.

Nothing here performs network I/O; these are just types and converters.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, TypedDict

from .. import address as _address


class GasCostSummaryDict(TypedDict, total=False):
    computationCost: str
    storageCost: str
    storageRebate: str
    nonRefundableStorageFee: str


@dataclass(frozen=True)
class GasCostSummary:
    """Gas cost report; only computation and storage cost feed the budget."""

    computation_cost: str
    storage_cost: str
    storage_rebate: str = "0"
    non_refundable_storage_fee: str = "0"

    @classmethod
    def from_rpc_dict(cls, d: Mapping[str, Any]) -> "GasCostSummary":
        # Values are passed through untouched; parsing and validation belong to the calculator.
        return cls(
            computation_cost=d.get("computationCost"),  # type: ignore[arg-type]
            storage_cost=d.get("storageCost"),  # type: ignore[arg-type]
            storage_rebate=d.get("storageRebate", "0"),
            non_refundable_storage_fee=d.get("nonRefundableStorageFee", "0"),
        )

    def to_rpc_dict(self) -> GasCostSummaryDict:
        return {
            "computationCost": self.computation_cost,
            "storageCost": self.storage_cost,
            "storageRebate": self.storage_rebate,
            "nonRefundableStorageFee": self.non_refundable_storage_fee,
        }


@dataclass(frozen=True)
class CalculatedFee:
    gas_budget: int
    tip_amount: int

    def to_dict(self) -> Dict[str, int]:
        return {"gasBudget": self.gas_budget, "tipAmount": self.tip_amount}


@dataclass(frozen=True)
class SharedTipObject:
    """A shared `tipmanager` object and its pinned initial shared version."""

    object_id: str
    version: int

    def to_dict(self) -> Dict[str, Any]:
        return {"objectId": self.object_id, "version": self.version}


@dataclass(frozen=True)
class ObjectRef:
    """(id, version, digest) triple used for owned / immutable object inputs."""

    object_id: str
    version: int
    digest: str  # base58

    @classmethod
    def from_rpc_dict(cls, d: Mapping[str, Any]) -> "ObjectRef":
        return cls(
            object_id=_address.normalize(str(d["objectId"])),
            version=int(d["version"]),
            digest=str(d["digest"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"objectId": self.object_id, "version": self.version, "digest": self.digest}


__all__ = [
    "GasCostSummaryDict",
    "GasCostSummary",
    "CalculatedFee",
    "SharedTipObject",
    "ObjectRef",
]
