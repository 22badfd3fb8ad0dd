"""
blockrz_sdk.fee
===============

Gas budget and priority tip from a dry-run gas cost report.

    gross      = computationCost + storageCost
    gas_budget = ceil(gross * 120 / 100)        # 20% margin over the estimate
    tip_amount = ceil(gas_budget * 5 / 100)     # 5% of the padded budget

Arithmetic is exact (Python ints) and both results are checked against the u64
range before being returned. Storage rebates are deliberately not subtracted:
the budget must cover the gross charge before any rebate is credited.

Entry points
------------
- compute_budget_and_tip(costs) -> (gas_budget, tip_amount)
- calculate_fee(costs) -> CalculatedFee
- FeeCalculator(client).from_tx_bytes / from_tx_b64 / from_encoded
    Dry-run via a `SuiClient` (one call, no retry) and compute from
    `effects.gasUsed`.
- calculate_fee_from_tx_bytes / calculate_fee_from_tx_b64 /
  calculate_fee_from_encoded
    Same, against the process-wide default client.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Mapping, Optional, Tuple, Union

from .constants import GAS_BUDGET_DIV, GAS_BUDGET_MUL, TIP_DIV, TIP_MUL, U64_MAX
from .errors import AmountOverflow, JsonRpcCode, RpcError
from .types.core import CalculatedFee, GasCostSummary
from .utils.bigint import ceil_mul_div, parse_decimal

_LOG = logging.getLogger("blockrz_sdk.fee")

CostsLike = Union[GasCostSummary, Mapping[str, Any]]

__all__ = [
    "compute_budget_and_tip",
    "calculate_fee",
    "FeeCalculator",
    "calculate_fee_from_tx_bytes",
    "calculate_fee_from_tx_b64",
    "calculate_fee_from_encoded",
]


def _coerce_costs(costs: CostsLike) -> GasCostSummary:
    if isinstance(costs, GasCostSummary):
        return costs
    if isinstance(costs, Mapping):
        return GasCostSummary.from_rpc_dict(costs)
    raise TypeError(f"expected GasCostSummary or mapping, got {type(costs).__name__}")


def _check_u64(field: str, value: int) -> int:
    if value > U64_MAX:
        raise AmountOverflow(field=field, value=value)
    return value


def compute_budget_and_tip(costs: CostsLike) -> Tuple[int, int]:
    """
    Return ``(gas_budget, tip_amount)`` for a gas cost report.

    `costs` is a `GasCostSummary` or the camelCase `gasUsed` mapping from a
    dry run.

    Raises:
        InvalidAmount: computationCost or storageCost is not a base-10 digit string.
        AmountOverflow: gas_budget or tip_amount does not fit in u64.
    """
    summary = _coerce_costs(costs)
    computation = parse_decimal(summary.computation_cost, "computationCost")
    storage = parse_decimal(summary.storage_cost, "storageCost")

    gross = computation + storage
    gas_budget = _check_u64("gasBudget", ceil_mul_div(gross, GAS_BUDGET_MUL, GAS_BUDGET_DIV))
    tip_amount = _check_u64("tipAmount", ceil_mul_div(gas_budget, TIP_MUL, TIP_DIV))

    _LOG.debug("gross=%d gas_budget=%d tip_amount=%d", gross, gas_budget, tip_amount)
    return gas_budget, tip_amount


def calculate_fee(costs: CostsLike) -> CalculatedFee:
    gas_budget, tip_amount = compute_budget_and_tip(costs)
    return CalculatedFee(gas_budget=gas_budget, tip_amount=tip_amount)


def _gas_used(response: Any) -> Mapping[str, Any]:
    effects = response.get("effects") if isinstance(response, Mapping) else None
    gas_used = effects.get("gasUsed") if isinstance(effects, Mapping) else None
    if not isinstance(gas_used, Mapping):
        raise RpcError(
            code=JsonRpcCode.INTERNAL_ERROR,
            message="dry run response has no effects.gasUsed",
            data=response,
            method="sui_dryRunTransactionBlock",
        )
    return gas_used


class FeeCalculator:
    """
    Fee calculation bound to an explicit chain client.

    `client` needs a ``dry_run_transaction_block(tx_b64) -> dict`` method
    (see `blockrz_sdk.rpc.sui.SuiClient`). Errors from the client propagate
    unchanged; the calculator never retries.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def from_tx_b64(self, tx_b64: str) -> CalculatedFee:
        response = self.client.dry_run_transaction_block(tx_b64)
        return calculate_fee(_gas_used(response))

    def from_tx_bytes(self, raw: Union[bytes, bytearray]) -> CalculatedFee:
        return self.from_tx_b64(base64.b64encode(bytes(raw)).decode("ascii"))

    def from_encoded(self, tx: Union[bytes, bytearray, str]) -> CalculatedFee:
        """Accept either raw transaction bytes or their base64 text."""
        if isinstance(tx, str):
            return self.from_tx_b64(tx)
        return self.from_tx_bytes(tx)


def _default_calculator() -> FeeCalculator:
    from .context import default_context

    return default_context().fee_calculator


def calculate_fee_from_tx_bytes(raw: Union[bytes, bytearray], calculator: Optional[FeeCalculator] = None) -> CalculatedFee:
    return (calculator or _default_calculator()).from_tx_bytes(raw)


def calculate_fee_from_tx_b64(tx_b64: str, calculator: Optional[FeeCalculator] = None) -> CalculatedFee:
    return (calculator or _default_calculator()).from_tx_b64(tx_b64)


def calculate_fee_from_encoded(
    tx: Union[bytes, bytearray, str], calculator: Optional[FeeCalculator] = None
) -> CalculatedFee:
    return (calculator or _default_calculator()).from_encoded(tx)
