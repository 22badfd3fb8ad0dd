"""
BlockRazor Sui SDK for Python
Fee/tip calculation and tip routing for Sui programmable transactions.
"""

from .version import __version__  # noqa: F401

# Config & errors
from .config import SDKConfig  # noqa: F401
from .errors import (  # noqa: F401
    AmountOverflow,
    BlockRzSdkError,
    GraphError,
    InvalidAmount,
    PoolError,
    RpcError,
)

# Types
from .types.core import CalculatedFee, GasCostSummary, ObjectRef, SharedTipObject  # noqa: F401

# Fees
from .fee import (  # noqa: F401
    FeeCalculator,
    calculate_fee,
    calculate_fee_from_encoded,
    calculate_fee_from_tx_b64,
    calculate_fee_from_tx_bytes,
    compute_budget_and_tip,
)

# Tip routing
from .tip.pool import (  # noqa: F401
    DEFAULT_POOL,
    FixedSelector,
    RandomSelector,
    TipObjectPool,
    select_tip_object,
)
from .tip.inject import TipInjector, add_tip  # noqa: F401

# Transaction graph
from .tx.ptb import ProgrammableTransaction, TransactionGraph  # noqa: F401

# RPC
from .rpc.http import RpcClient  # noqa: F401
from .rpc.sui import SuiClient  # noqa: F401

from .context import SdkContext, default_context  # noqa: F401

__all__ = [
    "__version__",
    "SDKConfig",
    "AmountOverflow",
    "BlockRzSdkError",
    "GraphError",
    "InvalidAmount",
    "PoolError",
    "RpcError",
    "CalculatedFee",
    "GasCostSummary",
    "ObjectRef",
    "SharedTipObject",
    "FeeCalculator",
    "calculate_fee",
    "calculate_fee_from_encoded",
    "calculate_fee_from_tx_b64",
    "calculate_fee_from_tx_bytes",
    "compute_budget_and_tip",
    "DEFAULT_POOL",
    "FixedSelector",
    "RandomSelector",
    "TipObjectPool",
    "select_tip_object",
    "TipInjector",
    "add_tip",
    "ProgrammableTransaction",
    "TransactionGraph",
    "RpcClient",
    "SuiClient",
    "SdkContext",
    "default_context",
]
