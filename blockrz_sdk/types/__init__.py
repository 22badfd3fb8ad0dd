"""
blockrz_sdk.types
-----------------

Data types shared by the fee calculator, the tip injector and the RPC layer.

    from blockrz_sdk.types import GasCostSummary, CalculatedFee, SharedTipObject
"""

from .core import (  # noqa: F401
    CalculatedFee,
    GasCostSummary,
    GasCostSummaryDict,
    ObjectRef,
    SharedTipObject,
)

__all__ = [
    "CalculatedFee",
    "GasCostSummary",
    "GasCostSummaryDict",
    "ObjectRef",
    "SharedTipObject",
]
