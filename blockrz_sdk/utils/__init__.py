"""
Utility helpers for the SDK.

Re-exports:
- bytes: BCS-flavoured ULEB128 encode/decode
- bigint: strict decimal parsing and ceiling multiply-divide
- base58: digest codec
"""

from .base58 import b58decode, b58encode
from .bigint import ceil_mul_div, parse_decimal
from .bytes import uleb128_decode, uleb128_encode

__all__ = [
    # bytes
    "uleb128_encode",
    "uleb128_decode",
    # bigint
    "parse_decimal",
    "ceil_mul_div",
    # base58
    "b58encode",
    "b58decode",
]
