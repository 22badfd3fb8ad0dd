"""
Exact integer helpers for fee arithmetic.

Python ints are arbitrary precision, so nothing here can lose precision; the
only work is strict parsing and ceiling division without floats.
"""

from __future__ import annotations

import re

from ..errors import InvalidAmount

# ASCII digits only; str.isdigit() would also accept e.g. Arabic-Indic digits.
_DECIMAL_RE = re.compile(r"[0-9]+")


def parse_decimal(s: object, label: str) -> int:
    """
    Parse a base-10, non-negative integer string.

    Signs, whitespace, underscores and empty strings are rejected even though
    `int()` would accept some of them.

    Raises:
        InvalidAmount naming `label` and echoing the offending value.
    """
    if not isinstance(s, str) or _DECIMAL_RE.fullmatch(s) is None:
        raise InvalidAmount(field=label, value=s)
    return int(s, 10)


def ceil_mul_div(x: int, mul: int, div: int) -> int:
    """Return ceil(x * mul / div) for non-negative x, mul and positive div."""
    if div <= 0:
        raise ValueError("div must be positive")
    num = x * mul
    return (num + div - 1) // div


__all__ = ["parse_decimal", "ceil_mul_div"]
