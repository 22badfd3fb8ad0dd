"""
Exact decimal parsing and ceiling multiply-divide.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockrz_sdk.errors import InvalidAmount
from blockrz_sdk.utils.bigint import ceil_mul_div, parse_decimal


@given(st.integers(min_value=0, max_value=1 << 200))
def test_parse_decimal_accepts_any_non_negative_integer(n: int) -> None:
    assert parse_decimal(str(n), "x") == n


@pytest.mark.parametrize("raw", ["", "-1", "+1", " 1", "1 ", "1_000", "1.0", "0x10", "abc", "١٢"])
def test_parse_decimal_rejects_malformed(raw: str) -> None:
    with pytest.raises(InvalidAmount) as ei:
        parse_decimal(raw, "storageCost")
    assert ei.value.field == "storageCost"
    assert ei.value.value == raw
    assert "storageCost" in str(ei.value)


@pytest.mark.parametrize("raw", [None, 12, 1.5, b"12"])
def test_parse_decimal_rejects_non_strings(raw: object) -> None:
    with pytest.raises(InvalidAmount):
        parse_decimal(raw, "computationCost")


def test_leading_zeros_are_fine() -> None:
    assert parse_decimal("000123", "x") == 123


@given(
    st.integers(min_value=0, max_value=1 << 130),
    st.integers(min_value=0, max_value=1000),
    st.integers(min_value=1, max_value=1000),
)
def test_ceil_mul_div_is_the_exact_ceiling(x: int, mul: int, div: int) -> None:
    q = ceil_mul_div(x, mul, div)
    # smallest q with q * div >= x * mul
    assert q * div >= x * mul
    assert q == 0 or (q - 1) * div < x * mul


@given(st.integers(min_value=0, max_value=1 << 200))
def test_ceil_mul_div_by_one_is_identity(x: int) -> None:
    assert ceil_mul_div(x, 1, 1) == x


def test_ceil_mul_div_examples() -> None:
    assert ceil_mul_div(3_000_000, 120, 100) == 3_600_000
    assert ceil_mul_div(1, 120, 100) == 2
    assert ceil_mul_div(2, 5, 100) == 1
    assert ceil_mul_div(0, 120, 100) == 0


@pytest.mark.parametrize("div", [0, -1])
def test_ceil_mul_div_requires_positive_divisor(div: int) -> None:
    with pytest.raises(ValueError):
        ceil_mul_div(1, 1, div)
