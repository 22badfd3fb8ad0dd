from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockrz_sdk.utils.bytes import ULEB128_MAX, uleb128_decode, uleb128_encode


@given(st.integers(min_value=0, max_value=ULEB128_MAX))
def test_decode_inverts_encode(n: int) -> None:
    enc = uleb128_encode(n)
    assert uleb128_decode(b"\xee" + enc + b"\xff", offset=1) == (n, len(enc))


def test_known_encodings() -> None:
    assert uleb128_encode(0) == b"\x00"
    assert uleb128_encode(127) == b"\x7f"
    assert uleb128_encode(128) == b"\x80\x01"
    assert uleb128_encode(ULEB128_MAX) == b"\xff\xff\xff\xff\x0f"


@pytest.mark.parametrize("n", [-1, ULEB128_MAX + 1])
def test_encode_range(n: int) -> None:
    with pytest.raises(ValueError):
        uleb128_encode(n)


@pytest.mark.parametrize(
    "raw",
    [
        b"",  # empty
        b"\x80",  # truncated
        b"\x80\x00",  # non-minimal
        b"\xff\xff\xff\xff\x1f",  # above u32
        b"\x80\x80\x80\x80\x80\x01",  # too long
    ],
)
def test_decode_rejects(raw: bytes) -> None:
    with pytest.raises(ValueError):
        uleb128_decode(raw)
