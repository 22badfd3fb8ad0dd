"""
ULEB128 as BCS uses it: sequence lengths and enum variant indices.

BCS narrows plain LEB128 in two ways: values must fit in u32, and the encoding
must be minimal (no trailing zero continuation groups). The decoder enforces
both so a decoded length can be trusted.
"""

from __future__ import annotations

from typing import Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]

ULEB128_MAX = 0xFFFFFFFF


def uleb128_encode(n: int) -> bytes:
    """
    Encode `n` (0 <= n <= 2^32-1).

    Example:
        0x00 -> b'\\x00'
        0x7f -> b'\\x7f'
        0x80 -> b'\\x80\\x01'
    """
    if not (0 <= n <= ULEB128_MAX):
        raise ValueError(f"uleb128 value out of u32 range: {n}")
    out = bytearray()
    while True:
        group = n & 0x7F
        n >>= 7
        if n:
            out.append(group | 0x80)
        else:
            out.append(group)
            return bytes(out)


def uleb128_decode(b: BytesLike, *, offset: int = 0) -> Tuple[int, int]:
    """
    Decode one value starting at `offset`.

    Returns:
        (value, length_consumed)

    Raises:
        ValueError on truncation, a value above u32, or a non-minimal encoding.
    """
    view = memoryview(b)[offset:]
    value = 0
    for i, byte in enumerate(view):
        if i == 5:
            break
        value |= (byte & 0x7F) << (7 * i)
        if not byte & 0x80:
            if i > 0 and byte == 0:
                raise ValueError("non-canonical uleb128 (trailing zero group)")
            if value > ULEB128_MAX:
                raise ValueError(f"uleb128 value out of u32 range: {value}")
            return value, i + 1
    else:
        raise ValueError("truncated uleb128")
    raise ValueError("uleb128 longer than 5 bytes")


__all__ = ["BytesLike", "ULEB128_MAX", "uleb128_encode", "uleb128_decode"]
