"""
Binary Canonical Serialization (BCS) writer.

Goals
-----
- Produce byte-for-byte deterministic encodings for the subset of Move/Sui
  types a programmable transaction needs.
- Integers are little-endian and fixed width; sequence lengths and enum variant
  indices are ULEB128; strings are length-prefixed UTF-8.

API
---
- BcsWriter: chainable low-level writer (`u8`, `u16`, `u64`, `bool`, `bytes`,
  `fixed_bytes`, `string`, `uleb128`, `variant`)
- BcsEncodeError
"""

from __future__ import annotations

import struct

from ..utils.bytes import uleb128_encode


class BcsEncodeError(ValueError):
    pass


def _check_range(name: str, val: int, bits: int) -> None:
    if not isinstance(val, int) or isinstance(val, bool):
        raise BcsEncodeError(f"{name} expects int, got {type(val).__name__}")
    if not (0 <= val < (1 << bits)):
        raise BcsEncodeError(f"{name} out of range: {val}")


class BcsWriter:
    """Append-only BCS byte buffer."""

    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    def u8(self, v: int) -> "BcsWriter":
        _check_range("u8", v, 8)
        self._buf.append(v)
        return self

    def u16(self, v: int) -> "BcsWriter":
        _check_range("u16", v, 16)
        self._buf += struct.pack("<H", v)
        return self

    def u64(self, v: int) -> "BcsWriter":
        _check_range("u64", v, 64)
        self._buf += struct.pack("<Q", v)
        return self

    def bool(self, v: bool) -> "BcsWriter":
        self._buf.append(1 if v else 0)
        return self

    def uleb128(self, v: int) -> "BcsWriter":
        _check_range("uleb128", v, 32)
        self._buf += uleb128_encode(v)
        return self

    def variant(self, index: int) -> "BcsWriter":
        return self.uleb128(index)

    def fixed_bytes(self, b: bytes, length: int) -> "BcsWriter":
        if len(b) != length:
            raise BcsEncodeError(f"expected {length} bytes, got {len(b)}")
        self._buf += b
        return self

    def bytes(self, b: bytes) -> "BcsWriter":
        self.uleb128(len(b))
        self._buf += b
        return self

    def string(self, s: str) -> "BcsWriter":
        return self.bytes(s.encode("utf-8"))

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def u64_bytes(v: int) -> bytes:
    """BCS encoding of a single u64 (the payload of a `Pure` u64 input)."""
    return BcsWriter().u64(v).getvalue()


__all__ = ["BcsEncodeError", "BcsWriter", "u64_bytes"]
