"""
blockrz_sdk.address
===================

Sui address / object-id normalization.

Format
------
Sui addresses and object ids are 32 bytes, written as `0x` followed by up to 64
hex digits. Short forms such as `0x2` are left-padded with zeros, so `0x2` and
`0x000…0002` name the same object.

This module provides:
- normalize(address) -> str            canonical 0x + 64 lowercase hex digits
- to_bytes(address) -> bytes           32 raw bytes
- from_bytes(raw) -> str               canonical string
- is_valid(address) -> bool
"""

from __future__ import annotations

import re

ADDRESS_LENGTH = 32

__all__ = [
    "ADDRESS_LENGTH",
    "AddressError",
    "normalize",
    "to_bytes",
    "from_bytes",
    "is_valid",
]

_HEX_BODY_RE = re.compile(r"[0-9a-fA-F]{1,64}")


class AddressError(ValueError):
    """Raised for malformed or invalid addresses."""


def normalize(address: str) -> str:
    """Return the canonical `0x`-prefixed, zero-padded, lowercase form."""
    if not isinstance(address, str):
        raise AddressError(f"address must be a string, got {type(address).__name__}")
    body = address[2:] if address.startswith(("0x", "0X")) else address
    if not _HEX_BODY_RE.fullmatch(body):
        raise AddressError(f"invalid Sui address: {address!r}")
    return "0x" + body.lower().rjust(ADDRESS_LENGTH * 2, "0")


def to_bytes(address: str) -> bytes:
    """Convert an address string to its 32 raw bytes."""
    return bytes.fromhex(normalize(address)[2:])


def from_bytes(raw: bytes) -> str:
    if len(raw) != ADDRESS_LENGTH:
        raise AddressError(f"address must be {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return "0x" + bytes(raw).hex()


def is_valid(address: str) -> bool:
    try:
        normalize(address)
        return True
    except AddressError:
        return False
