"""
Stable identifier hashing.

Provides the short, URL-safe hash used to generate series identifiers.
The hash must never change between releases: identifiers derived from it
are published in podcast feeds and page URLs.
"""

from __future__ import annotations

import base64

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193


def fnv1a_32(data: bytes) -> int:
    """Compute the 32-bit FNV-1a hash of some bytes.

    Args:
        data: Bytes to hash

    Returns:
        Unsigned 32-bit hash value
    """
    value = FNV32_OFFSET_BASIS
    for byte in data:
        value ^= byte
        value = (value * FNV32_PRIME) & 0xFFFFFFFF
    return value


def compute_hash(text: str) -> str:
    """Compute the stable identifier hash of a string.

    The FNV-1a value is printed in decimal, URL-safe base64 encoded and
    stripped of its '=' padding.

    Args:
        text: String to hash (usually a series name)

    Returns:
        Short URL-safe hash, e.g. "MTA1OTgwMDE3Ng" for "SERIES"
    """
    decimal = str(fnv1a_32(text.encode("utf-8")))
    encoded = base64.urlsafe_b64encode(decimal.encode("ascii")).decode("ascii")
    return encoded.strip("=")
