"""
Fixed-width bit vectors.

Integers become little-endian (least-significant bit first) boolean lists of a
declared width; that is the order the circuit gadgets consume. Bit vectors
become bytes most-significant-bit first within each byte, which is the order
signatures are computed over.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from plasma.errors import EncodingOverflow

Bits = List[bool]


def encode(value: int, width: int, subject: str = "value") -> Bits:
    """
    `value` as exactly `width` booleans, LSB first.

    Raises EncodingOverflow when the value is negative or needs more bits.
    """
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError(f"width must be a positive integer, got {width!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{subject} must be an int, got {type(value).__name__}")
    if value < 0 or value >> width:
        raise EncodingOverflow(value, width, subject)
    return [bool((value >> i) & 1) for i in range(width)]


def decode(bits: Iterable[bool]) -> int:
    """Inverse of `encode` (LSB first); accepts any boolean sequence."""
    out = 0
    for i, bit in enumerate(bits):
        if bit:
            out |= 1 << i
    return out


# The field bridge reads the same convention under this name.
le_bits_to_int = decode


def pack_bits_into_bytes(bits: Sequence[bool]) -> bytes:
    """
    Pack MSB-first within each byte; a trailing partial byte is padded with
    zeros in its low-order bits.
    """
    out = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit:
            out[i >> 3] |= 0x80 >> (i & 7)
    return bytes(out)


def unpack_bytes_into_bits(data: bytes, nbits: int) -> Bits:
    """Inverse of `pack_bits_into_bytes` for the first `nbits` bits."""
    if nbits < 0 or nbits > len(data) * 8:
        raise ValueError(f"cannot read {nbits} bits from {len(data)} bytes")
    return [bool(data[i >> 3] & (0x80 >> (i & 7))) for i in range(nbits)]


__all__ = [
    "Bits",
    "encode",
    "decode",
    "le_bits_to_int",
    "pack_bits_into_bytes",
    "unpack_bytes_into_bits",
]
