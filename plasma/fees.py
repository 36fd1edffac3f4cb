"""
Fee normalization for batch aggregation.

A fee only reaches the chain in packed form, so any total quoted to a client
must itself be packable. Summing packable fees does not keep that property
(e.g. 1023·10 + 1 needs more mantissa than the fee codec has), hence every
total is pushed back through the codec.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from plasma.config import DEFAULT_CONFIG, BitWidths
from plasma.encoding.floatpack import Amount


def closest_packable_fee(value: Amount, widths: BitWidths = DEFAULT_CONFIG.widths) -> Decimal:
    return widths.fee_codec().closest_packable(value)


def closest_packable_amount(value: Amount, widths: BitWidths = DEFAULT_CONFIG.widths) -> Decimal:
    return widths.amount_codec().closest_packable(value)


def batch_fee_total(fees: Iterable[Amount], widths: BitWidths = DEFAULT_CONFIG.widths) -> Decimal:
    """
    Sum of the packable projection of each fee, itself re-normalized.

    The result never exceeds the naive sum and is exactly representable by the
    fee codec. Raises AmountTooLarge if the total overflows the codec.
    """
    codec = widths.fee_codec()
    # packable values are integers; sum as ints to stay clear of Decimal context rounding
    total = sum(int(codec.closest_packable(fee)) for fee in fees)
    return codec.closest_packable(total)


def is_packable_fee(value: Amount, widths: BitWidths = DEFAULT_CONFIG.widths) -> bool:
    return widths.fee_codec().is_packable(value)


__all__ = [
    "closest_packable_fee",
    "closest_packable_amount",
    "batch_fee_total",
    "is_packable_fee",
]
