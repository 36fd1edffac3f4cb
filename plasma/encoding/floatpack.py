"""
Lossy decimal "float" packing: value ≈ mantissa · base^exponent.

The circuit commits amounts and fees in this compact form, and its gadget runs
the same normalization, so the rule below is a protocol constant:

    exponent = smallest e >= 0 with floor(value / base^e) < 2^mantissa_width
    mantissa = floor(value / base^e)
    bits     = LE(exponent, exponent_width) ++ LE(mantissa, mantissa_width)

Anything below the chosen exponent's resolution is truncated; that loss is
defined behaviour, not an error. Only a value that would need an exponent of
2^exponent_width or more fails (`AmountTooLarge`).

Consequences callers rely on:
- decode(encode(v)) <= v
- encoding an already-packed value reproduces it exactly
- decode(encode(decode(encode(v)))) == decode(encode(v))

Values are exact: `int` or `decimal.Decimal`. Binary floats are refused.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Tuple, Union

from plasma.encoding import bits as _bits
from plasma.errors import AmountTooLarge, InvalidAmount

Amount = Union[int, Decimal]


def floor_amount(value: Amount) -> int:
    """floor(value) for a finite non-negative exact amount."""
    if isinstance(value, bool):
        raise InvalidAmount(value, "booleans are not amounts")
    if isinstance(value, int):
        if value < 0:
            raise InvalidAmount(value, "negative")
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidAmount(value, "not finite")
        if value < 0:
            raise InvalidAmount(value, "negative")
        # int() truncates toward zero, which is floor for non-negative values
        return int(value)
    raise InvalidAmount(value, f"unsupported type {type(value).__name__}")


@dataclass(frozen=True)
class FloatCodec:
    exponent_width: int
    mantissa_width: int
    base: int = 10

    def __post_init__(self) -> None:
        if self.exponent_width <= 0 or self.mantissa_width <= 0:
            raise ValueError("exponent and mantissa widths must be positive")
        if self.base < 2:
            raise ValueError("base must be at least 2")

    @property
    def width(self) -> int:
        return self.exponent_width + self.mantissa_width

    @property
    def max_exponent(self) -> int:
        return (1 << self.exponent_width) - 1

    @property
    def max_mantissa(self) -> int:
        return (1 << self.mantissa_width) - 1

    def max_value(self) -> Decimal:
        return Decimal(self.max_mantissa * self.base ** self.max_exponent)

    def _limit(self) -> int:
        # smallest value whose mantissa overflows even at the largest exponent
        return (1 << self.mantissa_width) * self.base ** self.max_exponent

    def split(self, value: Amount) -> Tuple[int, int]:
        """(exponent, mantissa) for `value` under the truncating rule."""
        # bound a Decimal before int() so huge exponents cost nothing
        if isinstance(value, Decimal) and value.is_finite() and value >= self._limit():
            raise AmountTooLarge(value, self.exponent_width, self.mantissa_width, self.base)
        n = floor_amount(value)
        limit = 1 << self.mantissa_width
        scale = 1
        for exponent in range(self.max_exponent + 1):
            mantissa = n // scale
            if mantissa < limit:
                return exponent, mantissa
            scale *= self.base
        raise AmountTooLarge(value, self.exponent_width, self.mantissa_width, self.base)

    def encode(self, value: Amount) -> _bits.Bits:
        exponent, mantissa = self.split(value)
        return _bits.encode(exponent, self.exponent_width, "exponent") + _bits.encode(
            mantissa, self.mantissa_width, "mantissa"
        )

    def decode(self, encoded: Sequence[bool]) -> Decimal:
        if len(encoded) != self.width:
            raise ValueError(f"expected {self.width} bits, got {len(encoded)}")
        exponent = _bits.decode(encoded[: self.exponent_width])
        mantissa = _bits.decode(encoded[self.exponent_width :])
        return Decimal(mantissa * self.base ** exponent)

    def closest_packable(self, value: Amount) -> Decimal:
        """
        `decode(encode(value))`: the truncation of `value` at the minimal
        exponent. Never exceeds `value`, but a coarser exponent can land below
        another packable value (e.g. 160 -> 100 with a 4-bit mantissa).
        """
        exponent, mantissa = self.split(value)
        return Decimal(mantissa * self.base ** exponent)

    def is_packable(self, value: Amount) -> bool:
        try:
            return self.closest_packable(value) == value
        except AmountTooLarge:
            return False


__all__ = ["Amount", "FloatCodec", "floor_amount"]
