"""
Twisted Edwards arithmetic for the embedded curve.

    a·x² + y² = 1 + d·x²·y²   over F_p

The production parameter set is Baby Jubjub, whose base field is the BN254
scalar field, so curve coordinates are native circuit field elements. Any other
parameter set (e.g. a tiny curve for tests) can be supplied through
`CurveParams`; nothing in this module reads global state.

Points are immutable affine pairs. Internally scalar multiplication runs in
projective coordinates with the unified addition law (complete when `a` is a
square and `d` a non-square, as for Baby Jubjub), so the only inversion happens
when converting back to affine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from plasma.crypto.field import R as BN254_R, inv_mod, legendre, sqrt_mod
from plasma.errors import ConfigError

_Projective = Tuple[int, int, int]


@dataclass(frozen=True)
class Point:
    """Affine point. Curve membership is checked where points are created."""

    x: int
    y: int

    def xy(self) -> Tuple[int, int]:
        return self.x, self.y


@dataclass(frozen=True)
class CurveParams:
    """
    Immutable description of an embedded twisted Edwards curve.

    `order` is the prime order of the subgroup generated by `base`, and
    `cofactor · order` is the full group order. `personalization` is the
    16-byte BLAKE2b personalization used for signature challenges on this
    curve.
    """

    name: str
    p: int
    a: int
    d: int
    order: int
    cofactor: int
    base: Point
    personalization: bytes = b"Plasma_EdDSA_H*\x00"

    # --- Validation -------------------------------------------------------

    def validate(self) -> "CurveParams":
        """Check the parameter set is self-consistent; returns self."""
        if self.p < 3 or self.p % 2 == 0:
            raise ConfigError("curve modulus must be an odd prime", curve=self.name)
        if self.a % self.p == 0 or self.d % self.p == 0 or (self.a - self.d) % self.p == 0:
            raise ConfigError("degenerate curve coefficients", curve=self.name)
        if len(self.personalization) != 16:
            raise ConfigError("personalization must be exactly 16 bytes", curve=self.name)
        if not self.is_on_curve(self.base.x, self.base.y):
            raise ConfigError("base point is not on the curve", curve=self.name)
        if self.is_identity(self.base) or not self.is_identity(self.mul(self.base, self.order)):
            raise ConfigError("base point does not generate the prime-order subgroup", curve=self.name)
        return self

    @property
    def is_complete(self) -> bool:
        """True when the addition law has no exceptional cases."""
        return legendre(self.a, self.p) == 1 and legendre(self.d, self.p) == -1

    # --- Membership -------------------------------------------------------

    @property
    def identity(self) -> Point:
        return Point(0, 1)

    def is_identity(self, pt: Point) -> bool:
        return pt.x == 0 and pt.y == 1

    def is_on_curve(self, x: int, y: int) -> bool:
        """Coordinates must be canonical (in [0, p)) and satisfy the equation."""
        p = self.p
        if not (0 <= x < p and 0 <= y < p):
            return False
        xx, yy = x * x % p, y * y % p
        return (self.a * xx + yy - 1 - self.d * xx * yy) % p == 0

    def from_xy(self, x: int, y: int) -> Optional[Point]:
        """Build a point from affine coordinates, or None if not on the curve."""
        if not isinstance(x, int) or not isinstance(y, int):
            return None
        return Point(x, y) if self.is_on_curve(x, y) else None

    def from_y(self, y: int, x_sign: bool) -> Optional[Point]:
        """Recover x from y and its sign bit (x > (p-1)/2), None if impossible."""
        p = self.p
        if not 0 <= y < p:
            return None
        yy = y * y % p
        den = (self.a - self.d * yy) % p
        if den == 0:
            return None
        x = sqrt_mod((1 - yy) * inv_mod(den, p), p)
        if x is None:
            return None
        if (x > (p - 1) // 2) != x_sign:
            x = (p - x) % p
        if x == 0 and x_sign:
            return None
        return Point(x, y)

    def in_subgroup(self, pt: Point) -> bool:
        return self.is_identity(self.mul(pt, self.order))

    # --- Group law --------------------------------------------------------

    def negate(self, pt: Point) -> Point:
        return Point((-pt.x) % self.p, pt.y)

    def add(self, p1: Point, p2: Point) -> Point:
        return self._to_affine(self._add((p1.x, p1.y, 1), (p2.x, p2.y, 1)))

    def double(self, pt: Point) -> Point:
        return self.add(pt, pt)

    def mul(self, pt: Point, k: int) -> Point:
        """Scalar multiplication `k·pt` (k taken as a non-negative integer)."""
        if k < 0:
            return self.mul(self.negate(pt), -k)
        acc: _Projective = (0, 1, 1)
        cur: _Projective = (pt.x, pt.y, 1)
        while k:
            if k & 1:
                acc = self._add(acc, cur)
            cur = self._add(cur, cur)
            k >>= 1
        return self._to_affine(acc)

    def mul_base(self, k: int) -> Point:
        return self.mul(self.base, k)

    def mul_by_cofactor(self, pt: Point) -> Point:
        return self.mul(pt, self.cofactor)

    # --- Encoding ---------------------------------------------------------

    @property
    def byte_len(self) -> int:
        return (self.p.bit_length() + 7) // 8

    def encode(self, pt: Point) -> bytes:
        """
        Compressed form: y little-endian, with the top bit of the last byte set
        when x is "negative" (x > (p-1)/2). Needs one spare bit above p.
        """
        width = self.byte_len if self.p.bit_length() % 8 else self.byte_len + 1
        out = bytearray(pt.y.to_bytes(width, "little"))
        if pt.x > (self.p - 1) // 2:
            out[-1] |= 0x80
        return bytes(out)

    def decode(self, data: bytes) -> Optional[Point]:
        width = self.byte_len if self.p.bit_length() % 8 else self.byte_len + 1
        if len(data) != width:
            return None
        raw = bytearray(data)
        sign = bool(raw[-1] & 0x80)
        raw[-1] &= 0x7F
        return self.from_y(int.from_bytes(raw, "little"), sign)

    # --- Internals --------------------------------------------------------

    def _add(self, p1: _Projective, p2: _Projective) -> _Projective:
        # add-2008-bbjlp (projective, unified)
        p = self.p
        x1, y1, z1 = p1
        x2, y2, z2 = p2
        a_ = z1 * z2 % p
        b_ = a_ * a_ % p
        c_ = x1 * x2 % p
        d_ = y1 * y2 % p
        e_ = self.d * c_ % p * d_ % p
        f_ = (b_ - e_) % p
        g_ = (b_ + e_) % p
        x3 = a_ * f_ % p * (((x1 + y1) * (x2 + y2) - c_ - d_) % p) % p
        y3 = a_ * g_ % p * ((d_ - self.a * c_) % p) % p
        z3 = f_ * g_ % p
        return x3, y3, z3

    def _to_affine(self, pt: _Projective) -> Point:
        x, y, z = pt
        zi = inv_mod(z, self.p)
        return Point(x * zi % self.p, y * zi % self.p)


# ---------------------------------------------------------------------------
# Baby Jubjub over the BN254 scalar field
# ---------------------------------------------------------------------------

BABYJUBJUB = CurveParams(
    name="babyjubjub",
    p=BN254_R,
    a=168700,
    d=168696,
    order=2736030358979909402780800718157159386076813972158567259200215660948447373041,
    cofactor=8,
    # Spending-key generator: the prime-order "Base8" point.
    base=Point(
        5299619240641551281634865583518297030282874472190772894086521144482721001553,
        16950150798460657717958625567821834550301663161624707787222815936182638968203,
    ),
)

CURVES = {BABYJUBJUB.name: BABYJUBJUB}


def get_curve(name: str) -> CurveParams:
    try:
        return CURVES[name.strip().lower()]
    except KeyError:
        raise ConfigError(f"unknown curve '{name}'", known=sorted(CURVES)) from None


__all__ = [
    "Point",
    "CurveParams",
    "BABYJUBJUB",
    "CURVES",
    "get_curve",
]
