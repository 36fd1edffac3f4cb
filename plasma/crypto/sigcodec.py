"""
Flat ⇄ curve-native signature conversion.

The wire/storage form of a signature is three circuit-field scalars
``(r_x, r_y, s)``. The verifier wants a curve point R and a scalar in the
curve's prime-subgroup field F_l. These are the only two functions that cross
between the two, and both sides (signer, verifier, witness builder) go through
them, so the conversion is identical everywhere.

Every input here is treated as adversarial:
- ``(r_x, r_y)`` must be canonical coordinates satisfying the curve equation,
  otherwise `InvalidSignaturePoint`.
- ``s`` must be a canonical circuit-field element that is also below the
  subgroup order l, otherwise `InvalidScalar`. No silent reduction happens, so
  `to_flat(from_flat(t)) == t` for every accepted triple.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple, Union

from plasma.crypto.field import Fr, R
from plasma.crypto.jubjub import BABYJUBJUB, CurveParams, Point
from plasma.errors import InvalidScalar, InvalidSignaturePoint

if TYPE_CHECKING:  # pragma: no cover
    from plasma.models.tx import TxSignature

Scalar = Union[int, Fr]


@dataclass(frozen=True)
class CurveSignature:
    """EdDSA signature in curve-native form: point R and scalar s in [0, l)."""

    r: Point
    s: int


def _as_int(v: Scalar) -> int:
    if isinstance(v, Fr):
        return v.n
    if isinstance(v, bool) or not isinstance(v, int):
        raise TypeError(f"expected int or Fr, got {type(v).__name__}")
    return v


def encode_fr_into_fs(value: Scalar, curve: CurveParams = BABYJUBJUB) -> int:
    """
    Re-encode a circuit-field scalar as a subgroup scalar.

    The two fields have different moduli (R > l); values that are not
    canonical in both are rejected rather than reduced.
    """
    n = _as_int(value)
    if not 0 <= n < R or not n < curve.order:
        raise InvalidScalar(n, curve.order)
    return n


def from_flat(r_x: Scalar, r_y: Scalar, s: Scalar, curve: CurveParams = BABYJUBJUB) -> CurveSignature:
    x, y = _as_int(r_x), _as_int(r_y)
    point = curve.from_xy(x, y)
    if point is None:
        raise InvalidSignaturePoint(x, y)
    return CurveSignature(r=point, s=encode_fr_into_fs(s, curve))


def to_flat(signature: CurveSignature) -> Tuple[int, int, int]:
    return signature.r.x, signature.r.y, signature.s


def signature_from_tx(sig: "TxSignature", curve: CurveParams = BABYJUBJUB) -> CurveSignature:
    return from_flat(sig.r_x, sig.r_y, sig.s, curve)


def signature_to_tx(signature: CurveSignature) -> "TxSignature":
    from plasma.models.tx import TxSignature

    r_x, r_y, s = to_flat(signature)
    return TxSignature(r_x=r_x, r_y=r_y, s=s)


__all__ = [
    "CurveSignature",
    "encode_fr_into_fs",
    "from_flat",
    "to_flat",
    "signature_from_tx",
    "signature_to_tx",
]
